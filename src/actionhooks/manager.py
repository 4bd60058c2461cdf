"""Hook matching and execution.

HookManager finds the configured hooks for an action (context + key), runs
their "before" commands eagerly, and hands back an Execution that later runs
the matching "after" commands once the action's effects are complete.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass

from actionhooks.config.loader import ActionHooksConfig
from actionhooks.errors import HookAbortError, HookFailedError
from actionhooks.shell import CommandBuilder, CommandError
from actionhooks.types import (
    DEFAULT_ABORT_MESSAGE,
    ENV_CONTEXT,
    ENV_KEY,
    ENV_PHASE,
    HookDefinition,
    Phase,
)

logger = logging.getLogger(__name__)

# Config provider signature: () -> ActionHooksConfig | None
ConfigFn = Callable[[], ActionHooksConfig | None]


@dataclass(frozen=True)
class Execution:
    """Hooks whose "before" commands ran and whose "after" commands are due.

    Attributes:
        manager: The manager that runs the commands
        hooks: Matched definitions, in configuration order
        context: Context the action was triggered from
        key: Key label of the triggering action
    """

    manager: HookManager
    hooks: tuple[HookDefinition, ...]
    context: str
    key: str

    def execute_after(self) -> None:
        """Run all "after" commands of this execution.

        Raises:
            HookFailedError: If an after-command fails
            HookAbortError: If an after-command vetoes via abortOnSuccess
        """
        self.manager.run_commands(self.hooks, Phase.AFTER, self.context, self.key)


def execute_after(execution: Execution | None) -> None:
    """Run *execution*'s "after" commands; no-op when there is no execution."""
    if execution is None:
        return
    execution.execute_after()


class HookManager:
    """Coordinates execution of user-defined action hooks.

    The config provider is called on every match so that reloaded config
    takes effect for the next action.
    """

    def __init__(self, config_provider: ConfigFn, builder: CommandBuilder | None = None):
        self.config_provider = config_provider
        self.builder = builder or CommandBuilder()

    def execute_before(self, context: str, key: str) -> Execution | None:
        """Run matching "before" commands.

        Returns:
            An Execution for the after-phase, or None when no hook matched.

        Raises:
            HookFailedError: If a before-command fails; the action must not proceed
            HookAbortError: If a before-command vetoes the action
        """
        hooks = self.match_hooks(context, key)
        if not hooks:
            return None

        self.run_commands(hooks, Phase.BEFORE, context, key)
        return Execution(manager=self, hooks=tuple(hooks), context=context, key=key)

    def match_hooks(self, context: str, key: str) -> list[HookDefinition]:
        """Return the hooks configured for (context, key), in config order."""
        config = self.config_provider()
        if config is None or not config.action_hooks:
            return []

        key = key.strip().lower()
        if not key:
            return []
        context = context.lower()

        matches = []
        for hook in config.action_hooks:
            hook_key = hook.key.strip().lower()
            if not hook_key or hook_key != key:
                continue

            hook_context = hook.context.strip().lower()
            if hook_context and hook_context != context:
                continue

            if hook.is_inert:
                continue

            matches.append(hook)

        logger.debug("Matched %d action hooks for %s/%s", len(matches), context, key)
        return matches

    def run_commands(
        self,
        hooks: Sequence[HookDefinition],
        phase: Phase,
        context: str,
        key: str,
    ) -> None:
        """Run each hook's command for *phase*, stopping at the first failure or abort."""
        config = self.config_provider()
        shell_functions_file = config.shell_functions_file if config else ""

        for hook in hooks:
            command = hook.command_for(phase)
            if not command:
                continue

            cmd = self.builder.new_shell(command, shell_functions_file)
            if not hook.log_output:
                cmd.dont_log()
            cmd.add_env_vars(
                f"{ENV_CONTEXT}={context}",
                f"{ENV_KEY}={key}",
                f"{ENV_PHASE}={phase.value}",
            )

            try:
                cmd.run_with_output()
            except CommandError as e:
                trimmed = e.output.strip()
                logger.warning("Action hook (%s) for %s/%s failed: %s", phase.value, context, key, e)
                if trimmed:
                    raise HookFailedError(phase.value, trimmed) from e
                raise HookFailedError(phase.value, str(e)) from e

            if hook.abort_on_success:
                message = hook.abort_message.strip() or DEFAULT_ABORT_MESSAGE
                logger.info("Action hook (%s) for %s/%s aborted: %s", phase.value, context, key, message)
                raise HookAbortError(message)
