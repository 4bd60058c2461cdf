"""Action hook types.

Defines the core data structures shared by the matcher and the coordinator:
- Phase: which command of a hook runs ("before" or "after")
- HookDefinition: a user-configured before/after command pair
- environment variable names injected into every hook invocation
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any

from actionhooks.errors import ConfigError

ENV_CONTEXT = "ACTIONHOOKS_ACTION_CONTEXT"
ENV_KEY = "ACTIONHOOKS_ACTION_KEY"
ENV_PHASE = "ACTIONHOOKS_ACTION_PHASE"

DEFAULT_ABORT_MESSAGE = "Action aborted by hook"


def _flag(data: dict[str, Any], name: str) -> bool:
    value = data.get(name)
    if value is None:
        return False
    if not isinstance(value, bool):
        raise ConfigError(f"{name} must be true or false, got {value!r}")
    return value


class Phase(str, Enum):
    """The point in an action's lifecycle a hook command runs at."""

    BEFORE = "before"
    AFTER = "after"


@dataclass(frozen=True)
class HookDefinition:
    """A single configured action hook.

    Attributes:
        key: Action key label (case-insensitive, required to match)
        context: UI context the action runs in; empty matches any context
        before: Shell command run before the action (empty = none)
        after: Shell command run once the action's effects completed (empty = none)
        log_output: Log the command like a regular user-visible command
        abort_on_success: Veto the rest of the action when the command succeeds
        abort_message: Message surfaced on veto (falls back to DEFAULT_ABORT_MESSAGE)
    """

    key: str
    context: str = ""
    before: str = ""
    after: str = ""
    log_output: bool = False
    abort_on_success: bool = False
    abort_message: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "HookDefinition":
        """Create HookDefinition from a YAML/JSON dict (camelCase keys)."""
        return cls(
            key=str(data.get("key") or ""),
            context=str(data.get("context") or ""),
            before=str(data.get("before") or ""),
            after=str(data.get("after") or ""),
            log_output=_flag(data, "logOutput"),
            abort_on_success=_flag(data, "abortOnSuccess"),
            abort_message=str(data.get("abortMessage") or ""),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "context": self.context,
            "key": self.key,
            "before": self.before,
            "after": self.after,
            "logOutput": self.log_output,
            "abortOnSuccess": self.abort_on_success,
            "abortMessage": self.abort_message,
        }

    def command_for(self, phase: Phase) -> str:
        """Return the trimmed command for *phase* ("" when none)."""
        if phase is Phase.BEFORE:
            return self.before.strip()
        return self.after.strip()

    @property
    def is_inert(self) -> bool:
        """True when the definition has neither a before nor an after command."""
        return not self.before.strip() and not self.after.strip()
