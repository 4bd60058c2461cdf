"""actionhooks: user-configured shell hooks around application actions.

Runs "before" commands when an action is dispatched and "after" commands
once the action's effects have completed, whether those effects finish
synchronously, on worker threads, or not at all (abort).

Usage:
    from actionhooks import (
        ActionDispatcher,
        CompletionCoordinator,
        ConfigProvider,
        HookManager,
    )

    manager = HookManager(ConfigProvider())
    dispatcher = ActionDispatcher(manager, CompletionCoordinator())
    dispatcher.dispatch("files", "c", commit_changes)
"""

from actionhooks.config import ActionHooksConfig, ConfigProvider
from actionhooks.coordinator import CompletionCoordinator, CompletionToken
from actionhooks.dispatch import ActionDispatcher
from actionhooks.errors import (
    ActionHookError,
    ConfigError,
    HookAbortError,
    HookFailedError,
)
from actionhooks.manager import Execution, HookManager, execute_after
from actionhooks.types import DEFAULT_ABORT_MESSAGE, HookDefinition, Phase

__all__ = [
    "ActionDispatcher",
    "ActionHookError",
    "ActionHooksConfig",
    "CompletionCoordinator",
    "CompletionToken",
    "ConfigError",
    "ConfigProvider",
    "DEFAULT_ABORT_MESSAGE",
    "Execution",
    "HookAbortError",
    "HookDefinition",
    "HookFailedError",
    "HookManager",
    "Phase",
    "execute_after",
]
