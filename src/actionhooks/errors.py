"""Errors raised by the action hook system."""


class ActionHookError(Exception):
    """Base error for action hooks."""
    pass


class HookFailedError(ActionHookError):
    """A before/after hook command exited with failure."""

    def __init__(self, phase: str, detail: str):
        self.phase = phase
        self.detail = detail
        super().__init__(f"action hook ({phase}) failed: {detail}")


class HookAbortError(ActionHookError):
    """A hook deliberately vetoed the action (abortOnSuccess)."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ConfigError(ActionHookError):
    """The hook configuration file could not be loaded."""
    pass
