"""Action dispatch with before/after hooks.

ActionDispatcher is the seam the surrounding application calls at
action-dispatch time. It runs the before-hooks, tracks the resulting
Execution, runs the action, and then either finalizes (sync path) or leaves
resolution to the async work the action registered through ``track``,
``spawn`` or ``run_subprocess``.

Usage:
    dispatcher = ActionDispatcher(manager, coordinator)

    def commit():
        # the git call happens on a worker; after-hooks wait for it
        dispatcher.spawn(lambda: git.commit(message))

    dispatcher.dispatch("files", "c", commit)
"""

from __future__ import annotations

import functools
import logging
import subprocess
import threading
from collections.abc import Callable, Sequence
from typing import Any, TypeVar

from actionhooks.coordinator import CompletionCoordinator
from actionhooks.manager import HookManager

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ActionDispatcher:
    """Runs actions between their before- and after-hooks."""

    def __init__(self, manager: HookManager, coordinator: CompletionCoordinator):
        self.manager = manager
        self.coordinator = coordinator

    def dispatch(self, context: str, key: str, action: Callable[[], T]) -> T:
        """Run *action* for (context, key) with its hooks.

        Before-hook errors propagate and the action does not run. If the action
        raises, the execution is aborted and the error re-raised. Otherwise the
        execution is finalized; when the action registered async work, the
        last completion runs the after-hooks instead.
        """
        execution = self.manager.execute_before(context, key)
        self.coordinator.start(execution)

        try:
            result = action()
        except BaseException:
            self.coordinator.abort()
            raise

        self.coordinator.finalize()
        return result

    def track(self, fn: Callable[..., T]) -> Callable[..., T]:
        """Wrap *fn* as async work the after-hooks wait for.

        The completion is registered now, at wrap time, so it must happen
        before the dispatching action returns. The wrapper reports failure if
        *fn* raises (re-raising the error) and success otherwise; errors from
        the after-hooks surface from the wrapper call.
        """
        completion = self.coordinator.register_completion()
        if completion is None:
            return fn

        @functools.wraps(fn)
        def wrapper(*args: Any, **kwargs: Any) -> T:
            try:
                result = fn(*args, **kwargs)
            except BaseException:
                completion(False)
                raise
            completion(True)
            return result

        return wrapper

    def spawn(self, fn: Callable[[], Any], name: str | None = None) -> threading.Thread:
        """Run *fn* on a worker thread as tracked async work."""
        tracked = self.track(fn)

        def run() -> None:
            try:
                tracked()
            except Exception:
                logger.exception("Action worker failed")

        thread = threading.Thread(target=run, name=name, daemon=True)
        thread.start()
        return thread

    def run_subprocess(self, args: Sequence[str]) -> int:
        """Run an external program as tracked work; returns its exit status.

        A non-zero exit reports failure to the coordinator. After-hook errors
        from the final completion propagate.
        """
        completion = self.coordinator.register_completion()
        try:
            proc = subprocess.run(list(args), check=False)
        except OSError:
            if completion is not None:
                completion(False)
            raise

        if completion is not None:
            completion(proc.returncode == 0)
        return proc.returncode
