"""Completion coordination for action hook executions.

An action's effects may finish synchronously, on one or more workers, or not
at all. CompletionCoordinator tracks the single active Execution and decides
when its "after" commands run:

- ``start(execution)`` begins tracking (overwriting any previous execution)
- ``register_completion()`` hands a CompletionToken to each piece of async work
- ``finalize()`` resolves immediately when no async work was registered
- ``abort()`` discards the execution; its after-commands never run

The after-commands run exactly once, from whichever call reports last.
Bookkeeping happens under a lock; the commands themselves run after the lock
is released.
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from actionhooks.manager import Execution

logger = logging.getLogger(__name__)


class CompletionToken:
    """Reports the outcome of one piece of async work back to the coordinator.

    Only the first call has any effect.
    """

    def __init__(self, coordinator: CompletionCoordinator, generation: int):
        self._coordinator = coordinator
        self._generation = generation
        self._used = False
        self._lock = threading.Lock()

    def __call__(self, success: bool) -> None:
        with self._lock:
            if self._used:
                return
            self._used = True
        self._coordinator._complete(self._generation, success)

    @property
    def used(self) -> bool:
        return self._used


class CompletionCoordinator:
    """Owns at most one active Execution per application session."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._execution: Execution | None = None
        self._pending = 0
        self._completed = True
        self._generation = 0

    @property
    def active(self) -> bool:
        with self._lock:
            return not self._completed

    @property
    def pending(self) -> int:
        with self._lock:
            return self._pending

    def start(self, execution: Execution | None) -> None:
        """Begin tracking *execution*; None leaves the coordinator idle."""
        with self._lock:
            if not self._completed:
                logger.debug(
                    "Dropping unresolved action hook execution (%d pending)", self._pending
                )
            self._generation += 1
            self._execution = execution
            self._pending = 0
            self._completed = execution is None

    def register_completion(self) -> CompletionToken | None:
        """Register a piece of async work the after-phase must wait for.

        Returns None when nothing is being tracked.
        """
        with self._lock:
            if self._execution is None or self._completed:
                return None
            self._pending += 1
            logger.debug("Registered action hook completion (%d pending)", self._pending)
            return CompletionToken(self, self._generation)

    def finalize(self) -> None:
        """Resolve a tracked execution that has no outstanding async work.

        No-op if nothing is tracked or completions are still pending; those
        completions drive resolution themselves.

        Raises:
            HookFailedError, HookAbortError: From the after-commands
        """
        with self._lock:
            if self._execution is None or self._completed or self._pending > 0:
                return
            execution = self._resolve()

        execution.execute_after()

    def abort(self) -> None:
        """Discard the tracked execution without running its after-commands."""
        with self._lock:
            if not self._completed:
                logger.debug("Aborted action hook execution")
            self._execution = None
            self._pending = 0
            self._completed = True

    def _complete(self, generation: int, success: bool) -> None:
        with self._lock:
            if generation != self._generation or self._completed:
                return

            self._pending -= 1
            if self._pending > 0:
                return

            execution = self._resolve()
            if not success:
                logger.debug("Last action hook completion failed; skipping after-hooks")
                return

        execution.execute_after()

    def _resolve(self) -> Execution:
        # Caller holds self._lock.
        execution = self._execution
        self._execution = None
        self._completed = True
        return execution
