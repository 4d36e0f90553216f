"""
Domain Service: Reclamation Guard

Critical section around structural work on the index. On the outermost entry
it asks the reclaimer to pause once and guards every weak store, so that keys
reclaimed mid-scan are only dropped after the scan finishes. The outermost exit
flushes those deferred expirations and resumes the reclaimer, on every exit path.
"""

import logging
from contextlib import ExitStack
from typing import Optional, Sequence

from parentage.application.interfaces import IReclaimer
from parentage.logging_utils import StructuredLogger, ComponentType, EventType


class ReclamationGuard:
    """
    Reentrant context manager bracketing a bulk compaction.

    Nested entries (cleanup_all calling cleanup per parent) reuse the
    outer section; pause()/resume() run exactly once per outermost section.
    """

    def __init__(
        self,
        stores: Sequence,
        reclaimer: Optional[IReclaimer] = None,
        logger: Optional[StructuredLogger] = None,
        trace_id: str = "",
    ):
        """
        Initialize guard.

        Args:
            stores: Weak stores exposing guard() (IdentityWeakKeyMap/IdentityWeakSet)
            reclaimer: Collaborator to pause; None guards the stores only
            logger: Optional structured logger (creates default if None)
            trace_id: Correlation ID for log events
        """
        self._stores = tuple(stores)
        self._reclaimer = reclaimer
        self._logger = logger or StructuredLogger(ComponentType.RECLAMATION_GUARD)
        self._trace_id = trace_id
        self._depth = 0
        self._exit_stack: Optional[ExitStack] = None

    @property
    def active(self) -> bool:
        return self._depth > 0

    def __enter__(self) -> "ReclamationGuard":
        if self._depth == 0:
            self._enter_outermost()
        self._depth += 1
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        self._depth -= 1
        if self._depth == 0:
            self._exit_outermost()
        return False

    def _enter_outermost(self) -> None:
        if self._reclaimer is not None:
            self._reclaimer.pause()
        stack = ExitStack()
        try:
            for store in self._stores:
                stack.enter_context(store.guard())
        except BaseException:
            stack.close()
            if self._reclaimer is not None:
                self._reclaimer.resume()
            raise
        self._exit_stack = stack
        self._logger.log_event(
            trace_id=self._trace_id,
            event_type=EventType.RECLAMATION_PAUSED,
            payload={"stores": len(self._stores)},
            level=logging.DEBUG,
        )

    def _exit_outermost(self) -> None:
        stack, self._exit_stack = self._exit_stack, None
        try:
            # Applies expirations deferred during the section
            stack.close()
        finally:
            if self._reclaimer is not None:
                self._reclaimer.resume()
            self._logger.log_event(
                trace_id=self._trace_id,
                event_type=EventType.RECLAMATION_RESUMED,
                payload={"stores": len(self._stores)},
                level=logging.DEBUG,
            )
