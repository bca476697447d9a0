# Area: Router
# PRD: docs/prd-turnflow.md
"""
turnflow._router.outbound — Outbound platform calls as session tasks
====================================================================

Wraps the future returned by a MatchPlatform call. When the future
finishes, on whatever thread, the task posts ``OutboundCompleted`` to
the session inbox; the effects are applied there, in completion order.

A cancelled task posts nothing. Newer tasks never cancel older ones.
"""

import logging
import threading
from concurrent.futures import CancelledError, Future
from typing import Any, Callable, Dict, Optional

from .messages import OutboundCompleted
from ..errors import PlatformError

logger = logging.getLogger("turnflow.outbound")


class OutboundTask:
    """
    One in-flight platform call.

    Attributes:
        operation: MatchPlatform method name, e.g. "end_turn"
        match_id: Match the call concerns
        future: The platform's future
        details: Values the completion handler needs (retired ids, blob, ...)
        then: Message to post after a successful completion
    """

    def __init__(
        self,
        operation: str,
        match_id: Optional[str],
        future: Future,
        post: Callable[[Any], None],
        details: Optional[Dict[str, Any]] = None,
        then: Any = None,
    ):
        self.operation = operation
        self.match_id = match_id
        self.future = future
        self.details = details or {}
        self.then = then
        self._post = post
        self._cancelled = threading.Event()

    def start(self) -> "OutboundTask":
        self.future.add_done_callback(self._on_done)
        return self

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    def cancel(self) -> None:
        """Stop tracking the call; its completion is never applied."""
        self._cancelled.set()
        self.future.cancel()
        logger.info("Cancelled %s for match %s", self.operation, self.match_id or "N/A")

    def error(self) -> Optional[PlatformError]:
        """The failure of a finished call as a PlatformError, or None."""
        try:
            exc = self.future.exception(timeout=0)
        except CancelledError:
            return PlatformError(self.operation, self.match_id, "cancelled")
        if exc is None:
            return None
        if isinstance(exc, PlatformError):
            return exc
        return PlatformError(self.operation, self.match_id, str(exc) or type(exc).__name__)

    def result(self) -> Any:
        return self.future.result(timeout=0)

    def _on_done(self, future: Future) -> None:
        if self.cancelled:
            logger.debug("Dropping completion of cancelled %s", self.operation)
            return
        self._post(OutboundCompleted(self))

    def __repr__(self) -> str:
        return f"OutboundTask({self.operation!r}, match_id={self.match_id!r})"
