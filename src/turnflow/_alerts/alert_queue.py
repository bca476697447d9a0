# Area: Alerts
# PRD: docs/prd-turnflow.md
"""
turnflow._alerts.alert_queue — Priority-ordered alert queue
===========================================================

Serializes concurrent "needs attention" events into one-at-a-time modal
presentation. The head of the queue is the alert that holds (or is about
to hold) the screen; everything behind it waits in priority order.

Lifecycle of the head:
    enqueue -> present requested -> acknowledge_presented -> dismiss
    -> acknowledge_dismissed -> advance (pops, presents the next one)

The queue runs on the session's single logical thread and is not safe
for concurrent mutation.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator, List, Optional, Tuple

from .categories import AlertCategory
from .notification import Notification, PresentationState
from ..errors import InvariantViolation

logger = logging.getLogger("turnflow.alerts")


class AlertPriorityQueue:
    """
    Orders and deduplicates pending notifications.

    Presentation requests to the presenter are the only side effect.
    Presentation state changes only through the acknowledge_* methods,
    which the presenter drives.

    Usage:
        queue = AlertPriorityQueue(presenter)
        queue.enqueue(Notification(AlertContent("Your turn!")))
        ...
        queue.dismiss(AlertCategory.INFORMATIONAL)
    """

    def __init__(self, presenter):
        self._presenter = presenter
        self._entries: List[Notification] = []
        self._requested: Optional[Notification] = None
        self._hold_depth = 0
        self._dismissing: Optional[Notification] = None

    # ── Inspection ───────────────────────────────────────────

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Notification]:
        return iter(list(self._entries))

    @property
    def entries(self) -> Tuple[Notification, ...]:
        return tuple(self._entries)

    @property
    def head(self) -> Optional[Notification]:
        return self._entries[0] if self._entries else None

    def find(
        self, correlation_key: Optional[str], category: AlertCategory
    ) -> Optional[Notification]:
        """Return the live entry for (correlation_key, category), if queued."""
        for entry in self._entries:
            if entry.dedupe_key == (correlation_key, category) and \
                    entry.presentation_state != PresentationState.DISMISSED:
                return entry
        return None

    # ── Producers ────────────────────────────────────────────

    def enqueue(self, notification: Notification) -> bool:
        """
        Add a notification, presenting it at once if the queue was empty.

        Returns:
            True if queued, False if discarded as a duplicate
        """
        if not self._entries:
            self._entries.append(notification)
            self._present_head_if_idle()
            return True

        if self.find(notification.correlation_key, notification.category) is not None:
            logger.info(
                "Discarding alert \"%s\" as queue already contains an alert with similar purpose",
                notification.caption,
            )
            return False

        # A head whose presentation was requested keeps its place.
        start = 1 if self._requested is not None else 0
        category = notification.category
        for index in range(start, len(self._entries)):
            if category.outranks(self._entries[index].category):
                self._entries.insert(index, notification)
                logger.debug("Inserted alert \"%s\" at index %d", notification.caption, index)
                break
        else:
            self._entries.append(notification)
            logger.debug("Appended alert \"%s\" to end of queue", notification.caption)

        self._present_head_if_idle()
        return True

    def withdraw(
        self, correlation_key: Optional[str], category: AlertCategory
    ) -> Optional[Notification]:
        """
        Drop a queued alert that never reached the screen.

        The head whose presentation was already requested cannot be
        withdrawn; it has to be dismissed instead.
        """
        entry = self.find(correlation_key, category)
        if entry is None or entry is self._requested:
            return None
        self._entries.remove(entry)
        logger.info("Withdrew queued alert \"%s\"", entry.caption)
        return entry

    @contextmanager
    def holding(self):
        """
        Defer presentation while several alerts are produced together.

        Alerts enqueued inside the block are ordered among themselves before
        the first of them is shown. Nested blocks are allowed.
        """
        self._hold_depth += 1
        try:
            yield self
        finally:
            self._hold_depth -= 1
            self._present_head_if_idle()

    # ── Presentation control ─────────────────────────────────

    def dismiss(self, category: AlertCategory) -> bool:
        """
        Request dismissal of the head iff it is of ``category``.

        Returns:
            True if dismissal was requested, False if the head is of
            another category (or the queue is empty)

        Raises:
            InvariantViolation: If the head matches but is not on screen
        """
        head = self.head
        if head is None or head.category != category:
            logger.debug("No %s alert at the head of the queue to dismiss", category.name)
            return False

        if not head.is_on_screen():
            raise InvariantViolation(
                "dismiss-visible-only",
                "Tried to dismiss an alert that is not visible",
                {"category": category.name, "state": head.presentation_state.value},
            )

        if head is self._dismissing:
            logger.debug("Dismissal of \"%s\" already requested", head.caption)
            return True

        self._dismissing = head
        self._presenter.dismiss(category)
        return True

    def advance(self) -> Optional[Notification]:
        """
        Pop the former head and present the next alert, if any.

        Returns:
            The popped notification, or None on an empty queue

        Raises:
            InvariantViolation: If the head is still mid-presentation
        """
        if not self._entries:
            logger.info("Empty alert queue, nothing to advance")
            return None

        head = self._entries[0]
        if head is self._requested and head.presentation_state != PresentationState.DISMISSED:
            raise InvariantViolation(
                "advance-after-dismissal",
                "Attempted to dequeue an alert that is still shown",
                {"alert": head.caption, "state": head.presentation_state.value},
            )

        self._entries.pop(0)
        self._requested = None
        self._dismissing = None

        if not self._entries:
            logger.debug("No more queued alerts to present")
            return head

        self._present_head_if_idle()
        return head

    # ── Presenter acknowledgements ───────────────────────────

    def acknowledge_presented(self, notification: Notification) -> None:
        """Presenter confirms ``notification`` is on screen."""
        if notification is not self._requested:
            raise InvariantViolation(
                "presentation-divergence",
                "Presenter acknowledged an alert the queue did not request",
                {"alert": notification.caption},
            )
        notification.presentation_state = PresentationState.PRESENTED
        logger.info(
            "Presented \"%s\" alert from queue (%d remaining)",
            notification.caption, len(self._entries) - 1,
        )

    def acknowledge_dismissed(self, notification: Notification) -> None:
        """Presenter confirms ``notification`` left the screen."""
        if notification is not self.head or not notification.is_on_screen():
            raise InvariantViolation(
                "presentation-divergence",
                "Presenter dismissed an alert that was not on screen",
                {"alert": notification.caption, "state": notification.presentation_state.value},
            )
        notification.presentation_state = PresentationState.DISMISSED

    # ── Internal ─────────────────────────────────────────────

    def _present_head_if_idle(self) -> None:
        if self._hold_depth or not self._entries or self._requested is not None:
            return
        self._requested = self._entries[0]
        self._presenter.present(self._requested)
