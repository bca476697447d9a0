# Area: Router
# PRD: docs/prd-turnflow.md
"""
turnflow._router.context — Explicit session context
===================================================

Everything a handler may read or change: the displayed match, the local
player, the alert queue, the engines and the in-flight outbound tasks.
Handlers receive the context; there is no global "current match".
"""

import logging
from concurrent.futures import Future
from typing import Any, Callable, Dict, List, Optional, Set, Tuple

from .outbound import OutboundTask
from .._alerts.alert_queue import AlertPriorityQueue
from .._alerts.categories import AlertCategory
from .._alerts.notification import AlertContent, Notification
from .._config import SessionConfig
from .._match.models import Exchange, Match, Participant
from .._match.reconciler import ExchangeReconciler
from .._match.turn_order import TurnOrderResolver
from ..platform import MatchPlatform

logger = logging.getLogger("turnflow.context")


class SessionContext:
    """
    State shared by the handlers of one session.

    Attributes:
        config: Session settings
        platform: Outbound platform calls
        alerts: Alert queue in front of the presenter
        reconciler: Folds completed exchanges into match state
        resolver: Computes next-turn order
        current_match: The match on screen, if any
        matches: Latest record of every match seen, by id
        tasks: Outbound calls still in flight
        awaiting_exchange: Exchange the local player started, by match id
        prompted_exchange: Exchange the local player is asked to reply to, by match id
        stale_prompts: Alerts to dismiss as soon as they reach the screen
    """

    def __init__(
        self,
        config: SessionConfig,
        platform: MatchPlatform,
        alerts: AlertPriorityQueue,
        post: Callable[[Any], None],
        reconciler: Optional[ExchangeReconciler] = None,
        resolver: Optional[TurnOrderResolver] = None,
    ):
        self.config = config
        self.platform = platform
        self.alerts = alerts
        self.reconciler = reconciler or ExchangeReconciler()
        self.resolver = resolver or TurnOrderResolver(config.quit_exclusion)
        self.current_match: Optional[Match] = None
        self.matches: Dict[str, Match] = {}
        self.tasks: List[OutboundTask] = []
        self.awaiting_exchange: Dict[str, str] = {}
        self.prompted_exchange: Dict[str, str] = {}
        self.stale_prompts: Set[Tuple[Optional[str], AlertCategory]] = set()
        self.post = post

    @property
    def local_player_id(self) -> str:
        return self.config.local_player_id

    # ── Matches ──────────────────────────────────────────────

    def remember(self, match: Match) -> Match:
        """Store the latest record of ``match``; refresh the screen if it is shown."""
        self.matches[match.match_id] = match
        if self.is_current(match.match_id):
            self.current_match = match
        return match

    def select(self, match: Match) -> None:
        self.remember(match)
        self.current_match = match
        logger.info("Showing match %s", match.match_id)

    def is_current(self, match_id: str) -> bool:
        return self.current_match is not None and self.current_match.match_id == match_id

    def local_participant(self, match: Match) -> Optional[Participant]:
        return match.participant(self.local_player_id)

    def opponent_names(self, match: Match) -> str:
        names = [p.display_name for p in match.opponents(self.local_player_id)]
        return ", ".join(names) or "N/A"

    # ── Alerts ───────────────────────────────────────────────

    def notify(
        self,
        title: str,
        message: str = "",
        category: AlertCategory = AlertCategory.INFORMATIONAL,
        correlation_key: Optional[str] = None,
        actions: Tuple[str, ...] = ("OK",),
    ) -> bool:
        notification = Notification(
            content=AlertContent(title=title, message=message, actions=actions),
            category=category,
            correlation_key=correlation_key,
        )
        return self.alerts.enqueue(notification)

    def retract(self, correlation_key: Optional[str], category: AlertCategory) -> None:
        """
        Take an alert off the screen or out of the queue.

        An alert whose presentation was requested but not yet acknowledged
        is dismissed as soon as the presenter reports it on screen.
        """
        head = self.alerts.head
        if head is not None and head.dedupe_key == (correlation_key, category):
            if head.is_on_screen():
                self.alerts.dismiss(category)
                return
            if self.alerts.withdraw(correlation_key, category) is None:
                self.stale_prompts.add(head.dedupe_key)
            return
        self.alerts.withdraw(correlation_key, category)

    def prompt_exchange(self, match: Match, exchange: Exchange, sender: str) -> bool:
        """Ask the local player to accept or decline ``exchange``."""
        queued = self.notify(
            "Exchange",
            exchange.message or f"Accept the exchange with {sender}?",
            category=AlertCategory.RESPONDING_TO_EXCHANGE,
            correlation_key=match.match_id,
            actions=("Accept", "Decline"),
        )
        if queued:
            self.prompted_exchange[match.match_id] = exchange.exchange_id
        return queued

    # ── Outbound tasks ───────────────────────────────────────

    def launch(
        self,
        operation: str,
        match: Optional[Match],
        future: Future,
        then: Any = None,
        **details: Any,
    ) -> OutboundTask:
        """Track a platform future; its completion comes back as a message."""
        task = OutboundTask(
            operation,
            match.match_id if match is not None else None,
            future,
            self.post,
            details=details,
            then=then,
        )
        self.tasks.append(task)
        logger.debug("Started %r", task)
        return task.start()

    def in_flight_task(self, operation: str, match_id: str) -> Optional[OutboundTask]:
        return next(
            (t for t in self.tasks if t.operation == operation and t.match_id == match_id),
            None,
        )

    def in_flight(self, operation: str, match_id: str) -> bool:
        return self.in_flight_task(operation, match_id) is not None

    def finish(self, task: OutboundTask) -> bool:
        """Forget a completed task. False if it was cancelled meanwhile."""
        if task in self.tasks:
            self.tasks.remove(task)
        return not task.cancelled

    def cancel_tasks(self, match_id: Optional[str] = None, operation: Optional[str] = None) -> int:
        """Cancel in-flight tasks, optionally only those of one match or operation."""
        doomed = [
            t for t in self.tasks
            if (match_id is None or t.match_id == match_id)
            and (operation is None or t.operation == operation)
        ]
        for task in doomed:
            task.cancel()
            self.tasks.remove(task)
            if task.operation == "save_merged_state":
                self.reconciler.release(task.match_id, task.details.get("retired", ()))
        return len(doomed)
