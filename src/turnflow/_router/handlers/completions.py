# Area: Router
# PRD: docs/prd-turnflow.md
"""
turnflow._router.handlers.completions — Task and presenter completions
======================================================================

Applies the effects of finished outbound calls and the presenter's
acknowledgements, in the order they arrive in the inbox.
"""

import logging

from .base import BaseSessionHandler
from ..messages import AlertDismissed, AlertPresented, OutboundCompleted
from ..outbound import OutboundTask
from ..._alerts.categories import AlertCategory
from ..._match.enums import MatchStatus, Outcome
from ...errors import PlatformError

logger = logging.getLogger("turnflow.handler.completion")


class OutboundCompletedHandler(BaseSessionHandler):
    """
    Handles OutboundCompleted.

    A failed call is surfaced as an informational alert. A successful
    call applies its effect and posts the task's follow-up message.
    """

    def handle(self, message: OutboundCompleted) -> None:
        task = message.task
        if not self.context.finish(task):
            logger.debug("Ignoring completion of cancelled %r", task)
            return

        error = task.error()
        if error is not None:
            self._on_failure(task, error)
            return

        logger.info("%s succeeded for match %s", task.operation, task.match_id or "N/A")
        apply = getattr(self, f"_on_{task.operation}", None)
        if apply is not None:
            apply(task)
        if task.then is not None:
            self.context.post(task.then)

    def _on_failure(self, task: OutboundTask, error: PlatformError) -> None:
        logger.error("%s", error)
        if task.operation == "save_merged_state":
            self.context.reconciler.release(task.match_id, task.details.get("retired", ()))
        elif task.operation in ("quit_in_turn", "quit_out_of_turn"):
            local = self._local_participant(task)
            if local is not None:
                local.quit_pending = False
        self.context.notify("Received Error", error.reason, correlation_key=task.match_id)

    def _local_participant(self, task: OutboundTask):
        match = self.context.matches.get(task.match_id)
        return self.context.local_participant(match) if match is not None else None

    # ── Per-operation effects ────────────────────────────────

    def _on_save_merged_state(self, task: OutboundTask) -> None:
        match = self.context.matches[task.match_id]
        self.context.reconciler.mark_resolved(match, task.details["retired"])
        match.state = task.details["blob"]

    def _on_end_turn(self, task: OutboundTask) -> None:
        match = self.context.matches[task.match_id]
        match.state = task.details["blob"]

    def _on_end_match(self, task: OutboundTask) -> None:
        match = self.context.matches[task.match_id]
        match.status = MatchStatus.ENDED
        match.current_index = None

    def _on_send_exchange(self, task: OutboundTask) -> None:
        match = self.context.matches[task.match_id]
        exchange = match.upsert_exchange(task.result())
        self.context.awaiting_exchange[match.match_id] = exchange.exchange_id
        logger.info("Sent exchange %s for match %s", exchange.exchange_id, match.match_id)
        self.context.notify(
            "Exchange",
            "Awaiting reply or timeout.",
            category=AlertCategory.WAITING_FOR_EXCHANGE_REPLIES,
            correlation_key=match.match_id,
            actions=("Cancel",),
        )

    def _on_cancel_exchange(self, task: OutboundTask) -> None:
        match = self.context.matches[task.match_id]
        exchange = match.exchange(task.details["exchange_id"])
        if exchange is not None and exchange.is_active:
            exchange.cancel()
        if self.context.awaiting_exchange.get(match.match_id) == task.details["exchange_id"]:
            del self.context.awaiting_exchange[match.match_id]
        self.context.retract(match.match_id, AlertCategory.WAITING_FOR_EXCHANGE_REPLIES)

    def _on_quit_in_turn(self, task: OutboundTask) -> None:
        local = self._local_participant(task)
        if local is not None and not local.has_exited:
            local.set_outcome(Outcome.QUIT)

    _on_quit_out_of_turn = _on_quit_in_turn


class AlertPresentedHandler(BaseSessionHandler):
    """Handles AlertPresented from the presenter."""

    def handle(self, message: AlertPresented) -> None:
        notification = message.notification
        self.context.alerts.acknowledge_presented(notification)
        if notification.dedupe_key in self.context.stale_prompts:
            self.context.stale_prompts.discard(notification.dedupe_key)
            logger.info("Alert \"%s\" went stale before it was shown", notification.caption)
            self.context.alerts.dismiss(notification.category)


class AlertDismissedHandler(BaseSessionHandler):
    """Handles AlertDismissed: the head left the screen, show the next alert."""

    def handle(self, message: AlertDismissed) -> None:
        self.context.alerts.acknowledge_dismissed(message.notification)
        self.context.alerts.advance()
