# Area: Session
# PRD: docs/prd-turnflow.md
"""
turnflow.session — The match session actor
==========================================

One MatchSession owns one session context and processes its inbox one
message at a time, strictly in arrival order. Platform adapters, the
presenter and outbound futures only ever ``post()``; nothing else
touches the queue or the engines.

Usage:
    session = MatchSession(config, platform, presenter)
    session.post(TurnEvent(match, became_active=True))
    session.process_pending()
"""

from __future__ import annotations

import logging
import queue
import threading
from typing import Any, Dict, Optional, Union

from ._alerts.alert_queue import AlertPriorityQueue
from ._config import SessionConfig, validate_config
from ._match.reconciler import ExchangeReconciler
from ._match.turn_order import TurnOrderResolver
from ._router import messages as msg
from ._router.context import SessionContext
from ._router.event_router import MatchEventRouter
from ._router.handlers import (
    AlertDismissedHandler,
    AlertPresentedHandler,
    BeginExchangeHandler,
    CancelExchangeHandler,
    EndMatchHandler,
    EndTurnHandler,
    ExchangeCancellationHandler,
    ExchangeRepliesHandler,
    ExchangeRequestHandler,
    LoadMatchHandler,
    MatchEndedHandler,
    OutboundCompletedHandler,
    QuitRequestedHandler,
    ReplyToExchangeHandler,
    SaveMatchHandler,
    SendReminderHandler,
    TurnEventHandler,
)
from ._shared import log_error_block, setup_logging
from .errors import ExchangesPendingError, InvariantViolation, PlatformError
from .platform import MatchPlatform
from .presenter import Presenter

logger = logging.getLogger("turnflow.session")


class MatchSession:
    """
    Single logical actor coordinating platform events with the UI.

    Attributes:
        config: Validated session settings
        context: Explicit state shared by all handlers
        router: Message class -> handler registry
    """

    def __init__(
        self,
        config: Union[SessionConfig, Dict[str, Any]],
        platform: MatchPlatform,
        presenter: Presenter,
        reconciler: Optional[ExchangeReconciler] = None,
        resolver: Optional[TurnOrderResolver] = None,
        configure_logging: bool = True,
    ):
        if not isinstance(config, SessionConfig):
            config = validate_config(config)
        self.config = config

        if configure_logging:
            setup_logging(log_file_path=config.log_file, level=config.logging_level)

        self._inbox: "queue.Queue[Any]" = queue.Queue()
        self.context = SessionContext(
            config=config,
            platform=platform,
            alerts=AlertPriorityQueue(presenter),
            post=self.post,
            reconciler=reconciler,
            resolver=resolver,
        )
        self.router = MatchEventRouter()
        self._register_handlers()

    def _register_handlers(self) -> None:
        reg, ctx = self.router.register_handler, self.context
        # Platform events
        reg(msg.TurnEvent, TurnEventHandler(ctx))
        reg(msg.MatchEnded, MatchEndedHandler(ctx))
        reg(msg.QuitRequested, QuitRequestedHandler(ctx))
        reg(msg.ExchangeRequest, ExchangeRequestHandler(ctx))
        reg(msg.ExchangeReplies, ExchangeRepliesHandler(ctx))
        reg(msg.ExchangeCancellation, ExchangeCancellationHandler(ctx))
        # User intents
        reg(msg.LoadMatch, LoadMatchHandler(ctx))
        reg(msg.SaveMatch, SaveMatchHandler(ctx))
        reg(msg.EndTurn, EndTurnHandler(ctx))
        reg(msg.EndMatch, EndMatchHandler(ctx))
        reg(msg.BeginExchange, BeginExchangeHandler(ctx))
        reg(msg.ReplyToExchange, ReplyToExchangeHandler(ctx))
        reg(msg.CancelExchange, CancelExchangeHandler(ctx))
        reg(msg.SendReminder, SendReminderHandler(ctx))
        # Completions
        reg(msg.OutboundCompleted, OutboundCompletedHandler(ctx))
        reg(msg.AlertPresented, AlertPresentedHandler(ctx))
        reg(msg.AlertDismissed, AlertDismissedHandler(ctx))

    # ── Inbox ────────────────────────────────────────────────

    def post(self, message: Any) -> None:
        """Queue a message for the session. Safe to call from any thread."""
        self._inbox.put(message)

    @property
    def pending(self) -> int:
        return self._inbox.qsize()

    def process_pending(self) -> int:
        """
        Handle every message already in the inbox, including the ones
        posted while handling.

        Returns:
            Number of messages handled

        Raises:
            InvariantViolation: An internal invariant broke; the session
                must not continue
        """
        handled = 0
        while True:
            try:
                message = self._inbox.get_nowait()
            except queue.Empty:
                return handled
            self.handle(message)
            handled += 1

    def run(self, stop: threading.Event, poll_interval: float = 0.1) -> None:
        """Process messages as they arrive until ``stop`` is set."""
        logger.info("Match session started for player %s", self.config.local_player_id)
        while not stop.is_set():
            try:
                message = self._inbox.get(timeout=poll_interval)
            except queue.Empty:
                continue
            self.handle(message)
        logger.info("Match session stopped")

    # ── Dispatch ─────────────────────────────────────────────

    def handle(self, message: Any) -> None:
        """
        Route one message. Alerts produced while handling it are ordered
        together before the first of them is presented.
        """
        with self.context.alerts.holding():
            try:
                self.router.route(message)
            except InvariantViolation as e:
                log_error_block(e)
                raise
            except ExchangesPendingError as e:
                logger.info("%s", e)
                self.context.notify(
                    "Waiting for Exchanges",
                    "Active exchanges must complete or be cancelled first.",
                    correlation_key=e.match_id,
                )
            except PlatformError as e:
                logger.error("%s", e)
                self.context.notify("Received Error", e.reason, correlation_key=e.match_id)

    # ── Convenience ──────────────────────────────────────────

    @property
    def current_match(self):
        return self.context.current_match

    @property
    def alerts(self) -> AlertPriorityQueue:
        return self.context.alerts

    def cancel_outstanding(self, match_id: Optional[str] = None) -> int:
        """Cancel in-flight platform calls; their completions are dropped."""
        return self.context.cancel_tasks(match_id)
