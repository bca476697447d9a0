# Area: Router
# PRD: docs/prd-turnflow.md
"""
turnflow._router.handlers.match_events — Turn, end and quit events
==================================================================

Classifies platform events about whole matches by relevance:

    became active         -> show the match, prompt any pending exchange
    update to shown match -> refresh silently
    event for other match -> offer to load it (match-context altering)
"""

import logging

from .base import BaseSessionHandler
from ..messages import MatchEnded, QuitRequested, TurnEvent
from ..._alerts.categories import AlertCategory
from ..._match.enums import Outcome
from ..._match.models import Match

logger = logging.getLogger("turnflow.handler.match")


class TurnEventHandler(BaseSessionHandler):
    """Handles TurnEvent."""

    def handle(self, message: TurnEvent) -> None:
        match = message.match
        self.log_handling(message, match.match_id)

        if message.became_active:
            self.context.select(match)
            self.context.notify(
                "Match Loaded",
                f"Match against {self.context.opponent_names(match)}.",
            )
            self._prompt_pending_exchange(match)
            return

        if self.context.is_current(match.match_id):
            self.context.remember(match)
            logger.info("Refreshed current match %s", match.match_id)
            return

        self.context.remember(match)
        logger.info("Turn event received for another match")
        self.context.notify(
            f"It's your turn in a game against {self.context.opponent_names(match)}!",
            "Do you want to jump to that match?",
            category=AlertCategory.ALTERING_MATCH_CONTEXT,
            correlation_key=match.match_id,
            actions=("Load Match", "Cancel"),
        )

    def _prompt_pending_exchange(self, match: Match) -> None:
        # The platform only raises ExchangeRequest on first launch; later
        # launches have to surface an open request themselves.
        local_id = self.context.local_player_id
        for exchange in match.active_exchanges:
            if local_id in exchange.recipients and not exchange.has_replied(local_id):
                self.context.prompt_exchange(match, exchange, exchange.initiator)
                return


class MatchEndedHandler(BaseSessionHandler):
    """Handles MatchEnded."""

    def handle(self, message: MatchEnded) -> None:
        match = message.match
        self.log_handling(message, match.match_id)
        self.context.remember(match)
        self.context.awaiting_exchange.pop(match.match_id, None)
        # A merge can no longer be saved once the match is over.
        self.context.cancel_tasks(match.match_id, operation="save_merged_state")
        self.context.reconciler.forget(match.match_id)

        if self.context.is_current(match.match_id):
            logger.info("Current match %s ended", match.match_id)
            return

        local = self.context.local_participant(match)
        if local is None:
            logger.warning("Local player not found in participants of match %s", match.match_id)
            return

        self.context.notify(
            f"You {local.outcome.value} a Match against {self.context.opponent_names(match)}!",
            "Do you want to see the result now?",
            category=AlertCategory.ALTERING_MATCH_CONTEXT,
            correlation_key=match.match_id,
            actions=("See Result", "Cancel"),
        )


class QuitRequestedHandler(BaseSessionHandler):
    """
    Handles QuitRequested.

    In turn, the turn passes to the next live participant; out of turn,
    the quit stays pending until the platform confirms it.
    """

    def handle(self, message: QuitRequested) -> None:
        match = self.context.remember(message.match)
        self.log_handling(message, match.match_id)

        local = self.context.local_participant(match)
        if local is None or local.has_exited:
            logger.warning("Local player cannot quit match %s", match.match_id)
            return

        local.quit_pending = True
        platform = self.context.platform
        if match.is_turn_holder(local.player_id):
            next_participants = [
                p for p in self.context.resolver.next_turn_order(match) if p is not local
            ]
            future = platform.quit_in_turn(
                match, Outcome.QUIT, next_participants,
                self.context.config.turn_timeout_seconds, match.state,
            )
            self.context.launch("quit_in_turn", match, future)
        else:
            future = platform.quit_out_of_turn(match, Outcome.QUIT)
            self.context.launch("quit_out_of_turn", match, future)
