# Area: Router
# PRD: docs/prd-turnflow.md
"""
turnflow._router.handlers.exchange_events — Exchange platform events
====================================================================

Keeps the match record's exchanges current and turns exchange events
into prompts: a reply prompt for a request, a follow-up when the
request is cancelled, and a merge when the turn holder sees replies.
"""

import logging

from .base import BaseSessionHandler
from ..messages import ExchangeCancellation, ExchangeReplies, ExchangeRequest
from ..._alerts.categories import AlertCategory
from ..._match.models import Exchange, Match

logger = logging.getLogger("turnflow.handler.exchange")


def _stored_exchange(match: Match, exchange: Exchange) -> Exchange:
    """The match's own copy of ``exchange``, added when it is missing."""
    return match.exchange(exchange.exchange_id) or match.upsert_exchange(exchange)


class ExchangeRequestHandler(BaseSessionHandler):
    """Handles ExchangeRequest."""

    def handle(self, message: ExchangeRequest) -> None:
        match = self.context.remember(message.match)
        exchange = match.upsert_exchange(message.exchange)
        self.log_handling(message, match.match_id)
        logger.info(
            "Received exchange %s from %s for match %s",
            exchange.exchange_id, message.sender, match.match_id,
        )

        local_id = self.context.local_player_id
        if not exchange.is_active or exchange.has_replied(local_id):
            logger.info("Exchange %s needs no reply", exchange.exchange_id)
            return

        self.context.prompt_exchange(match, exchange, message.sender)


class ExchangeRepliesHandler(BaseSessionHandler):
    """
    Handles ExchangeReplies.

    The initiator's waiting alert is taken down. The turn holder of the
    displayed match merges the completed exchange straight away.
    """

    def handle(self, message: ExchangeReplies) -> None:
        match = self.context.remember(message.match)
        exchange = match.upsert_exchange(message.exchange)
        self.log_handling(message, match.match_id)
        logger.info(
            "Exchange %s is %s with %d replies",
            exchange.exchange_id, exchange.status.value, len(exchange.replies),
        )

        if self.context.awaiting_exchange.get(match.match_id) == exchange.exchange_id:
            del self.context.awaiting_exchange[match.match_id]
            self.context.retract(match.match_id, AlertCategory.WAITING_FOR_EXCHANGE_REPLIES)

        if not self.context.is_current(match.match_id):
            return

        self.context.notify(
            "Exchange Complete",
            f"All {len(exchange.recipients)} recipient(s) replied.",
            category=AlertCategory.MATCH_CONTEXT_SENSITIVE,
            correlation_key=match.match_id,
        )

        if (
            match.is_turn_holder(self.context.local_player_id)
            and not match.active_exchanges
            and not self.context.in_flight("save_merged_state", match.match_id)
        ):
            self.merge_completed_exchanges(match)


class ExchangeCancellationHandler(BaseSessionHandler):
    """
    Handles ExchangeCancellation.

    A cancelled exchange is never folded. If the local player was asked
    to reply, the prompt is taken down and a follow-up explains why.
    """

    def handle(self, message: ExchangeCancellation) -> None:
        match = self.context.remember(message.match)
        exchange = _stored_exchange(match, message.exchange)
        self.log_handling(message, match.match_id)
        logger.info(
            "Exchange creator %s cancelled the exchange %s",
            message.sender, exchange.exchange_id,
        )

        if exchange.is_active:
            exchange.cancel()

        if self.context.prompted_exchange.get(match.match_id) != exchange.exchange_id:
            return

        del self.context.prompted_exchange[match.match_id]
        self.context.retract(match.match_id, AlertCategory.RESPONDING_TO_EXCHANGE)
        self.context.notify(
            "Exchange Cancelled",
            f"{message.sender} cancelled the exchange.",
            category=AlertCategory.EXCHANGE_CANCELLATION_FOLLOW_UP,
            correlation_key=match.match_id,
        )
