# Area: Router
# PRD: docs/prd-turnflow.md
"""
turnflow._router.handlers.intents — Local player intents
========================================================

Turns user intents into outbound platform calls. Every turn-completing
intent (save, end turn, end match) first merges completed exchanges;
when a merge is saved, the intent is posted again and proceeds with the
merged state.

Intents the current match does not permit are logged and ignored.
"""

import logging

from .base import BaseSessionHandler
from ..messages import (
    BeginExchange,
    CancelExchange,
    EndMatch,
    EndTurn,
    LoadMatch,
    ReplyToExchange,
    SaveMatch,
    SendReminder,
)
from ..._match.enums import Outcome
from ..._match.models import Match
from ..._match.outcomes import all_outcomes_set, assign_outcomes
from ..._match.state_blob import encode_reply

logger = logging.getLogger("turnflow.handler.intent")


class LoadMatchHandler(BaseSessionHandler):
    """Handles LoadMatch."""

    def handle(self, message: LoadMatch) -> None:
        match = self.context.matches.get(message.match_id)
        if match is None:
            logger.warning("Unknown match %s, cannot load it", message.match_id)
            return
        self.context.select(match)


class TurnCompletionHandler(BaseSessionHandler):
    """Shared flow of SaveMatch, EndTurn and EndMatch."""

    def merge_first(self, match: Match, message) -> bool:
        """
        Returns:
            True if the intent has to wait for a merge to be saved
        """
        if self.defer_behind_save(match, message):
            return True
        return self.merge_completed_exchanges(match, then=message)

    def defer_behind_save(self, match: Match, message) -> bool:
        """
        Post ``message`` again once the merge save in flight completes.

        A save carries one follow-up. EndTurn or EndMatch replace a pending
        SaveMatch, which they include; any other later intent is dropped.

        Returns:
            True if a merge save is in flight for ``match``
        """
        task = self.context.in_flight_task("save_merged_state", match.match_id)
        if task is None:
            return False
        if task.then is None or (
            isinstance(task.then, SaveMatch) and not isinstance(message, SaveMatch)
        ):
            task.then = message
            logger.info("Merge for match %s in flight, %s follows it",
                        match.match_id, type(message).__name__)
        else:
            logger.info("Merge for match %s in flight with %s pending, ignoring %s",
                        match.match_id, type(task.then).__name__, type(message).__name__)
        return True


class SaveMatchHandler(TurnCompletionHandler):
    """Handles SaveMatch: persist merged exchanges without ending the turn."""

    def handle(self, message: SaveMatch) -> None:
        match = self.current_match("save")
        if match is None:
            return
        self.log_handling(message, match.match_id)
        if not self.actions(match).save_match:
            logger.warning("Saving match %s is not permitted now", match.match_id)
            return
        if self.defer_behind_save(match, message):
            return
        if not self.merge_completed_exchanges(match):
            logger.info("No completed exchanges to save for match %s", match.match_id)


class EndTurnHandler(TurnCompletionHandler):
    """
    Handles EndTurn.

    The platform never times out the last participant in the list, so
    the turn order from the resolver keeps the local holder as fallback.
    """

    def handle(self, message: EndTurn) -> None:
        match = self.current_match("end turn")
        if match is None:
            return
        self.log_handling(message, match.match_id)
        if not self.actions(match).end_turn:
            logger.warning("Ending the turn of match %s is not permitted now", match.match_id)
            return
        if self.merge_first(match, message):
            return

        next_participants = self.context.resolver.next_turn_order(match)
        future = self.context.platform.end_turn(
            match, next_participants, self.context.config.turn_timeout_seconds, match.state
        )
        self.context.launch("end_turn", match, future, blob=match.state)


class EndMatchHandler(TurnCompletionHandler):
    """Handles EndMatch: the holder ends the match with ``outcome``."""

    def handle(self, message: EndMatch) -> None:
        match = self.current_match("end match")
        if match is None:
            return
        self.log_handling(message, match.match_id)

        permitted = self.actions(match)
        allowed = permitted.end_turn_win if message.outcome is Outcome.WON else permitted.end_turn_lose
        if not allowed:
            logger.warning("Ending match %s as %s is not permitted now",
                           match.match_id, message.outcome.value)
            return
        if self.merge_first(match, message):
            return

        if not all_outcomes_set(match):
            assign_outcomes(match, message.outcome)
        future = self.context.platform.end_match(match, match.state)
        self.context.launch("end_match", match, future, blob=match.state)


class BeginExchangeHandler(BaseSessionHandler):
    """Handles BeginExchange: ask every live opponent to reply."""

    def handle(self, message: BeginExchange) -> None:
        match = self.current_match("begin exchange")
        if match is None:
            return
        self.log_handling(message, match.match_id)
        if not self.actions(match).begin_exchange:
            logger.warning("Exchanges are not permitted in match %s now", match.match_id)
            return

        recipients = [
            p for p in match.opponents(self.context.local_player_id)
            if self.context.resolver.is_live(p)
        ]
        if not recipients:
            logger.warning("No opponent for match %s", match.match_id)
            return

        future = self.context.platform.send_exchange(
            match, recipients, b"", message.message,
            self.context.config.exchange_timeout_seconds,
        )
        self.context.launch("send_exchange", match, future)


class ReplyToExchangeHandler(BaseSessionHandler):
    """Handles ReplyToExchange with an "accepted" or "declined" reply."""

    def handle(self, message: ReplyToExchange) -> None:
        match = self.context.matches.get(message.match_id)
        if match is None:
            logger.warning("Unknown match %s, cannot reply", message.match_id)
            return
        self.log_handling(message, match.match_id)

        exchange_id = self.context.prompted_exchange.pop(match.match_id, None)
        exchange_id = message.exchange_id or exchange_id
        exchange = match.exchange(exchange_id) if exchange_id else None
        if exchange is None or not exchange.is_active:
            logger.warning("Exchange %s is no longer active", exchange_id or "N/A")
            return

        payload = encode_reply("accepted" if message.accepted else "declined")
        future = self.context.platform.reply_to_exchange(exchange, payload)
        self.context.launch("reply_to_exchange", match, future, exchange_id=exchange.exchange_id)


class CancelExchangeHandler(BaseSessionHandler):
    """Handles CancelExchange for an exchange the local player started."""

    def handle(self, message: CancelExchange) -> None:
        match = self.current_match("cancel exchange")
        if match is None:
            return
        self.log_handling(message, match.match_id)

        exchange_id = message.exchange_id or self.context.awaiting_exchange.get(match.match_id)
        exchange = match.exchange(exchange_id) if exchange_id else None
        if exchange is None or not exchange.is_active:
            logger.warning("No active exchange to cancel in match %s", match.match_id)
            return
        if exchange.initiator != self.context.local_player_id:
            logger.warning("Only the initiator can cancel exchange %s", exchange.exchange_id)
            return

        future = self.context.platform.cancel_exchange(exchange)
        self.context.launch("cancel_exchange", match, future, exchange_id=exchange.exchange_id)


class SendReminderHandler(BaseSessionHandler):
    """Handles SendReminder: nudge the turn holder."""

    def handle(self, message: SendReminder) -> None:
        match = self.current_match("send reminder")
        if match is None:
            return
        self.log_handling(message, match.match_id)
        if not self.actions(match).send_reminder:
            logger.warning("Reminders for match %s are not available now", match.match_id)
            return

        holder = match.current_participant
        if holder is None:
            logger.warning("Nobody holds the turn in match %s", match.match_id)
            return

        future = self.context.platform.send_reminder(match, [holder], message.message)
        self.context.launch("send_reminder", match, future)
