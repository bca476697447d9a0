# Area: Match
# PRD: docs/prd-turnflow.md
"""
turnflow._match.models — Match, participant and exchange dataclasses
====================================================================

Client-side view of the externally-owned match record. The platform is
the source of truth; these objects are refreshed from platform events and
mutated locally only where the turn holder is allowed to.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List, Optional, Tuple

from .enums import ExchangeStatus, MatchStatus, Outcome, TurnStatus
from ..errors import InvariantViolation

logger = logging.getLogger("turnflow.match")


@dataclass
class Participant:
    """
    One seat in a match.

    Attributes:
        player_id: Platform identity of the player
        alias: Display name
        turn_status: Seat status reported by the platform
        outcome: Match outcome; set once, never changed afterwards
        last_turn_at: When this participant last took a turn
        quit_pending: A quit was observed but not yet confirmed
    """

    player_id: str
    alias: str = ""
    turn_status: TurnStatus = TurnStatus.ACTIVE
    outcome: Outcome = Outcome.NONE
    last_turn_at: Optional[datetime] = None
    quit_pending: bool = False

    @property
    def display_name(self) -> str:
        return self.alias or self.player_id

    @property
    def has_exited(self) -> bool:
        return self.outcome.is_terminal

    def set_outcome(self, outcome: Outcome) -> None:
        """Assign the match outcome. A terminal outcome is never replaced."""
        if self.outcome.is_terminal:
            raise InvariantViolation(
                "outcome-set-once",
                f"Outcome of {self.player_id} is already {self.outcome.value}",
                {"player_id": self.player_id, "requested": outcome.value},
            )
        self.outcome = outcome
        if outcome is Outcome.QUIT:
            self.quit_pending = False


@dataclass(frozen=True)
class ExchangeReply:
    """A recipient's reply to an exchange, in arrival order."""
    participant_id: str
    payload: bytes
    replied_at: Optional[datetime] = None


@dataclass
class Exchange:
    """
    A bounded side-negotiation among a subset of match participants.

    Attributes:
        exchange_id: Platform identifier
        initiator: player_id of the sender
        recipients: player_ids expected to reply (never empty)
        status: Lifecycle status
        timeout_deadline: When the platform will time the exchange out
        payload: Data attached by the initiator
        message: Prompt shown to recipients
        replies: Replies in arrival order
        completed_at: When the exchange became complete
    """

    exchange_id: str
    initiator: str
    recipients: Tuple[str, ...]
    status: ExchangeStatus = ExchangeStatus.ACTIVE
    timeout_deadline: Optional[datetime] = None
    payload: bytes = b""
    message: str = ""
    replies: List[ExchangeReply] = field(default_factory=list)
    completed_at: Optional[datetime] = None

    def __post_init__(self):
        self.recipients = tuple(self.recipients)
        if not self.recipients:
            raise ValueError(f"Exchange {self.exchange_id} must have at least one recipient")

    @property
    def is_active(self) -> bool:
        return self.status == ExchangeStatus.ACTIVE

    def has_replied(self, player_id: str) -> bool:
        return any(reply.participant_id == player_id for reply in self.replies)

    def missing_recipients(self) -> List[str]:
        return [r for r in self.recipients if not self.has_replied(r)]

    def add_reply(self, reply: ExchangeReply) -> None:
        """Record a reply; the exchange completes once every recipient replied."""
        if not self.is_active:
            logger.warning(
                "Ignoring reply from %s to %s exchange %s",
                reply.participant_id, self.status.value, self.exchange_id,
            )
            return
        if reply.participant_id not in self.recipients or self.has_replied(reply.participant_id):
            logger.warning("Ignoring unexpected reply from %s to exchange %s",
                           reply.participant_id, self.exchange_id)
            return
        self.replies.append(reply)
        if not self.missing_recipients():
            self.status = ExchangeStatus.COMPLETE
            self.completed_at = reply.replied_at or datetime.now(timezone.utc)

    def cancel(self) -> None:
        if self.status in (ExchangeStatus.COMPLETE, ExchangeStatus.RESOLVED):
            raise InvariantViolation(
                "cancel-active-only",
                f"Exchange {self.exchange_id} is already {self.status.value}",
            )
        self.status = ExchangeStatus.CANCELED


@dataclass
class Match:
    """
    A turn-based match as last reported by the platform.

    Attributes:
        match_id: Platform identifier
        status: Match lifecycle status
        participants: Seats in fixed order
        current_index: Seat index of the turn holder, None when nobody holds the turn
        state: Opaque match-state blob
        exchanges: Every exchange attached to the match
    """

    match_id: str
    status: MatchStatus = MatchStatus.OPEN
    participants: List[Participant] = field(default_factory=list)
    current_index: Optional[int] = None
    state: bytes = b""
    exchanges: List[Exchange] = field(default_factory=list)

    @property
    def current_participant(self) -> Optional[Participant]:
        if self.current_index is None:
            return None
        if not 0 <= self.current_index < len(self.participants):
            return None
        return self.participants[self.current_index]

    def participant(self, player_id: str) -> Optional[Participant]:
        for participant in self.participants:
            if participant.player_id == player_id:
                return participant
        return None

    def opponents(self, player_id: str) -> List[Participant]:
        return [p for p in self.participants if p.player_id != player_id]

    def is_turn_holder(self, player_id: str) -> bool:
        current = self.current_participant
        return current is not None and current.player_id == player_id

    def exchange(self, exchange_id: str) -> Optional[Exchange]:
        for exchange in self.exchanges:
            if exchange.exchange_id == exchange_id:
                return exchange
        return None

    @property
    def active_exchanges(self) -> List[Exchange]:
        return [e for e in self.exchanges if e.status == ExchangeStatus.ACTIVE]

    @property
    def completed_exchanges(self) -> List[Exchange]:
        return [e for e in self.exchanges if e.status == ExchangeStatus.COMPLETE]

    def upsert_exchange(self, exchange: Exchange) -> Exchange:
        """Replace the stored exchange with the same id, or append it."""
        for index, existing in enumerate(self.exchanges):
            if existing.exchange_id == exchange.exchange_id:
                self.exchanges[index] = exchange
                return exchange
        self.exchanges.append(exchange)
        return exchange
