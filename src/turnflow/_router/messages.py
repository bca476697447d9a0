# Area: Router
# PRD: docs/prd-turnflow.md
"""
turnflow._router.messages — Session inbox messages
==================================================

Everything the session reacts to arrives as one of these messages:

    Platform events   TurnEvent, MatchEnded, ExchangeRequest,
                      ExchangeReplies, ExchangeCancellation, QuitRequested
    User intents      LoadMatch, EndTurn, SaveMatch, EndMatch, BeginExchange,
                      ReplyToExchange, CancelExchange, SendReminder
    Completions       OutboundCompleted, AlertPresented, AlertDismissed

Messages are routed by their class.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from .._alerts.notification import Notification
from .._match.enums import Outcome
from .._match.models import Exchange, Match

if TYPE_CHECKING:
    from .outbound import OutboundTask


# ── Platform events ─────────────────────────────────────────

@dataclass
class TurnEvent:
    """A turn was taken in ``match``; ``became_active`` when the app was opened for it."""
    match: Match
    became_active: bool = False


@dataclass
class MatchEnded:
    match: Match


@dataclass
class ExchangeRequest:
    """``sender`` asks the local player to reply to ``exchange``."""
    exchange: Exchange
    match: Match
    sender: str


@dataclass
class ExchangeReplies:
    """Every recipient of ``exchange`` replied."""
    exchange: Exchange
    match: Match
    sender: str


@dataclass
class ExchangeCancellation:
    exchange: Exchange
    match: Match
    sender: str


@dataclass
class QuitRequested:
    """The local player asked to leave ``match``."""
    match: Match


# ── User intents ────────────────────────────────────────────

@dataclass
class LoadMatch:
    match_id: str


@dataclass
class EndTurn:
    pass


@dataclass
class SaveMatch:
    pass


@dataclass
class EndMatch:
    outcome: Outcome = Outcome.WON


@dataclass
class BeginExchange:
    message: str = "Do you want to trade?"


@dataclass
class ReplyToExchange:
    """Reply to the prompted exchange of ``match_id``, or to ``exchange_id``."""
    match_id: str
    accepted: bool = True
    exchange_id: Optional[str] = None


@dataclass
class CancelExchange:
    exchange_id: Optional[str] = None


@dataclass
class SendReminder:
    message: str = ":-)"


# ── Completions ─────────────────────────────────────────────

@dataclass
class OutboundCompleted:
    task: "OutboundTask"


@dataclass
class AlertPresented:
    notification: Notification


@dataclass
class AlertDismissed:
    notification: Notification
