# Area: Router
# PRD: docs/prd-turnflow.md
"""
Session Message Handlers
========================

Handler classes for platform events, user intents and completions.
"""

from .base import BaseSessionHandler
from .match_events import MatchEndedHandler, QuitRequestedHandler, TurnEventHandler
from .exchange_events import (
    ExchangeCancellationHandler,
    ExchangeRepliesHandler,
    ExchangeRequestHandler,
)
from .intents import (
    BeginExchangeHandler,
    CancelExchangeHandler,
    EndMatchHandler,
    EndTurnHandler,
    LoadMatchHandler,
    ReplyToExchangeHandler,
    SaveMatchHandler,
    SendReminderHandler,
)
from .completions import AlertDismissedHandler, AlertPresentedHandler, OutboundCompletedHandler

__all__ = [
    "BaseSessionHandler",
    "MatchEndedHandler",
    "QuitRequestedHandler",
    "TurnEventHandler",
    "ExchangeCancellationHandler",
    "ExchangeRepliesHandler",
    "ExchangeRequestHandler",
    "BeginExchangeHandler",
    "CancelExchangeHandler",
    "EndMatchHandler",
    "EndTurnHandler",
    "LoadMatchHandler",
    "ReplyToExchangeHandler",
    "SaveMatchHandler",
    "SendReminderHandler",
    "AlertDismissedHandler",
    "AlertPresentedHandler",
    "OutboundCompletedHandler",
]
