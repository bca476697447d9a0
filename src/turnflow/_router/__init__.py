# Area: Router
# PRD: docs/prd-turnflow.md
"""
Router - Classifies session messages and drives the engines.

This package handles:
- Inbox message types (platform events, user intents, completions)
- Routing messages to handlers by type
- The explicit session context handed to every handler
- Outbound platform calls tracked as cancellable tasks
"""

from .messages import (
    AlertDismissed,
    AlertPresented,
    BeginExchange,
    CancelExchange,
    EndMatch,
    EndTurn,
    ExchangeCancellation,
    ExchangeReplies,
    ExchangeRequest,
    LoadMatch,
    MatchEnded,
    OutboundCompleted,
    QuitRequested,
    ReplyToExchange,
    SaveMatch,
    SendReminder,
    TurnEvent,
)
from .event_router import MatchEventRouter
from .context import SessionContext
from .outbound import OutboundTask

__all__ = [
    "AlertDismissed",
    "AlertPresented",
    "BeginExchange",
    "CancelExchange",
    "EndMatch",
    "EndTurn",
    "ExchangeCancellation",
    "ExchangeReplies",
    "ExchangeRequest",
    "LoadMatch",
    "MatchEnded",
    "OutboundCompleted",
    "QuitRequested",
    "ReplyToExchange",
    "SaveMatch",
    "SendReminder",
    "TurnEvent",
    "MatchEventRouter",
    "SessionContext",
    "OutboundTask",
]
