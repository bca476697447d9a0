"""
turnflow — Turn-Based Match Coordination Core
=============================================

Copyright (c) 2026 turnflow contributors. All rights reserved.

Coordinates asynchronous, out-of-order events of a hosted turn-based
match with a single-window UI: a priority-ordered alert queue in front
of the presenter, and a turn/exchange engine that orders turns and folds
completed exchanges into match state.

Quick Start (no platform needed):
    from turnflow import InMemoryPlatform, MatchSession, RecordingPresenter
    presenter = RecordingPresenter()
    session = MatchSession({"local_player_id": "alice"},
                           InMemoryPlatform("alice"), presenter)
    presenter.bind(session)
    session.post(TurnEvent(match, became_active=True))
    session.process_pending()

Custom Implementation:
    from turnflow import MatchPlatform, Presenter
    class MyPlatform(MatchPlatform): ...  # Bridge the vendor SDK
    class MyPresenter(Presenter): ...     # Show alerts modally

Configuration
-------------
    from turnflow import load_config, validate_config
    config = validate_config(load_config("turnflow.json"))
"""

from .session import MatchSession
from .platform import MatchPlatform
from .presenter import Presenter
from .demo import InMemoryPlatform, RecordingPresenter, demo_match
from ._config import SessionConfig, load_config, validate_config
from ._shared import setup_logging
from .errors import (
    TurnflowError,
    ConfigError,
    PlatformError,
    PayloadDecodeError,
    ExchangesPendingError,
    InvariantViolation,
)
from ._alerts import (
    AlertCategory,
    AlertContent,
    AlertPriorityQueue,
    Notification,
    PresentationState,
    PriorityTier,
)
from ._match import (
    Exchange,
    ExchangeReconciler,
    ExchangeReply,
    ExchangeStatus,
    Match,
    MatchActions,
    MatchStatus,
    Outcome,
    Participant,
    QuitExclusion,
    Reconciliation,
    TurnOrderResolver,
    TurnStatus,
    assign_outcomes,
    available_actions,
    encode_reply,
    exchange_summary,
    read_records,
)
from ._router import (
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
    QuitRequested,
    ReplyToExchange,
    SaveMatch,
    SendReminder,
    TurnEvent,
)

__all__ = [
    # Main classes
    "MatchSession",
    "MatchPlatform",
    "Presenter",
    "InMemoryPlatform",
    "RecordingPresenter",
    "demo_match",
    # Configuration
    "SessionConfig",
    "load_config",
    "validate_config",
    "setup_logging",
    # Errors
    "TurnflowError",
    "ConfigError",
    "PlatformError",
    "PayloadDecodeError",
    "ExchangesPendingError",
    "InvariantViolation",
    # Alerts
    "AlertCategory",
    "AlertContent",
    "AlertPriorityQueue",
    "Notification",
    "PresentationState",
    "PriorityTier",
    # Match
    "Exchange",
    "ExchangeReconciler",
    "ExchangeReply",
    "ExchangeStatus",
    "Match",
    "MatchActions",
    "MatchStatus",
    "Outcome",
    "Participant",
    "QuitExclusion",
    "Reconciliation",
    "TurnOrderResolver",
    "TurnStatus",
    "assign_outcomes",
    "available_actions",
    "encode_reply",
    "exchange_summary",
    "read_records",
    # Platform events
    "TurnEvent",
    "MatchEnded",
    "ExchangeRequest",
    "ExchangeReplies",
    "ExchangeCancellation",
    "QuitRequested",
    # User intents
    "LoadMatch",
    "SaveMatch",
    "EndTurn",
    "EndMatch",
    "BeginExchange",
    "ReplyToExchange",
    "CancelExchange",
    "SendReminder",
    # Presenter acknowledgements
    "AlertPresented",
    "AlertDismissed",
]
__version__ = "1.0.0"
