# Area: Match
# PRD: docs/prd-turnflow.md
"""
Match - Client-side view of a turn-based match and its engines.

This package handles:
- Match, participant and exchange models
- Next-turn ordering
- Exchange reconciliation into the match-state blob
- Permitted actions and end-of-match outcomes
"""

from .enums import ExchangeStatus, MatchStatus, Outcome, QuitExclusion, TurnStatus
from .models import Exchange, ExchangeReply, Match, Participant
from .turn_order import TurnOrderResolver
from .reconciler import ExchangeReconciler, Reconciliation
from .state_blob import encode_reply, read_records
from .actions import MatchActions, available_actions, exchange_summary
from .outcomes import assign_outcomes

__all__ = [
    "ExchangeStatus",
    "MatchStatus",
    "Outcome",
    "QuitExclusion",
    "TurnStatus",
    "Exchange",
    "ExchangeReply",
    "Match",
    "Participant",
    "TurnOrderResolver",
    "ExchangeReconciler",
    "Reconciliation",
    "encode_reply",
    "read_records",
    "MatchActions",
    "available_actions",
    "exchange_summary",
    "assign_outcomes",
]
