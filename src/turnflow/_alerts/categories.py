# Area: Alerts
# PRD: docs/prd-turnflow.md
"""
turnflow._alerts.categories — Alert categories and priorities
=============================================================

Every notification belongs to exactly one category. A category carries an
explicit two-level priority: the tier decides which band it belongs to,
the rank orders categories inside the same tier.

Tiers (lowest to highest):
    INFORMATIONAL            generic alerts, no match context
    MATCH_CONTEXT_ALTERING   alerts that may load a different match
    MATCH_CONTEXT_SENSITIVE  alerts about the displayed match
    FOLLOW_UP                alerts that must follow a forcibly dismissed one
"""

from enum import Enum, IntEnum
from typing import NamedTuple


class PriorityTier(IntEnum):
    """Priority band of an alert category."""
    INFORMATIONAL = 0
    MATCH_CONTEXT_ALTERING = 1
    MATCH_CONTEXT_SENSITIVE = 2
    FOLLOW_UP = 3


class Priority(NamedTuple):
    """Comparable (tier, rank) pair. Higher compares greater."""
    tier: PriorityTier
    rank: int


class AlertCategory(Enum):
    """
    Closed set of alert categories.

    Each value is (tier, rank); compare categories through ``priority``.
    """
    INFORMATIONAL = (PriorityTier.INFORMATIONAL, 0)
    ALTERING_MATCH_CONTEXT = (PriorityTier.MATCH_CONTEXT_ALTERING, 0)
    MATCH_CONTEXT_SENSITIVE = (PriorityTier.MATCH_CONTEXT_SENSITIVE, 0)
    RESPONDING_TO_EXCHANGE = (PriorityTier.MATCH_CONTEXT_SENSITIVE, 1)
    WAITING_FOR_EXCHANGE_REPLIES = (PriorityTier.MATCH_CONTEXT_SENSITIVE, 2)
    CREATING_EXCHANGE = (PriorityTier.MATCH_CONTEXT_SENSITIVE, 3)
    EXCHANGE_CANCELLATION_FOLLOW_UP = (PriorityTier.FOLLOW_UP, 0)

    @property
    def tier(self) -> PriorityTier:
        return self.value[0]

    @property
    def rank(self) -> int:
        return self.value[1]

    @property
    def priority(self) -> Priority:
        """The priority of this category. Present higher priorities first."""
        return Priority(self.tier, self.rank)

    def outranks(self, other: "AlertCategory") -> bool:
        """True if this category has strictly higher priority than ``other``."""
        return self.priority > other.priority
