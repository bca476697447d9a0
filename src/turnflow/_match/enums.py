# Area: Match
# PRD: docs/prd-turnflow.md
"""
turnflow._match.enums — Match, participant and exchange enums
=============================================================

Mirrors the status values reported by the hosting platform.
"""

from enum import Enum


class MatchStatus(Enum):
    """
    Lifecycle of a match.

    MATCHING -> OPEN (all seats filled) -> ENDED
    """
    MATCHING = "matching"
    OPEN = "open"
    ENDED = "ended"


class TurnStatus(Enum):
    """A participant's seat status."""
    INVITED = "invited"
    MATCHING = "matching"
    ACTIVE = "active"
    DECLINED = "declined"
    DONE = "done"


class Outcome(Enum):
    """
    A participant's match outcome.

    NONE is the only non-terminal value; every other value is final.
    """
    NONE = "none"
    WON = "won"
    LOST = "lost"
    TIED = "tied"
    QUIT = "quit"
    TIMED_OUT = "timed_out"

    @property
    def is_terminal(self) -> bool:
        return self is not Outcome.NONE

    def opposite(self) -> "Outcome":
        """WON <-> LOST; every other outcome is its own opposite."""
        if self is Outcome.WON:
            return Outcome.LOST
        if self is Outcome.LOST:
            return Outcome.WON
        return self


class ExchangeStatus(Enum):
    """
    Lifecycle of an exchange.

    ACTIVE -> COMPLETE (every recipient replied) -> RESOLVED (folded and saved)
    ACTIVE -> CANCELED (initiator cancelled)
    """
    ACTIVE = "active"
    COMPLETE = "complete"
    RESOLVED = "resolved"
    CANCELED = "canceled"


class QuitExclusion(Enum):
    """When a participant who quit out of turn leaves the turn order."""
    IMMEDIATE = "immediate"                # as soon as the quit is observed
    ON_CONFIRMATION = "on_confirmation"    # only once the platform reports the outcome
