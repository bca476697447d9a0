# Area: Match
# PRD: docs/prd-turnflow.md
"""
turnflow._match.outcomes — End-of-match outcome assignment
==========================================================

When the turn holder ends the match, the holder's outcome is set and
every participant still without an outcome receives the opposite one.
Outcomes already set (quit, timed out, ...) are left untouched.
"""

import logging

from .enums import Outcome
from .models import Match
from ..errors import InvariantViolation

logger = logging.getLogger("turnflow.outcomes")


def assign_outcomes(match: Match, holder_outcome: Outcome) -> None:
    """
    Set outcomes for every participant of ``match``.

    Args:
        match: The match being ended by its turn holder
        holder_outcome: Outcome of the turn holder (WON, LOST or TIED)

    Raises:
        InvariantViolation: If nobody holds the turn, or the holder already
            has an outcome
    """
    holder = match.current_participant
    if holder is None:
        raise InvariantViolation(
            "holder-ends-match",
            f"Match {match.match_id} has no turn holder to end it",
        )

    holder.set_outcome(holder_outcome)
    for participant in match.participants:
        if participant is holder or participant.has_exited:
            continue
        participant.set_outcome(holder_outcome.opposite())

    logger.info(
        "Outcomes for %s: %s",
        match.match_id,
        ", ".join(f"{p.display_name}={p.outcome.value}" for p in match.participants),
    )


def all_outcomes_set(match: Match) -> bool:
    return all(p.has_exited for p in match.participants)
