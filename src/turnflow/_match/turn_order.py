# Area: Match
# PRD: docs/prd-turnflow.md
"""
turnflow._match.turn_order — Next-turn participant ordering
===========================================================

Computes the participant list handed to the platform when the local
holder ends a turn. The platform never times out the last participant in
that list, so the outgoing holder goes last as the fallback and the next
holder goes first.

    seats [A, B*, C, D]  (B holds the turn)  ->  [C, D, A, B]
"""

import logging
from typing import List

from .enums import QuitExclusion
from .models import Match, Participant

logger = logging.getLogger("turnflow.turn_order")


class TurnOrderResolver:
    """
    Resolves the next turn order for a match.

    Participants with a terminal outcome are never included. With
    QuitExclusion.IMMEDIATE, participants whose quit is still awaiting
    platform confirmation are excluded as well.
    """

    def __init__(self, quit_exclusion: QuitExclusion = QuitExclusion.ON_CONFIRMATION):
        self.quit_exclusion = quit_exclusion

    def is_live(self, participant: Participant) -> bool:
        if participant.has_exited:
            return False
        if self.quit_exclusion is QuitExclusion.IMMEDIATE and participant.quit_pending:
            return False
        return True

    def next_turn_order(self, match: Match) -> List[Participant]:
        """
        Return live participants rotated so the current holder is last.

        If the holder is not live (or nobody holds the turn) the remaining
        participants keep their seat order.
        """
        holder = match.current_participant
        live = [p for p in match.participants if self.is_live(p)]
        seat = next((i for i, p in enumerate(live) if p is holder), None)

        if seat is None:
            order = live
        else:
            order = live[seat + 1:] + live[:seat] + [holder]

        logger.debug(
            "New turn order for %s: %s",
            match.match_id, [p.display_name for p in order],
        )
        return order
