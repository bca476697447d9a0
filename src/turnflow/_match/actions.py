# Area: Match
# PRD: docs/prd-turnflow.md
"""Which local-player actions the displayed match currently permits."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from .enums import MatchStatus
from .models import Match


@dataclass(frozen=True)
class MatchActions:
    save_match: bool = False
    end_turn: bool = False
    end_turn_win: bool = False
    end_turn_lose: bool = False
    begin_exchange: bool = False
    send_reminder: bool = False


NO_ACTIONS = MatchActions()


def available_actions(
    match: Optional[Match],
    local_player_id: str,
    turn_timeout_seconds: float,
    now: Optional[datetime] = None,
    reminder_throttle_ratio: float = 0.5,
) -> MatchActions:
    """
    Derive the enabled actions for ``local_player_id`` in ``match``.

    Reminders are throttled by the platform; they are only offered out of
    turn, and once ``reminder_throttle_ratio`` of the turn timeout has
    passed since the local player's last turn.
    """
    if match is None:
        return NO_ACTIONS

    now = now or datetime.now(timezone.utc)
    local = match.participant(local_player_id)
    game_ended = match.status == MatchStatus.ENDED
    is_matching = match.status == MatchStatus.MATCHING
    is_resolving_turn = match.is_turn_holder(local_player_id)
    opponent_outcome_set = any(p.has_exited for p in match.opponents(local_player_id))
    has_local_outcome = local is not None and local.has_exited

    can_send_reminder = not (game_ended or is_matching or is_resolving_turn or has_local_outcome)
    allow_reminder = False
    if local is not None and local.last_turn_at is not None:
        elapsed = (now - local.last_turn_at).total_seconds()
        allow_reminder = elapsed > turn_timeout_seconds * reminder_throttle_ratio

    return MatchActions(
        save_match=is_resolving_turn and not opponent_outcome_set,
        end_turn=is_resolving_turn and not opponent_outcome_set,
        end_turn_win=is_resolving_turn,
        end_turn_lose=is_resolving_turn and not opponent_outcome_set,
        begin_exchange=not is_matching and not game_ended and not opponent_outcome_set,
        send_reminder=allow_reminder and can_send_reminder,
    )


def exchange_summary(match: Optional[Match]) -> str:
    """Short "N active / M total" exchange history line."""
    if match is None:
        return ""
    return f"{len(match.active_exchanges)} active / {len(match.exchanges)} total"
