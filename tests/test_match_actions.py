# Area: Match Tests
# PRD: docs/prd-turnflow.md
"""Tests for permitted actions and outcome assignment."""

from datetime import datetime, timedelta, timezone

import pytest

from turnflow._match.actions import NO_ACTIONS, available_actions, exchange_summary
from turnflow._match.enums import MatchStatus, Outcome
from turnflow._match.models import Exchange, Match, Participant
from turnflow._match.outcomes import all_outcomes_set, assign_outcomes
from turnflow.errors import InvariantViolation

NOW = datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)
TIMEOUT = 600


def make_match(holder="me", status=MatchStatus.OPEN, last_turn=NOW, outcomes=None):
    outcomes = outcomes or {}
    ids = ["me", "p2", "p3"]
    participants = [
        Participant(pid, outcome=outcomes.get(pid, Outcome.NONE), last_turn_at=last_turn)
        for pid in ids
    ]
    index = ids.index(holder) if holder else None
    return Match("m1", status=status, participants=participants, current_index=index)


def actions_for(match, now=NOW):
    return available_actions(match, "me", TIMEOUT, now=now)


class TestAvailableActions:
    """Tests for available_actions()."""

    def test_no_match(self):
        """Test nothing is permitted without a match."""
        assert available_actions(None, "me", TIMEOUT) == NO_ACTIONS

    def test_holder_may_complete_turn(self):
        """Test the holder gets every turn action."""
        actions = actions_for(make_match())
        assert actions.end_turn and actions.save_match
        assert actions.end_turn_win and actions.end_turn_lose
        assert actions.begin_exchange
        assert not actions.send_reminder

    def test_out_of_turn(self):
        """Test a waiting player cannot complete the turn."""
        actions = actions_for(make_match(holder="p2"))
        assert not (actions.end_turn or actions.save_match or actions.end_turn_win)
        assert actions.begin_exchange

    def test_opponent_outcome_only_allows_win(self):
        """Test once an opponent has an outcome only winning remains."""
        actions = actions_for(make_match(outcomes={"p2": Outcome.QUIT}))
        assert actions.end_turn_win
        assert not (actions.end_turn or actions.end_turn_lose or actions.save_match)
        assert not actions.begin_exchange

    @pytest.mark.parametrize("status", [MatchStatus.MATCHING, MatchStatus.ENDED])
    def test_no_exchanges_unless_open(self, status):
        """Test exchanges need an open match."""
        assert not actions_for(make_match(status=status)).begin_exchange

    def test_reminder_throttled(self):
        """Test reminders wait for half the turn timeout."""
        early = NOW + timedelta(seconds=TIMEOUT / 2 - 1)
        late = NOW + timedelta(seconds=TIMEOUT / 2 + 1)
        match = make_match(holder="p2")

        assert not actions_for(match, now=early).send_reminder
        assert actions_for(match, now=late).send_reminder

    def test_no_reminder_with_local_outcome(self):
        """Test a player who left cannot send reminders."""
        match = make_match(holder="p2", outcomes={"me": Outcome.QUIT})
        assert not actions_for(match, now=NOW + timedelta(hours=1)).send_reminder

    def test_no_reminder_without_last_turn(self):
        """Test reminders need a last turn timestamp."""
        match = make_match(holder="p2", last_turn=None)
        assert not actions_for(match, now=NOW + timedelta(hours=1)).send_reminder


class TestExchangeSummary:
    """Tests for exchange_summary()."""

    def test_counts(self):
        """Test the active / total history line."""
        match = make_match()
        match.exchanges = [
            Exchange("x1", initiator="me", recipients=("p2",)),
            Exchange("x2", initiator="me", recipients=("p3",)),
        ]
        match.exchanges[1].cancel()
        assert exchange_summary(match) == "1 active / 2 total"
        assert exchange_summary(None) == ""


class TestAssignOutcomes:
    """Tests for assign_outcomes()."""

    def test_holder_wins(self):
        """Test every other participant loses."""
        match = make_match()
        assign_outcomes(match, Outcome.WON)
        assert [p.outcome for p in match.participants] == [Outcome.WON, Outcome.LOST, Outcome.LOST]
        assert all_outcomes_set(match)

    def test_holder_loses_keeps_existing_outcomes(self):
        """Test participants who already left keep their outcome."""
        match = make_match(outcomes={"p3": Outcome.QUIT})
        assign_outcomes(match, Outcome.LOST)
        assert [p.outcome for p in match.participants] == [Outcome.LOST, Outcome.WON, Outcome.QUIT]

    def test_no_holder_raises(self):
        """Test only a turn holder can end the match."""
        with pytest.raises(InvariantViolation) as exc:
            assign_outcomes(make_match(holder=None), Outcome.WON)
        assert exc.value.invariant == "holder-ends-match"

    def test_holder_outcome_already_set_raises(self):
        """Test the holder's outcome cannot be overwritten."""
        match = make_match(outcomes={"me": Outcome.QUIT})
        with pytest.raises(InvariantViolation):
            assign_outcomes(match, Outcome.WON)
