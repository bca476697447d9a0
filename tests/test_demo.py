# Area: Shared Tests
# PRD: docs/prd-turnflow.md
"""Tests for the in-memory platform and recording presenter."""

from unittest.mock import Mock

import pytest

from turnflow.demo import InMemoryPlatform, RecordingPresenter, demo_match
from turnflow._alerts.categories import AlertCategory
from turnflow._alerts.notification import AlertContent, Notification
from turnflow._router.messages import AlertDismissed, AlertPresented
from turnflow.errors import PlatformError


class TestDemoMatch:
    """Tests for demo_match()."""

    def test_builds_open_match(self):
        """Test aliases and the holder seat."""
        match = demo_match("m1", ["alice", "bob"], holder="bob")
        assert [p.display_name for p in match.participants] == ["Alice", "Bob"]
        assert match.current_participant.player_id == "bob"
        assert all(p.last_turn_at is not None for p in match.participants)


class TestInMemoryPlatform:
    """Tests for InMemoryPlatform."""

    def test_send_exchange_returns_exchange(self):
        """Test exchange ids are numbered per platform."""
        platform = InMemoryPlatform("alice")
        match = demo_match("m1", ["alice", "bob"], holder="alice")

        first = platform.send_exchange(match, match.participants[1:], b"", "Trade?", 60).result()
        second = platform.send_exchange(match, match.participants[1:], b"", "Again?", 60).result()

        assert (first.exchange_id, second.exchange_id) == ("m1-x1", "m1-x2")
        assert first.initiator == "alice"
        assert first.recipients == ("bob",)

    def test_fail_next(self):
        """Test exactly one call fails."""
        platform = InMemoryPlatform("alice")
        match = demo_match("m1", ["alice", "bob"], holder="alice")
        platform.fail_next("offline")

        with pytest.raises(PlatformError, match="offline"):
            platform.end_match(match, b"").result()
        assert platform.end_match(match, b"").result() is None
        assert platform.operations() == ["end_match", "end_match"]

    def test_deferred_calls_complete_on_demand(self):
        """Test deferred futures stay pending until completed."""
        platform = InMemoryPlatform("alice")
        match = demo_match("m1", ["alice", "bob"], holder="bob")
        platform.defer()

        future = platform.send_reminder(match, match.participants[1:], "hi")
        assert not future.done()

        platform.complete(0)
        assert future.done()
        assert platform.pending == []


class TestRecordingPresenter:
    """Tests for RecordingPresenter."""

    def _notification(self):
        return Notification(AlertContent(title="Hello"), AlertCategory.INFORMATIONAL)

    def test_acknowledges_through_session(self):
        """Test present and dismiss post acknowledgements."""
        session = Mock()
        presenter = RecordingPresenter().bind(session)
        notification = self._notification()

        presenter.present(notification)
        presenter.dismiss(AlertCategory.INFORMATIONAL)

        posted = [c.args[0] for c in session.post.call_args_list]
        assert posted == [AlertPresented(notification), AlertDismissed(notification)]
        assert presenter.captions == ["Hello"]
        assert presenter.visible is None

    def test_manual_acknowledgement(self):
        """Test nothing is posted until close() without auto acknowledge."""
        session = Mock()
        presenter = RecordingPresenter(auto_acknowledge=False).bind(session)
        notification = self._notification()

        presenter.present(notification)
        presenter.dismiss(AlertCategory.INFORMATIONAL)
        session.post.assert_not_called()

        assert presenter.close() is notification
        session.post.assert_called_once_with(AlertDismissed(notification))
