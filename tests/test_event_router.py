# Area: Router Tests
# PRD: docs/prd-turnflow.md
"""Tests for MatchEventRouter."""

from unittest.mock import Mock, patch

from turnflow._router.event_router import MatchEventRouter
from turnflow._router.messages import EndTurn, SaveMatch, TurnEvent
from turnflow._match.models import Match


class TestMatchEventRouter:
    """Tests for MatchEventRouter class."""

    def test_routes_to_correct_handler(self):
        """Test that messages are routed by class."""
        router = MatchEventRouter()
        handler = Mock()
        router.register_handler(TurnEvent, handler)

        message = TurnEvent(Match("m1"), became_active=True)
        assert router.route(message) is True
        handler.handle.assert_called_once_with(message)

    def test_unknown_type_is_logged(self):
        """Test a message without a handler is reported."""
        router = MatchEventRouter()

        with patch("turnflow._router.event_router.logger") as mock_logger:
            assert router.route(EndTurn()) is False
            mock_logger.warning.assert_called_once()

    def test_register_multiple_handlers(self):
        """Test handlers for different classes stay separate."""
        router = MatchEventRouter()
        end_turn, save = Mock(), Mock()
        router.register_handler(EndTurn, end_turn)
        router.register_handler(SaveMatch, save)

        router.route(SaveMatch())

        save.handle.assert_called_once()
        end_turn.handle.assert_not_called()

    def test_get_handler(self):
        """Test get_handler returns the registered handler."""
        router = MatchEventRouter()
        handler = Mock()
        router.register_handler(EndTurn, handler)

        assert router.get_handler(EndTurn) is handler
        assert router.get_handler(SaveMatch) is None
