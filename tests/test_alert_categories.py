# Area: Alerts Tests
# PRD: docs/prd-turnflow.md
"""Tests for alert categories and priorities."""

from turnflow._alerts.categories import AlertCategory, PriorityTier


class TestAlertCategoryPriority:
    """Tests for the (tier, rank) priority of categories."""

    def test_tier_order(self):
        """Test tiers rank informational lowest and follow-ups highest."""
        assert PriorityTier.INFORMATIONAL < PriorityTier.MATCH_CONTEXT_ALTERING
        assert PriorityTier.MATCH_CONTEXT_ALTERING < PriorityTier.MATCH_CONTEXT_SENSITIVE
        assert PriorityTier.MATCH_CONTEXT_SENSITIVE < PriorityTier.FOLLOW_UP

    def test_context_sensitive_sub_ranks(self):
        """Test the ranks inside the match-context-sensitive tier."""
        ordered = [
            AlertCategory.MATCH_CONTEXT_SENSITIVE,
            AlertCategory.RESPONDING_TO_EXCHANGE,
            AlertCategory.WAITING_FOR_EXCHANGE_REPLIES,
            AlertCategory.CREATING_EXCHANGE,
        ]
        assert all(c.tier == PriorityTier.MATCH_CONTEXT_SENSITIVE for c in ordered)
        assert [c.priority for c in ordered] == sorted(c.priority for c in ordered)

    def test_full_order(self):
        """Test every category sorts into the documented order."""
        expected = [
            AlertCategory.INFORMATIONAL,
            AlertCategory.ALTERING_MATCH_CONTEXT,
            AlertCategory.MATCH_CONTEXT_SENSITIVE,
            AlertCategory.RESPONDING_TO_EXCHANGE,
            AlertCategory.WAITING_FOR_EXCHANGE_REPLIES,
            AlertCategory.CREATING_EXCHANGE,
            AlertCategory.EXCHANGE_CANCELLATION_FOLLOW_UP,
        ]
        assert sorted(AlertCategory, key=lambda c: c.priority) == expected

    def test_outranks_is_strict(self):
        """Test outranks() is false between equal categories."""
        follow_up = AlertCategory.EXCHANGE_CANCELLATION_FOLLOW_UP
        assert follow_up.outranks(AlertCategory.CREATING_EXCHANGE)
        assert not AlertCategory.INFORMATIONAL.outranks(AlertCategory.INFORMATIONAL)
        assert not AlertCategory.INFORMATIONAL.outranks(AlertCategory.ALTERING_MATCH_CONTEXT)

    def test_categories_are_distinct(self):
        """Test no two categories share a priority."""
        priorities = [c.priority for c in AlertCategory]
        assert len(set(priorities)) == len(priorities)
