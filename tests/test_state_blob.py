# Area: Match Tests
# PRD: docs/prd-turnflow.md
"""Tests for match-state blob encoding."""

import pytest

from turnflow._match.models import ExchangeReply
from turnflow._match.state_blob import (
    append_records,
    decode_reply,
    encode_reply,
    fold_replies,
    read_records,
)
from turnflow.errors import PayloadDecodeError


class TestReplyCodec:
    """Tests for reply payload encoding and decoding."""

    def test_encode_reply_is_json_array(self):
        """Test reply payloads are JSON string arrays."""
        assert encode_reply("accepted") == b'["accepted"]'

    def test_decode_reply_tags_participant(self):
        """Test a reply folds to participant:value."""
        reply = ExchangeReply("P1", encode_reply("accepted"))
        assert decode_reply("x1", reply) == "P1:accepted"

    def test_decode_multiple_values(self):
        """Test several values join with commas."""
        reply = ExchangeReply("P1", encode_reply("wood", "sheep"))
        assert decode_reply("x1", reply) == "P1:wood,sheep"

    @pytest.mark.parametrize("payload", [b"", b"not json", b"[]", b'{"a": 1}', b"[1, 2]"])
    def test_undecodable_payloads(self, payload):
        """Test payloads that are not a non-empty string array."""
        with pytest.raises(PayloadDecodeError) as exc:
            decode_reply("x1", ExchangeReply("P1", payload))
        assert exc.value.exchange_id == "x1"
        assert "P1" in exc.value.reason


class TestRecords:
    """Tests for blob records."""

    def test_fold_replies_in_order(self):
        """Test replies join with | in arrival order."""
        replies = [
            ExchangeReply("P1", encode_reply("accepted")),
            ExchangeReply("P2", encode_reply("declined")),
        ]
        assert fold_replies("x1", replies) == b"P1:accepted|P2:declined"

    def test_append_to_empty_state(self):
        """Test no leading separator on an empty blob."""
        assert append_records(b"", [b"a", b"b"]) == b"a\nb"

    def test_append_to_existing_state(self):
        """Test records follow the existing blob."""
        assert append_records(b"a", [b"b"]) == b"a\nb"

    def test_read_records(self):
        """Test a blob splits back into records."""
        assert read_records(b"") == []
        assert read_records(b"a\nb") == ["a", "b"]
