# Area: Match
# PRD: docs/prd-turnflow.md
"""
turnflow._match.state_blob — Match-state blob encoding
======================================================

The match-state blob is an application-level ordered concatenation:

    <record>\\n<record>\\n...

Each folded exchange appends one record. A record lists the exchange
replies in arrival order as ``player:value`` joined by ``|``:

    P1:accepted|P2:declined

Reply payloads travel as JSON arrays of strings, e.g. ``["accepted"]``.
"""

from __future__ import annotations

import json
from typing import Annotated, List

from pydantic import Field, TypeAdapter, ValidationError

from .models import ExchangeReply
from ..errors import PayloadDecodeError

RECORD_SEPARATOR = b"\n"
REPLY_SEPARATOR = "|"

ReplyValues = Annotated[List[str], Field(min_length=1)]
_reply_adapter = TypeAdapter(ReplyValues)


def encode_reply(*values: str) -> bytes:
    """Encode reply values as a reply payload."""
    return json.dumps(list(values)).encode("utf-8")


def decode_reply(exchange_id: str, reply: ExchangeReply) -> str:
    """
    Decode one reply payload into its folded ``player:value`` segment.

    Raises:
        PayloadDecodeError: If the payload is not a non-empty JSON string array
    """
    try:
        values = _reply_adapter.validate_json(reply.payload)
    except ValidationError as e:
        raise PayloadDecodeError(
            exchange_id,
            f"undecodable reply from {reply.participant_id}: {e.error_count()} error(s)",
        ) from e
    return f"{reply.participant_id}:{','.join(values)}"


def fold_replies(exchange_id: str, replies: List[ExchangeReply]) -> bytes:
    """Fold replies, in order, into one exchange record."""
    segments = [decode_reply(exchange_id, reply) for reply in replies]
    return REPLY_SEPARATOR.join(segments).encode("utf-8")


def append_records(state: bytes, records: List[bytes]) -> bytes:
    """Concatenate records onto the existing blob, preserving order."""
    parts = [state] if state else []
    parts.extend(records)
    return RECORD_SEPARATOR.join(parts)


def read_records(state: bytes) -> List[str]:
    """Split a blob back into its records (for display and tests)."""
    if not state:
        return []
    return state.decode("utf-8").split(RECORD_SEPARATOR.decode("utf-8"))
