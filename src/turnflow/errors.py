"""
turnflow.errors — Custom exception classes
===========================================

Defines the exception hierarchy for the match coordination core.
Each exception stores full context for structured logging.
"""

from __future__ import annotations
from typing import Any, Dict, Optional
import json


class TurnflowError(Exception):
    """Base exception for all turnflow package errors."""
    pass


class ConfigError(TurnflowError):
    """Raised when session configuration is missing or invalid."""
    pass


class PlatformError(TurnflowError):
    """Raised (or delivered through a task) when an outbound platform call fails."""

    def __init__(self, operation: str, match_id: Optional[str], reason: str):
        self.operation = operation
        self.match_id = match_id
        self.reason = reason
        super().__init__(
            f"Platform call '{operation}' failed for match {match_id or 'N/A'}: {reason}"
        )


class PayloadDecodeError(TurnflowError):
    """Raised when an exchange cannot be folded into match state."""

    def __init__(self, exchange_id: str, reason: str):
        self.exchange_id = exchange_id
        self.reason = reason
        super().__init__(f"Exchange {exchange_id} skipped: {reason}")


class ExchangesPendingError(TurnflowError):
    """Raised when a turn cannot end because exchanges are still active."""

    def __init__(self, match_id: str, active_exchange_ids: list):
        self.match_id = match_id
        self.active_exchange_ids = list(active_exchange_ids)
        super().__init__(
            f"Match {match_id} waiting for {len(self.active_exchange_ids)} "
            f"active exchange(s) to complete or be cancelled"
        )


class InvariantViolation(TurnflowError, AssertionError):
    """
    Programmer error: an internal invariant was broken.

    Raised for double dismissal, re-folding a resolved exchange,
    queue/presentation divergence and outcome overwrites. Never retried.
    """

    def __init__(self, invariant: str, detail: str, context: Optional[Dict[str, Any]] = None):
        self.invariant = invariant
        self.detail = detail
        self.context = context or {}
        super().__init__(f"{invariant}: {detail}")

    def format_error_log(self) -> str:
        return _format_error_block(
            error_type="INVARIANT_VIOLATION",
            invariant=self.invariant,
            detail=self.detail,
            context=self.context,
        )


def _format_error_block(
    error_type: str,
    invariant: str,
    detail: str,
    context: Dict[str, Any],
) -> str:
    """Format a framed error block for terminal and log output."""
    from datetime import datetime, timezone

    timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%f")[:-3] + "Z"

    lines = [
        "",
        "=" * 64,
        " INVARIANT VIOLATION — PROGRAMMER ERROR",
        "=" * 64,
        f" Timestamp:    {timestamp}",
        f" Error Type:   {error_type}",
        f" Invariant:    {invariant}",
        f" Detail:       {detail}",
    ]

    if context:
        lines.append("")
        lines.append(" ── CONTEXT " + "─" * 52)
        lines.append(_indent_json(context))

    lines.append("")
    lines.append("=" * 64)
    lines.append("")

    return "\n".join(lines)


def _indent_json(data: Dict[str, Any], indent: int = 2) -> str:
    """Format JSON with indentation for error logs."""
    try:
        formatted = json.dumps(data, indent=indent, default=str)
        # Add leading space to each line
        return "\n".join(" " + line for line in formatted.split("\n"))
    except Exception:
        return f" {repr(data)}"
