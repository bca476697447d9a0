# Area: Platform
# PRD: docs/prd-turnflow.md
"""
turnflow.platform — Outbound calls to the hosting platform
==========================================================

Every call is asynchronous and returns a ``concurrent.futures.Future``.
A future that fails carries a ``PlatformError``; the session turns it
into an informational alert. Nothing is retried automatically.

Implementations may complete futures on any thread; the session moves
the completion back onto its own message queue before acting on it.
"""

from abc import ABC, abstractmethod
from concurrent.futures import Future
from typing import Sequence

from ._match.enums import Outcome
from ._match.models import Exchange, Match, Participant


class MatchPlatform(ABC):
    """
    Abstract base class for the vendor turn-based platform.

    Subclass this to bridge the platform SDK. See demo.InMemoryPlatform
    for a reference implementation used in examples and tests.
    """

    # ──────────────────────────────────────────────────────────────
    # Exchanges
    # ──────────────────────────────────────────────────────────────

    @abstractmethod
    def send_exchange(
        self,
        match: Match,
        recipients: Sequence[Participant],
        payload: bytes,
        message: str,
        timeout_seconds: float,
    ) -> "Future[Exchange]":
        """Start an exchange; resolves to the created Exchange."""
        ...

    @abstractmethod
    def reply_to_exchange(self, exchange: Exchange, payload: bytes) -> "Future[None]":
        """Reply to an exchange the local player received."""
        ...

    @abstractmethod
    def cancel_exchange(self, exchange: Exchange) -> "Future[None]":
        """Cancel an exchange the local player initiated."""
        ...

    # ──────────────────────────────────────────────────────────────
    # Match state
    # ──────────────────────────────────────────────────────────────

    @abstractmethod
    def save_merged_state(
        self, match: Match, blob: bytes, resolved_exchange_ids: Sequence[str]
    ) -> "Future[None]":
        """Persist merged state and mark the given exchanges resolved."""
        ...

    @abstractmethod
    def end_turn(
        self,
        match: Match,
        next_participants: Sequence[Participant],
        timeout_seconds: float,
        blob: bytes,
    ) -> "Future[None]":
        """Pass the turn. The last listed participant does not time out."""
        ...

    @abstractmethod
    def end_match(self, match: Match, blob: bytes) -> "Future[None]":
        """End the match in turn. Every participant must have an outcome."""
        ...

    # ──────────────────────────────────────────────────────────────
    # Leaving and reminders
    # ──────────────────────────────────────────────────────────────

    @abstractmethod
    def quit_in_turn(
        self,
        match: Match,
        outcome: Outcome,
        next_participants: Sequence[Participant],
        timeout_seconds: float,
        blob: bytes,
    ) -> "Future[None]":
        """Leave the match while holding the turn, passing it on."""
        ...

    @abstractmethod
    def quit_out_of_turn(self, match: Match, outcome: Outcome) -> "Future[None]":
        """Leave the match while another participant holds the turn."""
        ...

    @abstractmethod
    def send_reminder(
        self, match: Match, recipients: Sequence[Participant], message: str
    ) -> "Future[None]":
        """Nudge participants that it is their turn."""
        ...
