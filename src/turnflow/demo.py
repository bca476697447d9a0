# Area: Shared
# PRD: docs/prd-turnflow.md
"""
turnflow.demo — In-memory platform and recording presenter
==========================================================

Ready-to-use MatchPlatform and Presenter implementations that work
without a vendor SDK or a UI. Used by the example script and tests.

Usage:
    from turnflow import InMemoryPlatform, MatchSession, RecordingPresenter

    presenter = RecordingPresenter()
    session = MatchSession(config, InMemoryPlatform("alice"), presenter)
    presenter.bind(session)
"""

import itertools
import logging
from concurrent.futures import Future
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from ._alerts.categories import AlertCategory
from ._alerts.notification import Notification
from ._match.enums import Outcome
from ._match.models import Exchange, Match, Participant
from ._router.messages import AlertDismissed, AlertPresented
from .errors import PlatformError
from .platform import MatchPlatform
from .presenter import Presenter

logger = logging.getLogger("turnflow.demo")


@dataclass
class PlatformCall:
    """One recorded platform call."""
    operation: str
    match_id: Optional[str]
    args: Dict[str, Any] = field(default_factory=dict)


class InMemoryPlatform(MatchPlatform):
    """
    MatchPlatform that resolves every call at once.

    Calls are recorded in ``calls``. ``fail_next(reason)`` makes the next
    call fail with a PlatformError; ``defer()`` leaves futures pending so
    a test can resolve them later, out of order if it likes.
    """

    def __init__(self, local_player_id: str):
        self.local_player_id = local_player_id
        self.calls: List[PlatformCall] = []
        self.pending: List[Tuple[Future, Any]] = []
        self._failures: List[str] = []
        self._deferred = False
        self._exchange_ids = itertools.count(1)

    # ── Test controls ────────────────────────────────────────

    def fail_next(self, reason: str = "Error communicating with the server.") -> None:
        self._failures.append(reason)

    def defer(self, deferred: bool = True) -> None:
        self._deferred = deferred

    def complete(self, index: int = 0) -> None:
        """Resolve a deferred future."""
        future, result = self.pending.pop(index)
        if isinstance(result, BaseException):
            future.set_exception(result)
        else:
            future.set_result(result)

    def operations(self) -> List[str]:
        return [call.operation for call in self.calls]

    # ── MatchPlatform ────────────────────────────────────────

    def send_exchange(self, match, recipients, payload, message, timeout_seconds):
        exchange = Exchange(
            exchange_id=f"{match.match_id}-x{next(self._exchange_ids)}",
            initiator=self.local_player_id,
            recipients=tuple(p.player_id for p in recipients),
            payload=payload,
            message=message,
        )
        return self._record(
            "send_exchange", match.match_id, exchange,
            recipients=[p.player_id for p in recipients], timeout=timeout_seconds,
        )

    def reply_to_exchange(self, exchange, payload):
        return self._record(
            "reply_to_exchange", None, None,
            exchange_id=exchange.exchange_id, payload=payload,
        )

    def cancel_exchange(self, exchange):
        return self._record("cancel_exchange", None, None, exchange_id=exchange.exchange_id)

    def save_merged_state(self, match, blob, resolved_exchange_ids):
        return self._record(
            "save_merged_state", match.match_id, None,
            blob=blob, resolved=list(resolved_exchange_ids),
        )

    def end_turn(self, match, next_participants, timeout_seconds, blob):
        return self._record(
            "end_turn", match.match_id, None,
            next=[p.player_id for p in next_participants], timeout=timeout_seconds, blob=blob,
        )

    def end_match(self, match, blob):
        return self._record(
            "end_match", match.match_id, None,
            outcomes={p.player_id: p.outcome for p in match.participants}, blob=blob,
        )

    def quit_in_turn(self, match, outcome, next_participants, timeout_seconds, blob):
        return self._record(
            "quit_in_turn", match.match_id, None,
            outcome=outcome, next=[p.player_id for p in next_participants],
        )

    def quit_out_of_turn(self, match, outcome):
        return self._record("quit_out_of_turn", match.match_id, None, outcome=outcome)

    def send_reminder(self, match, recipients, message):
        return self._record(
            "send_reminder", match.match_id, None,
            recipients=[p.player_id for p in recipients], message=message,
        )

    def _record(self, operation: str, match_id: Optional[str], result: Any, **args: Any) -> Future:
        self.calls.append(PlatformCall(operation, match_id, args))
        logger.debug("Platform call %s for match %s", operation, match_id or "N/A")

        future: Future = Future()
        if self._failures:
            result = PlatformError(operation, match_id, self._failures.pop(0))

        if self._deferred:
            self.pending.append((future, result))
        elif isinstance(result, BaseException):
            future.set_exception(result)
        else:
            future.set_result(result)
        return future


class RecordingPresenter(Presenter):
    """
    Presenter that records requests and acknowledges through the session.

    With ``auto_acknowledge`` (the default) every present/dismiss request
    is acknowledged at once by posting to the bound session. ``close()``
    simulates the user closing the visible alert through one of its actions.
    """

    def __init__(self, auto_acknowledge: bool = True):
        self.auto_acknowledge = auto_acknowledge
        self.presented: List[Notification] = []
        self.dismissed: List[AlertCategory] = []
        self.visible: Optional[Notification] = None
        self._post: Optional[Callable[[Any], None]] = None

    def bind(self, session) -> "RecordingPresenter":
        self._post = session.post
        return self

    def present(self, notification: Notification) -> None:
        logger.info("Presenting \"%s\"", notification.caption)
        self.presented.append(notification)
        self.visible = notification
        if self.auto_acknowledge and self._post is not None:
            self._post(AlertPresented(notification))

    def dismiss(self, category: AlertCategory) -> None:
        self.dismissed.append(category)
        if self.auto_acknowledge:
            self.close()

    def close(self) -> Optional[Notification]:
        """Take the visible alert off screen and acknowledge it."""
        notification, self.visible = self.visible, None
        if notification is not None and self._post is not None:
            self._post(AlertDismissed(notification))
        return notification

    @property
    def captions(self) -> List[str]:
        return [n.caption for n in self.presented]


def demo_match(
    match_id: str,
    player_ids: Sequence[str],
    holder: Optional[str] = None,
    last_turn_at: Optional[datetime] = None,
) -> Match:
    """Build an open match with one active seat per player."""
    participants = [
        Participant(player_id=pid, alias=pid.title(), outcome=Outcome.NONE,
                    last_turn_at=last_turn_at or datetime.now(timezone.utc))
        for pid in player_ids
    ]
    index = list(player_ids).index(holder) if holder is not None else None
    return Match(match_id=match_id, participants=participants, current_index=index)
