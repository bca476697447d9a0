# Area: Match
# PRD: docs/prd-turnflow.md
"""
turnflow._match.reconciler — Exchange reconciliation
====================================================

Folds the payload of completed exchanges into the match-state blob and
decides which exchanges to retire. The reconciler is the only component
that marks exchanges retired, so an exchange is folded at most once:

    COMPLETE --decode error--> skipped until its replies change
    COMPLETE --reconcile()--> retired (in flight)
             --mark_resolved()--> RESOLVED    (platform saved the merge)
             --release()--> COMPLETE again     (save failed, user may retry)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Set, Tuple

from .enums import ExchangeStatus
from .models import Exchange, ExchangeReply, Match
from .state_blob import append_records, fold_replies
from ..errors import InvariantViolation, PayloadDecodeError

logger = logging.getLogger("turnflow.reconciler")


@dataclass(frozen=True)
class Reconciliation:
    """
    Result of one reconcile() call.

    Attributes:
        match_id: Match the result applies to
        merged_state: New state blob, None when nothing changed
        retired_exchange_ids: Exchanges folded into merged_state, in fold order
        decode_errors: Exchanges skipped because they could not be folded
    """

    match_id: str
    merged_state: Optional[bytes] = None
    retired_exchange_ids: Tuple[str, ...] = ()
    decode_errors: Tuple[PayloadDecodeError, ...] = field(default=())

    @property
    def is_no_change(self) -> bool:
        return not self.retired_exchange_ids


class ExchangeReconciler:
    """
    Computes merged match state from completed exchanges.

    Keeps, per match, the exchanges it has retired but the platform has
    not yet confirmed as resolved, and those already resolved, so a stale
    match record can never fold an exchange twice. Exchanges that failed to
    decode are skipped until the platform delivers different replies.
    """

    def __init__(self) -> None:
        self._retired: Dict[str, Set[str]] = {}
        self._resolved: Dict[str, Set[str]] = {}
        self._undecodable: Dict[str, Dict[str, Tuple[ExchangeReply, ...]]] = {}

    def retired_ids(self, match_id: str) -> Set[str]:
        return set(self._retired.get(match_id, set()))

    def eligible_exchanges(self, match: Match) -> List[Exchange]:
        """Complete, not yet retired exchanges in completion order."""
        excluded = (self._retired.get(match.match_id, set())
                    | self._resolved.get(match.match_id, set()))
        undecodable = self._undecodable.get(match.match_id, {})
        eligible = [
            e for e in match.exchanges
            if e.status == ExchangeStatus.COMPLETE
            and e.exchange_id not in excluded
            and undecodable.get(e.exchange_id) != tuple(e.replies)
        ]
        # sorted() is stable: exchanges without a timestamp keep list order.
        return sorted(eligible, key=_completion_key)

    def reconcile(self, match: Match) -> Reconciliation:
        """
        Fold every eligible exchange into a new state blob.

        Returns a no-change Reconciliation when nothing can be folded, so
        callers never write an unchanged blob.
        """
        records: List[bytes] = []
        folded: List[str] = []
        errors: List[PayloadDecodeError] = []
        skipped = self._undecodable.setdefault(match.match_id, {})

        for exchange in self.eligible_exchanges(match):
            try:
                records.append(self._fold(exchange))
            except PayloadDecodeError as e:
                logger.error("Decode error in match %s: %s", match.match_id, e)
                errors.append(e)
                skipped[exchange.exchange_id] = tuple(exchange.replies)
                continue
            skipped.pop(exchange.exchange_id, None)
            folded.append(exchange.exchange_id)

        if not folded:
            logger.debug("No completed exchanges to merge for match %s", match.match_id)
            return Reconciliation(match_id=match.match_id, decode_errors=tuple(errors))

        self._retired.setdefault(match.match_id, set()).update(folded)
        logger.info("Merged %d exchange(s) into match %s", len(folded), match.match_id)
        return Reconciliation(
            match_id=match.match_id,
            merged_state=append_records(match.state, records),
            retired_exchange_ids=tuple(folded),
            decode_errors=tuple(errors),
        )

    def mark_resolved(self, match: Match, exchange_ids: Iterable[str]) -> None:
        """
        Record that the platform persisted the merge of ``exchange_ids``.

        Raises:
            InvariantViolation: If an id was not retired by this reconciler
                or is already resolved
        """
        retired = self._retired.get(match.match_id, set())
        resolved = self._resolved.setdefault(match.match_id, set())
        for exchange_id in exchange_ids:
            if exchange_id not in retired or exchange_id in resolved:
                raise InvariantViolation(
                    "fold-once",
                    f"Exchange {exchange_id} resolved without a pending fold",
                    {"match_id": match.match_id, "exchange_id": exchange_id},
                )
            retired.discard(exchange_id)
            resolved.add(exchange_id)
            exchange = match.exchange(exchange_id)
            if exchange is not None:
                exchange.status = ExchangeStatus.RESOLVED

    def release(self, match_id: str, exchange_ids: Iterable[str]) -> None:
        """Forget a fold whose save failed so the exchanges can fold again."""
        retired = self._retired.get(match_id, set())
        for exchange_id in exchange_ids:
            retired.discard(exchange_id)

    def forget(self, match_id: str) -> None:
        """Drop all bookkeeping of a match that has ended."""
        self._retired.pop(match_id, None)
        self._resolved.pop(match_id, None)
        self._undecodable.pop(match_id, None)

    def _fold(self, exchange: Exchange) -> bytes:
        missing = exchange.missing_recipients()
        if missing:
            raise PayloadDecodeError(
                exchange.exchange_id, f"missing replies from {', '.join(missing)}"
            )
        return fold_replies(exchange.exchange_id, exchange.replies)


def _completion_key(exchange: Exchange) -> float:
    if exchange.completed_at is None:
        return float("-inf")
    return exchange.completed_at.timestamp()
