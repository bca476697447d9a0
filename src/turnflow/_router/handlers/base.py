# Area: Router
# PRD: docs/prd-turnflow.md
"""
turnflow._router.handlers.base — Base Session Handler
=====================================================

Abstract base class for all session message handlers.
Provides the helpers handlers share: looking up the displayed match,
deriving permitted actions and merging completed exchanges.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Optional

from ..context import SessionContext
from ..._match.actions import MatchActions, available_actions
from ..._match.models import Match
from ...errors import ExchangesPendingError

logger = logging.getLogger("turnflow.handler")


class BaseSessionHandler(ABC):
    """
    Abstract base class for session message handlers.

    Handlers receive the session context when constructed and are
    called with one inbox message at a time.
    """

    def __init__(self, context: SessionContext):
        self.context = context

    @abstractmethod
    def handle(self, message: Any) -> None:
        pass

    def current_match(self, action: str) -> Optional[Match]:
        """The displayed match, or None (logged) when nothing is shown."""
        match = self.context.current_match
        if match is None:
            logger.warning("No match selected, ignoring %s", action)
        return match

    def actions(self, match: Match) -> MatchActions:
        config = self.context.config
        return available_actions(
            match,
            self.context.local_player_id,
            config.turn_timeout_seconds,
            reminder_throttle_ratio=config.reminder_throttle_ratio,
        )

    def merge_completed_exchanges(self, match: Match, then: Any = None) -> bool:
        """
        Save the merge of every completed exchange, if there is one.

        ``then`` is posted once the platform confirmed the save. Exchanges
        whose replies cannot be decoded are reported once with an
        informational alert and left out.

        Returns:
            True if a save was started, False when there is nothing to merge

        Raises:
            ExchangesPendingError: If exchanges are still active
        """
        active = match.active_exchanges
        if active:
            raise ExchangesPendingError(match.match_id, [e.exchange_id for e in active])

        result = self.context.reconciler.reconcile(match)
        if result.decode_errors:
            skipped = ", ".join(e.exchange_id for e in result.decode_errors)
            self.context.notify(
                "Exchange Skipped",
                f"Could not read the replies of exchange {skipped}.",
                correlation_key=match.match_id,
            )
        if result.is_no_change:
            return False

        future = self.context.platform.save_merged_state(
            match, result.merged_state, result.retired_exchange_ids
        )
        self.context.launch(
            "save_merged_state", match, future, then=then,
            retired=result.retired_exchange_ids, blob=result.merged_state,
        )
        return True

    def log_handling(self, message: Any, match_id: Optional[str] = None) -> None:
        if match_id:
            logger.info("Handling %s (match_id=%s)", type(message).__name__, match_id)
        else:
            logger.info("Handling %s", type(message).__name__)
