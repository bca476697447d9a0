# Area: Alerts
# PRD: docs/prd-turnflow.md
"""
turnflow._alerts.notification — Queued notification dataclasses
================================================================

A Notification pairs presentable content with its category and the match
it concerns. Its presentation state is written only from the presenter's
acknowledgements, never inferred from UI objects.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple

from .categories import AlertCategory


class PresentationState(Enum):
    """Where a notification is in its on-screen lifecycle."""
    PENDING = "pending"        # queued, or presentation requested but not acknowledged
    PRESENTED = "presented"    # presenter confirmed it is on screen
    DISMISSED = "dismissed"    # presenter confirmed it left the screen


@dataclass(frozen=True)
class AlertContent:
    """What the presenter shows: a title, a message and action labels."""
    title: str
    message: str = ""
    actions: Tuple[str, ...] = ("OK",)


@dataclass(eq=False)
class Notification:
    """
    One "needs attention" event waiting for (or holding) the screen.

    Attributes:
        content: Presentable title/message/actions
        category: Category deciding queue position
        correlation_key: Match identifier the alert concerns, if any
        presentation_state: Updated only by presenter acknowledgements
    """

    content: AlertContent
    category: AlertCategory = AlertCategory.INFORMATIONAL
    correlation_key: Optional[str] = None
    presentation_state: PresentationState = field(default=PresentationState.PENDING)

    @property
    def dedupe_key(self) -> Tuple[Optional[str], AlertCategory]:
        return (self.correlation_key, self.category)

    @property
    def caption(self) -> str:
        return self.content.title or self.content.message or "an empty alert"

    def is_on_screen(self) -> bool:
        return self.presentation_state == PresentationState.PRESENTED
