# Area: Alerts
# PRD: docs/prd-turnflow.md
"""
Alerts - One-at-a-time modal presentation of platform events.

This package handles:
- Alert categories and their (tier, rank) priorities
- Notification dataclasses and presentation state
- The priority queue that serializes presentation
"""

from .categories import AlertCategory, Priority, PriorityTier
from .notification import AlertContent, Notification, PresentationState
from .alert_queue import AlertPriorityQueue

__all__ = [
    "AlertCategory",
    "Priority",
    "PriorityTier",
    "AlertContent",
    "Notification",
    "PresentationState",
    "AlertPriorityQueue",
]
