# Area: Router
# PRD: docs/prd-turnflow.md
"""
turnflow._router.event_router — Session message router
======================================================

Routes inbox messages to their handlers based on message class.
"""

import logging
from typing import Any, Dict, Optional, Protocol, Type

logger = logging.getLogger("turnflow.router")


class MessageHandler(Protocol):
    """Protocol for session message handlers."""

    def handle(self, message: Any) -> None:
        """Handle one message."""
        ...


class MatchEventRouter:
    """
    Routes session messages to handlers.

    Maintains a registry of handlers for each message class and
    dispatches incoming messages to the appropriate handler.

    Usage:
        router = MatchEventRouter()
        router.register_handler(TurnEvent, turn_handler)
        router.route(TurnEvent(match, became_active=True))
    """

    def __init__(self):
        self._handlers: Dict[Type, MessageHandler] = {}

    def register_handler(self, message_type: Type, handler: MessageHandler) -> None:
        self._handlers[message_type] = handler
        logger.debug("Registered handler for %s", message_type.__name__)

    def get_handler(self, message_type: Type) -> Optional[MessageHandler]:
        return self._handlers.get(message_type)

    def route(self, message: Any) -> bool:
        """
        Route a message to its handler.

        Returns:
            True if a handler took the message, False if none is registered
        """
        name = type(message).__name__
        handler = self._handlers.get(type(message))

        if handler is None:
            logger.warning("No handler for message type: %s", name)
            return False

        logger.debug("Routing %s to handler", name)
        handler.handle(message)
        return True
