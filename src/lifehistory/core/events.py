"""
Pub/Sub notice bus for the diagnostic side-channel.

The builder and mover publish notices here so the surrounding application can
observe moves and no-op moves without inspecting return values. Handlers never
affect the structure that is returned.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from collections.abc import Callable
from typing import Any

logger = logging.getLogger(__name__)

Handler = Callable[[Any], None]


class EventBus:
    """
    Synchronous pub/sub bus.

    Usage:
        bus = EventBus()

        def on_move_failed(notice):
            print(notice["reason"])

        bus.subscribe(NoticeTypes.EVENT_MOVE_FAILED, on_move_failed)
        move_event(..., bus=bus)
    """

    def __init__(self):
        self._handlers: dict[str, list[Handler]] = defaultdict(list)

    def subscribe(self, notice_type: str, handler: Handler) -> Callable[[], None]:
        """
        Subscribe a handler to a notice type.

        Args:
            notice_type: Notice type identifier (e.g., "event.moved")
            handler: Callback receiving the notice payload

        Returns:
            Unsubscribe function
        """
        self._handlers[notice_type].append(handler)
        logger.debug("Handler subscribed to: %s", notice_type)

        def unsubscribe():
            self.unsubscribe(notice_type, handler)

        return unsubscribe

    def unsubscribe(self, notice_type: str, handler: Handler) -> bool:
        """
        Unsubscribe a handler from a notice type.

        Returns:
            True if handler was found and removed
        """
        try:
            self._handlers[notice_type].remove(handler)
        except ValueError:
            return False
        logger.debug("Handler unsubscribed from: %s", notice_type)
        return True

    def publish(self, notice_type: str, data: Any = None) -> int:
        """
        Publish a notice to all subscribed handlers.

        Handler errors are logged and do not reach the publisher.

        Args:
            notice_type: Notice type identifier
            data: Notice payload

        Returns:
            Number of handlers called
        """
        handlers = list(self._handlers.get(notice_type, []))

        if not handlers:
            logger.debug("No handlers for notice: %s", notice_type)
            return 0

        logger.debug("Publishing %s to %d handlers", notice_type, len(handlers))

        for handler in handlers:
            try:
                handler(data)
            except Exception as e:
                logger.error(
                    "Error in handler for %s: %s",
                    notice_type,
                    e,
                    exc_info=True,
                )

        return len(handlers)

    def clear(self, notice_type: str | None = None) -> None:
        """Clear handlers for a notice type, or all handlers if None."""
        if notice_type:
            self._handlers.pop(notice_type, None)
            logger.debug("Cleared handlers for: %s", notice_type)
        else:
            self._handlers.clear()
            logger.debug("Cleared all handlers")

    def get_handlers(self, notice_type: str) -> list[Handler]:
        return list(self._handlers.get(notice_type, []))

    @property
    def notice_types(self) -> set[str]:
        """Get all notice types with at least one registration."""
        return {key for key, handlers in self._handlers.items() if handlers}

    def __repr__(self) -> str:
        total = sum(len(h) for h in self._handlers.values())
        return f"EventBus(handlers={total})"


class NoticeTypes:
    """Standard notice type constants."""

    LIFE_HISTORY_BUILT = "life_history.built"
    EVENT_MOVED = "event.moved"
    EVENT_MOVE_FAILED = "event.move_failed"
