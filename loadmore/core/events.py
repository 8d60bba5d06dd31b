"""Ordered lifecycle events for the navigation controller.

A navigation that reaches the content source emits, in order:
``BEFORE_LOAD``, then ``LOADED`` (and ``PAGE_CHANGE``) or ``LOAD_FAILED``,
then ``AFTER_LOAD``. Boundary no-ops emit only ``BOUNDARY``. ``DESTROYED``
fires once, right before all listeners are dropped.

Handlers may be plain callables or coroutine functions.
"""

import inspect
from collections.abc import Awaitable, Callable
from enum import Enum
from typing import Any

from loadmore.core.logging import get_logger

logger = get_logger(__name__)

Handler = Callable[[Any], Awaitable[None] | None]


class EventType(Enum):
    BEFORE_LOAD = "beforeLoad"
    LOADED = "loaded"
    LOAD_FAILED = "loadFailed"
    AFTER_LOAD = "afterLoad"
    BOUNDARY = "boundary"
    PAGE_CHANGE = "pageChange"
    DESTROYED = "destroyed"


class EventBus:
    """Registry of event handlers, dispatched in registration order."""

    def __init__(self) -> None:
        self._handlers: dict[EventType, list[Handler]] = {}

    def on(self, event: EventType, handler: Handler) -> Callable[[], None]:
        """Register ``handler`` for ``event``.

        Returns:
            A callable that unregisters the handler.
        """
        self._handlers.setdefault(event, []).append(handler)
        return lambda: self.off(event, handler)

    def off(self, event: EventType, handler: Handler) -> None:
        handlers = self._handlers.get(event, [])
        if handler in handlers:
            handlers.remove(handler)

    def listener_count(self, event: EventType | None = None) -> int:
        if event is not None:
            return len(self._handlers.get(event, []))
        return sum(len(h) for h in self._handlers.values())

    def clear(self) -> None:
        self._handlers.clear()

    async def emit(self, event: EventType, payload: Any = None) -> None:
        """Dispatch ``payload`` to every handler of ``event``.

        A failing handler is logged and does not stop the others.
        """
        for handler in list(self._handlers.get(event, [])):
            try:
                outcome = handler(payload)
                if inspect.isawaitable(outcome):
                    await outcome
            except Exception:
                logger.exception("event_handler_failed", event_type=event.value)
