"""Event bus for mention lifecycle events."""

import logging
from collections.abc import Callable
from typing import Any

from mentions_listener.events.schemas import MentionEvent

logger = logging.getLogger(__name__)

Handler = Callable[[MentionEvent, Any], None]


class EventBus:
    """Synchronous bus delivering mention events to subscribers.

    A subscriber may restrict itself to some event classes; otherwise it
    receives every event. A failing handler is logged and skipped so the
    listener and the remaining handlers carry on.

    Args:
        context: Passed to every handler with the event, e.g. an editor id
    """

    def __init__(self, context: Any = None) -> None:
        self._subscriptions: list[tuple[Handler, tuple[type, ...]]] = []
        self._context = context

    def subscribe(self, handler: Handler, *event_types: type) -> Handler:
        """Subscribe a handler to mention events.

        Args:
            handler: Callable that takes an event and the bus context
            event_types: Event classes to receive; all events when omitted

        Returns:
            The handler, which lets :meth:`on` return it unchanged
        """
        self._subscriptions.append((handler, event_types))
        return handler

    def on(self, *event_types: type) -> Callable[[Handler], Handler]:
        """Decorator form of :meth:`subscribe`."""

        def register(handler: Handler) -> Handler:
            return self.subscribe(handler, *event_types)

        return register

    def unsubscribe(self, handler: Handler) -> None:
        self._subscriptions = [entry for entry in self._subscriptions if entry[0] is not handler]

    def publish(self, event: MentionEvent) -> None:
        """Deliver ``event`` to every matching subscriber, in subscription order."""
        for handler, event_types in list(self._subscriptions):
            if event_types and not isinstance(event, event_types):
                continue
            try:
                handler(event, self._context)
            except Exception:
                logger.exception(f"Error in {event.type} handler {getattr(handler, '__name__', handler)!r}")


class EventRecorder:
    """Bus subscriber that keeps every event it receives, in order."""

    def __init__(self) -> None:
        self.events: list[MentionEvent] = []

    def __call__(self, event: MentionEvent, context: Any) -> None:
        self.events.append(event)

    @property
    def types(self) -> list[str]:
        return [event.type for event in self.events]

    def clear(self) -> None:
        self.events.clear()
