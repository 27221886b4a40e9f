"""Mention lifecycle events and the bus that carries them."""

from mentions_listener.events.bus import EventBus
from mentions_listener.events.bus import EventRecorder
from mentions_listener.events.schemas import MentionAdded
from mentions_listener.events.schemas import MentionEvent
from mentions_listener.events.schemas import MentionRemoved
from mentions_listener.events.schemas import SearchHidden
from mentions_listener.events.schemas import SearchShown
from mentions_listener.events.schemas import SearchUpdated

__all__ = [
    "EventBus",
    "EventRecorder",
    "MentionEvent",
    "MentionAdded",
    "MentionRemoved",
    "SearchShown",
    "SearchUpdated",
    "SearchHidden",
]
