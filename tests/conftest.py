"""Shared fixtures for mentions listener tests."""

import pytest
from mentions_listener.attributes import Attribute
from mentions_listener.attributes import AttributeSet
from mentions_listener.config import MentionsConfig
from mentions_listener.delegates import MentionsManager
from mentions_listener.engine import MentionsListener
from mentions_listener.host import TextBuffer

RED = AttributeSet([Attribute("color", "red")])
BLACK = AttributeSet([Attribute("color", "black")])


class RecordingManager(MentionsManager):
    """Manager that records every callback as a tuple."""

    def __init__(self, allow_return_key: bool = True):
        self.calls: list[tuple] = []
        self.allow_return_key = allow_return_key
        self.return_key_checked = False

    def on_mention_added(self, mention):
        self.calls.append(("added", mention))

    def on_mention_removed(self, mention):
        self.calls.append(("removed", mention))

    def on_search_show(self, trigger, query):
        self.calls.append(("show", trigger, query))

    def on_search_update(self, query):
        self.calls.append(("update", query))

    def on_search_hide(self):
        self.calls.append(("hide",))

    def should_allow_return_key_to_add_mention(self):
        self.return_key_checked = True
        return self.allow_return_key

    def names(self) -> list[str]:
        return [call[0] for call in self.calls]


@pytest.fixture
def config():
    return MentionsConfig(mention_attributes=RED, default_attributes=BLACK)


@pytest.fixture
def buffer():
    return TextBuffer()


@pytest.fixture
def manager():
    return RecordingManager()


@pytest.fixture
def listener(buffer, manager, config):
    return MentionsListener(buffer, manager=manager, config=config)


def type_text(listener: MentionsListener, text: str) -> None:
    """Type ``text`` one character at a time at the caret."""
    for char in text:
        listener.insert_text(char)
