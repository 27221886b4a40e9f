"""The editable text surface the listener drives.

``HostAdapter`` is what a real text widget has to provide. ``TextBuffer`` is
an in-memory implementation that keeps one attribute set per character.
"""

from __future__ import annotations

from typing import Any
from typing import Protocol

from mentions_listener.attributes import AttributeSet
from mentions_listener.models import TextRange

EMPTY_ATTRIBUTES = AttributeSet()


class HostAdapter(Protocol):
    """Text surface operations used by the listener."""

    @property
    def text(self) -> str: ...

    @property
    def selected_range(self) -> TextRange: ...

    def set_selected_range(self, text_range: TextRange) -> None: ...

    def replace_text(self, text_range: TextRange, replacement: str) -> None: ...

    def set_text(self, text: str) -> None: ...

    def apply_attributes(self, text_range: TextRange, attributes: AttributeSet) -> None: ...


class TextBuffer:
    """In-memory text with a caret and per-character attributes.

    Inserted text takes the attributes of the character before it, the way
    native text views extend the style at the insertion point.
    """

    def __init__(self, text: str = "", attributes: AttributeSet = EMPTY_ATTRIBUTES):
        self._text = text
        self._attributes: list[AttributeSet] = [attributes] * len(text)
        self._selection = TextRange(len(text), 0)
        self.typing_attributes = attributes

    def __len__(self) -> int:
        return len(self._text)

    @property
    def text(self) -> str:
        return self._text

    @property
    def selected_range(self) -> TextRange:
        return self._selection

    def set_selected_range(self, text_range: TextRange) -> None:
        self._check_range(text_range)
        self._selection = text_range

    def replace_text(self, text_range: TextRange, replacement: str) -> None:
        """Replace ``text_range`` and leave the caret after the new text."""
        self._check_range(text_range)
        if text_range.location > 0:
            inherited = self._attributes[text_range.location - 1]
        else:
            inherited = self.typing_attributes
        start, end = text_range.location, text_range.end
        self._text = self._text[:start] + replacement + self._text[end:]
        self._attributes[start:end] = [inherited] * len(replacement)
        self._selection = TextRange(start + len(replacement), 0)

    def insert_text(self, text: str) -> None:
        """Replace the current selection with ``text``."""
        self.replace_text(self._selection, text)

    def set_text(self, text: str) -> None:
        self._text = text
        self._attributes = [self.typing_attributes] * len(text)
        self._selection = TextRange(len(text), 0)

    def apply_attributes(self, text_range: TextRange, attributes: AttributeSet) -> None:
        self._check_range(text_range)
        self._attributes[text_range.location : text_range.end] = [attributes] * text_range.length

    def attributes_at(self, index: int) -> AttributeSet:
        return self._attributes[index]

    def attribute_at(self, name: str, index: int) -> Any:
        return self._attributes[index].get(name)

    def runs(self) -> list[tuple[TextRange, AttributeSet]]:
        """Maximal spans sharing the same attributes, in text order."""
        runs: list[tuple[TextRange, AttributeSet]] = []
        start = 0
        for index in range(1, len(self._text) + 1):
            if index == len(self._text) or self._attributes[index] != self._attributes[start]:
                runs.append((TextRange(start, index - start), self._attributes[start]))
                start = index
        return runs

    def _check_range(self, text_range: TextRange) -> None:
        if text_range.end > len(self._text):
            raise IndexError(f"Range ({text_range.location}, {text_range.length}) beyond text length {len(self._text)}")
