"""Data models for tracked mentions and search candidates."""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from dataclasses import field
from dataclasses import replace
from typing import Any


@dataclass(frozen=True)
class TextRange:
    """A span of characters: ``location`` offset plus ``length``."""

    location: int
    length: int = 0

    def __post_init__(self) -> None:
        if self.location < 0 or self.length < 0:
            raise ValueError(f"Invalid range ({self.location}, {self.length})")

    @property
    def end(self) -> int:
        return self.location + self.length

    def contains(self, offset: int) -> bool:
        """True if ``offset`` falls inside ``[location, end)``."""
        return self.location <= offset < self.end

    def intersects(self, other: TextRange) -> bool:
        """True if the two spans share at least one character."""
        return self.location < other.end and other.location < self.end

    def shifted(self, delta: int) -> TextRange:
        return TextRange(self.location + delta, self.length)


def _new_mention_id() -> str:
    return uuid.uuid4().hex


@dataclass(frozen=True)
class MentionRange:
    """A tracked mention: identity, display text and current position.

    Attributes:
        display_name: Text the mention renders as inside the buffer
        range: Current character span of the mention
        id: Opaque identifier supplied by the host (or generated)
    """

    display_name: str
    range: TextRange
    id: Any = field(default_factory=_new_mention_id)

    @classmethod
    def create(cls, display_name: str, text_range: TextRange, mention_id: Any = None) -> MentionRange:
        """Build a mention, generating an id when the host did not supply one."""
        if mention_id is None:
            return cls(display_name, text_range)
        return cls(display_name, text_range, mention_id)

    @property
    def start(self) -> int:
        return self.range.location

    @property
    def length(self) -> int:
        return self.range.length

    @property
    def end(self) -> int:
        return self.range.end

    def shifted(self, delta: int) -> MentionRange:
        """Same mention moved by ``delta`` characters."""
        return replace(self, range=self.range.shifted(delta))


@dataclass(frozen=True)
class CandidateSearch:
    """Transient state between typing a trigger character and finishing a search.

    Attributes:
        trigger: The trigger character that opened the search
        trigger_offset: Offset of the trigger character in the text
        query: Text typed after the trigger, up to the caret
        active: False once the search was hidden, cancelled or finalized
    """

    trigger: str
    trigger_offset: int
    query: str
    active: bool = True

    @property
    def span(self) -> TextRange:
        """Range covering the trigger character and the query."""
        return TextRange(self.trigger_offset, len(self.trigger) + len(self.query))

    def ended(self) -> CandidateSearch:
        """Copy of this search marked as no longer open."""
        return replace(self, active=False)


@dataclass(frozen=True)
class NewMention:
    """A mention chosen by the host to finalize the active search."""

    display_name: str
    id: Any = None


@dataclass(frozen=True)
class ExistingMention:
    """A mention already present in the text, used for seeding."""

    display_name: str
    range: TextRange
    id: Any = None
