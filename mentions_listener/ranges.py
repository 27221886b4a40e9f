"""Mention range bookkeeping across text edits.

Every edit is described as "replace ``old_length`` characters at ``start``
with ``new_length`` characters". Tracked ranges after the edit shift by the
length difference, ranges before it stay put, and any range whose text the
edit touches is dropped: a partially edited mention no longer reads as that
mention.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from dataclasses import field

from mentions_listener.errors import PreconditionViolation
from mentions_listener.models import MentionRange
from mentions_listener.models import TextRange

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TextEdit:
    """Replacement of ``old_length`` characters at ``start`` by ``new_length`` characters."""

    start: int
    old_length: int
    new_length: int

    @classmethod
    def replacing(cls, text_range: TextRange, replacement: str) -> TextEdit:
        return cls(text_range.location, text_range.length, len(replacement))

    @property
    def delta(self) -> int:
        return self.new_length - self.old_length

    @property
    def old_end(self) -> int:
        return self.start + self.old_length

    @property
    def new_end(self) -> int:
        return self.start + self.new_length


@dataclass
class AdjustResult:
    """Outcome of applying an edit to the tracked mentions.

    Attributes:
        mentions: Surviving mentions at their new offsets, ascending by start
        invalidated: Mentions destroyed by the edit, at their pre-edit offsets
    """

    mentions: list[MentionRange] = field(default_factory=list)
    invalidated: list[MentionRange] = field(default_factory=list)


def adjust_ranges(mentions: Iterable[MentionRange], edit: TextEdit) -> AdjustResult:
    """Map tracked mentions across an edit.

    Insertion exactly at either boundary of a mention leaves it intact and
    never extends it.

    Args:
        mentions: Currently tracked mentions
        edit: The edit that was applied to the text

    Returns:
        AdjustResult with surviving and invalidated mentions
    """
    result = AdjustResult()
    if not edit.old_length and not edit.new_length:
        result.mentions = sorted(mentions, key=lambda m: m.start)
        return result

    for mention in mentions:
        if edit.start >= mention.end:
            result.mentions.append(mention)
        elif edit.old_end <= mention.start:
            result.mentions.append(mention.shifted(edit.delta) if edit.delta else mention)
        else:
            logger.debug(f"Edit {edit} invalidated mention '{mention.display_name}' at {mention.range}")
            result.invalidated.append(mention)

    result.mentions.sort(key=lambda m: m.start)
    return result


def invalidated_extent(mention: MentionRange, edit: TextEdit) -> TextRange:
    """Post-edit span holding whatever is left of a mention the edit destroyed.

    Covers the mention's surviving characters plus the inserted text.
    """
    start = min(mention.start, edit.start)
    end = max(mention.end, edit.old_end) + edit.delta
    return TextRange(start, max(end - start, 0))


def validate_seed_ranges(ranges: Iterable[TextRange], text_length: int) -> list[TextRange]:
    """Check seeded ranges against the text before any of them is applied.

    Args:
        ranges: Ranges the caller claims hold mentions
        text_length: Current length of the text

    Returns:
        The ranges sorted by location

    Raises:
        PreconditionViolation: If a range is outside the text or overlaps another
    """
    ordered = sorted(ranges, key=lambda r: (r.location, r.length))
    for text_range in ordered:
        if text_range.end > text_length:
            raise PreconditionViolation(
                f"Mention range ({text_range.location}, {text_range.length}) "
                f"exceeds text length {text_length}",
                text_range,
            )

    previous: TextRange | None = None
    for current in ordered:
        if previous is not None and current.location < previous.end:
            raise PreconditionViolation(
                f"Mention range ({current.location}, {current.length}) overlaps "
                f"({previous.location}, {previous.length})",
                current,
            )
        if previous is None or current.end > previous.end:
            previous = current
    return ordered
