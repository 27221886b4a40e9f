"""Trigger detection around the caret."""

from __future__ import annotations

from collections.abc import Iterable

from mentions_listener.models import CandidateSearch

DEFAULT_TRIGGERS = frozenset({"@"})

LINE_BREAKS = frozenset("\n\r\u2028\u2029")


class TriggerDetector:
    """Decides whether the text before the caret forms a mention search.

    A search exists when a trigger character sits at the start of the text or
    right after whitespace, and everything between it and the caret is free
    of whitespace. With ``search_spaces`` enabled, spaces are allowed in the
    query; line breaks always end it.
    """

    def __init__(self, trigger_characters: Iterable[str] = DEFAULT_TRIGGERS, search_spaces: bool = False):
        self.trigger_characters = frozenset(trigger_characters)
        self.search_spaces = search_spaces

    def detect(self, text: str, caret: int | None) -> CandidateSearch | None:
        """Return the candidate search ending at ``caret``, if any.

        Args:
            text: Full buffer text
            caret: Caret offset, or None when a non-empty selection is active

        Returns:
            CandidateSearch for the trigger nearest before the caret, or None
        """
        if caret is None or caret <= 0 or caret > len(text):
            return None

        index = caret - 1
        while index >= 0:
            char = text[index]
            if char in self.trigger_characters:
                if index == 0 or text[index - 1].isspace():
                    return CandidateSearch(trigger=char, trigger_offset=index, query=text[index + 1 : caret])
                # Mid-word trigger such as email@domain
                return None
            if char in LINE_BREAKS:
                return None
            if char.isspace() and not self.search_spaces:
                return None
            index -= 1
        return None
