"""Mention tracking over an editable text surface.

``MentionsListener`` sits between a text surface and the application. The
host reports every edit and caret move; the listener keeps tracked mention
ranges aligned with the text, restyles the spans it owns, and tells the
application when a mention search should be shown, updated or hidden.

All state is committed before any callback runs, so handlers may call back
into the listener.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from enum import Enum
from typing import Any

from mentions_listener.attributes import AttributeSet
from mentions_listener.config import MentionsConfig
from mentions_listener.delegates import FORWARDED_DEFAULTS
from mentions_listener.delegates import EditorDelegate
from mentions_listener.delegates import MentionsManager
from mentions_listener.errors import PreconditionViolation
from mentions_listener.events import EventBus
from mentions_listener.events import MentionAdded
from mentions_listener.events import MentionRemoved
from mentions_listener.events import SearchHidden
from mentions_listener.events import SearchShown
from mentions_listener.events import SearchUpdated
from mentions_listener.host import HostAdapter
from mentions_listener.models import CandidateSearch
from mentions_listener.models import ExistingMention
from mentions_listener.models import MentionRange
from mentions_listener.models import NewMention
from mentions_listener.models import TextRange
from mentions_listener.ranges import TextEdit
from mentions_listener.ranges import adjust_ranges
from mentions_listener.ranges import invalidated_extent
from mentions_listener.ranges import validate_seed_ranges
from mentions_listener.triggers import TriggerDetector

logger = logging.getLogger(__name__)


class ListenerState(str, Enum):
    """Whether a mention search is in progress."""

    IDLE = "idle"
    SEARCHING = "searching"


class MentionsListener:
    """Tracks mentions in a host text surface and drives the mention picker.

    Args:
        host: Text surface holding the text, caret and attributes
        manager: Receives mention and search lifecycle callbacks
        editor_delegate: Receives forwarded generic editing callbacks
        config: Attributes, triggers and behaviour switches
        event_bus: Optional bus that also receives every lifecycle event
    """

    def __init__(
        self,
        host: HostAdapter,
        manager: MentionsManager | None = None,
        editor_delegate: EditorDelegate | None = None,
        config: MentionsConfig | None = None,
        event_bus: EventBus | None = None,
    ):
        self.host = host
        self.manager = manager
        self.editor_delegate = editor_delegate
        self.config = config or MentionsConfig()
        self.event_bus = event_bus
        self.detector = TriggerDetector(self.config.trigger_characters, self.config.search_spaces_in_query)
        self._mentions: list[MentionRange] = []
        self._search: CandidateSearch | None = None
        self._last_search: CandidateSearch | None = None
        # Search the manager was last shown; differs from _search only while callbacks run
        self._shown: CandidateSearch | None = None

    @property
    def mention_attributes(self) -> AttributeSet:
        return self.config.mention_attributes

    @property
    def default_attributes(self) -> AttributeSet:
        return self.config.default_attributes

    @property
    def mentions(self) -> list[MentionRange]:
        """Tracked mentions, ascending by start offset."""
        return list(self._mentions)

    def current_mentions(self) -> list[MentionRange]:
        return self.mentions

    @property
    def search(self) -> CandidateSearch | None:
        """The active mention search, if any."""
        return self._search

    @property
    def last_search(self) -> CandidateSearch | None:
        """The active search, or the most recent one with ``active`` False once it ended.

        Lets ``on_search_hide`` handlers see the trigger and query that were
        just dismissed.
        """
        return self._search if self._search is not None else self._last_search

    @property
    def state(self) -> ListenerState:
        return ListenerState.SEARCHING if self._search is not None else ListenerState.IDLE

    def mention_at(self, offset: int) -> MentionRange | None:
        """Tracked mention covering ``offset``, if any."""
        for mention in self._mentions:
            if mention.range.contains(offset):
                return mention
        return None

    # ------------------------------------------------------------------
    # Edits
    # ------------------------------------------------------------------

    def should_change_text(self, text_range: TextRange, replacement: str) -> bool:
        """Decide whether the host should apply an edit.

        Only the return key is ever refused: with ``add_mention_after_return_key``
        enabled and a search active, the manager decides whether return adds
        the mention. The search ends before the newline would be applied
        either way.

        Returns:
            False if the edit was consumed to add a mention, True otherwise
        """
        if not (self.config.add_mention_after_return_key and self._search is not None and replacement == "\n"):
            return True

        allow = self.manager.should_allow_return_key_to_add_mention() if self.manager is not None else False
        logger.debug(f"Return key while searching, manager allows adding mention: {allow}")
        self._search = None
        self._end_search()
        return not allow

    def text_changed(self, text_range: TextRange, replacement: str) -> None:
        """Reconcile after the host replaced ``text_range`` with ``replacement``.

        Args:
            text_range: Replaced range, in offsets from before the edit
            replacement: Text that now occupies the range
        """
        edit = TextEdit.replacing(text_range, replacement)
        adjusted = adjust_ranges(self._mentions, edit)
        self._mentions = adjusted.mentions

        self._search = self._detect()

        if edit.new_length:
            self._apply(TextRange(edit.start, edit.new_length), self.default_attributes)
        for mention in adjusted.invalidated:
            self._apply(invalidated_extent(mention, edit), self.default_attributes)

        current = self._search
        for mention in adjusted.invalidated:
            self._emit_mention_removed(mention)
        if self._search is not current:
            return
        self._emit_search_transition(edited=True)

    def replace_text(self, text_range: TextRange, replacement: str) -> bool:
        """Apply an edit through the host and reconcile.

        Returns:
            True if the edit was applied
        """
        if not self.should_change_text(text_range, replacement):
            return False
        self.host.replace_text(text_range, replacement)
        self.text_changed(text_range, replacement)
        return True

    def insert_text(self, text: str) -> bool:
        """Type ``text`` over the current selection."""
        return self.replace_text(self.host.selected_range, text)

    def selection_changed(self) -> None:
        """Re-evaluate the search after the caret moved without an edit."""
        self._search = self._detect()
        self._emit_search_transition(edited=False)
        if self.editor_delegate is not None:
            self.editor_delegate.did_change_selection()

    # ------------------------------------------------------------------
    # Mentions
    # ------------------------------------------------------------------

    def add_mention(self, mention: NewMention) -> MentionRange:
        """Finalize the active search into a tracked mention.

        The trigger and query are replaced by the mention's display name,
        which gets the mention attributes. The caret lands right after it, so
        text typed next is plain.

        Raises:
            PreconditionViolation: If no search is active
        """
        search = self._search
        if search is None:
            raise PreconditionViolation("No active mention search to finalize", mention)

        span = search.span
        self.host.replace_text(span, mention.display_name)
        edit = TextEdit.replacing(span, mention.display_name)
        adjusted = adjust_ranges(self._mentions, edit)

        added = MentionRange.create(mention.display_name, TextRange(span.location, edit.new_length), mention.id)
        self._mentions = sorted([*adjusted.mentions, added], key=lambda m: m.start)
        self._search = None

        self._apply(added.range, self.mention_attributes)
        self.host.set_selected_range(TextRange(added.end, 0))
        logger.debug(f"Added mention '{added.display_name}' at {added.range}")

        for removed in adjusted.invalidated:
            self._emit_mention_removed(removed)
        self._emit_mention_added(added)
        self._end_search()
        return added

    def insert_existing_mentions(self, mentions: Iterable[ExistingMention]) -> None:
        """Track mentions whose names are already in the text.

        Replaces any previously tracked mentions. Nothing changes if a range
        is invalid.

        Raises:
            PreconditionViolation: If a range lies outside the text or overlaps another
        """
        mentions = list(mentions)
        text_length = len(self.host.text)
        validate_seed_ranges([m.range for m in mentions], text_length)

        tracked = [MentionRange.create(m.display_name, m.range, m.id) for m in mentions]
        self._mentions = sorted(tracked, key=lambda m: m.start)

        self._search = self._detect()

        self._apply(TextRange(0, text_length), self.default_attributes)
        for mention in self._mentions:
            self._apply(mention.range, self.mention_attributes)
        logger.info(f"Seeded {len(self._mentions)} existing mentions")

        self._emit_search_transition(edited=False)

    def remove_mention(self, mention_id: Any) -> MentionRange:
        """Stop tracking a mention and restore default styling over its text.

        Raises:
            PreconditionViolation: If no tracked mention has ``mention_id``
        """
        for mention in self._mentions:
            if mention.id == mention_id:
                break
        else:
            raise PreconditionViolation(f"No tracked mention with id {mention_id!r}", mention_id)

        self._mentions = [m for m in self._mentions if m is not mention]
        self._apply(mention.range, self.default_attributes)
        self._emit_mention_removed(mention)
        return mention

    def reset(self) -> None:
        """Clear the text, every tracked mention and the active search."""
        removed = self._mentions
        self._mentions = []
        self._search = None
        self.host.set_text("")

        for mention in removed:
            self._emit_mention_removed(mention)
        self._end_search()

    # ------------------------------------------------------------------
    # Forwarded editor callbacks
    # ------------------------------------------------------------------

    def should_begin_editing(self) -> bool:
        return self._forward("should_begin_editing")

    def should_end_editing(self) -> bool:
        return self._forward("should_end_editing")

    def should_interact_with_url(self, url: str, text_range: TextRange) -> bool:
        return self._forward("should_interact_with_url", url, text_range)

    def should_interact_with_attachment(self, attachment: Any, text_range: TextRange) -> bool:
        return self._forward("should_interact_with_attachment", attachment, text_range)

    def did_begin_editing(self) -> None:
        if self.editor_delegate is not None:
            self.editor_delegate.did_begin_editing()

    def did_end_editing(self) -> None:
        if self.editor_delegate is not None:
            self.editor_delegate.did_end_editing()

    def _forward(self, name: str, *args: Any) -> bool:
        answer = None
        if self.editor_delegate is not None:
            answer = getattr(self.editor_delegate, name)(*args)
        return FORWARDED_DEFAULTS[name] if answer is None else answer

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _detect(self) -> CandidateSearch | None:
        selection = self.host.selected_range
        caret = selection.location if selection.length == 0 else None
        candidate = self.detector.detect(self.host.text, caret)
        if candidate is not None and self.mention_at(candidate.trigger_offset) is not None:
            return None
        return candidate

    def _apply(self, text_range: TextRange, attributes: AttributeSet) -> None:
        end = min(text_range.end, len(self.host.text))
        if end > text_range.location:
            self.host.apply_attributes(TextRange(text_range.location, end - text_range.location), attributes)

    def _end_search(self) -> None:
        shown = self._shown
        if shown is not None:
            self._shown = None
            self._emit_search_hidden(shown)

    def _emit_search_transition(self, edited: bool) -> None:
        """Bring the manager from the last shown search to the current one.

        Stops as soon as a handler re-enters and changes the search; the
        nested call has already reported everything from there on.
        """
        current = self._search
        shown = self._shown
        if shown is not None and (
            current is None or (current.trigger, current.trigger_offset) != (shown.trigger, shown.trigger_offset)
        ):
            self._end_search()
            if self._search is not current or self._shown is not None:
                return
            shown = None

        if current is None:
            return
        self._shown = current
        if shown is None:
            logger.debug(f"Search started at {current.trigger_offset} with trigger {current.trigger!r}")
            self._emit_search_shown(current)
            if self._search is not current or self._shown is not current:
                return
            self._emit_search_updated(current.query)
        elif edited or current.query != shown.query:
            self._emit_search_updated(current.query)

    def _emit_mention_added(self, mention: MentionRange) -> None:
        if self.manager is not None:
            self.manager.on_mention_added(mention)
        self._publish(
            MentionAdded(id=mention.id, display_name=mention.display_name, location=mention.start, length=mention.length)
        )

    def _emit_mention_removed(self, mention: MentionRange) -> None:
        if self.manager is not None:
            self.manager.on_mention_removed(mention)
        self._publish(
            MentionRemoved(id=mention.id, display_name=mention.display_name, location=mention.start, length=mention.length)
        )

    def _emit_search_shown(self, search: CandidateSearch) -> None:
        if self.manager is not None:
            self.manager.on_search_show(search.trigger, search.query)
        self._publish(SearchShown(trigger=search.trigger, query=search.query))

    def _emit_search_updated(self, query: str) -> None:
        if self.manager is not None:
            self.manager.on_search_update(query)
        self._publish(SearchUpdated(query=query))

    def _emit_search_hidden(self, search: CandidateSearch) -> None:
        logger.debug(f"Search ended at {search.trigger_offset} with query {search.query!r}")
        self._last_search = search.ended()
        if self.manager is not None:
            self.manager.on_search_hide()
        self._publish(SearchHidden())

    def _publish(self, event: Any) -> None:
        if self.event_bus is not None:
            self.event_bus.publish(event)
