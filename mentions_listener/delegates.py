"""Consumer surfaces the listener talks to.

``MentionsManager`` receives mention lifecycle callbacks and drives the
host's picker. ``EditorDelegate`` receives the host's generic editing
callbacks that the listener does not need to intercept. Boolean queries on
``EditorDelegate`` return ``None`` when the delegate does not handle them;
the listener then falls back to ``FORWARDED_DEFAULTS``.
"""

from typing import Any

from mentions_listener.models import MentionRange
from mentions_listener.models import TextRange

# Answer used for each forwarded boolean callback when no delegate handles it.
FORWARDED_DEFAULTS: dict[str, bool] = {
    "should_begin_editing": True,
    "should_end_editing": True,
    "should_interact_with_url": True,
    "should_interact_with_attachment": True,
}


class MentionsManager:
    """Receives mention lifecycle callbacks. Override what you need."""

    def on_mention_added(self, mention: MentionRange) -> None:
        pass

    def on_mention_removed(self, mention: MentionRange) -> None:
        pass

    def on_search_show(self, trigger: str, query: str) -> None:
        """Show the mention picker for a new search."""

    def on_search_update(self, query: str) -> None:
        """Refresh the picker for the current query."""

    def on_search_hide(self) -> None:
        """Hide the mention picker."""

    def should_allow_return_key_to_add_mention(self) -> bool:
        """Whether the return key should add the highlighted mention.

        Only consulted when ``add_mention_after_return_key`` is enabled and a
        search is active. Implementations typically call
        ``MentionsListener.add_mention`` from here before returning True.
        """
        return True


class EditorDelegate:
    """Host editing callbacks forwarded through the listener."""

    def should_begin_editing(self) -> bool | None:
        return None

    def should_end_editing(self) -> bool | None:
        return None

    def should_interact_with_url(self, url: str, text_range: TextRange) -> bool | None:
        return None

    def should_interact_with_attachment(self, attachment: Any, text_range: TextRange) -> bool | None:
        return None

    def did_begin_editing(self) -> None:
        pass

    def did_end_editing(self) -> None:
        pass

    def did_change_selection(self) -> None:
        pass
