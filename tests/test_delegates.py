"""Tests for forwarding host editing callbacks through the listener."""

import pytest
from conftest import RecordingManager
from mentions_listener.delegates import FORWARDED_DEFAULTS
from mentions_listener.delegates import EditorDelegate
from mentions_listener.delegates import MentionsManager
from mentions_listener.engine import MentionsListener
from mentions_listener.host import TextBuffer
from mentions_listener.models import TextRange


class DenyingDelegate(EditorDelegate):
    """Delegate that answers every query with False and records notifications."""

    def __init__(self):
        self.triggered_delegate_method = False
        self.selection_changes = 0

    def should_begin_editing(self):
        return False

    def should_end_editing(self):
        return False

    def should_interact_with_url(self, url, text_range):
        return False

    def should_interact_with_attachment(self, attachment, text_range):
        return False

    def did_begin_editing(self):
        self.triggered_delegate_method = True

    def did_end_editing(self):
        self.triggered_delegate_method = True

    def did_change_selection(self):
        self.selection_changes += 1


@pytest.fixture
def delegate():
    return DenyingDelegate()


@pytest.fixture
def forwarding_listener(delegate):
    return MentionsListener(TextBuffer(), manager=RecordingManager(), editor_delegate=delegate)


QUERIES = [
    ("should_begin_editing", ()),
    ("should_end_editing", ()),
    ("should_interact_with_url", ("http://test.com", TextRange(0, 0))),
    ("should_interact_with_attachment", (object(), TextRange(0, 0))),
]


class TestForwardedQueries:
    """Test the default-allow policy for forwarded boolean callbacks."""

    @pytest.mark.parametrize("name,args", QUERIES)
    def test_delegate_answer_is_returned(self, forwarding_listener, name, args):
        """Test a delegate's answer is returned verbatim."""
        assert getattr(forwarding_listener, name)(*args) is False

    @pytest.mark.parametrize("name,args", QUERIES)
    def test_no_delegate_allows(self, forwarding_listener, name, args):
        """Test every query is allowed when no delegate is registered."""
        forwarding_listener.editor_delegate = None
        assert getattr(forwarding_listener, name)(*args) is True

    @pytest.mark.parametrize("name,args", QUERIES)
    def test_unhandled_query_allows(self, name, args):
        """Test a delegate that does not override a query falls back to allow."""
        listener = MentionsListener(TextBuffer(), editor_delegate=EditorDelegate())
        assert getattr(listener, name)(*args) is True

    def test_policy_table_covers_queries(self):
        """Test every forwarded query has a default."""
        assert set(FORWARDED_DEFAULTS) == {name for name, _ in QUERIES}
        assert all(FORWARDED_DEFAULTS.values())

    def test_partial_delegate(self):
        """Test only the overridden query uses the delegate's answer."""

        class UrlBlocker(EditorDelegate):
            def should_interact_with_url(self, url, text_range):
                return url.startswith("https://")

        listener = MentionsListener(TextBuffer(), editor_delegate=UrlBlocker())
        assert listener.should_interact_with_url("http://test.com", TextRange(0, 0)) is False
        assert listener.should_interact_with_url("https://test.com", TextRange(0, 0)) is True
        assert listener.should_begin_editing() is True


class TestForwardedNotifications:
    """Test notifications reach the delegate."""

    def test_did_begin_editing(self, forwarding_listener, delegate):
        """Test begin editing is forwarded."""
        assert delegate.triggered_delegate_method is False
        forwarding_listener.did_begin_editing()
        assert delegate.triggered_delegate_method is True

    def test_did_end_editing(self, forwarding_listener, delegate):
        """Test end editing is forwarded."""
        forwarding_listener.did_end_editing()
        assert delegate.triggered_delegate_method is True

    def test_selection_change_forwarded(self, forwarding_listener, delegate):
        """Test selection changes are forwarded after search re-evaluation."""
        forwarding_listener.selection_changed()
        assert delegate.selection_changes == 1

    def test_notifications_without_delegate(self):
        """Test notifications are dropped when no delegate is registered."""
        listener = MentionsListener(TextBuffer())
        listener.did_begin_editing()
        listener.did_end_editing()
        listener.selection_changed()


class TestMentionsManagerDefaults:
    """Test the base manager's behaviour."""

    def test_return_key_allowed_by_default(self):
        """Test the base manager allows adding mentions on return."""
        assert MentionsManager().should_allow_return_key_to_add_mention() is True

    def test_callbacks_are_noops(self):
        """Test the base manager accepts every callback."""
        manager = MentionsManager()
        manager.on_search_show("@", "")
        manager.on_search_update("a")
        manager.on_search_hide()
