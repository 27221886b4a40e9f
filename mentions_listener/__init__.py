"""Mention tracking for editable text.

Keeps mention ranges, styling and mention-search state consistent while a
user types, pastes and deletes text in a host text surface.
"""

from mentions_listener.attributes import Attribute
from mentions_listener.attributes import AttributeSet
from mentions_listener.config import MentionsConfig
from mentions_listener.config import load_config
from mentions_listener.delegates import EditorDelegate
from mentions_listener.delegates import MentionsManager
from mentions_listener.engine import ListenerState
from mentions_listener.engine import MentionsListener
from mentions_listener.errors import ConfigError
from mentions_listener.errors import MentionsError
from mentions_listener.errors import PreconditionViolation
from mentions_listener.host import HostAdapter
from mentions_listener.host import TextBuffer
from mentions_listener.models import CandidateSearch
from mentions_listener.models import ExistingMention
from mentions_listener.models import MentionRange
from mentions_listener.models import NewMention
from mentions_listener.models import TextRange
from mentions_listener.ranges import TextEdit
from mentions_listener.ranges import adjust_ranges
from mentions_listener.triggers import TriggerDetector

__all__ = [
    "Attribute",
    "AttributeSet",
    "CandidateSearch",
    "ConfigError",
    "EditorDelegate",
    "ExistingMention",
    "HostAdapter",
    "ListenerState",
    "MentionRange",
    "MentionsConfig",
    "MentionsError",
    "MentionsListener",
    "MentionsManager",
    "NewMention",
    "PreconditionViolation",
    "TextBuffer",
    "TextEdit",
    "TextRange",
    "TriggerDetector",
    "adjust_ranges",
    "load_config",
]
