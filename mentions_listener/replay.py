"""Replay scripted editing sessions against a listener.

A script is a YAML document::

    mentions:                 # optional, same keys as the settings file
      add_mention_after_return_key: true
    text: "Hello "            # optional initial text
    steps:
      - type: "@ste"
      - add_mention: {name: Steven, id: 42}
      - type: " how are you"
      - select: [0, 5]
      - replace: {range: [0, 5], text: "Hi"}
      - seed: [{name: Steven, range: [3, 6]}]
      - return: true
      - reset: true

Used for reproducing host bug reports without a real text widget.
"""

import logging
from dataclasses import dataclass
from dataclasses import field
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from mentions_listener.config import MentionsConfig
from mentions_listener.delegates import MentionsManager
from mentions_listener.engine import MentionsListener
from mentions_listener.errors import ConfigError
from mentions_listener.errors import ScriptError
from mentions_listener.events import EventBus
from mentions_listener.events import EventRecorder
from mentions_listener.events import MentionEvent
from mentions_listener.host import TextBuffer
from mentions_listener.models import ExistingMention
from mentions_listener.models import NewMention
from mentions_listener.models import TextRange

logger = logging.getLogger(__name__)


class ScriptedManager(MentionsManager):
    """Manager whose return-key answer comes from the script."""

    def __init__(self, allow_return_key: bool = True):
        self.allow_return_key = allow_return_key

    def should_allow_return_key_to_add_mention(self) -> bool:
        return self.allow_return_key


@dataclass
class ReplayResult:
    """Final state of a replayed session."""

    buffer: TextBuffer
    listener: MentionsListener
    events: list[MentionEvent] = field(default_factory=list)


def load_script(path: Path) -> dict[str, Any]:
    """Read a replay script from disk.

    Raises:
        ConfigError: If the file is unreadable or not a mapping
    """
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(path, f"Failed to read script: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(path, "Script must be a mapping")
    return data


def replay(script: dict[str, Any], config: MentionsConfig | None = None) -> ReplayResult:
    """Run every step of ``script`` and return the resulting state.

    Args:
        script: Parsed script document
        config: Overrides the script's own ``mentions`` section when given

    Raises:
        ScriptError: If a step is malformed
        PreconditionViolation: If a step breaks a listener precondition
    """
    if config is None:
        section = script.get("mentions") or {}
        if not isinstance(section, dict):
            raise ScriptError(0, "mentions settings must be a mapping")
        try:
            config = MentionsConfig(**section)
        except ValidationError as e:
            raise ScriptError(0, f"Invalid mentions settings: {e}") from e

    buffer = TextBuffer(script.get("text", ""), config.default_attributes)
    recorder = EventRecorder()
    bus = EventBus()
    bus.subscribe(recorder)
    manager = ScriptedManager()
    listener = MentionsListener(buffer, manager=manager, config=config, event_bus=bus)

    for number, step in enumerate(script.get("steps") or [], start=1):
        if not isinstance(step, dict) or len(step) != 1:
            raise ScriptError(number, f"Expected a single-key mapping, got {step!r}")
        action, argument = next(iter(step.items()))
        logger.debug(f"Replaying step {number}: {action}")
        _run_step(listener, manager, number, action, argument)

    return ReplayResult(buffer=buffer, listener=listener, events=recorder.events)


def _run_step(listener: MentionsListener, manager: ScriptedManager, number: int, action: str, argument: Any) -> None:
    if action == "type":
        for char in str(argument):
            listener.insert_text(char)
    elif action == "paste":
        listener.insert_text(str(argument))
    elif action == "select":
        listener.host.set_selected_range(_parse_range(number, argument))
        listener.selection_changed()
    elif action == "replace":
        if not isinstance(argument, dict) or "range" not in argument:
            raise ScriptError(number, "replace needs 'range' and 'text'")
        listener.replace_text(_parse_range(number, argument["range"]), str(argument.get("text", "")))
    elif action == "delete":
        listener.replace_text(_parse_range(number, argument), "")
    elif action == "return":
        manager.allow_return_key = bool(argument)
        listener.insert_text("\n")
    elif action == "add_mention":
        if not isinstance(argument, dict) or "name" not in argument:
            raise ScriptError(number, "add_mention needs 'name'")
        listener.add_mention(NewMention(display_name=str(argument["name"]), id=argument.get("id")))
    elif action == "seed":
        if not isinstance(argument, list) or not all(isinstance(item, dict) for item in argument):
            raise ScriptError(number, "seed needs a list of mentions")
        seeded = [
            ExistingMention(
                display_name=str(item.get("name", "")),
                range=_parse_range(number, item.get("range")),
                id=item.get("id"),
            )
            for item in argument
        ]
        listener.insert_existing_mentions(seeded)
    elif action == "reset":
        listener.reset()
    else:
        raise ScriptError(number, f"Unknown action: {action}")


def _parse_range(number: int, value: Any) -> TextRange:
    if not isinstance(value, list | tuple) or len(value) != 2:
        raise ScriptError(number, f"Expected [location, length], got {value!r}")
    try:
        return TextRange(int(value[0]), int(value[1]))
    except (TypeError, ValueError) as e:
        raise ScriptError(number, f"Invalid range {value!r}: {e}") from e
