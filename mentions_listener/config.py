"""Listener configuration and settings file loading.

Settings files are YAML with a ``mentions`` section::

    mentions:
      trigger_characters: ["@", "#"]
      add_mention_after_return_key: true
      search_spaces_in_query: false
      mention_attributes:
        color: blue
        bold: true
      default_attributes:
        color: black
"""

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field
from pydantic import ValidationError
from pydantic import field_validator

from mentions_listener.attributes import AttributeSet
from mentions_listener.errors import ConfigError
from mentions_listener.triggers import DEFAULT_TRIGGERS

logger = logging.getLogger(__name__)


class MentionsConfig(BaseModel):
    """Options fixed when a listener is constructed."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    mention_attributes: AttributeSet = Field(
        default_factory=AttributeSet, description="Attributes applied to finalized mentions"
    )
    default_attributes: AttributeSet = Field(
        default_factory=AttributeSet, description="Attributes applied to non-mention text"
    )
    trigger_characters: frozenset[str] = Field(
        default=DEFAULT_TRIGGERS, description="Characters that can start a mention search"
    )
    add_mention_after_return_key: bool = Field(
        default=False, description="Return key adds the mention instead of a newline while searching"
    )
    search_spaces_in_query: bool = Field(
        default=False, description="Whitespace inside a query does not end the search"
    )

    @field_validator("mention_attributes", "default_attributes", mode="before")
    @classmethod
    def _coerce_attributes(cls, value: Any) -> Any:
        if isinstance(value, dict) or isinstance(value, list):
            return AttributeSet(value)
        return value

    @field_validator("trigger_characters", mode="before")
    @classmethod
    def _coerce_triggers(cls, value: Any) -> Any:
        if isinstance(value, str):
            return frozenset(value)
        return value

    @field_validator("trigger_characters")
    @classmethod
    def _check_triggers(cls, value: frozenset[str]) -> frozenset[str]:
        if not value:
            raise ValueError("at least one trigger character is required")
        for char in value:
            if len(char) != 1 or char.isspace():
                raise ValueError(f"invalid trigger character: {char!r}")
        return value


def load_config(path: Path) -> MentionsConfig:
    """Load listener configuration from a YAML settings file.

    Args:
        path: Settings file path

    Returns:
        MentionsConfig built from the ``mentions`` section (defaults if absent)

    Raises:
        ConfigError: If the file cannot be read, parsed or validated
    """
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(path, f"Failed to read settings: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(path, "Settings must be a mapping")

    section = data.get("mentions") or {}
    if not isinstance(section, dict):
        raise ConfigError(path, "The mentions section must be a mapping")
    try:
        config = MentionsConfig(**section)
    except ValidationError as e:
        raise ConfigError(path, f"Invalid mentions settings: {e}") from e

    logger.debug(f"Loaded mentions config from {path}: triggers={sorted(config.trigger_characters)}")
    return config
