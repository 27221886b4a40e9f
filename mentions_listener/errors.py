"""Exceptions raised by the mentions listener."""

from typing import Any


class MentionsError(Exception):
    """Base class for mentions listener errors."""


class PreconditionViolation(MentionsError):
    """Raised when a caller breaks an operation's precondition.

    These indicate a bug in the calling code (e.g. seeding a mention outside
    the text bounds) and are never clamped or routed around.
    """

    def __init__(self, reason: str, item: Any = None):
        self.reason = reason
        self.item = item
        super().__init__(reason)


class ConfigError(MentionsError):
    """Raised when a settings file cannot be loaded or validated."""

    def __init__(self, path: Any, message: str):
        self.path = path
        self.message = message
        super().__init__(f"{path}: {message}")


class ScriptError(MentionsError):
    """Raised when a replay script step is malformed."""

    def __init__(self, step: int, message: str):
        self.step = step
        self.message = message
        super().__init__(f"Step {step}: {message}")
