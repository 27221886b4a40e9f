"""Shared Rich console and buffer rendering for CLI output."""

from rich.console import Console
from rich.style import Style
from rich.text import Text

from mentions_listener.attributes import AttributeSet
from mentions_listener.host import TextBuffer


def attributes_to_style(attributes: AttributeSet) -> Style:
    """Map the attribute names Rich understands onto a Style.

    Unknown attribute names are ignored.
    """
    return Style(
        color=attributes.get("color"),
        bgcolor=attributes.get("background"),
        bold=attributes.get("bold"),
        italic=attributes.get("italic"),
        underline=attributes.get("underline"),
    )


def render_buffer(buffer: TextBuffer) -> Text:
    """Render buffer text with each attribute run styled."""
    text = Text()
    for text_range, attributes in buffer.runs():
        text.append(buffer.text[text_range.location : text_range.end], style=attributes_to_style(attributes))
    return text


console = Console()

__all__ = ["console", "attributes_to_style", "render_buffer"]
