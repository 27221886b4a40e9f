"""Tests for rendering buffers with Rich."""

from io import StringIO

from conftest import BLACK
from conftest import RED
from mentions_listener.attributes import AttributeSet
from mentions_listener.console import attributes_to_style
from mentions_listener.console import render_buffer
from mentions_listener.host import TextBuffer
from mentions_listener.models import TextRange
from rich.console import Console


class TestRenderBuffer:
    """Test mapping buffer attributes onto Rich styles."""

    def test_style_from_attributes(self):
        """Test known attribute names become style properties."""
        style = attributes_to_style(AttributeSet({"color": "red", "bold": True, "font": "Menlo"}))
        assert style.color.name == "red"
        assert style.bold is True
        assert style.italic is None

    def test_render_spans(self):
        """Test each attribute run becomes a styled span."""
        buffer = TextBuffer("hi Steven", BLACK)
        buffer.apply_attributes(TextRange(3, 6), RED)

        text = render_buffer(buffer)

        assert text.plain == "hi Steven"
        assert [(span.start, span.end, str(span.style)) for span in text.spans] == [(0, 3, "black"), (3, 9, "red")]

    def test_renders_plain_output(self):
        """Test the rendered text prints as-is without a terminal."""
        buf = StringIO()
        Console(file=buf, force_terminal=False, no_color=True).print(render_buffer(TextBuffer("@bob")))
        assert buf.getvalue() == "@bob\n"
