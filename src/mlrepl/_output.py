"""Output sink receiving the lines a REPL produces."""

__all__ = ["Style", "Line", "OutputSink", "ConsoleSink", "create_theme"]

import enum
from typing import NamedTuple

from rich.console import Console
from rich.text import Text
from rich.theme import Theme


class Style(str, enum.Enum):
    """Closed set of styles attached to output lines."""
    INPUT = "input"
    SUCCESS = "success"
    ERROR = "error"


class Line(NamedTuple):
    text: str
    style: Style


class OutputSink:
    """Ordered, append-only list of rendered lines.

    Attributes:
        lines: (list[Line]) Lines in the order they were added
    """

    def __init__(self):
        self.lines = []

    def append(self, text, style):
        line = Line(text, Style(style))
        self.lines.append(line)
        return line

    def clear(self):
        self.lines.clear()

    def texts(self, style=None):
        """Text of every line, optionally only those with one style."""
        return [line.text for line in self.lines if style is None or line.style == style]


def create_theme(
    *,
    input_text: str = "bold cyan",
    success: str = "green",
    error: str = "bold white on dark_red",
) -> Theme:
    """Create the theme mapping each line style to a rich style."""
    return Theme(
        {
            Style.INPUT.value: input_text,
            Style.SUCCESS.value: success,
            Style.ERROR.value: error,
        }
    )


class ConsoleSink(OutputSink):
    """Output sink that also writes each line to a rich console.

    Args:
        console: (Console | None) Destination, a themed stdout console
            if not given
    """

    def __init__(self, console=None):
        super().__init__()
        self.console = console if console is not None else Console(theme=create_theme())

    def append(self, text, style):
        line = super().append(text, style)
        # Text avoids interpreting markup that happens to be in the output
        self.console.print(Text(line.text, style=line.style.value))
        return line

    def clear(self):
        super().clear()
        self.console.clear()
