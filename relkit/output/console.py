"""Console output abstraction.

Release steps report progress through ``ConsoleProtocol``. The CLI passes a
Rich-backed console; tests pass ``MockConsole`` and assert on what was
recorded.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Protocol

__all__ = [
    "ConsoleProtocol",
    "MockConsole",
    "OutputRecord",
    "RichConsole",
    "Style",
]


class Style(Enum):
    """Text styles for console output."""

    DEFAULT = auto()
    SUCCESS = auto()
    ERROR = auto()
    WARNING = auto()
    INFO = auto()
    DIM = auto()
    HEADER = auto()

    def __str__(self) -> str:
        return self.name.lower()


class ConsoleProtocol(Protocol):
    """Log sink for release steps."""

    def print(self, message: str, style: Style = Style.DEFAULT) -> None: ...

    def success(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...

    def warning(self, message: str) -> None: ...

    def info(self, message: str) -> None: ...

    def header(self, message: str) -> None: ...


class RichConsole:
    """Console implementation using Rich.

    Messages are escaped, so version strings or file paths containing
    brackets are printed verbatim.
    """

    def __init__(self, *, no_color: bool = False) -> None:
        from rich.console import Console

        self._console = Console(no_color=no_color, highlight=False)
        self._style_map = {
            Style.DEFAULT: "",
            Style.SUCCESS: "green",
            Style.ERROR: "red bold",
            Style.WARNING: "yellow",
            Style.INFO: "cyan",
            Style.DIM: "dim",
            Style.HEADER: "blue bold",
        }

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        from rich.markup import escape

        rich_style = self._style_map.get(style, "")
        if rich_style:
            self._console.print(escape(message), style=rich_style)
        else:
            self._console.print(escape(message))

    def success(self, message: str) -> None:
        self._tagged("green", "ok:", message)

    def error(self, message: str) -> None:
        self._tagged("red bold", "error:", message)

    def warning(self, message: str) -> None:
        self._tagged("yellow", "warning:", message)

    def info(self, message: str) -> None:
        self._tagged("cyan", "info:", message)

    def header(self, message: str) -> None:
        from rich.markup import escape

        self._console.print(f"\n[blue bold]{escape(message)}[/blue bold]")

    def _tagged(self, style: str, tag: str, message: str) -> None:
        from rich.markup import escape

        self._console.print(f"[{style}]{tag}[/{style}] {escape(message)}")


@dataclass
class OutputRecord:
    """A single output record for MockConsole."""

    message: str
    style: Style


def _empty_outputs() -> list[OutputRecord]:
    return []


@dataclass
class MockConsole:
    """Console that records output instead of printing it."""

    outputs: list[OutputRecord] = field(default_factory=_empty_outputs)

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        self.outputs.append(OutputRecord(message, style))

    def success(self, message: str) -> None:
        self.outputs.append(OutputRecord(f"ok: {message}", Style.SUCCESS))

    def error(self, message: str) -> None:
        self.outputs.append(OutputRecord(f"error: {message}", Style.ERROR))

    def warning(self, message: str) -> None:
        self.outputs.append(OutputRecord(f"warning: {message}", Style.WARNING))

    def info(self, message: str) -> None:
        self.outputs.append(OutputRecord(f"info: {message}", Style.INFO))

    def header(self, message: str) -> None:
        self.outputs.append(OutputRecord(message, Style.HEADER))

    # Test helpers

    @property
    def messages(self) -> list[str]:
        return [o.message for o in self.outputs]

    @property
    def text(self) -> str:
        return "\n".join(self.messages)

    def has_error(self) -> bool:
        return any(o.style == Style.ERROR for o in self.outputs)

    def has_warning(self) -> bool:
        return any(o.style == Style.WARNING for o in self.outputs)

    def errors(self) -> list[str]:
        """Messages printed with the ERROR style."""
        return [o.message for o in self.outputs if o.style == Style.ERROR]

    def find(self, substring: str) -> list[OutputRecord]:
        return [o for o in self.outputs if substring in o.message]
