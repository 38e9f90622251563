"""Core terminal UI abstractions: output options, styles and interfaces.

Plugins read and write to a terminal through these abstractions, which are
portable across the different styles presented to the user. The primary
interface is :class:`UI`.
"""

from __future__ import annotations

import os
import sys
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Iterable, TextIO

BOLD = 1
FG_RED = 31
FG_GREEN = 32
FG_YELLOW = 33


class Style(str, Enum):
    """Named output styles."""

    HEADER = "header"
    ERROR = "error"
    ERROR_BOLD = "error-bold"
    WARNING = "warning"
    WARNING_BOLD = "warning-bold"
    INFO = "info"
    SUCCESS = "success"
    SUCCESS_BOLD = "success-bold"


class NonInteractiveError(Exception):
    """Raised when input is requested from a non-interactive UI."""

    def __init__(self, message: str = "noninteractive UI doesn't support this operation"):
        super().__init__(message)


@dataclass
class NamedValue:
    """A name and value shown as an aligned ``name: value`` line."""

    name: str
    value: Any


@dataclass
class Input:
    """Configuration for asking the user for input."""

    prompt: str
    style: str = ""
    secret: bool = False


@dataclass
class OutputConfig:
    """Where a message is written and the style it takes."""

    writer: TextIO
    style: str = ""


@dataclass(frozen=True)
class _Option:
    apply: Callable[[OutputConfig], None]

    def __call__(self, cfg: OutputConfig) -> None:
        self.apply(cfg)


def _normalize_style(style: Any) -> str:
    return style.value if isinstance(style, Style) else style


def with_style(style) -> _Option:
    """Apply an arbitrary style by name."""
    value = _normalize_style(style)

    def apply(cfg: OutputConfig) -> None:
        cfg.style = value

    return _Option(apply)


def with_header_style() -> _Option:
    """Style output as a header denoting a new section (single line only)."""
    return with_style(Style.HEADER)


def with_info_style() -> _Option:
    """Style output as formatted information."""
    return with_style(Style.INFO)


def with_error_style() -> _Option:
    """Style output as an error message."""
    return with_style(Style.ERROR)


def with_warning_style() -> _Option:
    """Style output as a warning message."""
    return with_style(Style.WARNING)


def with_success_style() -> _Option:
    """Style output as a success message."""
    return with_style(Style.SUCCESS)


def with_writer(writer: TextIO) -> _Option:
    """Send the output to ``writer``."""

    def apply(cfg: OutputConfig) -> None:
        cfg.writer = writer

    return _Option(apply)


def build_config(options: Iterable[Any], writer: TextIO | None = None) -> OutputConfig:
    """Build an OutputConfig from ``options``, starting from ``writer``."""
    cfg = OutputConfig(writer=writer if writer is not None else sys.stdout)
    for opt in options:
        if isinstance(opt, _Option):
            opt(cfg)
    return cfg


def interpret(msg: str, *args: Any) -> tuple[str, str, TextIO]:
    """Split args into format arguments and options; return (message, style, writer)."""
    fmt_args = tuple(a for a in args if not isinstance(a, _Option))
    options = [a for a in args if isinstance(a, _Option)]
    if fmt_args:
        msg = msg % fmt_args
    cfg = build_config(options)
    return msg, cfg.style, cfg.writer


def _color_enabled() -> bool:
    if os.environ.get("NO_COLOR") or os.environ.get("TERM") == "dumb":
        return False
    isatty = getattr(sys.stdout, "isatty", None)
    return bool(isatty and isatty())


def colorize(text: str, *args: int) -> str:
    """Wrap ``text`` in the given SGR codes when the terminal supports colour."""
    if not args or not _color_enabled():
        return text
    codes = ";".join(str(a) for a in args)
    return f"\x1b[{codes}m{text}\x1b[0m"


def _format_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        return f"{value:f}"
    return str(value)


def format_named_values(rows: Iterable[NamedValue]) -> str:
    """Format rows as right-aligned ``name: value`` lines; empty strings are skipped."""
    cells = [
        (f"  {row.name}: ", _format_value(row.value))
        for row in rows
        if not (isinstance(row.value, str) and row.value == "")
    ]
    if not cells:
        return ""
    width = max(len(name) for name, _ in cells)
    return "".join(f"{name.rjust(width)}{value}\n" for name, value in cells)


class Status(ABC):
    """A live-updating single-line status, usually with a spinner."""

    @abstractmethod
    def update(self, msg: str) -> None:
        """Write a new status message."""

    @abstractmethod
    def step(self, status: str, msg: str) -> None:
        """Finish a step with an ok, error, warn or custom status."""

    @abstractmethod
    def close(self) -> None:
        """Finish live updating."""

    def __enter__(self) -> "Status":
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()


class Step(ABC):
    """A unit of work within a StepGroup."""

    @abstractmethod
    def term_output(self):
        """Return a writer whose data appears as terminal output under the step."""

    @abstractmethod
    def update(self, msg: str, *args: Any) -> None:
        """Change the step's message."""

    @abstractmethod
    def status(self, status: str) -> None:
        """Change the step's status."""

    @abstractmethod
    def done(self) -> None:
        """Mark the step finished."""

    @abstractmethod
    def abort(self) -> None:
        """Mark the step failed and finished unless already done."""


class StepGroup(ABC):
    """A group of steps that may run concurrently."""

    @abstractmethod
    def add(self, msg: str, *args: Any) -> Step:
        """Start a step with the given message."""

    @abstractmethod
    def wait(self) -> None:
        """Wait for all steps to finish and clean up."""

    def __enter__(self) -> "StepGroup":
        return self

    def __exit__(self, *exc: object) -> None:
        self.wait()


class UI(ABC):
    """The primary interface for interacting with a user on the command line."""

    @abstractmethod
    def input(self, prompt: Input) -> str:
        """Ask the user for input; raise NonInteractiveError if unsupported."""

    @abstractmethod
    def interactive(self) -> bool:
        """Return whether the UI supports user interaction."""

    @abstractmethod
    def output(self, msg: str, *args: Any) -> None:
        """Output a formatted message; options may follow the format arguments."""

    @abstractmethod
    def named_values(self, rows: Iterable[NamedValue], *args: Any) -> None:
        """Output aligned name/value pairs."""

    @abstractmethod
    def output_writers(self) -> tuple[TextIO, TextIO]:
        """Return the stdout and stderr writers."""

    @abstractmethod
    def status(self) -> Status:
        """Return a live-updating status."""

    @abstractmethod
    def table(self, table, *args: Any) -> None:
        """Output a table."""

    @abstractmethod
    def step_group(self) -> StepGroup:
        """Return a new step group."""