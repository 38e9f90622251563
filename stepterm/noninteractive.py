"""A plain-text UI for environments without an interactive terminal."""

from __future__ import annotations

import re
import sys
import threading
from typing import Any, Iterable, TextIO

from .status import TEXT_STATUS
from .table import Table, render_table
from .ui import (
    UI,
    Input,
    NamedValue,
    NonInteractiveError,
    Status,
    Step,
    StepGroup,
    Style,
    build_config,
    format_named_values,
    interpret,
)

_ANSI = re.compile(
    r"[\x1b\x9b][\[\]()#;?]*"
    r"(?:(?:(?:[a-zA-Z\d]*(?:;[a-zA-Z\d]*)*)?\x07)"
    r"|(?:(?:\d{1,4}(?:;\d{0,4})*)?[\dA-PRZcf-ntqry=><~]))"
)


def strip_ansi(text: str) -> str:
    """Remove ANSI escape sequences from ``text``."""
    return _ANSI.sub("", text)


def _resolve(writer: TextIO | None) -> TextIO:
    return writer if writer is not None else sys.stdout


class StripAnsiWriter:
    """A writer that drops ANSI escape sequences before passing data on."""

    def __init__(self, next_writer: TextIO | None = None):
        self._next = next_writer

    @property
    def next(self) -> TextIO:
        return _resolve(self._next)

    def write(self, data) -> int:
        """Write ``data`` (text or bytes) without its escape sequences."""
        text = data.decode("utf-8", "replace") if isinstance(data, (bytes, bytearray)) else data
        self.next.write(strip_ansi(text))
        return len(data)

    def flush(self) -> None:
        flush = getattr(self.next, "flush", None)
        if flush is not None:
            flush()


class NonInteractiveUI(UI):
    """Writes plain lines; never asks for input."""

    def __init__(self, writer: TextIO | None = None):
        self._writer = writer
        self._lock = threading.Lock()

    @property
    def writer(self) -> TextIO:
        return _resolve(self._writer)

    def input(self, prompt: Input) -> str:
        raise NonInteractiveError()

    def interactive(self) -> bool:
        return False

    def output(self, msg: str, *args: Any) -> None:
        with self._lock:
            msg, style, _ = interpret(msg, *args)
            writer = build_config(args, self.writer).writer

            if style == Style.HEADER:
                msg = "\n» " + msg
            elif style in (Style.ERROR, Style.ERROR_BOLD):
                first, *rest = msg.split("\n")
                writer.write("! " + first + "\n")
                for line in rest:
                    writer.write("  " + line + "\n")
                return
            elif style in (Style.WARNING, Style.WARNING_BOLD):
                msg = "warning: " + msg
            elif style == Style.INFO:
                msg = "\n".join("  " + line for line in msg.split("\n"))

            writer.write(msg + "\n")

    def named_values(self, rows: Iterable[NamedValue], *args: Any) -> None:
        with self._lock:
            cfg = build_config(args, self.writer)
            cfg.writer.write(format_named_values(rows) + "\n")

    def output_writers(self) -> tuple[TextIO, TextIO]:
        return sys.stdout, sys.stderr

    def status(self) -> "NonInteractiveStatus":
        return NonInteractiveStatus(self._lock, self._writer)

    def step_group(self) -> "NonInteractiveStepGroup":
        return NonInteractiveStepGroup(self._lock, self._writer)

    def table(self, table: Table, *args: Any) -> None:
        with self._lock:
            cfg = build_config(args, self.writer)
            cfg.writer.write(render_table(table))


class NonInteractiveStatus(Status):
    """Prints each update and step as its own line."""

    def __init__(self, lock: threading.Lock | None = None, writer: TextIO | None = None):
        self._lock = lock if lock is not None else threading.Lock()
        self._writer = writer

    def update(self, msg: str) -> None:
        with self._lock:
            _resolve(self._writer).write(msg + "\n")

    def step(self, status: str, msg: str) -> None:
        with self._lock:
            _resolve(self._writer).write(f"{TEXT_STATUS.get(status, '')}: {msg}\n")

    def close(self) -> None:
        """Nothing to clear."""


class NonInteractiveStepGroup(StepGroup):
    """Prints each step's messages; waits for all steps to finish."""

    def __init__(self, lock: threading.Lock | None = None, writer: TextIO | None = None):
        self._lock = lock if lock is not None else threading.Lock()
        self._writer = writer
        self._cond = threading.Condition()
        self._pending = 0
        self._closed = False

    def add(self, msg: str, *args: Any) -> "NonInteractiveStep":
        step = NonInteractiveStep(self._lock, self._writer)
        step.update(msg, *args)
        with self._cond:
            # A step added after wait() still works but is not waited on.
            if not self._closed:
                step._group = self
                self._pending += 1
        return step

    def _step_done(self) -> None:
        with self._cond:
            self._pending -= 1
            self._cond.notify_all()

    def wait(self) -> None:
        with self._cond:
            self._closed = True
            while self._pending > 0:
                self._cond.wait()


class NonInteractiveStep(Step):
    """A single step of a NonInteractiveStepGroup."""

    def __init__(self, lock: threading.Lock | None = None, writer: TextIO | None = None):
        self._lock = lock if lock is not None else threading.Lock()
        self._writer = writer
        self._group: NonInteractiveStepGroup | None = None
        self._done = False

    def term_output(self) -> StripAnsiWriter:
        return StripAnsiWriter(self._writer)

    def update(self, msg: str, *args: Any) -> None:
        text = msg % args if args else msg
        with self._lock:
            _resolve(self._writer).write("-> " + text + "\n")

    def status(self, status: str) -> None:
        """Statuses are not shown."""

    def done(self) -> None:
        with self._lock:
            if self._done:
                return
            self._done = True
            group = self._group
        if group is not None:
            group._step_done()

    def abort(self) -> None:
        self.done()