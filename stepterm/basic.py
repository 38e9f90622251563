"""A UI writing coloured output to the current process's terminal."""

from __future__ import annotations

import getpass
import io
import os
import queue
import sys
import threading
from typing import Any, Iterable, TextIO

from .glint import GlintUI
from .noninteractive import NonInteractiveUI
from .status import SpinnerStatus
from .step import FancyStepGroup
from .table import Table, render_table
from .ui import (
    BOLD,
    FG_GREEN,
    FG_RED,
    FG_YELLOW,
    UI,
    Input,
    NamedValue,
    Style,
    build_config,
    colorize,
    format_named_values,
    interpret,
    with_style,
    with_writer,
)

_STYLE_CODES = {
    Style.ERROR.value: (FG_RED,),
    Style.ERROR_BOLD.value: (FG_RED, BOLD),
    Style.WARNING.value: (FG_YELLOW,),
    Style.WARNING_BOLD.value: (FG_YELLOW, BOLD),
    Style.SUCCESS.value: (FG_GREEN,),
    Style.SUCCESS_BOLD.value: (FG_GREEN, BOLD),
}


def _stdout_is_terminal() -> bool:
    try:
        fd = sys.stdout.fileno()
        if not os.isatty(fd):
            return False
        size = os.get_terminal_size(fd)
    except (AttributeError, OSError, ValueError, io.UnsupportedOperation):
        return False
    return size.lines > 0 and size.columns > 0


def console_ui() -> UI:
    """Return a live UI on a real terminal and a plain one otherwise."""
    if _stdout_is_terminal():
        return GlintUI()
    return NonInteractiveUI()


def _isatty(stream) -> bool:
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())


class BasicUI(UI):
    """Writes styled output with a spinner status; reads input from stdin.

    ``stop`` plays the part of a cancellation signal: once set, pending input
    is abandoned and step groups stop waiting.
    """

    def __init__(self, writer: TextIO | None = None, *, stop: threading.Event | None = None):
        self._writer = writer
        self._stop = stop if stop is not None else threading.Event()
        self._status: SpinnerStatus | None = None

    @property
    def writer(self) -> TextIO:
        return self._writer if self._writer is not None else sys.stdout

    def input(self, prompt: Input) -> str:
        buf = io.StringIO()
        self.output(prompt.prompt, with_style(prompt.style), with_writer(buf))
        out = self.writer
        out.write(buf.getvalue().rstrip("\r\n") + " ")
        flush = getattr(out, "flush", None)
        if flush is not None:
            flush()

        results: queue.Queue = queue.Queue(maxsize=1)
        stdin = sys.stdin

        def read() -> None:
            try:
                if prompt.secret and _isatty(stdin):
                    line = getpass.getpass("")
                else:
                    line = stdin.readline()
                    if not line.endswith("\n"):
                        raise EOFError("end of input")
            except BaseException as exc:  # handed to the caller
                results.put((None, exc))
                return
            results.put((line.rstrip("\r\n"), None))

        threading.Thread(target=read, daemon=True).start()

        while True:
            try:
                line, err = results.get(timeout=0.05)
            except queue.Empty:
                if self._stop.is_set():
                    out.write("\n")
                    raise InterruptedError("input cancelled")
                continue
            if err is not None:
                raise err
            return line

    def interactive(self) -> bool:
        return _isatty(sys.stdin)

    def output(self, msg: str, *args: Any) -> None:
        msg, style, _ = interpret(msg, *args)
        writer = build_config(args, self.writer).writer

        if style == Style.HEADER:
            msg = colorize(f"\n==> {msg}", BOLD)
        elif style in _STYLE_CODES:
            msg = colorize(msg, *_STYLE_CODES[style])
        elif style == Style.INFO:
            msg = "\n".join(f"    {line}" for line in msg.split("\n"))

        status = self._status
        resume = status is not None and status.pause()
        try:
            writer.write(msg + "\n")
        finally:
            if resume:
                status.start()

    def named_values(self, rows: Iterable[NamedValue], *args: Any) -> None:
        cfg = build_config(args, self.writer)
        cfg.writer.write(format_named_values(rows) + "\n")

    def output_writers(self) -> tuple[TextIO, TextIO]:
        return sys.stdout, sys.stderr

    def status(self) -> SpinnerStatus:
        if self._status is None:
            self._status = SpinnerStatus(self.writer)
        return self._status

    def step_group(self) -> FancyStepGroup:
        return FancyStepGroup(self.writer, stop=self._stop)

    def table(self, table: Table, *args: Any) -> None:
        cfg = build_config(args, self.writer)
        cfg.writer.write(render_table(table))