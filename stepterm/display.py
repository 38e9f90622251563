"""A live-updating multi-line display of status entries with spinners."""

from __future__ import annotations

import os
import sys
import threading
from typing import Any, TextIO

from .status import COLOR_STATUS, SPINNER_CHARSET, STATUS_ICONS
from .vterm import Screen

DEFAULT_WIDTH = 80

_RESET = "\x1b[0m"
_LIGHT_BLUE = "\x1b[94m"
_COLUMN0 = "\x1b[0G"
_ERASE_LINE = "\x1b[2K"


def _up(n: int) -> str:
    return f"\x1b[{n}A" if n > 0 else ""


def _down(n: int) -> str:
    return f"\x1b[{n}B" if n > 0 else ""


def _detect_width(writer: TextIO) -> int:
    try:
        fd = writer.fileno()
        if os.isatty(fd):
            columns = os.get_terminal_size(fd).columns
            if columns >= 10:
                return columns - 1
    except (AttributeError, OSError, ValueError):
        pass
    return DEFAULT_WIDTH


class DisplayEntry:
    """One status line of a Display, with optional body lines below it."""

    def __init__(self, display: "Display", indent: int = 0, body_lines: int = 0):
        self.display = display
        self.indent = indent
        self.line = 0
        self.spinner = False
        self.text = ""
        self.status = ""
        self.body: list[str] = [""] * body_lines

    def start_spinner(self) -> None:
        """Show an animated spinner in front of the entry."""
        d = self.display
        with d._lock:
            self.spinner = True
            d.spinning += 1
            d.render_entry(self, d._spin)

    def stop_spinner(self) -> None:
        """Remove the spinner and redraw the entry."""
        d = self.display
        with d._lock:
            self.spinner = False
            d.spinning -= 1
            d.render_entry(self, d._spin)

    def set_status(self, status: str) -> None:
        """Set the status shown with the entry; takes effect on the next redraw."""
        with self.display._lock:
            self.status = status

    def update(self, msg: str, *args: Any) -> None:
        """Set the entry's text, formatted with ``args``, and redraw it."""
        d = self.display
        with d._lock:
            self.text = msg % args if args else msg
            d.render_entry(self, d._spin)

    def set_body(self, line: int, data: str) -> None:
        """Set a body line, growing the body (and the display) as needed."""
        d = self.display
        with d._lock:
            resize = False
            if line >= len(self.body):
                self.body.extend([""] * (line + 1 - len(self.body)))
                resize = True
            self.body[line] = data
            if resize:
                d._resize()
            d.render_entry(self, d._spin)


class Display:
    """Draws entries on consecutive terminal lines, redrawing them in place."""

    def __init__(self, writer: TextIO | None = None, *, width: int | None = None,
                 interval: float = 1 / 6):
        self.writer = writer if writer is not None else sys.stdout
        self.width = width if width is not None else _detect_width(self.writer)
        self.entries: list[DisplayEntry] = []
        self.line = 0
        self.spinning = 0
        self._spin = 0
        self._lock = threading.RLock()
        self._stop = threading.Event()
        self._thread = threading.Thread(target=self._run, args=(interval,), daemon=True)
        self._thread.start()

    def __enter__(self) -> "Display":
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    def _run(self, interval: float) -> None:
        while not self._stop.wait(interval):
            with self._lock:
                self._spin = (self._spin + 1) % len(SPINNER_CHARSET)
                if self.spinning <= 0:
                    continue
                for ent in self.entries:
                    if ent.spinner:
                        self.render_entry(ent, self._spin)

    def _write(self, text: str) -> None:
        self.writer.write(text)
        flush = getattr(self.writer, "flush", None)
        if flush is not None:
            flush()

    def _add(self, entry: DisplayEntry) -> DisplayEntry:
        with self._lock:
            entry.line = self.line
            self.entries.append(entry)
            self.line += 1 + len(entry.body)
            self._write("\n" * (1 + len(entry.body)))
        return entry

    def new_status(self, indent: int) -> DisplayEntry:
        """Add an entry on a new line."""
        return self._add(DisplayEntry(self, indent))

    def new_status_with_body(self, indent: int, lines: int) -> DisplayEntry:
        """Add an entry with ``lines`` body lines reserved below it."""
        return self._add(DisplayEntry(self, indent, lines))

    def render_entry(self, entry: DisplayEntry, spin: int) -> None:
        """Move to the entry's line, redraw it and its body, and move back."""
        with self._lock:
            diff = self.line - entry.line
            text = entry.text.rstrip(" \t\n")
            if len(text) >= self.width:
                text = text[: self.width - 1]

            prefix = SPINNER_CHARSET[spin % len(SPINNER_CHARSET)] + " " if entry.spinner else ""
            color = ""
            if entry.status:
                icon = STATUS_ICONS.get(entry.status, entry.status)
                prefix = f"{prefix} {icon} " if prefix else f"{icon} "
                codes = COLOR_STATUS.get(entry.status)
                if codes:
                    color = "".join(f"\x1b[{c}m" for c in codes)

            line = f"{_up(diff)}{_COLUMN0}{_ERASE_LINE}{prefix}{text}"
            if color:
                line = f"{color}{line}{_RESET}"

            parts = [line]
            for body in entry.body:
                parts.append(f"{_down(1)}{_COLUMN0}{body}")
                diff -= 1
            parts.append(f"{_down(max(diff, 0))}{_COLUMN0}")
            self._write("".join(parts))

    def _resize(self) -> None:
        new_line = sum(1 + len(ent.body) for ent in self.entries)
        diff = new_line - self.line
        if diff <= 0:
            return
        self._write("\n" * diff)
        self.line = new_line
        cnt = 0
        for ent in self.entries:
            ent.line = cnt
            cnt += 1 + len(ent.body)
            self.render_entry(ent, self._spin)

    def close(self) -> None:
        """Stop the spinner animation."""
        self._stop.set()
        if self._thread is not threading.current_thread():
            self._thread.join()


class Term:
    """A terminal window whose screen is shown as an entry's body lines."""

    def __init__(self, entry: DisplayEntry, height: int, width: int):
        self.entry = entry
        self._closed = False
        self._screen = Screen(height, width, on_damage=self._damage_done)

    def _damage_done(self, rows: list[int]) -> None:
        lines = self._screen.lines()
        for row in rows:
            self.entry.set_body(row, f" │ {_LIGHT_BLUE}{lines[row]}{_RESET}")

    def _check_open(self) -> None:
        if self._closed:
            raise ValueError("I/O operation on closed terminal")

    def write(self, data) -> int:
        """Feed terminal output to the window."""
        self._check_open()
        return self._screen.write(data)

    def flush(self) -> None:
        """Fail like a closed file would; writes are applied immediately."""
        self._check_open()

    def close(self) -> None:
        """Stop accepting output."""
        self._closed = True

    def __enter__(self) -> "Term":
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()