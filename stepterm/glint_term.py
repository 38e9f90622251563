"""A terminal window rendered as a document component."""

from __future__ import annotations

import threading

from .document import Component, Text
from .vterm import Screen

_GUTTER = " │ "


class GlintTerm(Component):
    """Shows terminal output written to it; the scrollback once shown in full."""

    def __init__(self, height: int = 10, width: int = 80):
        self.height = height
        self.width = width
        self._lock = threading.Lock()
        self._rows = 0
        self._full = False
        self._closed = False
        self._screen = Screen(height, width, on_damage=self._damage_done)

    def _damage_done(self, rows: list[int]) -> None:
        with self._lock:
            self._rows = max(self._rows, max(rows) + 1)

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

    def show_full(self) -> None:
        """Render the scrollback too from now on."""
        with self._lock:
            self._full = True

    def lines(self) -> list[str]:
        with self._lock:
            rows, full = self._rows, self._full
        out = []
        if full:
            out.extend(_GUTTER + row.rstrip() for row in self._screen.scrollback())
        for row in self._screen.lines()[:rows]:
            out.append(_GUTTER + Text(row.rstrip(), color="lightBlue").lines()[0])
        return out

    def close(self) -> None:
        """Stop accepting output."""
        self._closed = True

    def __enter__(self) -> "GlintTerm":
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()