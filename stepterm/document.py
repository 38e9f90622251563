"""A live-rendered document of components drawn on a terminal."""

from __future__ import annotations

import sys
import threading
from abc import ABC, abstractmethod
from typing import TextIO

from .ui import BOLD, colorize

COLORS = {
    "lightRed": 91,
    "lightGreen": 92,
    "lightYellow": 93,
    "lightBlue": 94,
}


class Component(ABC):
    """Something that renders to a list of terminal lines."""

    @property
    def finalized(self) -> bool:
        """Whether the component will never change again."""
        return False

    @abstractmethod
    def lines(self) -> list[str]:
        """Return the lines the component currently renders to."""


class Text(Component):
    """Plain or styled text, split on newlines."""

    def __init__(self, text: str, *, color: str = "", bold: bool = False, final: bool = False):
        if color and color not in COLORS:
            raise ValueError(f"unknown color: {color!r}")
        self.text = text
        self.color = color
        self.bold = bold
        self.final = final

    @property
    def finalized(self) -> bool:
        return self.final

    def lines(self) -> list[str]:
        codes = []
        if self.bold:
            codes.append(BOLD)
        if self.color:
            codes.append(COLORS[self.color])
        return [colorize(line, *codes) for line in self.text.split("\n")]


class Document:
    """An ordered set of components redrawn in place on a writer.

    Leading finalized components are written once and leave the live region;
    the rest are redrawn whenever their output changes.
    """

    def __init__(self, writer: TextIO | None = None, *, interval: float = 1 / 24,
                 live: bool = True):
        self.writer = writer if writer is not None else sys.stdout
        self._components: list[Component] = []
        self._static: list[str] = []
        self._last: list[str] = []
        self._drawn = 0
        self._closed = False
        self._lock = threading.RLock()
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None
        if live:
            self._thread = threading.Thread(target=self._run, args=(interval,), daemon=True)
            self._thread.start()

    def __enter__(self) -> "Document":
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    def append(self, component: Component) -> None:
        """Add a component to the end of the document."""
        with self._lock:
            self._components.append(component)

    def render_frame(self) -> str:
        """Return the whole document as text, without cursor movement."""
        with self._lock:
            lines = list(self._static)
            for component in self._components:
                lines.extend(component.lines())
        return "\n".join(lines)

    def _run(self, interval: float) -> None:
        while not self._stop.wait(interval):
            self._draw()

    def _draw(self, final: bool = False) -> None:
        with self._lock:
            static: list[str] = []
            while self._components and (final or self._components[0].finalized):
                static.extend(self._components.pop(0).lines())
            live = [line for c in self._components for line in c.lines()]
            if not static and live == self._last:
                return
            parts = []
            if self._drawn:
                parts.append(f"\x1b[{self._drawn}A\r\x1b[J")
            parts.extend(line + "\n" for line in static + live)
            self._static.extend(static)
            self._drawn = len(live)
            self._last = live
            self.writer.write("".join(parts))
            flush = getattr(self.writer, "flush", None)
            if flush is not None:
                flush()

    def close(self) -> None:
        """Stop live rendering and draw the final frame."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
        self._stop.set()
        if self._thread is not None and self._thread is not threading.current_thread():
            self._thread.join()
        self._draw(final=True)