"""A Status rendered as a document component with a spinner."""

from __future__ import annotations

import threading
import time

from .document import Component, Text
from .status import SPINNER_CHARSET, STATUS_ERROR, STATUS_ICONS, STATUS_OK, STATUS_WARN
from .ui import Status

_STEP_COLORS = {
    STATUS_OK: "lightGreen",
    STATUS_ERROR: "lightRed",
    STATUS_WARN: "lightYellow",
}


def _spinner_frame() -> str:
    return SPINNER_CHARSET[int(time.monotonic() * 6) % len(SPINNER_CHARSET)]


class GlintStatus(Status, Component):
    """Finished steps as coloured lines, plus a spinner for the current message."""

    def __init__(self):
        self._lock = threading.Lock()
        self._closed = False
        self._msg = ""
        self._text: list[Text] = []

    def update(self, msg: str) -> None:
        with self._lock:
            self._msg = msg

    def step(self, status: str, msg: str) -> None:
        with self._lock:
            icon = STATUS_ICONS.get(status)
            if icon is not None:
                msg = f"{icon} {msg}"
            self._msg = ""
            self._text.append(Text(msg, color=_STEP_COLORS.get(status, ""), final=True))

    def close(self) -> None:
        with self._lock:
            self._closed = True

    def reset(self) -> None:
        """Forget finished steps and the current message."""
        with self._lock:
            self._text = []
            self._msg = ""

    @property
    def finalized(self) -> bool:
        with self._lock:
            return self._closed

    def lines(self) -> list[str]:
        with self._lock:
            out = [line for text in self._text for line in text.lines()]
            if not self._closed and self._msg:
                out.append(f"{_spinner_frame()} {self._msg}")
            return out