"""Status indicators and a threaded spinner."""

from __future__ import annotations

import os
import sys
import threading
from typing import Mapping, TextIO

from .ui import BOLD, FG_GREEN, FG_RED, FG_YELLOW, Status, colorize

STATUS_OK = "ok"
STATUS_ERROR = "error"
STATUS_WARN = "warn"
STATUS_TIMEOUT = "timeout"
STATUS_ABORT = "abort"

EMOJI_STATUS = {
    STATUS_OK: "\u2713",
    STATUS_ERROR: "❌",
    STATUS_WARN: "⚠️",
    STATUS_TIMEOUT: "⌛",
}

TEXT_STATUS = {
    STATUS_OK: " +",
    STATUS_ERROR: " !",
    STATUS_WARN: " *",
    STATUS_TIMEOUT: "<>",
}

COLOR_STATUS = {
    STATUS_OK: (FG_GREEN,),
    STATUS_ERROR: (FG_RED,),
    STATUS_WARN: (FG_YELLOW,),
}

ENV_FORCE_EMOJI = "WAYPOINT_FORCE_EMOJI"

SPINNER_CHARSET = ("⠋", "⠙", "⠹", "⠸", "⠼", "⠴", "⠦", "⠧", "⠇", "⠏")


def choose_status_icons(environ: Mapping[str, str]) -> dict:
    """Pick emoji icons when forced or when the locale is UTF-8, text otherwise."""
    if environ.get(ENV_FORCE_EMOJI, "") or "UTF-8" in environ.get("LANG", ""):
        return EMOJI_STATUS
    return TEXT_STATUS


STATUS_ICONS = choose_status_icons(os.environ)


class Spinner:
    """An animated spinner drawn on one line by a background thread."""

    def __init__(self, charset=SPINNER_CHARSET, interval: float = 1 / 6,
                 writer: TextIO | None = None, suffix: str = ""):
        self.charset = tuple(charset)
        self.interval = interval
        self.writer = writer if writer is not None else sys.stdout
        self.suffix = suffix
        self._lock = threading.Lock()
        self._write_lock = threading.Lock()
        self._stop_event: threading.Event | None = None
        self._thread: threading.Thread | None = None

    @property
    def running(self) -> bool:
        return self._thread is not None

    def _draw(self, frame: int) -> None:
        with self._write_lock:
            self.writer.write(f"\r\x1b[K{colorize(self.charset[frame], BOLD)}{self.suffix}")
            self.writer.flush()

    def _run(self, stop: threading.Event) -> None:
        frame = 0
        while not stop.wait(self.interval):
            frame = (frame + 1) % len(self.charset)
            self._draw(frame)

    def start(self) -> None:
        """Start animating; does nothing when already running."""
        with self._lock:
            if self._thread is not None:
                return
            self._draw(0)
            self._stop_event = threading.Event()
            self._thread = threading.Thread(target=self._run, args=(self._stop_event,), daemon=True)
            self._thread.start()

    def stop(self) -> None:
        """Stop animating and clear the line; does nothing when stopped."""
        with self._lock:
            thread, event = self._thread, self._stop_event
            self._thread = self._stop_event = None
        if thread is None:
            return
        event.set()
        thread.join()
        with self._write_lock:
            self.writer.write("\r\x1b[K")
            self.writer.flush()


class SpinnerStatus(Status):
    """A Status showing updates with a spinner."""

    def __init__(self, writer: TextIO | None = None, interval: float = 1 / 6):
        self.writer = writer if writer is not None else sys.stdout
        self._lock = threading.Lock()
        self._spinner = Spinner(SPINNER_CHARSET, interval, self.writer)
        self._running = False

    def update(self, msg: str) -> None:
        with self._lock:
            self._spinner.suffix = " " + msg
            if not self._running:
                self._spinner.start()
                self._running = True

    def step(self, status: str, msg: str) -> None:
        with self._lock:
            self._spinner.stop()
            self._running = False
            pad = ""
            icon = EMOJI_STATUS.get(status, "")
            if not icon:
                icon = status
            elif status == STATUS_WARN:
                pad = " "
            self.writer.write(f"{icon}{pad} {msg}\n")

    def close(self) -> None:
        with self._lock:
            if self._running:
                self._running = False
                self._spinner.suffix = ""
            self._spinner.stop()

    def pause(self) -> bool:
        """Stop the spinner; return whether it was running."""
        with self._lock:
            was_running = self._running
            if self._running:
                self._running = False
                self._spinner.stop()
            return was_running

    def start(self) -> None:
        """Restart the spinner if it is not running."""
        with self._lock:
            if not self._running:
                self._running = True
                self._spinner.start()