"""A step group drawn live on a Display, with terminal output per step."""

from __future__ import annotations

import threading
from typing import Any, TextIO

from .display import Display, DisplayEntry, Term
from .status import STATUS_ERROR, STATUS_OK
from .ui import Step, StepGroup

TERM_ROWS = 10
TERM_COLUMNS = 100


class FancyStepGroup(StepGroup):
    """Steps shown as live lines with spinners and status icons."""

    def __init__(self, writer: TextIO | None = None, *, display: Display | None = None,
                 stop: threading.Event | None = None, interval: float = 1 / 6):
        self.display = display if display is not None else Display(writer, interval=interval)
        self._parent_stop = stop
        self._cancelled = threading.Event()
        self._cond = threading.Condition()
        self._steps = 0
        self._finished = 0

    @property
    def cancelled(self) -> bool:
        """Whether the group has been cancelled or its parent stopped."""
        return self._cancelled.is_set() or (
            self._parent_stop is not None and self._parent_stop.is_set()
        )

    def add(self, msg: str, *args: Any) -> "FancyStep":
        with self._cond:
            self._steps += 1
        ent = self.display.new_status(0)
        ent.start_spinner()
        ent.update(msg, *args)
        return FancyStep(self, ent)

    def wait(self) -> None:
        with self._cond:
            while self._finished < self._steps and not self.cancelled:
                self._cond.wait(0.05)
        self._cancelled.set()
        self.display.close()

    def _signal_done(self) -> None:
        if self.cancelled:
            return
        with self._cond:
            self._finished += 1
            self._cond.notify_all()


class FancyStep(Step):
    """A single step of a FancyStepGroup."""

    def __init__(self, group: FancyStepGroup, entry: DisplayEntry):
        self.group = group
        self.entry = entry
        self._lock = threading.RLock()
        self._done = False
        self._status = ""
        self._term: Term | None = None

    def term_output(self) -> Term:
        with self._lock:
            if self._term is None:
                self._term = Term(self.entry, TERM_ROWS, TERM_COLUMNS)
            return self._term

    def update(self, msg: str, *args: Any) -> None:
        self.entry.update(msg, *args)

    def status(self, status: str) -> None:
        with self._lock:
            self._status = status
            self.entry.set_status(status)

    def done(self) -> None:
        with self._lock:
            if self._done:
                return
            if not self._status:
                self.status(STATUS_OK)
            self._signal_done()

    def abort(self) -> None:
        with self._lock:
            if self._done:
                return
            self.status(STATUS_ERROR)
            self._signal_done()

    def _signal_done(self) -> None:
        self._done = True
        self.entry.stop_spinner()
        self.group._signal_done()