"""A step group rendered as a document component."""

from __future__ import annotations

import threading
from typing import Any

from .document import Component
from .glint_status import GlintStatus
from .glint_term import GlintTerm
from .status import STATUS_ERROR, STATUS_OK
from .ui import Step, StepGroup

TERM_ROWS = 10
TERM_COLUMNS = 80


class GlintStepGroup(StepGroup, Component):
    """Steps with live status lines and optional terminal windows."""

    def __init__(self):
        self._cond = threading.Condition()
        self._steps: list[GlintStep] = []
        self._pending = 0
        self._closed = False

    def add(self, msg: str, *args: Any) -> "GlintStep":
        step = GlintStep()
        step.update(msg, *args)
        with self._cond:
            # A step added after wait() still works but is neither shown nor waited on.
            if not self._closed:
                step._group = self
                self._pending += 1
                self._steps.append(step)
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
            steps = list(self._steps)
        for step in steps:
            step._close_term()

    def lines(self) -> list[str]:
        with self._cond:
            steps = list(self._steps)
        return [line for step in steps for line in step.lines()]


class GlintStep(Step, Component):
    """A single step of a GlintStepGroup."""

    def __init__(self):
        self._lock = threading.RLock()
        self._group: GlintStepGroup | None = None
        self._done = False
        self._msg = ""
        self._status_val = ""
        self._status = GlintStatus()
        self._term: GlintTerm | None = None

    def term_output(self) -> GlintTerm:
        with self._lock:
            if self._term is None:
                self._term = GlintTerm(TERM_ROWS, TERM_COLUMNS)
            return self._term

    def update(self, msg: str, *args: Any) -> None:
        with self._lock:
            self._msg = msg % args if args else msg
            self._status.reset()
            if self._status_val:
                self._status.step(self._status_val, self._msg)
            else:
                self._status.update(self._msg)

    def status(self, status: str) -> None:
        with self._lock:
            self._status_val = status
            self._status.reset()
            self._status.step(status, self._msg)

    def done(self) -> None:
        with self._lock:
            if self._done:
                return
            self._done = True
            if not self._status_val:
                self._status.reset()
                self._status.step(STATUS_OK, self._msg)
            group = self._group
        if group is not None:
            group._step_done()

    def abort(self) -> None:
        with self._lock:
            if self._done:
                return
            self._done = True
            if self._term is not None:
                self._term.show_full()
            self._status.step(STATUS_ERROR, self._msg)
            group = self._group
        if group is not None:
            group._step_done()

    def _close_term(self) -> None:
        with self._lock:
            if self._term is not None:
                self._term.close()

    def lines(self) -> list[str]:
        with self._lock:
            out = self._status.lines()
            if self._term is not None:
                out.extend(self._term.lines())
            return out