"""A small in-memory terminal screen with scrollback."""

from __future__ import annotations

import codecs
import threading
from typing import Callable


class Screen:
    """A fixed-size character grid fed with terminal output.

    Printable text, newlines, carriage returns, backspace, tabs and the common
    cursor movement and erase sequences are applied; other escape sequences
    are dropped. Lines scrolled off the top go to the scrollback.
    """

    def __init__(self, height: int, width: int, *,
                 on_damage: Callable[[list], None] | None = None):
        if height <= 0 or width <= 0:
            raise ValueError("screen height and width must be positive")
        self.height = height
        self.width = width
        self._on_damage = on_damage
        self._grid = [[" "] * width for _ in range(height)]
        self._scrollback: list[str] = []
        self._row = 0
        self._col = 0
        self._pending = ""
        self._decoder = codecs.getincrementaldecoder("utf-8")("replace")
        self._lock = threading.Lock()

    def write(self, data) -> int:
        """Feed bytes or text to the screen; return the amount consumed."""
        text = self._decoder.decode(data) if isinstance(data, (bytes, bytearray)) else data
        with self._lock:
            before = self._rows()
            self._feed(text)
            after = self._rows()
        changed = [i for i, (a, b) in enumerate(zip(before, after)) if a != b]
        if changed and self._on_damage is not None:
            self._on_damage(changed)
        return len(data)

    def lines(self) -> list[str]:
        """Return the visible rows, each ``width`` characters long."""
        with self._lock:
            return self._rows()

    def scrollback(self) -> list[str]:
        """Return the rows that have scrolled off the top, oldest first."""
        with self._lock:
            return list(self._scrollback)

    def _rows(self) -> list[str]:
        return ["".join(row) for row in self._grid]

    def _linefeed(self) -> None:
        self._row += 1
        if self._row >= self.height:
            self._scrollback.append("".join(self._grid.pop(0)))
            self._grid.append([" "] * self.width)
            self._row = self.height - 1

    def _put(self, ch: str) -> None:
        if self._col >= self.width:
            self._col = 0
            self._linefeed()
        self._grid[self._row][self._col] = ch
        self._col += 1

    def _feed(self, text: str) -> None:
        text = self._pending + text
        self._pending = ""
        i = 0
        n = len(text)
        while i < n:
            ch = text[i]
            if ch == "\x1b":
                if i + 1 >= n:
                    self._pending = text[i:]
                    return
                nxt = text[i + 1]
                if nxt == "[":
                    j = i + 2
                    while j < n and not ("\x40" <= text[j] <= "\x7e"):
                        j += 1
                    if j >= n:
                        self._pending = text[i:]
                        return
                    self._csi(text[i + 2:j], text[j])
                    i = j + 1
                elif nxt == "]":
                    bel = text.find("\x07", i + 2)
                    st = text.find("\x1b\\", i + 2)
                    ends = [e for e in ((bel, 1), (st, 2)) if e[0] >= 0]
                    if not ends:
                        self._pending = text[i:]
                        return
                    pos, size = min(ends)
                    i = pos + size
                else:
                    i += 2
                continue
            if ch == "\n":
                self._col = 0
                self._linefeed()
            elif ch == "\r":
                self._col = 0
            elif ch == "\b":
                self._col = max(0, min(self._col, self.width) - 1)
            elif ch == "\t":
                self._col = min(self.width - 1, (self._col // 8 + 1) * 8)
            elif ch < " " or ch == "\x7f" or "\x80" <= ch <= "\x9f":
                pass
            else:
                self._put(ch)
            i += 1

    def _erase(self, row: int, start: int, end: int) -> None:
        for col in range(max(0, start), min(self.width, end)):
            self._grid[row][col] = " "

    def _csi(self, params: str, final: str) -> None:
        nums = [int(p) if p.isdigit() else 0 for p in params.lstrip("?>=").split(";")]
        n = nums[0] or 1
        col = min(self._col, self.width - 1)
        if final == "A":
            self._row = max(0, self._row - n)
        elif final == "B":
            self._row = min(self.height - 1, self._row + n)
        elif final == "C":
            self._col = min(self.width - 1, col + n)
        elif final == "D":
            self._col = max(0, col - n)
        elif final == "G":
            self._col = min(self.width - 1, n - 1)
        elif final in "Hf":
            second = nums[1] if len(nums) > 1 and nums[1] else 1
            self._row = min(self.height - 1, n - 1)
            self._col = min(self.width - 1, second - 1)
        elif final == "K":
            mode = nums[0]
            if mode == 0:
                self._erase(self._row, col, self.width)
            elif mode == 1:
                self._erase(self._row, 0, col + 1)
            elif mode == 2:
                self._erase(self._row, 0, self.width)
        elif final == "J":
            mode = nums[0]
            if mode == 0:
                self._erase(self._row, col, self.width)
                for row in range(self._row + 1, self.height):
                    self._erase(row, 0, self.width)
            elif mode == 1:
                for row in range(self._row):
                    self._erase(row, 0, self.width)
                self._erase(self._row, 0, col + 1)
            elif mode in (2, 3):
                for row in range(self.height):
                    self._erase(row, 0, self.width)