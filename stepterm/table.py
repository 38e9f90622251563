"""Tables of coloured entries and their text rendering."""

from __future__ import annotations

import re
from dataclasses import dataclass
from itertools import zip_longest

YELLOW = "yellow"
GREEN = "green"
RED = "red"

COLOR_MAPPING = {
    GREEN: 32,
    YELLOW: 33,
    RED: 31,
}

_DECIMAL = re.compile(r"^-?(?:\d{1,3}(?:,\d{3})*|\d+)(?:\.\d+)?$")


@dataclass
class TableEntry:
    """A single cell of a table."""

    value: str
    color: str = ""


class Table:
    """Headers and rows of entries, rendered by a UI."""

    def __init__(self, *headers: str):
        self.headers: list[str] = list(headers)
        self.rows: list[list[TableEntry]] = []

    def rich(self, cols, colors) -> None:
        """Add a row; colours apply to the leading columns they cover."""
        cols = list(cols)
        colors = list(colors)[: len(cols)]
        self.rows.append(
            [TableEntry(value, color) for value, color in zip_longest(cols, colors, fillvalue="")]
        )


def _title(name: str) -> str:
    orig = len(name)
    name = name.replace("_", " ").replace(".", " ").strip()
    if not name and orig:
        name = " "
    return name.upper()


def _center(text: str, width: int) -> str:
    gap = width - len(text)
    left = gap // 2
    return " " * left + text + " " * (gap - left)


def _line(cells: list[str]) -> str:
    return " " + "|".join(f" {c} " for c in cells) + " "


def render_table(table: Table) -> str:
    """Render the table borderless, with a header separator line."""
    headers = [_title(h) for h in table.headers]
    ncols = max([len(headers)] + [len(r) for r in table.rows])
    if ncols == 0:
        return ""
    widths = [0] * ncols
    for col, header in enumerate(headers):
        widths[col] = max(widths[col], len(header))
    for row in table.rows:
        for col, ent in enumerate(row):
            widths[col] = max(widths[col], len(ent.value))

    lines = []
    if headers:
        padded = headers + [""] * (ncols - len(headers))
        lines.append(_line([_center(h, w) for h, w in zip(padded, widths)]))
        lines.append("+".join("-" * (w + 2) for w in widths))

    for row in table.rows:
        cells = []
        entries = row + [TableEntry("")] * (ncols - len(row))
        for ent, width in zip(entries, widths):
            if _DECIMAL.match(ent.value):
                text = ent.value.rjust(width)
            else:
                text = ent.value.ljust(width)
            code = COLOR_MAPPING.get(ent.color)
            if code is not None:
                text = f"\x1b[{code}m{text}\x1b[0m"
            cells.append(text)
        lines.append(_line(cells))

    return "".join(line + "\n" for line in lines)