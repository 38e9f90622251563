"""A UI drawn as a live-updating document."""

from __future__ import annotations

import sys
from typing import Any, Iterable, TextIO

from .document import Document, Text
from .glint_status import GlintStatus
from .glint_step_group import GlintStepGroup
from .table import Table, render_table
from .ui import (
    FG_GREEN,
    UI,
    Input,
    NamedValue,
    NonInteractiveError,
    Style,
    colorize,
    format_named_values,
    interpret,
)


class GlintUI(UI):
    """A non-interactive UI that renders everything into a Document."""

    def __init__(self, writer: TextIO | None = None, *, live: bool = True,
                 interval: float = 1 / 24):
        self.document = Document(writer, interval=interval, live=live)

    def __enter__(self) -> "GlintUI":
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    def input(self, prompt: Input) -> str:
        text = getattr(prompt, "prompt", prompt)
        raise NonInteractiveError(f"cannot ask {text!r}: the document UI takes no input")

    def interactive(self) -> bool:
        return False

    def output(self, msg: str, *args: Any) -> None:
        msg, style, _ = interpret(msg, *args)
        color = ""
        bold = False

        if style == Style.HEADER:
            bold = True
            msg = "\n» " + msg
        elif style in (Style.ERROR, Style.ERROR_BOLD):
            first, *rest = msg.split("\n")
            self.document.append(Text("! " + first, color="lightRed",
                                      bold=style == Style.ERROR_BOLD, final=True))
            for line in rest:
                self.document.append(Text("  " + line, final=True))
            return
        elif style in (Style.WARNING, Style.WARNING_BOLD):
            color = "lightYellow"
            bold = style == Style.WARNING_BOLD
        elif style in (Style.SUCCESS, Style.SUCCESS_BOLD):
            color = "lightGreen"
            bold = style == Style.SUCCESS_BOLD
            msg = colorize(msg, FG_GREEN)
        elif style == Style.INFO:
            msg = "\n".join("  " + line for line in msg.split("\n"))

        self.document.append(Text(msg, color=color, bold=bold, final=True))

    def named_values(self, rows: Iterable[NamedValue], *args: Any) -> None:
        text = format_named_values(rows)
        if text.endswith("\n"):
            text = text[:-1]
        self.document.append(Text(text, final=True))

    def output_writers(self) -> tuple[TextIO, TextIO]:
        return sys.stdout, sys.stderr

    def status(self) -> GlintStatus:
        st = GlintStatus()
        self.document.append(st)
        return st

    def step_group(self) -> GlintStepGroup:
        sg = GlintStepGroup()
        self.document.append(sg)
        return sg

    def table(self, table: Table, *args: Any) -> None:
        self.document.append(Text(render_table(table), final=True))

    def close(self) -> None:
        """Finish rendering the document."""
        self.document.close()