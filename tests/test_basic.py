import io
import threading
from textwrap import dedent

import pytest

from stepterm.basic import BasicUI, console_ui
from stepterm.table import Table, render_table
from stepterm.ui import (
    Input,
    NamedValue,
    NonInteractiveError,
    with_error_style,
    with_header_style,
    with_info_style,
    with_writer,
)


@pytest.fixture(autouse=True)
def no_color(monkeypatch):
    monkeypatch.setenv("NO_COLOR", "1")


def test_named_values():
    buf = io.StringIO()
    ui = BasicUI()
    ui.named_values(
        [
            NamedValue("hello", "a"),
            NamedValue("this", "is"),
            NamedValue("a", "test"),
            NamedValue("of", "foo"),
            NamedValue("the_key_value", "style"),
        ],
        with_writer(buf),
    )
    expected = (
        "          hello: a\n"
        "           this: is\n"
        "              a: test\n"
        "             of: foo\n"
        "  the_key_value: style\n"
        "\n"
    )
    assert buf.getvalue() == expected


def test_named_values_server():
    buf = io.StringIO()
    ui = BasicUI()
    ui.output("Server configuration:", with_header_style(), with_writer(buf))
    ui.named_values(
        [
            NamedValue("DB Path", "data.db"),
            NamedValue("gRPC Address", "127.0.0.1:1234"),
            NamedValue("HTTP Address", "127.0.0.1:1235"),
            NamedValue("URL Service", "api.alpha.waypoint.run:443 (account: token)"),
        ],
        with_writer(buf),
    )
    expected = (
        "\n"
        "==> Server configuration:\n"
        "       DB Path: data.db\n"
        "  gRPC Address: 127.0.0.1:1234\n"
        "  HTTP Address: 127.0.0.1:1235\n"
        "   URL Service: api.alpha.waypoint.run:443 (account: token)\n"
        "\n"
    )
    assert buf.getvalue() == expected


def test_status_style():
    buf = io.StringIO()
    ui = BasicUI()
    msg = dedent(
        """
        one
        two
          three"""
    ).strip()
    ui.output(msg, with_writer(buf), with_info_style())
    assert buf.getvalue() == "    one\n    two\n      three\n"


def test_error_style_plain_without_color():
    buf = io.StringIO()
    BasicUI(buf).output("bad %s", "thing", with_error_style())
    assert buf.getvalue() == "bad thing\n"


def test_table_matches_render():
    buf = io.StringIO()
    t = Table("name", "state")
    t.rich(["app", "up"], ["green", "red"])
    BasicUI().table(t, with_writer(buf))
    assert buf.getvalue() == render_table(t)


def test_input_reads_line(monkeypatch):
    buf = io.StringIO()
    monkeypatch.setattr("sys.stdin", io.StringIO("answer\n"))
    ui = BasicUI(buf)
    assert ui.input(Input("Name?")) == "answer"
    assert buf.getvalue() == "Name? "
    assert ui.interactive() is False


def test_input_eof(monkeypatch):
    monkeypatch.setattr("sys.stdin", io.StringIO(""))
    with pytest.raises(EOFError):
        BasicUI(io.StringIO()).input(Input("Name?"))


class _BlockingStdin:
    def __init__(self):
        self.release = threading.Event()

    def readline(self):
        self.release.wait(5)
        return "late\n"

    def isatty(self):
        return False


def test_input_cancelled(monkeypatch):
    stdin = _BlockingStdin()
    monkeypatch.setattr("sys.stdin", stdin)
    stop = threading.Event()
    stop.set()
    buf = io.StringIO()
    try:
        with pytest.raises(InterruptedError):
            BasicUI(buf, stop=stop).input(Input("Wait?"))
    finally:
        stdin.release.set()
    assert buf.getvalue() == "Wait? \n"


def test_status_is_reused():
    ui = BasicUI(io.StringIO())
    statuses = [ui.status() for _ in range(3)]
    assert len({id(s) for s in statuses}) == 1


def test_step_group_shows_step():
    buf = io.StringIO()
    ui = BasicUI(buf)
    sg = ui.step_group()
    step = sg.add("deploying %s", "web")
    step.done()
    sg.wait()
    assert "deploying web" in buf.getvalue()


def test_console_ui_without_terminal():
    ui = console_ui()
    assert ui.interactive() is False
    with pytest.raises(NonInteractiveError):
        ui.input(Input("Continue?"))