import io
import sys

import pytest

from stepterm.ui import (
    BOLD,
    UI,
    Input,
    NamedValue,
    NonInteractiveError,
    Style,
    build_config,
    colorize,
    format_named_values,
    interpret,
    with_error_style,
    with_header_style,
    with_info_style,
    with_style,
    with_success_style,
    with_warning_style,
    with_writer,
)


class _Tty(io.StringIO):
    def isatty(self):
        return True


def test_interpret_formats_and_applies_options():
    buf = io.StringIO()
    msg, style, writer = interpret("hello %s %d", "world", 3, with_header_style(), with_writer(buf))
    assert msg == "hello world 3"
    assert style == "header"
    assert writer is buf


def test_interpret_without_args_keeps_percent():
    msg, style, _ = interpret("100%")
    assert msg == "100%"
    assert style == ""


def test_interpret_defaults_to_stdout(monkeypatch):
    fake = io.StringIO()
    monkeypatch.setattr(sys, "stdout", fake)
    _, _, writer = interpret("x")
    assert writer is fake


@pytest.mark.parametrize(
    "option, expected",
    [
        (with_header_style, Style.HEADER),
        (with_info_style, Style.INFO),
        (with_error_style, Style.ERROR),
        (with_warning_style, Style.WARNING),
        (with_success_style, Style.SUCCESS),
    ],
)
def test_style_options(option, expected):
    cfg = build_config([option()], io.StringIO())
    assert cfg.style == expected.value


def test_last_option_wins():
    cfg = build_config([with_info_style(), with_style("error-bold")], io.StringIO())
    assert cfg.style == "error-bold"


def test_format_named_values_alignment():
    out = format_named_values(
        [
            NamedValue("hello", "a"),
            NamedValue("this", "is"),
            NamedValue("a", "test"),
            NamedValue("of", "foo"),
            NamedValue("the_key_value", "style"),
        ]
    )
    expected = (
        "          hello: a\n"
        "           this: is\n"
        "              a: test\n"
        "             of: foo\n"
        "  the_key_value: style\n"
    )
    assert out == expected


def test_format_named_values_types_and_skip_empty():
    out = format_named_values(
        [NamedValue("n", 5), NamedValue("f", 1.5), NamedValue("b", True), NamedValue("e", "")]
    )
    lines = out.splitlines()
    assert lines == ["  n: 5", "  f: 1.500000", "  b: true"]


def test_colorize_plain_without_codes():
    assert colorize("text") == "text"


def test_colorize_disabled_when_not_tty(monkeypatch):
    monkeypatch.setattr(sys, "stdout", io.StringIO())
    assert colorize("text", BOLD) == "text"


def test_colorize_on_tty(monkeypatch):
    monkeypatch.delenv("NO_COLOR", raising=False)
    monkeypatch.setenv("TERM", "xterm")
    monkeypatch.setattr(sys, "stdout", _Tty())
    assert colorize("x", BOLD) == "\x1b[1mx\x1b[0m"


def test_non_interactive_error_message():
    err = NonInteractiveError()
    assert "noninteractive UI" in str(err)


def test_input_defaults():
    prompt = Input("Continue?")
    assert (prompt.style, prompt.secret) == ("", False)


def test_ui_is_abstract():
    with pytest.raises(TypeError):
        UI()