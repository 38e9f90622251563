import io
import time

import pytest

from stepterm.document import Component, Document, Text


@pytest.fixture(autouse=True)
def _no_color(monkeypatch):
    monkeypatch.setenv("NO_COLOR", "1")


class _Mutable(Component):
    def __init__(self, value):
        self.value = value

    def lines(self):
        return [self.value]


def test_text_splits_lines():
    assert Text("a\nb").lines() == ["a", "b"]


def test_text_unknown_color_raises():
    with pytest.raises(ValueError):
        Text("x", color="purpleish")


def test_text_finalized_flag():
    assert Text("x", final=True).finalized is True
    assert Text("x").finalized is False


def test_render_frame_joins_components():
    doc = Document(io.StringIO(), live=False)
    doc.append(Text("one"))
    doc.append(Text("two\nthree"))
    assert doc.render_frame() == "one\ntwo\nthree"


def test_render_frame_follows_changes():
    doc = Document(io.StringIO(), live=False)
    comp = _Mutable("first")
    doc.append(comp)
    comp.value = "second"
    assert doc.render_frame() == "second"


def test_close_writes_final_frame():
    out = io.StringIO()
    doc = Document(out, live=False)
    doc.append(Text("one"))
    doc.append(_Mutable("two"))
    doc.close()
    assert out.getvalue() == "one\ntwo\n"
    assert doc.render_frame() == "one\ntwo"


def test_close_is_idempotent():
    out = io.StringIO()
    doc = Document(out, live=False)
    doc.append(Text("one"))
    doc.close()
    doc.close()
    assert out.getvalue() == "one\n"


def test_finalized_component_written_once_when_live():
    out = io.StringIO()
    with Document(out, interval=0.01) as doc:
        doc.append(Text("static", final=True))
        deadline = time.monotonic() + 2
        while "static" not in out.getvalue() and time.monotonic() < deadline:
            time.sleep(0.01)
    assert out.getvalue().count("static") == 1