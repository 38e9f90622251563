import io
import threading

import pytest

from stepterm.status import STATUS_ERROR, STATUS_ICONS, STATUS_OK
from stepterm.step import TERM_ROWS, FancyStep, FancyStepGroup


@pytest.fixture
def out():
    return io.StringIO()


@pytest.fixture
def group(out):
    g = FancyStepGroup(out, interval=3600)
    yield g
    g.wait()


def test_wait_without_steps_returns(out):
    g = FancyStepGroup(out, interval=3600)
    g.wait()
    assert g.cancelled is True


def test_add_shows_message(group, out):
    step = group.add("building %s", "app")
    assert isinstance(step, FancyStep)
    assert "building app" in out.getvalue()
    assert group.display.spinning == 1
    step.done()
    assert group.display.spinning == 0


def test_done_sets_ok(group, out):
    step = group.add("deploy")
    step.done()
    assert step.entry.status == STATUS_OK
    assert STATUS_ICONS[STATUS_OK] + " deploy" in out.getvalue()


def test_abort_sets_error(group, out):
    step = group.add("deploy")
    step.abort()
    assert step.entry.status == STATUS_ERROR
    assert STATUS_ICONS[STATUS_ERROR] + " deploy" in out.getvalue()


def test_abort_after_done_is_ignored(group, out):
    step = group.add("deploy")
    step.done()
    step.abort()
    assert step.entry.status == STATUS_OK
    assert group.display.spinning == 0


def test_custom_status_kept_on_done(group, out):
    step = group.add("deploy")
    step.status("custom")
    step.done()
    assert step.entry.status == "custom"
    assert "custom deploy" in out.getvalue()


def test_update_changes_text(group):
    step = group.add("first")
    step.update("second %d", 2)
    assert step.entry.text == "second 2"
    step.done()


def test_wait_for_concurrent_steps(out):
    g = FancyStepGroup(out, interval=3600)
    steps = [g.add("step %d", i) for i in range(5)]
    threads = [threading.Thread(target=s.done) for s in steps]
    for t in threads:
        t.start()
    g.wait()
    for t in threads:
        t.join()
    assert all(s.entry.status == STATUS_OK for s in steps)
    assert g.display.spinning == 0


def test_wait_returns_when_parent_stops(out):
    stop = threading.Event()
    g = FancyStepGroup(out, stop=stop, interval=3600)
    g.add("never finishes")
    stop.set()
    g.wait()
    assert g.cancelled is True


def test_term_output_is_reused_and_rendered(group, out):
    step = group.add("logs")
    term = step.term_output()
    assert step.term_output() is term
    term.write("line one\n")
    assert "line one" in step.entry.body[0]
    assert "line one" in out.getvalue()
    step.done()


def test_term_output_body_limited_to_term_rows(group):
    step = group.add("logs")
    term = step.term_output()
    term.write("".join(f"line {i}\n" for i in range(14)) + "line 14")
    assert 1 <= len(step.entry.body) <= TERM_ROWS
    assert any("line 14" in row for row in step.entry.body)
    step.done()