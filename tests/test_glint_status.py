import pytest

from stepterm.glint_status import GlintStatus
from stepterm.status import SPINNER_CHARSET, STATUS_ICONS


@pytest.fixture(autouse=True)
def _no_color(monkeypatch):
    monkeypatch.setenv("NO_COLOR", "1")


def test_update_shows_spinner_line():
    st = GlintStatus()
    st.update("working")
    (line,) = st.lines()
    assert line.endswith(" working")
    assert line[0] in SPINNER_CHARSET


def test_step_replaces_spinner_with_icon_line():
    st = GlintStatus()
    st.update("working")
    st.step("ok", "finished")
    assert st.lines() == [f"{STATUS_ICONS['ok']} finished"]


def test_custom_status_has_no_icon():
    st = GlintStatus()
    st.step("custom", "msg")
    assert st.lines() == ["msg"]


def test_steps_accumulate():
    st = GlintStatus()
    st.step("ok", "a")
    st.step("error", "b")
    assert st.lines() == [f"{STATUS_ICONS['ok']} a", f"{STATUS_ICONS['error']} b"]


def test_close_hides_spinner_and_finalizes():
    st = GlintStatus()
    st.update("working")
    st.close()
    assert st.lines() == []
    assert st.finalized is True


def test_reset_clears_everything():
    st = GlintStatus()
    st.step("ok", "a")
    st.update("b")
    st.reset()
    assert st.lines() == []