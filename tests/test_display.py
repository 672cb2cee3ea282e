"""Tests for the console display."""

import io

import pytest

from breathing_orb.display import ConsoleDisplay, format_elapsed, render
from breathing_orb.phases import BreathingPhase, ScaleTarget
from breathing_orb.state import SessionSnapshot


@pytest.mark.parametrize("seconds, expected", [
    (0, "00:00"),
    (9, "00:09"),
    (75, "01:15"),
    (3599, "59:59"),
    (6000, "100:00"),
])
def test_format_elapsed(seconds, expected):
    assert format_elapsed(seconds) == expected


def test_render_idle():
    assert render(SessionSnapshot()) == "Session Time: 00:00  [Start]"


def test_render_active():
    state = SessionSnapshot(True, 65, BreathingPhase.HOLD_INHALE, ScaleTarget.MAX)
    line = render(state)
    assert line.startswith("Session Time: 01:05  Hold Breath")
    assert "|" + "o" * 20 + "|" in line
    assert line.endswith("x1.5  [Stop]")


def test_render_shrunk_orb():
    state = SessionSnapshot(True, 8, BreathingPhase.EXHALE, ScaleTarget.MIN)
    assert "|" + "o" * 7 + " " * 13 + "|" in render(state)


def test_console_display_skips_unchanged():
    stream = io.StringIO()
    display = ConsoleDisplay(stream)
    state = SessionSnapshot(True, 1, BreathingPhase.INHALE, ScaleTarget.MAX)

    display.update(state)
    display.update(state)
    display.close()

    output = stream.getvalue()
    assert output.count("\r") == 1
    assert output.endswith("\n")
