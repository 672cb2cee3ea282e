"""
Breathing Orb - Console display
"""

import sys
from typing import Optional, TextIO

from .phases import MAX_SCALE
from .state import SessionSnapshot

ORB_WIDTH = 20


def format_elapsed(seconds: int) -> str:
    """Format elapsed seconds as MM:SS"""
    minutes, secs = divmod(int(seconds), 60)
    return f"{minutes:02d}:{secs:02d}"


def render(state: SessionSnapshot) -> str:
    """Single-line rendering of the session state"""
    if not state.is_active:
        return f"Session Time: {format_elapsed(0)}  [Start]"

    # Orb bar proportional to the target scale
    width = round(ORB_WIDTH * state.scale_target.scale / MAX_SCALE)
    orb = ("o" * width).ljust(ORB_WIDTH)
    return (
        f"Session Time: {format_elapsed(state.elapsed_seconds)}  "
        f"{state.current_phase.label:<11}  |{orb}| x{state.scale_target.scale:g}  [Stop]"
    )


class ConsoleDisplay:
    """
    Redraws one status line whenever the session state changes

    Usage:
        display = ConsoleDisplay()
        session.subscribe(display.update)
    """

    def __init__(self, stream: Optional[TextIO] = None):
        self._stream = stream or sys.stdout
        self._last = ""

    def update(self, state: SessionSnapshot) -> None:
        line = render(state)
        if line == self._last:
            return
        # Pad so a shorter line fully covers the previous one
        self._stream.write("\r" + line.ljust(len(self._last)))
        self._stream.flush()
        self._last = line

    def close(self) -> None:
        if self._last:
            self._stream.write("\n")
            self._stream.flush()
            self._last = ""
