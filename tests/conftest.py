"""Pytest configuration and shared fixtures."""

import heapq
import itertools
from typing import Callable, List

import pytest

from breathing_orb.phases import BreathingPattern
from breathing_orb.state import SessionState


class FakeHandle:
    def __init__(self, when: float, callback: Callable[[], None]):
        self.when = when
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class FakeScheduler:
    """Virtual-time scheduler; callbacks run in deadline order on advance()."""

    def __init__(self):
        self.now = 0.0
        self._queue: List = []
        self._seq = itertools.count()

    def time(self) -> float:
        return self.now

    def call_later(self, delay: float, callback: Callable[[], None]) -> FakeHandle:
        handle = FakeHandle(self.now + delay, callback)
        heapq.heappush(self._queue, (handle.when, next(self._seq), handle))
        return handle

    @property
    def pending(self) -> List[FakeHandle]:
        return [h for _, _, h in self._queue if not h.cancelled]

    def advance(self, seconds: float) -> None:
        target = self.now + seconds
        while self._queue and self._queue[0][0] <= target:
            when, _, handle = heapq.heappop(self._queue)
            if handle.cancelled:
                continue
            self.now = when
            handle.callback()
        self.now = target


class FakeHaptics:
    def __init__(self):
        self.pulses = []

    def pulse(self, pulse=None) -> None:
        self.pulses.append(pulse)


@pytest.fixture
def scheduler() -> FakeScheduler:
    return FakeScheduler()


@pytest.fixture
def state() -> SessionState:
    return SessionState()


@pytest.fixture
def haptics() -> FakeHaptics:
    return FakeHaptics()


@pytest.fixture
def box_pattern() -> BreathingPattern:
    return BreathingPattern(4.0, 4.0, 4.0, 4.0)
