"""
Breathing Orb - Session clock
"""

from typing import Callable, Optional

from .scheduler import Scheduler, TimerHandle
from .state import SessionState

TICK_INTERVAL = 1.0


class SessionClock:
    """
    Counts elapsed whole seconds while a session is active

    Each tick is scheduled against the start time rather than the previous
    tick, so late callbacks do not push later ticks back.
    """

    def __init__(
        self,
        state: SessionState,
        scheduler: Scheduler,
        on_tick: Optional[Callable[[int], None]] = None
    ):
        self._state = state
        self._scheduler = scheduler
        self._on_tick = on_tick
        self._handle: Optional[TimerHandle] = None
        self._started_at = 0.0

    @property
    def is_running(self) -> bool:
        return self._handle is not None

    def start(self) -> None:
        """Reset elapsed time to zero and begin ticking every second"""
        self._cancel()
        self._state.elapsed_seconds = 0
        self._started_at = self._scheduler.time()
        self._schedule_next()

    def stop(self) -> None:
        """Cancel ticking and reset elapsed time to zero"""
        self._cancel()
        self._state.elapsed_seconds = 0

    def _cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _schedule_next(self) -> None:
        deadline = self._started_at + (self._state.elapsed_seconds + 1) * TICK_INTERVAL
        delay = max(0.0, deadline - self._scheduler.time())
        self._handle = self._scheduler.call_later(delay, self._tick)

    def _tick(self) -> None:
        if self._handle is None:
            return  # stopped
        self._state.elapsed_seconds += 1
        self._schedule_next()
        if self._on_tick:
            self._on_tick(self._state.elapsed_seconds)
