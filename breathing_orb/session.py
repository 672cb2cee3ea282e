"""
Breathing Orb - Guided breathing session
"""

from typing import Callable, List, Optional

from .clock import SessionClock
from .cycler import PhaseCycler, TransitionListener
from .haptics import TRANSITION_PULSE, NullHaptics, TactileFeedback
from .log_config import get_session_logger
from .phases import DEFAULT_PATTERN, BreathingPattern
from .scheduler import AsyncioScheduler, Scheduler
from .state import PhaseTransition, SessionSnapshot, SessionState

logger = get_session_logger(__name__)

StateObserver = Callable[[SessionSnapshot], None]


class BreathingSession:
    """
    Guided breathing session

    Owns the session state, a SessionClock for elapsed time and a
    PhaseCycler for the breathing phases. Observers receive a state
    snapshot after every change; each phase transition also plays one
    tactile pulse.

    Usage:
        session = BreathingSession()
        session.subscribe(lambda s: print(s.current_phase.label))
        session.start()   # inside a running event loop
        ...
        session.stop()
    """

    def __init__(
        self,
        pattern: BreathingPattern = DEFAULT_PATTERN,
        haptics: Optional[TactileFeedback] = None,
        scheduler: Optional[Scheduler] = None
    ):
        """
        Args:
            pattern: Phase durations
            haptics: Tactile feedback device. If None, pulses are skipped.
            scheduler: Timer queue. If None, the running asyncio loop is used.
        """
        self._state = SessionState()
        self._haptics = haptics or NullHaptics()
        scheduler = scheduler or AsyncioScheduler()
        self._clock = SessionClock(self._state, scheduler, on_tick=self._on_tick)
        self._cycler = PhaseCycler(self._state, scheduler, pattern)
        self._cycler.add_listener(self._on_transition)
        self._observers: List[StateObserver] = []

    @property
    def state(self) -> SessionSnapshot:
        """Snapshot of the current state"""
        return self._state.snapshot()

    @property
    def is_active(self) -> bool:
        return self._state.is_active

    @property
    def pattern(self) -> BreathingPattern:
        return self._cycler.pattern

    @property
    def control_label(self) -> str:
        """Label for the single start/stop control"""
        return "Stop" if self._state.is_active else "Start"

    # -------------------------------------------------------------------------
    # Observation
    # -------------------------------------------------------------------------

    def subscribe(self, observer: StateObserver) -> Callable[[], None]:
        """
        Receive a state snapshot after every change

        Returns:
            Callable that unsubscribes the observer
        """
        self._observers.append(observer)

        def unsubscribe():
            if observer in self._observers:
                self._observers.remove(observer)
        return unsubscribe

    def on_transition(self, listener: TransitionListener) -> Callable[[], None]:
        """Receive every PhaseTransition; returns a removal callable"""
        return self._cycler.add_listener(listener)

    def _publish(self) -> None:
        snapshot = self._state.snapshot()
        for observer in list(self._observers):
            observer(snapshot)

    # -------------------------------------------------------------------------
    # Control
    # -------------------------------------------------------------------------

    def start(self) -> None:
        """Start a session from idle, restarting one already running"""
        if self._state.is_active:
            logger.info("session_restarted")
            self._halt()
        self._state.is_active = True
        logger.info("session_started", pattern=str(self.pattern))
        self._clock.start()
        self._cycler.start()

    def stop(self) -> None:
        """Stop the session and return to idle; no-op when already idle"""
        if not self._state.is_active:
            return
        elapsed = self._state.elapsed_seconds
        self._halt()
        logger.info(
            "session_stopped",
            elapsed_seconds=elapsed,
            transitions=self._cycler.transition_count,
        )
        self._publish()

    def toggle(self) -> None:
        """Start when idle, stop when active"""
        if self._state.is_active:
            self.stop()
        else:
            self.start()

    def _halt(self) -> None:
        self._clock.stop()
        self._cycler.stop()
        self._state.reset()

    # -------------------------------------------------------------------------
    # Timer callbacks
    # -------------------------------------------------------------------------

    def _on_tick(self, elapsed: int) -> None:
        self._publish()

    def _on_transition(self, transition: PhaseTransition) -> None:
        try:
            self._haptics.pulse(TRANSITION_PULSE)
        except Exception as e:
            # Pulse failures never stop the cycle
            logger.warning("haptic_pulse_failed", phase=transition.phase.name, error=str(e))
        self._publish()
