"""
Breathing Orb - Phase cycler
"""

from typing import Callable, List, Optional

from .log_config import get_session_logger
from .phases import DEFAULT_PATTERN, BreathingPattern, BreathingPhase, ScaleTarget
from .scheduler import Scheduler, TimerHandle
from .state import PhaseTransition, SessionState

logger = get_session_logger(__name__)

TransitionListener = Callable[[PhaseTransition], None]


class PhaseCycler:
    """
    Advances through the four breathing phases on a per-phase timer

    Every phase entry, including the first one on start(), produces exactly
    one PhaseTransition for the registered listeners. At most one phase
    timer is pending at any time.

    Usage:
        cycler = PhaseCycler(state, scheduler)
        cycler.add_listener(lambda t: print(t.phase.label))
        cycler.start()
        ...
        cycler.stop()
    """

    def __init__(
        self,
        state: SessionState,
        scheduler: Scheduler,
        pattern: BreathingPattern = DEFAULT_PATTERN
    ):
        self._state = state
        self._scheduler = scheduler
        self._pattern = pattern
        self._handle: Optional[TimerHandle] = None
        self._listeners: List[TransitionListener] = []
        self._count = 0
        self._deadline = 0.0

    @property
    def pattern(self) -> BreathingPattern:
        return self._pattern

    @property
    def is_running(self) -> bool:
        return self._handle is not None

    @property
    def transition_count(self) -> int:
        """Transitions emitted since the last start()"""
        return self._count

    def add_listener(self, listener: TransitionListener) -> Callable[[], None]:
        """
        Register a transition listener

        Returns:
            Callable that removes the listener again
        """
        self._listeners.append(listener)

        def remove():
            if listener in self._listeners:
                self._listeners.remove(listener)
        return remove

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def start(self) -> None:
        """Enter INHALE immediately and start the phase timer"""
        self._cancel()
        self._count = 0
        self._deadline = self._scheduler.time()
        self._enter(BreathingPhase.INHALE)

    def stop(self) -> None:
        """Cancel the pending phase timer and return to the idle pose"""
        self._cancel()
        self._state.current_phase = BreathingPhase.INHALE
        self._state.scale_target = ScaleTarget.MIN

    def _cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    # -------------------------------------------------------------------------
    # Transitions
    # -------------------------------------------------------------------------

    def _advance(self) -> None:
        if self._handle is None:
            return  # stopped
        self._enter(self._state.current_phase.next())

    def _enter(self, phase: BreathingPhase) -> None:
        self._state.current_phase = phase
        # Hold phases keep the orb at its current size
        if phase is BreathingPhase.INHALE:
            self._state.scale_target = ScaleTarget.MAX
        elif phase is BreathingPhase.EXHALE:
            self._state.scale_target = ScaleTarget.MIN

        # Deadlines accumulate from the start time
        self._deadline += self._pattern.duration_for(phase)
        delay = max(0.0, self._deadline - self._scheduler.time())
        self._handle = self._scheduler.call_later(delay, self._advance)

        self._count += 1
        transition = PhaseTransition(phase, self._state.scale_target, self._count)
        logger.debug("phase_transition", phase=phase.name, count=self._count)
        for listener in list(self._listeners):
            listener(transition)
