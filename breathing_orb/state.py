"""
Breathing Orb - Session state
"""

from dataclasses import asdict, dataclass, field

from .phases import BreathingPhase, ScaleTarget


@dataclass
class SessionState:
    """
    Observable state of one breathing session

    Created idle. While a session runs, elapsed_seconds is written only by
    the SessionClock and current_phase / scale_target only by the
    PhaseCycler.
    """
    is_active: bool = False
    elapsed_seconds: int = 0
    current_phase: BreathingPhase = BreathingPhase.INHALE
    scale_target: ScaleTarget = ScaleTarget.MIN

    def reset(self) -> None:
        """Return to idle defaults"""
        self.is_active = False
        self.elapsed_seconds = 0
        self.current_phase = BreathingPhase.INHALE
        self.scale_target = ScaleTarget.MIN

    def snapshot(self) -> "SessionSnapshot":
        """Immutable copy for observers"""
        return SessionSnapshot(**asdict(self))


@dataclass(frozen=True)
class SessionSnapshot:
    """Read-only view of SessionState at one point in time"""
    is_active: bool = False
    elapsed_seconds: int = 0
    current_phase: BreathingPhase = BreathingPhase.INHALE
    scale_target: ScaleTarget = ScaleTarget.MIN

    @property
    def is_idle(self) -> bool:
        return self == SessionSnapshot()


@dataclass(frozen=True)
class PhaseTransition:
    """Notification emitted on every phase entry"""
    phase: BreathingPhase
    scale_target: ScaleTarget
    count: int = field(default=1, compare=False)

    def __str__(self):
        return f"{self.phase.label} (scale {self.scale_target.value})"
