"""
Breathing Orb - Phases, scale targets and breathing patterns
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict

from .exceptions import PatternError


# Default phase durations (seconds)
INHALE_TIME = 4.0
HOLD_TIME = 4.0
EXHALE_TIME = 4.0

# Orb scale factors
MIN_SCALE = 0.5
MAX_SCALE = 1.5


class BreathingPhase(Enum):
    """
    One of the four phases of the breathing cycle

    Order is fixed and cyclic:
        INHALE -> HOLD_INHALE -> EXHALE -> HOLD_EXHALE -> INHALE ...
    """
    INHALE = "Inhale"
    HOLD_INHALE = "Hold Breath"
    EXHALE = "Exhale"
    HOLD_EXHALE = "Rest"

    @property
    def label(self) -> str:
        """Text shown to the user for this phase"""
        return self.value

    @property
    def duration(self) -> float:
        """Default duration of this phase in seconds"""
        return DEFAULT_PATTERN.duration_for(self)

    def next(self) -> "BreathingPhase":
        """Phase that follows this one in the cycle"""
        phases = list(BreathingPhase)
        return phases[(phases.index(self) + 1) % len(phases)]


class ScaleTarget(Enum):
    """Size the orb animates toward"""
    MIN = "min"
    MAX = "max"

    @property
    def scale(self) -> float:
        return MAX_SCALE if self is ScaleTarget.MAX else MIN_SCALE


@dataclass(frozen=True)
class BreathingPattern:
    """
    Durations in seconds for each of the four phases

    Defaults to box breathing: 4s inhale, 4s hold, 4s exhale, 4s rest.
    """
    inhale: float = INHALE_TIME
    hold_inhale: float = HOLD_TIME
    exhale: float = EXHALE_TIME
    hold_exhale: float = HOLD_TIME

    def __post_init__(self):
        for name in ("inhale", "hold_inhale", "exhale", "hold_exhale"):
            if getattr(self, name) <= 0:
                raise PatternError(f"{name} duration must be positive, got {getattr(self, name)}")

    def duration_for(self, phase: BreathingPhase) -> float:
        """Duration of the given phase in seconds"""
        return {
            BreathingPhase.INHALE: self.inhale,
            BreathingPhase.HOLD_INHALE: self.hold_inhale,
            BreathingPhase.EXHALE: self.exhale,
            BreathingPhase.HOLD_EXHALE: self.hold_exhale,
        }[phase]

    @property
    def cycle_time(self) -> float:
        """Length of one full cycle in seconds"""
        return self.inhale + self.hold_inhale + self.exhale + self.hold_exhale

    @property
    def breaths_per_minute(self) -> float:
        return 60 / self.cycle_time

    def __str__(self):
        return f"{self.inhale:g}-{self.hold_inhale:g}-{self.exhale:g}-{self.hold_exhale:g}"


DEFAULT_PATTERN = BreathingPattern()

PRESETS: Dict[str, BreathingPattern] = {
    # Equal phases, general practice
    "box": DEFAULT_PATTERN,
    # Longer cycles for winding down
    "relax": BreathingPattern(5.0, 5.0, 5.0, 5.0),
    # Short holds for alertness
    "focus": BreathingPattern(3.0, 2.0, 3.0, 2.0),
    # Long slow breathing before sleep
    "sleep": BreathingPattern(6.0, 6.0, 6.0, 6.0),
}


def get_preset(name: str) -> BreathingPattern:
    """
    Look up a named breathing pattern

    Raises:
        PatternError: If the preset does not exist
    """
    try:
        return PRESETS[name.lower()]
    except KeyError:
        options = ", ".join(PRESETS)
        raise PatternError(f"Unknown preset: {name}. Options: {options}") from None
