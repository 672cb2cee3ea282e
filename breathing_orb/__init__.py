"""
Breathing Orb
Guided box breathing with phase timing and tactile feedback
"""

from .phases import BreathingPhase, ScaleTarget, BreathingPattern, PRESETS, get_preset
from .state import SessionState, SessionSnapshot, PhaseTransition
from .clock import SessionClock
from .cycler import PhaseCycler
from .session import BreathingSession
from .haptics import HapticPulse, NullHaptics, BleHaptics, ScanResult
from .display import ConsoleDisplay, format_elapsed
from .exceptions import (
    BreathingError,
    PatternError,
    HapticsError,
    HapticsConnectionError,
    DeviceNotFoundError,
    CommandError,
    HapticsTimeoutError
)

__version__ = "1.0.0"
__all__ = [
    "BreathingPhase",
    "ScaleTarget",
    "BreathingPattern",
    "PRESETS",
    "get_preset",
    "SessionState",
    "SessionSnapshot",
    "PhaseTransition",
    "SessionClock",
    "PhaseCycler",
    "BreathingSession",
    "HapticPulse",
    "NullHaptics",
    "BleHaptics",
    "ScanResult",
    "ConsoleDisplay",
    "format_elapsed",
    "BreathingError",
    "PatternError",
    "HapticsError",
    "HapticsConnectionError",
    "DeviceNotFoundError",
    "CommandError",
    "HapticsTimeoutError"
]
