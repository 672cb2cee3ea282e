"""
Breathing Orb - Exceptions
"""


class BreathingError(Exception):
    """Base exception for Breathing Orb"""
    pass


class PatternError(BreathingError):
    """Invalid breathing pattern or unknown preset"""
    pass


class HapticsError(BreathingError):
    """Base exception for tactile feedback failures"""
    pass


class HapticsConnectionError(HapticsError):
    """Failed to connect to haptic device"""
    pass


class DeviceNotFoundError(HapticsError):
    """No haptic wearable found"""
    pass


class CommandError(HapticsError):
    """Failed to send command to haptic device"""
    pass


class HapticsTimeoutError(HapticsError):
    """Haptic device operation timed out"""
    pass
