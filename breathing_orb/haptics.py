"""
Breathing Orb - Tactile feedback

One short pulse is played at every phase transition. Playing a pulse never
raises into the session: hardware that is missing, disconnected or failing
is logged and the pulse is skipped.
"""

import asyncio
from dataclasses import dataclass
from typing import List, Optional, Protocol, Set

from bleak import BleakClient, BleakScanner
from bleak.exc import BleakError

from .exceptions import (
    CommandError,
    DeviceNotFoundError,
    HapticsConnectionError,
    HapticsTimeoutError,
)
from .log_config import get_logger

logger = get_logger(__name__)


# BLE UUIDs
SERVICE_UUID = "000000ff-0000-1000-8000-00805f9b34fb"
CHAR_UUID = "0000ff02-0000-1000-8000-00805f9b34fb"
DEVICE_NAME = "Haptic_Band"

# Command prefix for a single transient pulse
PULSE_COMMAND = 0xB1


@dataclass(frozen=True)
class HapticPulse:
    """
    A single transient tactile event

    Intensity and sharpness are on a 0-1 scale.
    """
    intensity: float = 0.5
    sharpness: float = 0.5

    def encode(self) -> bytes:
        """Wire format: command byte, intensity 0-255, sharpness 0-255"""
        intensity = max(0, min(255, round(self.intensity * 255)))
        sharpness = max(0, min(255, round(self.sharpness * 255)))
        return bytes([PULSE_COMMAND, intensity, sharpness])


TRANSITION_PULSE = HapticPulse()


class TactileFeedback(Protocol):
    def pulse(self, pulse: HapticPulse = TRANSITION_PULSE) -> None: ...


class NullHaptics:
    """Tactile feedback for hosts without haptic hardware"""

    def pulse(self, pulse: HapticPulse = TRANSITION_PULSE) -> None:
        logger.debug("haptic_pulse_skipped", reason="no haptic hardware")


@dataclass
class ScanResult:
    """Represents a discovered haptic wearable"""
    name: str
    address: str
    rssi: int

    def __str__(self):
        return f"{self.name} ({self.address}) RSSI: {self.rssi}"


class BleHaptics:
    """
    Haptic wearable driven over Bluetooth Low Energy

    Usage:
        async with BleHaptics() as haptics:
            session = BreathingSession(haptics=haptics)

    Or manually:
        haptics = BleHaptics()
        await haptics.connect()
        await haptics.play(HapticPulse())
        await haptics.disconnect()
    """

    def __init__(self, address: Optional[str] = None):
        """
        Initialize haptics controller

        Args:
            address: Optional BLE address. If None, will scan for device.
        """
        self._address = address
        self._client: Optional[BleakClient] = None
        self._connected = False
        self._pending: Set[asyncio.Task] = set()

    @property
    def is_connected(self) -> bool:
        """Check if currently connected"""
        return self._connected and self._client is not None

    @property
    def address(self) -> Optional[str]:
        """Get the device address"""
        return self._address

    # -------------------------------------------------------------------------
    # Connection Management
    # -------------------------------------------------------------------------

    @staticmethod
    async def scan(timeout: float = 5.0) -> List[ScanResult]:
        """
        Scan for haptic wearables

        Args:
            timeout: Scan duration in seconds

        Returns:
            List of discovered devices, strongest signal first

        Raises:
            HapticsConnectionError: If Bluetooth is unavailable
        """
        devices = []

        try:
            discovered = await BleakScanner.discover(timeout=timeout, return_adv=True)
        except BleakError as e:
            raise HapticsConnectionError(f"Bluetooth unavailable: {e}")

        for d, adv in discovered.values():
            if d.name and DEVICE_NAME in d.name:
                devices.append(ScanResult(
                    name=d.name,
                    address=d.address,
                    rssi=adv.rssi if adv.rssi is not None else -100
                ))

        return sorted(devices, key=lambda x: x.rssi, reverse=True)

    async def connect(self, timeout: float = 10.0) -> None:
        """
        Connect to the wearable

        Args:
            timeout: Connection timeout in seconds

        Raises:
            DeviceNotFoundError: If no device found during scan
            HapticsConnectionError: If Bluetooth is unavailable or connection fails
            HapticsTimeoutError: If connection times out
        """
        if not self._address:
            devices = await self.scan(timeout=5.0)
            if not devices:
                raise DeviceNotFoundError("No haptic wearable found. Is the device powered on?")
            self._address = devices[0].address

        try:
            self._client = BleakClient(self._address, timeout=timeout)
            await self._client.connect()
            self._connected = True
        except BleakError as e:
            raise HapticsConnectionError(f"Failed to connect: {e}")
        except asyncio.TimeoutError:
            raise HapticsTimeoutError(f"Connection timed out after {timeout}s")

    async def disconnect(self) -> None:
        """Disconnect from the wearable"""
        for task in list(self._pending):
            task.cancel()
        if self._client:
            try:
                await self._client.disconnect()
            except BleakError as e:
                logger.debug("haptics_disconnect_failed", error=str(e))
            finally:
                self._connected = False
                self._client = None

    async def __aenter__(self):
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.disconnect()
        return False

    # -------------------------------------------------------------------------
    # Commands
    # -------------------------------------------------------------------------

    async def _send(self, data: bytes) -> None:
        """
        Send raw bytes to the wearable

        Raises:
            HapticsConnectionError: If not connected
            CommandError: If write fails
        """
        if not self.is_connected:
            raise HapticsConnectionError("Not connected. Call connect() first.")

        try:
            await self._client.write_gatt_char(CHAR_UUID, data, response=False)
        except BleakError as e:
            raise CommandError(f"Command failed: {e}")

    async def play(self, pulse: HapticPulse = TRANSITION_PULSE) -> None:
        """
        Play one pulse and wait for the write to complete

        Raises:
            HapticsConnectionError: If not connected
            CommandError: If write fails
        """
        await self._send(pulse.encode())

    def pulse(self, pulse: HapticPulse = TRANSITION_PULSE) -> None:
        """
        Fire-and-forget pulse for use from timer callbacks

        Must be called from the event loop thread. Failures are logged.
        """
        if not self.is_connected:
            logger.warning("haptic_pulse_skipped", reason="not connected")
            return

        task = asyncio.get_running_loop().create_task(self.play(pulse))
        self._pending.add(task)
        task.add_done_callback(self._on_played)

    def _on_played(self, task: asyncio.Task) -> None:
        self._pending.discard(task)
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            logger.warning("haptic_pulse_failed", error=str(error))
