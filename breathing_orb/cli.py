#!/usr/bin/env python3
"""
Breathing Orb CLI
Guided breathing sessions in the terminal

Usage:
    breathing-orb session              # Box breathing until Ctrl-C
    breathing-orb session relax 10     # 10-min relax session
    breathing-orb session --haptics    # Pulse a BLE haptic wearable
    breathing-orb presets              # List breathing patterns
    breathing-orb scan                 # Find haptic wearables
    breathing-orb pulse                # Test one haptic pulse
"""

import asyncio
import sys
from typing import Optional

from breathing_orb import BleHaptics, BreathingSession, ConsoleDisplay, NullHaptics
from breathing_orb.exceptions import HapticsError
from breathing_orb.log_config import configure_logging, get_logger
from breathing_orb.phases import PRESETS, get_preset

logger = get_logger(__name__)


async def cmd_presets():
    """List presets"""
    print("Breathing patterns (inhale-hold-exhale-rest seconds):")
    for name, pattern in PRESETS.items():
        print(f"  {name:<8} {str(pattern):<10} {pattern.breaths_per_minute:.1f} breaths/min")


async def cmd_scan():
    """Scan for haptic wearables"""
    print("Scanning for haptic wearables...")
    devices = await BleHaptics.scan(timeout=5.0)

    if not devices:
        print("No devices found.")
        return

    print(f"Found {len(devices)} device(s):")
    for i, d in enumerate(devices):
        print(f"  {i+1}. {d.name} [{d.address}] RSSI: {d.rssi}")


async def cmd_pulse():
    """Play one pulse"""
    async with BleHaptics() as haptics:
        await haptics.play()
        print("Pulse sent")


async def connect_haptics() -> Optional[BleHaptics]:
    """Connect to a wearable, or None when unavailable"""
    haptics = BleHaptics()
    try:
        await haptics.connect()
    except HapticsError as e:
        logger.warning("haptics_unavailable", error=str(e))
        print("Haptics unavailable, continuing without tactile feedback")
        return None
    return haptics


async def cmd_session(preset: str, minutes: Optional[float], use_haptics: bool):
    """Run a session until the time limit or Ctrl-C"""
    pattern = get_preset(preset)
    haptics = await connect_haptics() if use_haptics else None

    session = BreathingSession(pattern=pattern, haptics=haptics or NullHaptics())
    display = ConsoleDisplay()
    session.subscribe(display.update)

    limit = f"{minutes:g} min" if minutes is not None else "Ctrl-C to stop"
    print(f"{preset} breathing ({pattern}) - {limit}")
    session.toggle()
    try:
        if minutes is not None:
            await asyncio.sleep(minutes * 60)
        else:
            await asyncio.Event().wait()
    finally:
        session.toggle()
        display.close()
        if haptics:
            await haptics.disconnect()
    print("Session complete!")


def print_help():
    print(__doc__)
    print("Commands:")
    print("  session [preset] [mins]  Start session (box/relax/focus/sleep)")
    print("  presets                  List breathing patterns")
    print("  scan                     Scan for haptic wearables")
    print("  pulse                    Send one test pulse")
    print()
    print("Options:")
    print("  --haptics                Pulse a haptic wearable on each phase")
    print("  --verbose                Debug logging to stderr")


async def main(argv=None):
    argv = list(sys.argv[1:] if argv is None else argv)
    flags = {a for a in argv if a.startswith("--")}
    args = [a for a in argv if not a.startswith("--")]

    configure_logging(level="DEBUG" if "--verbose" in flags else "WARNING")

    if not args:
        print_help()
        return

    cmd = args[0].lower()

    try:
        if cmd == "session":
            preset = args[1].lower() if len(args) > 1 else "box"
            minutes = float(args[2]) if len(args) > 2 else None
            if minutes is not None and minutes <= 0:
                raise ValueError("minutes must be positive")
            await cmd_session(preset, minutes, "--haptics" in flags)

        elif cmd == "presets":
            await cmd_presets()

        elif cmd == "scan":
            await cmd_scan()

        elif cmd == "pulse":
            await cmd_pulse()

        elif cmd in ("help", "-h"):
            print_help()

        else:
            print(f"Unknown command: {cmd}")
            print_help()

    except Exception as e:
        print(f"Error: {e}")
        sys.exit(1)


def cli_main():
    """Synchronous entry point for CLI"""
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        print("\nStopped!")


if __name__ == "__main__":
    cli_main()
