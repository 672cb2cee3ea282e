"""
Haptic Session Example
Pulses a BLE haptic wearable on every phase transition

Requires:
    pip install breathing-orb bleak
"""

import asyncio
from breathing_orb import BleHaptics, BreathingSession, ConsoleDisplay, get_preset


async def main():
    print("Scanning for haptic wearables...")
    devices = await BleHaptics.scan(timeout=5.0)

    if not devices:
        print("No devices found!")
        return

    print(f"Found: {devices[0]}")

    async with BleHaptics(devices[0].address) as haptics:
        print("Connected!")

        preset = input("Preset (box/relax/focus/sleep, default relax): ").strip() or "relax"
        pattern = get_preset(preset)

        session = BreathingSession(pattern=pattern, haptics=haptics)
        display = ConsoleDisplay()
        session.subscribe(display.update)

        # Five full cycles
        session.start()
        try:
            await asyncio.sleep(pattern.cycle_time * 5)
        finally:
            session.stop()
            display.close()

        print("Session complete!")


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        print("\nStopped!")
