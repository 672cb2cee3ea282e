"""
Basic Breathing Orb Example
Runs one full box-breathing cycle in the terminal
"""

import asyncio
from breathing_orb import BreathingSession, ConsoleDisplay


async def main():
    session = BreathingSession()
    display = ConsoleDisplay()
    session.subscribe(display.update)

    print(f"One cycle of box breathing ({session.pattern.cycle_time:g}s)")
    session.start()
    await asyncio.sleep(session.pattern.cycle_time)
    session.stop()
    display.close()

    print("Done!")


if __name__ == "__main__":
    asyncio.run(main())
