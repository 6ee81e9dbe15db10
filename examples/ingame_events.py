"""
Live Game Events
================

Waits for a game to start and prints its events as they happen.
"""

import asyncio
import logging

from shaco import IngameEventStream


async def main():
    async with IngameEventStream() as stream:
        print("Waiting for a game...")
        async for event in stream:
            print(f"[{event.event_time:7.1f}s] #{event.event_id} {event}")
    print("Game over")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        pass
