"""
LCU WebSocket Events
====================

Prints every gameflow phase change pushed by the League client.
Start the League client first.
"""

import asyncio
import logging

from shaco import LcuWebsocketClient, LcuWebsocketError, SubscriptionType


async def main():
    client = await LcuWebsocketClient.connect()
    async with client:
        await client.subscribe(SubscriptionType.json_api_event("/lol-gameflow/v1/gameflow-phase"))
        print("Listening for gameflow changes (Ctrl+C to stop)")
        async for event in client:
            print(f"{event.event_type.value:<7} {event.uri} -> {event.data}")
    print("Connection closed")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    try:
        asyncio.run(main())
    except LcuWebsocketError as e:
        print(f"\n❌ Error: {e}")
    except KeyboardInterrupt:
        pass
