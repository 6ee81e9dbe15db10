"""
Change Chat Status
==================

Sets the chat status message of the logged in summoner.

Usage: python examples/change_status.py "Playing with my food"
"""

import asyncio
import sys

from shaco import LcuRestClient, LcuRestError


async def main(message: str):
    async with LcuRestClient() as client:
        me = await client.put("/lol-chat/v1/me", {"statusMessage": message})
        print(f"Status set to: {me.get('statusMessage') if me else message}")


if __name__ == "__main__":
    message = sys.argv[1] if len(sys.argv) > 1 else "shaco says hi"
    try:
        asyncio.run(main(message))
    except LcuRestError as e:
        print(f"\n❌ Error: {e}")
