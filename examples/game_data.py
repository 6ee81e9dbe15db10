"""
Live Game Snapshot
==================

Prints game stats and the scoreboard of the running game.
"""

import asyncio

from shaco import IngameClient, IngameClientError


async def main():
    async with IngameClient() as client:
        if not await client.active_game():
            print("No game running")
            return

        stats = await client.game_stats()
        print(f"{stats.game_mode.value} on {stats.map_name.value}, {stats.game_time:.0f}s in")

        for player in await client.player_list():
            scores = player.scores
            print(f"  {player.team.value:<6} {player.riot_id!s:<24} {player.champion_name:<14} "
                  f"{scores.kills}/{scores.deaths}/{scores.assists}  {scores.creep_score} cs")

        if await client.is_spectator_mode():
            print("(spectating)")
        else:
            print(f"You are {await client.active_player_name()}")


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except IngameClientError as e:
        print(f"\n❌ Error: {e}")
