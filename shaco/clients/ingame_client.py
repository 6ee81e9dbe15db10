"""
Live Client Data API client
Provides access to the in-game telemetry API the game process exposes while a match runs.

Base URL: https://127.0.0.1:2999/liveclientdata

Endpoints Implemented:
=====================

SNAPSHOTS:
- /allgamedata             - Everything below in one response
- /gamestats               - Game mode, time, map
- /eventdata               - Game events, optionally since an event id

ACTIVE PLAYER (not available to spectators):
- /activeplayer            - Stats, abilities, runes, gold
- /activeplayername        - Riot id of the active player
- /activeplayerabilities   - Abilities
- /activeplayerrunes       - Full rune page

PLAYERS:
- /playerlist              - All players, optionally one team
- /playerscores            - KDA, CS and ward score of one player
- /playersummonerspells    - Summoner spells of one player
- /playermainrunes         - Keystone and trees of one player
- /playeritems             - Items of one player

The API is only up while a game (or its loading screen) is running. Status
codes are meaningful: 400 means "not available in spectator mode", 404 means
"not available during the loading screen".
"""

import asyncio
import json
import logging
from typing import Any, Dict, List, Optional

import aiohttp

from shaco.config import ShacoConfig, resolve_config
from shaco.errors import IngameClientError, IngameErrorKind, DecodeError
from shaco.models.ingame import (
    ActivePlayer,
    ActivePlayerAbilities,
    ActivePlayerRunes,
    AllGameData,
    GameEvent,
    GameStats,
    Player,
    PlayerItem,
    PlayerMainRunes,
    PlayerScores,
    PlayerSummonerSpells,
    Team,
    decode_event_data,
)
from shaco.utils.request import build_session, build_ssl_context

logger = logging.getLogger(__name__)


class IngameClient:
    """
    Async client for the live client data API.

    Creating the client performs no I/O; the HTTP session and TLS context are
    built on the first request. A missing game is not an error until a request
    is made.
    """

    API_PATH = "/liveclientdata"

    def __init__(self, config: Optional[ShacoConfig] = None):
        self.config = resolve_config(config)
        self.base_url = f"{self.config.ingame_base_url}{self.API_PATH}"
        self._session: Optional[aiohttp.ClientSession] = None

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create aiohttp session."""
        if self._session is None or self._session.closed:
            try:
                ssl_context = build_ssl_context(self.config.ca_file, self.config.check_hostname)
            except (OSError, ValueError) as e:
                raise IngameClientError(IngameErrorKind.CONNECTION, f"TLS setup failed: {e}") from e
            self._session = build_session(ssl_context, self.config.request_timeout)
            logger.debug(f"Created live client session for {self.base_url}")
        return self._session

    async def close(self):
        """Close the HTTP session."""
        if self._session and not self._session.closed:
            await self._session.close()
        self._session = None

    async def __aenter__(self) -> "IngameClient":
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()

    async def _request(
        self,
        endpoint: str,
        params: Optional[Dict[str, Any]] = None,
        timeout: Optional[float] = None,
    ) -> Any:
        """
        GET an endpoint and return its decoded JSON body.

        Args:
            endpoint: Path below /liveclientdata, e.g. "gamestats"
            params: Query parameters (None values are dropped)
            timeout: Total timeout in seconds (defaults to config.request_timeout)

        Raises:
            IngameClientError: on any HTTP, transport or JSON error
        """
        session = await self._get_session()
        url = f"{self.base_url}/{endpoint}"
        query = {k: v for k, v in (params or {}).items() if v is not None}
        if timeout is None:
            timeout = self.config.request_timeout

        try:
            request_timeout = aiohttp.ClientTimeout(total=timeout)
            async with session.get(url, params=query or None, timeout=request_timeout) as response:
                if response.status >= 400:
                    text = await response.text(errors="replace")
                    raise IngameClientError.from_status(response.status, text)
                return await response.json(content_type=None)
        except IngameClientError:
            raise
        except (aiohttp.ContentTypeError, json.JSONDecodeError, UnicodeDecodeError) as e:
            raise IngameClientError(IngameErrorKind.DESERIALIZATION, str(e)) from e
        except asyncio.TimeoutError as e:
            raise IngameClientError(IngameErrorKind.CONNECTION, f"Timeout fetching {endpoint}") from e
        except aiohttp.ClientError as e:
            raise IngameClientError(IngameErrorKind.CONNECTION, str(e)) from e

    async def _fetch(self, endpoint: str, decoder, params: Optional[Dict[str, Any]] = None) -> Any:
        payload = await self._request(endpoint, params)
        try:
            return decoder(payload)
        except DecodeError as e:
            raise IngameClientError(IngameErrorKind.DESERIALIZATION, str(e)) from e

    # ========================================================================
    # GAME STATE CHECKS
    # ========================================================================

    async def active_game(self) -> bool:
        """True once a game has started (the loading screen does not count)."""
        try:
            await self._request("gamestats", timeout=self.config.connect_timeout)
        except IngameClientError:
            return False
        return True

    async def active_game_loadingscreen(self) -> bool:
        """True while the API answers at all, including during the loading screen."""
        try:
            await self._request("gamestats", timeout=self.config.connect_timeout)
        except IngameClientError as e:
            # Any HTTP status means the game process is up
            return e.kind is not IngameErrorKind.CONNECTION
        return True

    async def is_spectator_mode(self) -> bool:
        """
        Whether the local client is spectating.

        Raises:
            IngameClientError: the API could not answer for another reason
        """
        try:
            await self._request("activeplayername", timeout=self.config.connect_timeout)
        except IngameClientError as e:
            if e.kind is IngameErrorKind.SPECTATOR_MODE:
                return True
            raise
        return False

    # ========================================================================
    # SNAPSHOTS
    # ========================================================================

    async def all_game_data(self, event_id: Optional[int] = None) -> AllGameData:
        """Get all current game data, with events from ``event_id`` on."""
        return await self._fetch("allgamedata", AllGameData.from_dict, {"eventID": event_id})

    async def event_data(self, event_id: Optional[int] = None) -> List[GameEvent]:
        """
        Get the events of the running game.

        Args:
            event_id: Only return events with an id >= event_id (None/0 = all buffered events)
        """
        return await self._fetch("eventdata", decode_event_data, {"eventID": event_id})

    async def game_stats(self) -> GameStats:
        return await self._fetch("gamestats", GameStats.from_dict)

    # ========================================================================
    # ACTIVE PLAYER
    # ========================================================================

    async def active_player(self) -> ActivePlayer:
        return await self._fetch("activeplayer", ActivePlayer.from_dict)

    async def active_player_name(self) -> str:
        return await self._fetch("activeplayername", _expect_str)

    async def active_player_abilities(self) -> ActivePlayerAbilities:
        return await self._fetch("activeplayerabilities", ActivePlayerAbilities.from_dict)

    async def active_player_runes(self) -> ActivePlayerRunes:
        return await self._fetch("activeplayerrunes", ActivePlayerRunes.from_dict)

    # ========================================================================
    # PLAYERS
    # ========================================================================

    async def player_list(self, team: Optional[Team] = None) -> List[Player]:
        """Get the players in the game, optionally only one team."""
        team_id = team.value if isinstance(team, Team) else team
        return await self._fetch("playerlist", _list_of(Player.from_dict), {"teamID": team_id})

    async def player_scores(self, riot_id: str) -> PlayerScores:
        return await self._fetch("playerscores", PlayerScores.from_dict, {"riotId": riot_id})

    async def player_summoner_spells(self, riot_id: str) -> PlayerSummonerSpells:
        return await self._fetch(
            "playersummonerspells", PlayerSummonerSpells.from_dict, {"riotId": riot_id}
        )

    async def player_main_runes(self, riot_id: str) -> PlayerMainRunes:
        return await self._fetch("playermainrunes", PlayerMainRunes.from_dict, {"riotId": riot_id})

    async def player_items(self, riot_id: str) -> List[PlayerItem]:
        return await self._fetch("playeritems", _list_of(PlayerItem.from_dict), {"riotId": riot_id})


def _expect_str(payload: Any) -> str:
    if not isinstance(payload, str):
        raise DecodeError(f"Expected a string, got {type(payload).__name__}")
    return payload


def _list_of(decoder):
    def decode(payload: Any) -> list:
        if not isinstance(payload, list):
            raise DecodeError(f"Expected a list, got {type(payload).__name__}")
        return [decoder(item) for item in payload]
    return decode


# Singleton instance
_ingame_client: Optional[IngameClient] = None


def get_ingame_client() -> IngameClient:
    """Get or create the ingame client singleton."""
    global _ingame_client
    if _ingame_client is None:
        _ingame_client = IngameClient()
    return _ingame_client


async def close_ingame_client():
    """Close the ingame client singleton."""
    global _ingame_client
    if _ingame_client:
        await _ingame_client.close()
        _ingame_client = None
