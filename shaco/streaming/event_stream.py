"""
Live game event stream.

Turns the polling-only ``/eventdata`` endpoint into an async iterator. A
background task waits until a game is running, then polls with a cursor so
every event is delivered once and in order:

    async with IngameEventStream() as stream:
        async for event in stream:
            print(event)

Nothing is requested from the game until the stream is first advanced.
"""

import asyncio
import logging
from enum import Enum
from typing import List, Optional

from shaco.clients.ingame_client import IngameClient
from shaco.config import ShacoConfig, resolve_config
from shaco.errors import IngameClientError
from shaco.models.ingame import GameEvent

logger = logging.getLogger(__name__)

_STOP = object()


class StreamState(str, Enum):
    CREATED = "created"
    AWAITING_START = "awaiting_start"
    WAITING_FOR_GAME_START = "waiting_for_game_start"
    POLLING = "polling"
    STOPPED = "stopped"


class IngameEventStream:
    """
    Async iterator over the events of the running game.

    The stream ends when polling fails for any reason, including the game
    ending. It is meant for a single consumer.
    """

    def __init__(
        self,
        client: Optional[IngameClient] = None,
        poll_interval: Optional[float] = None,
        config: Optional[ShacoConfig] = None,
    ):
        self.config = resolve_config(config)
        self._owns_client = client is None
        self.client = client if client is not None else IngameClient(self.config)
        self.poll_interval = poll_interval if poll_interval is not None else self.config.poll_interval

        self._state = StreamState.CREATED
        self._cursor = 0
        self._queue: asyncio.Queue = asyncio.Queue()
        self._start = asyncio.Event()
        self._task: Optional[asyncio.Task] = None
        self._exhausted = False
        self._closed = False

        # Spawn now if we can so the task is ready as soon as the consumer asks
        try:
            asyncio.get_running_loop()
        except RuntimeError:
            pass
        else:
            self._spawn()

    @classmethod
    def from_ingame_client(
        cls, client: IngameClient, poll_interval: Optional[float] = None
    ) -> "IngameEventStream":
        return cls(client=client, poll_interval=poll_interval, config=client.config)

    @property
    def state(self) -> StreamState:
        return self._state

    @property
    def cursor(self) -> int:
        """Smallest event id not yet delivered."""
        return self._cursor

    def _spawn(self):
        if self._task is None:
            self._task = asyncio.create_task(self._run())

    # ========================================================================
    # BACKGROUND TASK
    # ========================================================================

    async def _run(self):
        try:
            self._state = StreamState.AWAITING_START
            await self._start.wait()

            self._state = StreamState.WAITING_FOR_GAME_START
            while not await self.client.active_game():
                await asyncio.sleep(self.poll_interval)

            logger.info("Game detected, polling events")
            self._state = StreamState.POLLING
            while True:
                events = await self.client.event_data(self._cursor)
                forwarded = self._forward(events)
                logger.debug(f"Polled {len(events)} events, forwarded {forwarded}, cursor {self._cursor}")
                await asyncio.sleep(self.poll_interval)
        except IngameClientError as e:
            logger.info(f"Event stream stopped: {e}")
        except Exception as e:
            logger.warning(f"Event stream failed: {e}")
        finally:
            self._state = StreamState.STOPPED
            self._queue.put_nowait(_STOP)

    def _forward(self, events: List[GameEvent]) -> int:
        forwarded = 0
        for event in events:
            # The API may repeat events we already delivered
            if event.event_id < self._cursor:
                continue
            self._queue.put_nowait(event)
            self._cursor = event.event_id + 1
            forwarded += 1
        return forwarded

    # ========================================================================
    # ITERATION
    # ========================================================================

    def __aiter__(self):
        return self

    async def __anext__(self) -> GameEvent:
        if self._exhausted or self._closed:
            raise StopAsyncIteration

        if not self._start.is_set():
            self._spawn()
            self._start.set()

        item = await self._queue.get()
        if item is _STOP:
            self._exhausted = True
            raise StopAsyncIteration
        return item

    async def aclose(self):
        """Stop polling and release the client if the stream created it."""
        self._closed = True
        task, self._task = self._task, None
        if task is not None and not task.done():
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                pass
        # Wakes a consumer even if the task was cancelled before it first ran
        self._queue.put_nowait(_STOP)
        self._state = StreamState.STOPPED
        if self._owns_client:
            await self.client.close()

    async def __aenter__(self) -> "IngameEventStream":
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.aclose()

    def __del__(self):
        task = getattr(self, "_task", None)
        if task is not None and not task.done() and not task.get_loop().is_closed():
            task.cancel()
