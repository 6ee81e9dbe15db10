"""
WebSocket client for the LCU push API.

Subscribe to event families with :meth:`LcuWebsocketClient.subscribe`, then
iterate the client to receive :class:`LcuEvent` values:

    client = await LcuWebsocketClient.connect()
    await client.subscribe(SubscriptionType.json_api_event("/lol-gameflow/v1/gameflow-phase"))
    async for event in client:
        print(event.uri, event.data)

There is no reconnection: once the peer closes the socket, iteration ends and
every later call fails with ``DISCONNECTED``.
"""

import asyncio
import logging
import ssl
from typing import Optional

import websockets
from websockets.exceptions import ConnectionClosed, InvalidHandshake, WebSocketException

from shaco.config import LCU_HOST, ShacoConfig, resolve_config
from shaco.errors import DecodeError, LcuWebsocketError, ProcessInfoError, WebsocketErrorKind
from shaco.models.ws import LcuEvent, Opcode, SubscriptionType, decode_event_frame, encode_control_frame
from shaco.utils.process_info import CredentialProvider, ProcessCredentialProvider
from shaco.utils.request import build_ssl_context

logger = logging.getLogger(__name__)


class LcuWebsocketClient:
    """
    A live push connection to the LCU.

    Use :meth:`connect` to open one. The constructor only wraps an already
    open connection object.
    """

    def __init__(self, websocket):
        self.websocket = websocket
        self._closed = False

    @classmethod
    async def connect(
        cls,
        credential_provider: Optional[CredentialProvider] = None,
        config: Optional[ShacoConfig] = None,
    ) -> "LcuWebsocketClient":
        """
        Open the WebSocket connection.

        Raises:
            LcuWebsocketError: NOT_AVAILABLE when the client is not running or
                does not answer, AUTH_FAILURE on certificate problems,
                DISCONNECTED when the upgrade is rejected
        """
        config = resolve_config(config)
        provider = credential_provider or ProcessCredentialProvider(config.process_name)

        try:
            credentials = provider.resolve_credentials()
        except ProcessInfoError as e:
            raise LcuWebsocketError(WebsocketErrorKind.NOT_AVAILABLE, str(e)) from e

        try:
            ssl_context = build_ssl_context(config.ca_file, config.check_hostname)
        except (OSError, ssl.SSLError) as e:
            raise LcuWebsocketError(WebsocketErrorKind.AUTH_FAILURE, str(e)) from e

        url = f"wss://{LCU_HOST}:{credentials.port}"
        logger.info(f"Connecting to LCU websocket at {url}")
        try:
            websocket = await websockets.connect(
                url,
                ssl=ssl_context,
                additional_headers={"Authorization": credentials.basic_auth_header()},
                open_timeout=config.connect_timeout,
            )
        except ssl.SSLError as e:
            raise LcuWebsocketError(WebsocketErrorKind.AUTH_FAILURE, str(e)) from e
        except InvalidHandshake as e:
            raise LcuWebsocketError(WebsocketErrorKind.DISCONNECTED, str(e)) from e
        except (OSError, asyncio.TimeoutError) as e:
            raise LcuWebsocketError(WebsocketErrorKind.NOT_AVAILABLE, str(e)) from e

        logger.info("Connected to LCU websocket")
        return cls(websocket)

    @property
    def closed(self) -> bool:
        return self._closed

    async def _send(self, opcode: Opcode, subscription: SubscriptionType):
        if self._closed:
            raise LcuWebsocketError(WebsocketErrorKind.DISCONNECTED, "Connection is closed")
        try:
            await self.websocket.send(encode_control_frame(opcode, subscription))
        except ConnectionClosed as e:
            self._closed = True
            raise LcuWebsocketError(WebsocketErrorKind.DISCONNECTED, str(e)) from e
        except (WebSocketException, OSError) as e:
            raise LcuWebsocketError(WebsocketErrorKind.SEND_ERROR, str(e)) from e

    async def subscribe(self, subscription: SubscriptionType):
        """Start receiving events of ``subscription``."""
        await self._send(Opcode.SUBSCRIBE, subscription)
        logger.info(f"Subscribed to {subscription}")

    async def unsubscribe(self, subscription: SubscriptionType):
        """Stop receiving events of ``subscription``."""
        await self._send(Opcode.UNSUBSCRIBE, subscription)
        logger.info(f"Unsubscribed from {subscription}")

    async def next_event(self) -> Optional[LcuEvent]:
        """
        Wait for the next event.

        Returns:
            The event, or None once the connection has ended
        """
        while not self._closed:
            try:
                message = await self.websocket.recv()
            except ConnectionClosed:
                logger.info("LCU websocket closed")
                self._closed = True
                break
            except (WebSocketException, OSError) as e:
                logger.warning(f"Error receiving from LCU websocket: {e}")
                self._closed = True
                try:
                    await self.websocket.close()
                except (WebSocketException, OSError):
                    pass
                break

            if not isinstance(message, str):
                logger.debug("Skipping non-text frame")
                continue
            try:
                return decode_event_frame(message)
            except DecodeError as e:
                # The LCU also sends welcome/ack frames that are not events
                logger.debug(f"Skipping frame: {e}")
        return None

    def __aiter__(self):
        return self

    async def __anext__(self) -> LcuEvent:
        event = await self.next_event()
        if event is None:
            raise StopAsyncIteration
        return event

    async def close(self):
        """Close the connection. Safe to call more than once."""
        if self.websocket is not None:
            await self.websocket.close()
        self._closed = True

    async def __aenter__(self) -> "LcuWebsocketClient":
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()
