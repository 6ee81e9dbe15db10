"""
LCU WebSocket Client - Test Suite
=================================

Push engine behaviour against an in-memory connection.
"""

import asyncio
import json
import ssl
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from websockets.exceptions import ConnectionClosed, InvalidHandshake

from shaco.clients.websocket_client import LcuWebsocketClient
from shaco.config import ShacoConfig
from shaco.errors import LcuWebsocketError, ProcessInfoError, ProcessInfoErrorKind, WebsocketErrorKind
from shaco.models.ws import EventType, SubscriptionType
from shaco.utils.process_info import StaticCredentialProvider


class FakeWebsocket:
    """Replays queued frames, then behaves like a closed connection."""

    def __init__(self, frames=()):
        self.frames = list(frames)
        self.sent = []
        self.closed = False

    async def send(self, message):
        if self.closed:
            raise ConnectionClosed(None, None)
        self.sent.append(message)

    async def recv(self):
        if self.frames:
            return self.frames.pop(0)
        self.closed = True
        raise ConnectionClosed(None, None)

    async def close(self):
        self.closed = True


def event_frame(uri="/lol-gameflow/v1/gameflow-phase", data="Lobby", event_type="Update"):
    return json.dumps([8, "OnJsonApiEvent_lol-gameflow_v1_gameflow-phase",
                       {"data": data, "eventType": event_type, "uri": uri}])


class TestLcuWebsocketClient:
    """Tests for subscribing and receiving."""

    @pytest.mark.asyncio
    async def test_subscribe_sends_control_frame(self):
        ws = FakeWebsocket()
        client = LcuWebsocketClient(ws)

        await client.subscribe(SubscriptionType.json_api_event("/lol-gameflow/v1/gameflow-phase"))
        await client.unsubscribe(SubscriptionType.all_json_api_events())

        assert [json.loads(m) for m in ws.sent] == [
            [5, "OnJsonApiEvent_lol-gameflow_v1_gameflow-phase"],
            [6, "OnJsonApiEvent"],
        ]

    @pytest.mark.asyncio
    async def test_end_to_end_three_frames(self):
        """Subscribe ack, one event, then close."""
        ws = FakeWebsocket([
            json.dumps([5, "OnJsonApiEvent"]),
            event_frame(data="ChampSelect"),
        ])
        client = LcuWebsocketClient(ws)
        await client.subscribe(SubscriptionType.all_json_api_events())

        events = [event async for event in client]

        assert len(events) == 1
        assert events[0].data == "ChampSelect"
        assert events[0].event_type is EventType.UPDATE
        assert client.closed

    @pytest.mark.asyncio
    async def test_malformed_frame_is_skipped(self):
        ws = FakeWebsocket(["{not json", b"\x00binary", event_frame(data="InProgress")])
        client = LcuWebsocketClient(ws)

        event = await client.next_event()
        assert event is not None
        assert event.data == "InProgress"

        assert await client.next_event() is None

    @pytest.mark.asyncio
    async def test_iteration_after_close_ends_immediately(self):
        client = LcuWebsocketClient(FakeWebsocket())
        assert [e async for e in client] == []
        assert [e async for e in client] == []

    @pytest.mark.asyncio
    async def test_subscribe_after_close_is_disconnected(self):
        client = LcuWebsocketClient(FakeWebsocket())
        await client.close()

        with pytest.raises(LcuWebsocketError) as exc_info:
            await client.subscribe(SubscriptionType.all_json_api_events())
        assert exc_info.value.kind is WebsocketErrorKind.DISCONNECTED

    @pytest.mark.asyncio
    async def test_send_on_dropped_connection_is_disconnected(self):
        ws = FakeWebsocket()
        ws.closed = True
        client = LcuWebsocketClient(ws)

        with pytest.raises(LcuWebsocketError) as exc_info:
            await client.subscribe(SubscriptionType.all_lcds_events())
        assert exc_info.value.kind is WebsocketErrorKind.DISCONNECTED
        assert client.closed

    @pytest.mark.asyncio
    async def test_send_transport_error(self):
        ws = MagicMock()
        ws.send = AsyncMock(side_effect=OSError("broken pipe"))
        client = LcuWebsocketClient(ws)

        with pytest.raises(LcuWebsocketError) as exc_info:
            await client.subscribe(SubscriptionType.all_lcds_events())
        assert exc_info.value.kind is WebsocketErrorKind.SEND_ERROR

    @pytest.mark.asyncio
    async def test_receive_error_ends_iteration(self):
        ws = MagicMock()
        ws.recv = AsyncMock(side_effect=OSError("reset"))
        ws.close = AsyncMock()
        client = LcuWebsocketClient(ws)

        assert await client.next_event() is None
        assert client.closed
        ws.close.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_receive_error_ignores_close_failure(self):
        ws = MagicMock()
        ws.recv = AsyncMock(side_effect=OSError("reset"))
        ws.close = AsyncMock(side_effect=OSError("broken pipe"))
        client = LcuWebsocketClient(ws)

        assert await client.next_event() is None
        assert client.closed

    @pytest.mark.asyncio
    async def test_async_context_manager_closes(self):
        ws = FakeWebsocket()
        async with LcuWebsocketClient(ws) as client:
            assert not client.closed
        assert ws.closed
        assert client.closed


class FailingProvider:
    def resolve_credentials(self):
        raise ProcessInfoError(ProcessInfoErrorKind.PROCESS_NOT_AVAILABLE)


class TestLcuWebsocketConnect:
    """Tests for connection error mapping."""

    @pytest.fixture
    def config(self, tmp_path):
        return ShacoConfig(ca_file=tmp_path / "riotgames.pem")

    @pytest.mark.asyncio
    async def test_no_client_process(self, config):
        with pytest.raises(LcuWebsocketError) as exc_info:
            await LcuWebsocketClient.connect(FailingProvider(), config)
        assert exc_info.value.kind is WebsocketErrorKind.NOT_AVAILABLE

    @pytest.mark.asyncio
    async def test_missing_certificate(self, config):
        with pytest.raises(LcuWebsocketError) as exc_info:
            await LcuWebsocketClient.connect(StaticCredentialProvider(1234, "tok"), config)
        assert exc_info.value.kind is WebsocketErrorKind.AUTH_FAILURE

    @pytest.mark.asyncio
    async def test_connects_with_basic_auth(self, config):
        ws = FakeWebsocket()
        connect = AsyncMock(return_value=ws)
        with patch("shaco.clients.websocket_client.build_ssl_context", return_value=MagicMock()), \
                patch("shaco.clients.websocket_client.websockets.connect", connect):
            client = await LcuWebsocketClient.connect(StaticCredentialProvider(1234, "tok"), config)

        assert client.websocket is ws
        args, kwargs = connect.call_args
        assert args[0] == "wss://127.0.0.1:1234"
        assert kwargs["additional_headers"]["Authorization"].startswith("Basic ")
        assert kwargs["open_timeout"] == config.connect_timeout

    @pytest.mark.asyncio
    @pytest.mark.parametrize("error,kind", [
        (ConnectionRefusedError(), WebsocketErrorKind.NOT_AVAILABLE),
        (asyncio.TimeoutError(), WebsocketErrorKind.NOT_AVAILABLE),
        (ssl.SSLCertVerificationError("bad cert"), WebsocketErrorKind.AUTH_FAILURE),
        (InvalidHandshake("rejected"), WebsocketErrorKind.DISCONNECTED),
    ])
    async def test_connect_error_mapping(self, config, error, kind):
        with patch("shaco.clients.websocket_client.build_ssl_context", return_value=MagicMock()), \
                patch("shaco.clients.websocket_client.websockets.connect", AsyncMock(side_effect=error)):
            with pytest.raises(LcuWebsocketError) as exc_info:
                await LcuWebsocketClient.connect(StaticCredentialProvider(1234, "tok"), config)
        assert exc_info.value.kind is kind
