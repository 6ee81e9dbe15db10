"""
LCU REST Client - Test Suite
============================

Lazy credential resolution, request building and error mapping.
"""

import asyncio
from unittest.mock import AsyncMock, MagicMock, patch

import aiohttp
import pytest

from shaco.clients.rest_client import LcuRestClient
from shaco.config import ShacoConfig
from shaco.errors import LcuRestError, ProcessInfoError, ProcessInfoErrorKind, RestErrorKind
from shaco.utils.process_info import StaticCredentialProvider


def make_response(status=200, text=""):
    response = MagicMock()
    response.status = status
    response.text = AsyncMock(return_value=text)
    return response


def make_session(response=None, error=None):
    session = MagicMock()
    session.closed = False
    session.close = AsyncMock()
    if error is not None:
        session.request = MagicMock(side_effect=error)
    else:
        session.request.return_value.__aenter__ = AsyncMock(return_value=response)
        session.request.return_value.__aexit__ = AsyncMock(return_value=False)
    return session


@pytest.fixture
def config(tmp_path):
    return ShacoConfig(ca_file=tmp_path / "riotgames.pem")


@pytest.fixture
def client(config):
    client = LcuRestClient(StaticCredentialProvider(51234, "s3cr3t"), config)
    # Pretend the session was already built with resolved credentials
    client._credentials = client.credential_provider.resolve_credentials()
    return client


class TestLcuRestClient:
    """Tests for request handling."""

    @pytest.mark.asyncio
    async def test_get_decodes_json(self, client):
        client._session = make_session(make_response(text='{"displayName": "Faker"}'))

        assert await client.get("/lol-summoner/v1/current-summoner") == {"displayName": "Faker"}
        args, kwargs = client._session.request.call_args
        assert args == ("GET", "https://127.0.0.1:51234/lol-summoner/v1/current-summoner")
        assert kwargs == {}

    @pytest.mark.asyncio
    async def test_get_with_params_and_relative_path(self, client):
        client._session = make_session(make_response(text="[]"))
        await client.get("lol-chat/v1/friends", params={"limit": 5})

        args, kwargs = client._session.request.call_args
        assert args[1] == "https://127.0.0.1:51234/lol-chat/v1/friends"
        assert kwargs == {"params": {"limit": 5}}

    @pytest.mark.asyncio
    @pytest.mark.parametrize("method", ["post", "put", "patch"])
    async def test_body_is_sent_as_json(self, client, method):
        client._session = make_session(make_response(text='{"ok": true}'))
        result = await getattr(client, method)("/lol-chat/v1/me", {"statusMessage": "hi"})

        assert result == {"ok": True}
        args, kwargs = client._session.request.call_args
        assert args[0] == method.upper()
        assert kwargs["json"] == {"statusMessage": "hi"}

    @pytest.mark.asyncio
    async def test_empty_body_returns_none(self, client):
        client._session = make_session(make_response(status=204, text=""))
        assert await client.delete("/lol-lobby/v2/lobby") is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status,kind", [
        (401, RestErrorKind.AUTH_FAILURE),
        (403, RestErrorKind.AUTH_FAILURE),
        (404, RestErrorKind.CLIENT_ERROR),
        (500, RestErrorKind.SERVER_ERROR),
    ])
    async def test_status_mapping(self, client, status, kind):
        client._session = make_session(make_response(status=status, text='{"message": "x"}'))
        with pytest.raises(LcuRestError) as exc_info:
            await client.get("/lol-gameflow/v1/session")
        assert exc_info.value.kind is kind
        assert exc_info.value.status == status

    @pytest.mark.asyncio
    async def test_invalid_json(self, client):
        client._session = make_session(make_response(text="<html>"))
        with pytest.raises(LcuRestError) as exc_info:
            await client.get("/lol-gameflow/v1/session")
        assert exc_info.value.kind is RestErrorKind.DESERIALIZATION

    @pytest.mark.asyncio
    async def test_undecodable_body(self, client):
        response = make_response()
        response.text = AsyncMock(side_effect=UnicodeDecodeError("utf-8", b"\xff", 0, 1, "invalid start byte"))
        client._session = make_session(response)

        with pytest.raises(LcuRestError) as exc_info:
            await client.get("/lol-gameflow/v1/session")
        assert exc_info.value.kind is RestErrorKind.DESERIALIZATION
        assert exc_info.value.status == 200

    @pytest.mark.asyncio
    async def test_error_body_is_read_leniently(self, client):
        response = make_response(status=500, text="oops")
        client._session = make_session(response)
        with pytest.raises(LcuRestError):
            await client.get("/lol-gameflow/v1/session")
        response.text.assert_awaited_once_with(errors="replace")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("error,kind", [
        (asyncio.TimeoutError(), RestErrorKind.CONNECTION),
        (aiohttp.ServerDisconnectedError(), RestErrorKind.CONNECTION),
    ])
    async def test_transport_errors(self, client, error, kind):
        client._session = make_session(error=error)
        with pytest.raises(LcuRestError) as exc_info:
            await client.get("/lol-gameflow/v1/session")
        assert exc_info.value.kind is kind


class TestLcuRestSession:
    """Tests for lazy setup."""

    def test_construction_does_no_io(self, config):
        provider = MagicMock()
        client = LcuRestClient(provider, config)
        provider.resolve_credentials.assert_not_called()
        assert client.base_url is None

    @pytest.mark.asyncio
    async def test_client_not_running(self, config):
        provider = MagicMock()
        provider.resolve_credentials.side_effect = ProcessInfoError(ProcessInfoErrorKind.PROCESS_NOT_AVAILABLE)
        client = LcuRestClient(provider, config)

        with pytest.raises(LcuRestError) as exc_info:
            await client.get("/lol-gameflow/v1/session")
        assert exc_info.value.kind is RestErrorKind.NOT_AVAILABLE

    @pytest.mark.asyncio
    async def test_missing_certificate(self, config):
        client = LcuRestClient(StaticCredentialProvider(51234, "s3cr3t"), config)
        with pytest.raises(LcuRestError) as exc_info:
            await client.get("/lol-gameflow/v1/session")
        assert exc_info.value.kind is RestErrorKind.AUTH_FAILURE

    @pytest.mark.asyncio
    async def test_session_carries_basic_auth(self, config):
        client = LcuRestClient(StaticCredentialProvider(51234, "s3cr3t"), config)
        with patch("shaco.clients.rest_client.build_ssl_context", return_value=MagicMock()), \
                patch("shaco.clients.rest_client.build_session") as build_session:
            await client._get_session()

        _, kwargs = build_session.call_args
        assert kwargs["auth_header"] == "Basic cmlvdDpzM2NyM3Q="
        assert client.base_url == "https://127.0.0.1:51234"

    @pytest.mark.asyncio
    async def test_async_context_manager_closes_session(self, client):
        session = make_session(make_response())
        client._session = session
        async with client:
            pass
        session.close.assert_awaited_once()
