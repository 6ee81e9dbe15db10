"""
LCU REST API client
Provides access to the local control API of the League desktop client.

The API listens on https://127.0.0.1:<port> where both the port and the
auth token come from the command line of the running client process.
Requests use HTTP Basic auth with the user ``riot``.

Example endpoints:
- /lol-summoner/v1/current-summoner     - Logged in summoner
- /lol-gameflow/v1/session              - Champ select / in game / post game state
- /lol-chat/v1/me                       - Chat presence (PUT to change status)
"""

import asyncio
import json
import logging
import ssl
from typing import Any, Dict, Optional

import aiohttp

from shaco.config import LCU_HOST, ShacoConfig, resolve_config
from shaco.errors import LcuRestError, ProcessInfoError, RestErrorKind
from shaco.utils.process_info import CredentialProvider, Credentials, ProcessCredentialProvider
from shaco.utils.request import build_session, build_ssl_context

logger = logging.getLogger(__name__)


class LcuRestClient:
    """
    Async client for the LCU REST API.

    Credentials are resolved on the first request, not at construction, so
    the client can be created before the League client is running.
    """

    def __init__(
        self,
        credential_provider: Optional[CredentialProvider] = None,
        config: Optional[ShacoConfig] = None,
    ):
        self.config = resolve_config(config)
        self.credential_provider = credential_provider or ProcessCredentialProvider(
            self.config.process_name
        )
        self._credentials: Optional[Credentials] = None
        self._session: Optional[aiohttp.ClientSession] = None

    @property
    def base_url(self) -> Optional[str]:
        if self._credentials is None:
            return None
        return f"https://{LCU_HOST}:{self._credentials.port}"

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create aiohttp session, resolving credentials if needed."""
        if self._session is None or self._session.closed:
            if self._credentials is None:
                try:
                    self._credentials = self.credential_provider.resolve_credentials()
                except ProcessInfoError as e:
                    raise LcuRestError(RestErrorKind.NOT_AVAILABLE, str(e)) from e

            try:
                ssl_context = build_ssl_context(self.config.ca_file, self.config.check_hostname)
            except (OSError, ssl.SSLError) as e:
                raise LcuRestError(RestErrorKind.AUTH_FAILURE, str(e)) from e

            self._session = build_session(
                ssl_context,
                self.config.request_timeout,
                auth_header=self._credentials.basic_auth_header(),
            )
            logger.info(f"LCU REST client bound to port {self._credentials.port}")
        return self._session

    async def close(self):
        """Close the HTTP session."""
        if self._session and not self._session.closed:
            await self._session.close()
        self._session = None

    async def __aenter__(self) -> "LcuRestClient":
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()

    async def _request(
        self,
        method: str,
        endpoint: str,
        params: Optional[Dict[str, Any]] = None,
        body: Any = None,
    ) -> Any:
        """
        Make a request and return the decoded JSON body.

        Args:
            method: HTTP method
            endpoint: Absolute API path, e.g. "/lol-summoner/v1/current-summoner"
            params: Query parameters
            body: JSON body (None sends no body)

        Returns:
            Decoded JSON, or None for an empty response (e.g. 204)
        """
        session = await self._get_session()
        if not endpoint.startswith("/"):
            endpoint = f"/{endpoint}"
        url = f"{self.base_url}{endpoint}"

        kwargs: Dict[str, Any] = {}
        if params:
            kwargs["params"] = params
        if body is not None:
            kwargs["json"] = body

        try:
            async with session.request(method, url, **kwargs) as response:
                if response.status >= 400:
                    text = await response.text(errors="replace")
                    if response.status in (401, 403):
                        raise LcuRestError(RestErrorKind.AUTH_FAILURE, text or None, status=response.status)
                    raise LcuRestError.from_status(response.status, text)
                try:
                    text = await response.text()
                except UnicodeDecodeError as e:
                    raise LcuRestError(RestErrorKind.DESERIALIZATION, str(e), status=response.status) from e
        except LcuRestError:
            raise
        except aiohttp.ClientSSLError as e:
            raise LcuRestError(RestErrorKind.AUTH_FAILURE, str(e)) from e
        except asyncio.TimeoutError as e:
            raise LcuRestError(RestErrorKind.CONNECTION, f"Timeout on {method} {endpoint}") from e
        except aiohttp.ClientConnectorError as e:
            raise LcuRestError(RestErrorKind.NOT_AVAILABLE, str(e)) from e
        except aiohttp.ClientError as e:
            raise LcuRestError(RestErrorKind.CONNECTION, str(e)) from e

        if not text.strip():
            return None
        try:
            return json.loads(text)
        except json.JSONDecodeError as e:
            raise LcuRestError(RestErrorKind.DESERIALIZATION, str(e), status=response.status) from e

    # ========================================================================
    # HTTP VERBS
    # ========================================================================

    async def get(self, endpoint: str, params: Optional[Dict[str, Any]] = None) -> Any:
        return await self._request("GET", endpoint, params=params)

    async def post(self, endpoint: str, body: Any = None) -> Any:
        return await self._request("POST", endpoint, body=body)

    async def put(self, endpoint: str, body: Any = None) -> Any:
        return await self._request("PUT", endpoint, body=body)

    async def patch(self, endpoint: str, body: Any = None) -> Any:
        return await self._request("PATCH", endpoint, body=body)

    async def delete(self, endpoint: str) -> Any:
        return await self._request("DELETE", endpoint)
