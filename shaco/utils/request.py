"""
TLS and HTTP session helpers shared by the REST, ingame and WebSocket clients.

All three peers present certificates signed by the bundled Riot Games root;
the system trust store is never consulted.
"""

import ssl
from pathlib import Path
from typing import Dict, Optional, Union

import aiohttp


def build_ssl_context(ca_file: Union[str, Path], check_hostname: bool = False) -> ssl.SSLContext:
    """
    Create a client SSL context that trusts only ``ca_file``.

    Raises:
        FileNotFoundError: the certificate file does not exist
        ssl.SSLError: the certificate file could not be parsed
    """
    ca_path = Path(ca_file)
    if not ca_path.is_file():
        raise FileNotFoundError(f"Pinned root certificate not found: {ca_path}")

    context = ssl.SSLContext(ssl.PROTOCOL_TLS_CLIENT)
    context.check_hostname = check_hostname
    context.verify_mode = ssl.CERT_REQUIRED
    context.load_verify_locations(cafile=str(ca_path))
    return context


def build_headers(auth_header: Optional[str] = None) -> Dict[str, str]:
    headers = {"Accept": "application/json"}
    if auth_header:
        headers["Authorization"] = auth_header
    return headers


def build_session(
    ssl_context: ssl.SSLContext,
    timeout: float,
    auth_header: Optional[str] = None,
) -> aiohttp.ClientSession:
    """Create an aiohttp session pinned to ``ssl_context`` with default headers."""
    connector = aiohttp.TCPConnector(ssl=ssl_context)
    return aiohttp.ClientSession(
        connector=connector,
        headers=build_headers(auth_header),
        timeout=aiohttp.ClientTimeout(total=timeout),
    )
