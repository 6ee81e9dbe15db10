"""
Credential discovery for the LCU API.

The LCU control API listens on a random port protected by a per-session token.
Both are passed to the ``LeagueClientUx`` process on its command line; the
providers here turn that into a :class:`Credentials` pair. Clients take a
provider as a constructor argument so tests and callers can inject their own.
"""

import logging
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Iterable, Optional

import aiohttp
import psutil

from shaco.config import default_process_name
from shaco.errors import ProcessInfoError, ProcessInfoErrorKind

logger = logging.getLogger(__name__)

PORT_RE = re.compile(r"--app-port=([0-9]*)")
TOKEN_RE = re.compile(r"--remoting-auth-token=([\w-]*)")

LCU_USERNAME = "riot"


@dataclass(frozen=True)
class Credentials:
    """Port and bearer token of the local LCU peer."""
    port: int
    token: str

    def basic_auth_header(self) -> str:
        """``Authorization`` header value, ``Basic base64(riot:<token>)``."""
        return aiohttp.BasicAuth(LCU_USERNAME, self.token).encode()

    def __repr__(self) -> str:
        return f"Credentials(port={self.port}, token='***')"


class CredentialProvider(ABC):
    """Resolves the port and token of the running LCU."""

    @abstractmethod
    def resolve_credentials(self) -> Credentials:
        """Return credentials or raise :class:`ProcessInfoError`."""


class StaticCredentialProvider(CredentialProvider):
    """Provider for a port/token pair that is already known."""

    def __init__(self, port: int, token: str):
        self._credentials = Credentials(port=int(port), token=token)

    def resolve_credentials(self) -> Credentials:
        return self._credentials


class ProcessCredentialProvider(CredentialProvider):
    """Scans running processes for the client UX and parses its arguments."""

    def __init__(self, process_name: Optional[str] = None):
        self.process_name = process_name or default_process_name()

    def resolve_credentials(self) -> Credentials:
        cmdline = find_process(self.process_name)
        credentials = extract_info(cmdline)
        logger.debug(f"Found {self.process_name} listening on port {credentials.port}")
        return credentials


def find_process(process_name: str, processes: Optional[Iterable] = None) -> str:
    """
    Return the joined command line of the first process called ``process_name``.

    Args:
        process_name: Executable name to look for
        processes: Process iterable, defaults to ``psutil.process_iter``

    Raises:
        ProcessInfoError: no matching process is running
    """
    if processes is None:
        processes = psutil.process_iter(["name", "cmdline"])

    for process in processes:
        try:
            info = process.info
        except (psutil.NoSuchProcess, psutil.AccessDenied):
            continue
        if info.get("name") == process_name:
            return " ".join(info.get("cmdline") or [])

    raise ProcessInfoError(
        ProcessInfoErrorKind.PROCESS_NOT_AVAILABLE,
        f"Could not find a running {process_name} process",
    )


def extract_info(cmd_args: str) -> Credentials:
    """Parse ``--app-port`` and ``--remoting-auth-token`` out of a command line."""
    port_match = PORT_RE.search(cmd_args)
    if port_match is None or not port_match.group(1):
        raise ProcessInfoError(ProcessInfoErrorKind.PORT_NOT_FOUND, "No port found")

    token_match = TOKEN_RE.search(cmd_args)
    if token_match is None or not token_match.group(1):
        raise ProcessInfoError(ProcessInfoErrorKind.AUTH_TOKEN_NOT_FOUND, "No authentication token found")

    return Credentials(port=int(port_match.group(1)), token=token_match.group(1))
