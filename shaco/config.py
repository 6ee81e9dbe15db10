"""
Configuration for the League client wrappers
============================================
Ports, timeouts and TLS settings shared by the REST, ingame and WebSocket clients.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional
import os
import sys


# Live client data API always listens here
DEFAULT_INGAME_HOST = "127.0.0.1"
DEFAULT_INGAME_PORT = 2999

# The LCU control API and its WebSocket share the loopback interface
LCU_HOST = "127.0.0.1"

DEFAULT_POLL_INTERVAL = 0.5      # seconds between event polls
DEFAULT_CONNECT_TIMEOUT = 0.1    # handshakes and game-state checks
DEFAULT_REQUEST_TIMEOUT = 10.0   # regular one-shot requests

DEFAULT_CA_FILE = Path(__file__).parent / "data" / "riotgames.pem"


def default_process_name() -> str:
    """Name of the client UX process as reported by the OS."""
    if sys.platform.startswith("win"):
        return "LeagueClientUx.exe"
    if sys.platform == "darwin":
        return "LeagueClientUx"
    # Wine truncates the executable name on Linux
    return "LeagueClientUx."


def _env_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class ShacoConfig:
    """Settings for every client in the package."""
    ingame_host: str = DEFAULT_INGAME_HOST
    ingame_port: int = DEFAULT_INGAME_PORT
    poll_interval: float = DEFAULT_POLL_INTERVAL
    connect_timeout: float = DEFAULT_CONNECT_TIMEOUT
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    ca_file: Path = field(default_factory=lambda: DEFAULT_CA_FILE)
    # The Riot root is pinned, but the leaf certificates are not issued for 127.0.0.1
    check_hostname: bool = False
    process_name: str = field(default_factory=default_process_name)

    @property
    def ingame_base_url(self) -> str:
        return f"https://{self.ingame_host}:{self.ingame_port}"

    @classmethod
    def from_env(cls, prefix: str = "SHACO_") -> "ShacoConfig":
        """Build a config from ``SHACO_*`` environment variables, falling back to defaults."""
        config = cls()
        env = os.environ

        if f"{prefix}INGAME_HOST" in env:
            config.ingame_host = env[f"{prefix}INGAME_HOST"]
        if f"{prefix}INGAME_PORT" in env:
            config.ingame_port = int(env[f"{prefix}INGAME_PORT"])
        if f"{prefix}POLL_INTERVAL" in env:
            config.poll_interval = float(env[f"{prefix}POLL_INTERVAL"])
        if f"{prefix}CONNECT_TIMEOUT" in env:
            config.connect_timeout = float(env[f"{prefix}CONNECT_TIMEOUT"])
        if f"{prefix}REQUEST_TIMEOUT" in env:
            config.request_timeout = float(env[f"{prefix}REQUEST_TIMEOUT"])
        if f"{prefix}CA_FILE" in env:
            config.ca_file = Path(env[f"{prefix}CA_FILE"])
        if f"{prefix}CHECK_HOSTNAME" in env:
            config.check_hostname = _env_bool(env[f"{prefix}CHECK_HOSTNAME"])
        if f"{prefix}PROCESS_NAME" in env:
            config.process_name = env[f"{prefix}PROCESS_NAME"]

        return config


def resolve_config(config: Optional[ShacoConfig] = None) -> ShacoConfig:
    """Return ``config`` or a fresh one read from the environment."""
    return config if config is not None else ShacoConfig.from_env()
