"""
Error taxonomy for the League client wrappers.

Every error carries a ``kind`` (an Enum member) and an optional diagnostic
message. One-shot requests raise these; the event streams only log them and
end iteration.
"""

from enum import Enum
from typing import Optional


class ShacoError(Exception):
    """Base class for all errors raised by this package."""

    default_message = "League client error"

    def __init__(self, kind: Enum, message: Optional[str] = None):
        self.kind = kind
        self.message = message
        super().__init__(str(self))

    def __str__(self) -> str:
        label = self.kind.value if isinstance(self.kind, Enum) else str(self.kind)
        if self.message:
            return f"{self.default_message} ({label}): {self.message}"
        return f"{self.default_message} ({label})"

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.kind!s}, {self.message!r})"


class DecodeKind(str, Enum):
    SCHEMA = "schema"


class DecodeError(ShacoError, ValueError):
    """A payload did not match the expected schema."""

    default_message = "Could not decode payload"

    def __init__(self, message: Optional[str] = None):
        super().__init__(DecodeKind.SCHEMA, message)


class ProcessInfoErrorKind(str, Enum):
    PROCESS_NOT_AVAILABLE = "process_not_available"
    PORT_NOT_FOUND = "port_not_found"
    AUTH_TOKEN_NOT_FOUND = "auth_token_not_found"


class ProcessInfoError(ShacoError):
    """The client process, its API port or its auth token could not be found."""

    default_message = "Could not resolve League client credentials"


class WebsocketErrorKind(str, Enum):
    NOT_AVAILABLE = "not_available"
    AUTH_FAILURE = "auth_failure"
    SEND_ERROR = "send_error"
    DISCONNECTED = "disconnected"


class LcuWebsocketError(ShacoError):
    """Errors of the WebSocket connection to the LCU API."""

    default_message = "LCU websocket error"


class IngameErrorKind(str, Enum):
    # Some calls only work once the game has started, even if others already answer
    SPECTATOR_MODE = "api_not_available_in_spectator_mode"
    LOADING_SCREEN = "api_not_available_during_loading_screen"
    CLIENT_ERROR = "client_error"
    SERVER_ERROR = "server_error"
    DESERIALIZATION = "deserialization_error"
    CONNECTION = "connection_error"


class IngameClientError(ShacoError):
    """Errors of the live client data API."""

    default_message = "Ingame API error"

    @classmethod
    def from_status(cls, status: int, text: Optional[str] = None) -> "IngameClientError":
        """Classify an HTTP error status the way the live client API uses them."""
        if status == 400:
            return cls(IngameErrorKind.SPECTATOR_MODE, text)
        if status == 404:
            return cls(IngameErrorKind.LOADING_SCREEN, text)
        detail = f"HTTP {status}" + (f": {text}" if text else "")
        if 400 <= status < 500:
            return cls(IngameErrorKind.CLIENT_ERROR, detail)
        if 500 <= status < 600:
            return cls(IngameErrorKind.SERVER_ERROR, detail)
        return cls(IngameErrorKind.CONNECTION, detail)


class RestErrorKind(str, Enum):
    NOT_AVAILABLE = "not_available"
    AUTH_FAILURE = "auth_failure"
    CLIENT_ERROR = "client_error"
    SERVER_ERROR = "server_error"
    DESERIALIZATION = "deserialization_error"
    CONNECTION = "connection_error"


class LcuRestError(ShacoError):
    """Errors of the LCU REST API."""

    default_message = "LCU REST error"

    def __init__(self, kind: RestErrorKind, message: Optional[str] = None, status: Optional[int] = None):
        self.status = status
        super().__init__(kind, message)

    @classmethod
    def from_status(cls, status: int, text: Optional[str] = None) -> "LcuRestError":
        detail = f"HTTP {status}" + (f": {text}" if text else "")
        if 400 <= status < 500:
            return cls(RestErrorKind.CLIENT_ERROR, detail, status=status)
        if 500 <= status < 600:
            return cls(RestErrorKind.SERVER_ERROR, detail, status=status)
        return cls(RestErrorKind.CONNECTION, detail, status=status)
