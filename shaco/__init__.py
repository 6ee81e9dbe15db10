"""
shaco - async wrappers for the League of Legends local APIs.

* :class:`LcuRestClient` - one-shot requests to the desktop client
* :class:`LcuWebsocketClient` - push events from the desktop client
* :class:`IngameClient` - live game telemetry
* :class:`IngameEventStream` - live game events as an async iterator
"""

from shaco.config import ShacoConfig
from shaco.errors import (
    DecodeError,
    IngameClientError,
    IngameErrorKind,
    LcuRestError,
    LcuWebsocketError,
    ProcessInfoError,
    ProcessInfoErrorKind,
    RestErrorKind,
    ShacoError,
    WebsocketErrorKind,
)
from shaco.models.ws import EventType, LcuEvent, SubscriptionType
from shaco.utils.process_info import (
    CredentialProvider,
    Credentials,
    ProcessCredentialProvider,
    StaticCredentialProvider,
)
from shaco.clients import IngameClient, LcuRestClient, LcuWebsocketClient
from shaco.streaming import IngameEventStream, StreamState

__version__ = "0.1.0"

__all__ = [
    "ShacoConfig",
    "ShacoError",
    "DecodeError",
    "IngameClientError",
    "IngameErrorKind",
    "LcuRestError",
    "RestErrorKind",
    "LcuWebsocketError",
    "WebsocketErrorKind",
    "ProcessInfoError",
    "ProcessInfoErrorKind",
    "EventType",
    "LcuEvent",
    "SubscriptionType",
    "CredentialProvider",
    "Credentials",
    "ProcessCredentialProvider",
    "StaticCredentialProvider",
    "IngameClient",
    "LcuRestClient",
    "LcuWebsocketClient",
    "IngameEventStream",
    "StreamState",
]
