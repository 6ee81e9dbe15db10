"""
LCU WebSocket message model.

The LCU speaks a WAMP-like protocol over its WebSocket:

* outbound control frames are JSON arrays ``[opcode, "<subscription>"]``
  (5 = subscribe, 6 = unsubscribe);
* inbound event frames are ``[8, "<subscription>", {"data": ..., "eventType": ..., "uri": ...}]``.

The subscription string is the only contract with the peer, so its encoding
here must match what the client expects byte for byte.
"""

import json
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Any

from shaco.errors import DecodeError


class Opcode(IntEnum):
    SUBSCRIBE = 5
    UNSUBSCRIBE = 6
    EVENT = 8


class SubscriptionKind(str, Enum):
    """Wire prefixes of the two event families."""
    JSON_API = "OnJsonApiEvent"
    LCDS = "OnLcdsEvent"


def sanitize_path(path: str) -> str:
    """``/lol-gameflow/v1/session`` -> ``lol-gameflow_v1_session``"""
    if path.startswith("/"):
        path = path[1:]
    return path.replace("/", "_")


@dataclass(frozen=True)
class SubscriptionType:
    """
    Which category of push events to receive.

    The path is stored in its sanitized wire form, so two keys are equal
    exactly when they produce the same subscription string. A key with an
    empty path subscribes to every event of its family.
    """
    kind: SubscriptionKind
    path: str = ""

    def __post_init__(self):
        object.__setattr__(self, "kind", SubscriptionKind(self.kind))
        object.__setattr__(self, "path", sanitize_path(self.path))

    @classmethod
    def all_json_api_events(cls) -> "SubscriptionType":
        return cls(SubscriptionKind.JSON_API)

    @classmethod
    def all_lcds_events(cls) -> "SubscriptionType":
        return cls(SubscriptionKind.LCDS)

    @classmethod
    def json_api_event(cls, path: str) -> "SubscriptionType":
        return cls(SubscriptionKind.JSON_API, path)

    @classmethod
    def lcds_event(cls, path: str) -> "SubscriptionType":
        return cls(SubscriptionKind.LCDS, path)

    @property
    def is_all(self) -> bool:
        return not self.path

    def to_wire(self) -> str:
        if self.is_all:
            return self.kind.value
        return f"{self.kind.value}_{self.path}"

    @classmethod
    def from_wire(cls, value: str) -> "SubscriptionType":
        """Parse a subscription string; unknown prefixes raise :class:`DecodeError`."""
        if not isinstance(value, str):
            raise DecodeError(f"Subscription must be a string, got {type(value).__name__}")

        for kind in SubscriptionKind:
            prefix = kind.value
            if not value.startswith(prefix):
                continue
            suffix = value[len(prefix):]
            if not suffix:
                return cls(kind)
            if suffix[0] != "_":
                # e.g. "OnJsonApiEventFoo" is a different event name
                continue
            # An empty path after the separator is the "all" key of the family
            return cls(kind, suffix[1:])

        raise DecodeError(f"Unknown SubscriptionType: {value}")

    def __str__(self) -> str:
        return self.to_wire()


class EventType(str, Enum):
    CREATE = "Create"
    UPDATE = "Update"
    DELETE = "Delete"


@dataclass(frozen=True)
class LcuEvent:
    """A decoded push event."""
    subscription: SubscriptionType
    event_type: EventType
    data: Any
    uri: str


def encode_control_frame(opcode: Opcode, subscription: SubscriptionType) -> str:
    """JSON text of an outbound subscribe/unsubscribe frame."""
    return json.dumps([int(opcode), subscription.to_wire()])


def decode_event_frame(raw: str) -> LcuEvent:
    """
    Decode an inbound text frame.

    Raises:
        DecodeError: the text is not JSON or not shaped like an event frame
    """
    try:
        message = json.loads(raw)
    except (TypeError, ValueError) as e:
        raise DecodeError(f"Frame is not JSON: {e}") from e

    if not isinstance(message, list) or len(message) != 3:
        raise DecodeError("Event frame must be a 3-element array")

    opcode, subscription, payload = message
    if not isinstance(opcode, int) or isinstance(opcode, bool):
        raise DecodeError(f"Invalid opcode: {opcode!r}")
    if not isinstance(payload, dict):
        raise DecodeError("Event payload must be an object")

    if "data" not in payload:
        raise DecodeError("Event payload has no 'data'")
    try:
        event_type = EventType(payload.get("eventType"))
    except ValueError as e:
        raise DecodeError(f"Invalid eventType: {payload.get('eventType')!r}") from e
    uri = payload.get("uri")
    if not isinstance(uri, str):
        raise DecodeError("Event payload has no 'uri'")

    return LcuEvent(
        subscription=SubscriptionType.from_wire(subscription),
        event_type=event_type,
        data=payload["data"],
        uri=uri,
    )
