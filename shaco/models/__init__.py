"""Wire and payload models for the LCU WebSocket and the live client data API."""

from shaco.models.ws import (
    EventType,
    LcuEvent,
    Opcode,
    SubscriptionKind,
    SubscriptionType,
    decode_event_frame,
    encode_control_frame,
)
from shaco.models.ingame import (
    AllGameData,
    GameEvent,
    Killer,
    KillerKind,
    decode_event_data,
    decode_game_event,
)
