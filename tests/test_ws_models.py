"""
LCU WebSocket Wire Format - Test Suite
======================================

Subscription strings, control frames and event frame decoding.
"""

import json

import pytest

from shaco.errors import DecodeError
from shaco.models.ws import (
    EventType,
    Opcode,
    SubscriptionKind,
    SubscriptionType,
    decode_event_frame,
    encode_control_frame,
    sanitize_path,
)


class TestSubscriptionType:
    """Tests for subscription string encoding."""

    def test_all_events_wire_strings(self):
        assert SubscriptionType.all_json_api_events().to_wire() == "OnJsonApiEvent"
        assert SubscriptionType.all_lcds_events().to_wire() == "OnLcdsEvent"

    def test_named_event_is_sanitized(self):
        sub = SubscriptionType.json_api_event("/lol-gameflow/v1/gameflow-phase")
        assert sub.to_wire() == "OnJsonApiEvent_lol-gameflow_v1_gameflow-phase"
        assert str(sub) == sub.to_wire()

    def test_lcds_named_event(self):
        sub = SubscriptionType.lcds_event("/lol-chat/v1/me")
        assert sub.to_wire() == "OnLcdsEvent_lol-chat_v1_me"

    def test_sanitize_strips_only_one_leading_slash(self):
        assert sanitize_path("/a/b") == "a_b"
        assert sanitize_path("a/b") == "a_b"
        assert sanitize_path("//a") == "_a"

    def test_paths_with_and_without_slash_are_equal(self):
        assert SubscriptionType.json_api_event("/a/b") == SubscriptionType.json_api_event("a/b")

    @pytest.mark.parametrize("sub", [
        SubscriptionType.all_json_api_events(),
        SubscriptionType.all_lcds_events(),
        SubscriptionType.json_api_event("/lol-gameflow/v1/session"),
        SubscriptionType.lcds_event("/lol-chat/v1/me"),
    ])
    def test_from_wire_inverts_to_wire(self, sub):
        assert SubscriptionType.from_wire(sub.to_wire()) == sub

    def test_from_wire_named(self):
        sub = SubscriptionType.from_wire("OnJsonApiEvent_lol-gameflow_v1_session")
        assert sub.kind is SubscriptionKind.JSON_API
        assert sub.path == "lol-gameflow_v1_session"
        assert not sub.is_all

    def test_from_wire_empty_suffix_is_all_events(self):
        sub = SubscriptionType.from_wire("OnJsonApiEvent_")
        assert sub == SubscriptionType.all_json_api_events()
        assert sub == SubscriptionType.json_api_event("")
        assert sub.to_wire() == "OnJsonApiEvent"

    def test_from_wire_unknown_prefix(self):
        with pytest.raises(DecodeError):
            SubscriptionType.from_wire("OnSomethingElse")

    def test_from_wire_rejects_glued_suffix(self):
        with pytest.raises(DecodeError):
            SubscriptionType.from_wire("OnJsonApiEventFoo")

    def test_from_wire_rejects_non_string(self):
        with pytest.raises(DecodeError):
            SubscriptionType.from_wire(5)


class TestControlFrames:
    """Tests for outbound frames."""

    def test_subscribe_frame(self):
        frame = encode_control_frame(Opcode.SUBSCRIBE, SubscriptionType.all_json_api_events())
        assert json.loads(frame) == [5, "OnJsonApiEvent"]

    def test_unsubscribe_frame(self):
        frame = encode_control_frame(Opcode.UNSUBSCRIBE, SubscriptionType.json_api_event("/a/b"))
        assert json.loads(frame) == [6, "OnJsonApiEvent_a_b"]


class TestEventFrames:
    """Tests for inbound frame decoding."""

    def _frame(self, **payload):
        body = {"data": {"phase": "Lobby"}, "eventType": "Update", "uri": "/lol-gameflow/v1/session"}
        body.update(payload)
        return json.dumps([8, "OnJsonApiEvent_lol-gameflow_v1_session", body])

    def test_decode_event(self):
        event = decode_event_frame(self._frame())
        assert event.event_type is EventType.UPDATE
        assert event.uri == "/lol-gameflow/v1/session"
        assert event.data == {"phase": "Lobby"}
        assert event.subscription == SubscriptionType.json_api_event("/lol-gameflow/v1/session")

    def test_null_data_is_allowed(self):
        event = decode_event_frame(self._frame(data=None, eventType="Delete"))
        assert event.data is None
        assert event.event_type is EventType.DELETE

    @pytest.mark.parametrize("raw", [
        "not json",
        "{}",
        "[]",
        json.dumps([8, "OnJsonApiEvent"]),
        json.dumps(["8", "OnJsonApiEvent", {"data": 1, "eventType": "Create", "uri": "/"}]),
        json.dumps([True, "OnJsonApiEvent", {"data": 1, "eventType": "Create", "uri": "/"}]),
        json.dumps([8, "OnJsonApiEvent", []]),
        json.dumps([8, "OnJsonApiEvent", {"eventType": "Create", "uri": "/"}]),
        json.dumps([8, "OnJsonApiEvent", {"data": 1, "eventType": "Replace", "uri": "/"}]),
        json.dumps([8, "OnJsonApiEvent", {"data": 1, "eventType": "Create"}]),
        json.dumps([8, "Bogus", {"data": 1, "eventType": "Create", "uri": "/"}]),
    ])
    def test_malformed_frames_raise(self, raw):
        with pytest.raises(DecodeError):
            decode_event_frame(raw)
