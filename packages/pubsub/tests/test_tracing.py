"""Tests for trace-id injection and raw document helpers."""

from __future__ import annotations

import base64
import json
import uuid

import pytest

from cqrs_ddd_pubsub.constants import TRACE_ID_FIELD
from cqrs_ddd_pubsub.exceptions import MalformedPayloadError
from cqrs_ddd_pubsub.tracing import from_cloud_event, from_raw_payload, set_trace_id


def test_trace_field_name() -> None:
    assert TRACE_ID_FIELD == "traceid"


@pytest.mark.parametrize("raw", [b"a", b"", b"{", b'"text"', b"[1, 2]", b"42", b"null"])
def test_invalid_input_raises(raw: bytes) -> None:
    with pytest.raises(MalformedPayloadError):
        set_trace_id(raw, "1")


def test_invalid_json_chains_cause() -> None:
    with pytest.raises(MalformedPayloadError) as exc_info:
        set_trace_id(b"a", "1")
    assert isinstance(exc_info.value.__cause__, json.JSONDecodeError)


def test_valid_json() -> None:
    raw = json.dumps({"specversion": "1.0", "customfield": "a"}).encode()
    out = set_trace_id(raw, "1")
    document = json.loads(out)
    assert document["specversion"] == "1.0"
    assert document["customfield"] == "a"
    assert document[TRACE_ID_FIELD] == "1"


def test_overwrites_existing_trace_and_keeps_order(cloud_event: bytes) -> None:
    original = json.loads(cloud_event)
    original[TRACE_ID_FIELD] = "old"
    raw = json.dumps(original).encode()

    out = set_trace_id(raw, "new")

    document = json.loads(out)
    assert list(document) == list(original)
    assert document.pop(TRACE_ID_FIELD) == "new"
    original.pop(TRACE_ID_FIELD)
    assert document == original


def test_preserves_extension_fields(cloud_event: bytes) -> None:
    document = json.loads(set_trace_id(cloud_event, "00-abc-01"))
    assert document["comexampleextension1"] == "value"
    assert document["comexampleothervalue"] == 5
    assert document["subject"] == "123"
    assert document["data"] == '<much wow="xml"/>'
    assert document[TRACE_ID_FIELD] == "00-abc-01"


def test_input_buffer_untouched() -> None:
    raw = b'{"id":"a"}'
    copy = bytes(raw)
    set_trace_id(raw, "1")
    assert raw == copy


def test_nested_and_unicode_values_survive() -> None:
    raw = json.dumps(
        {"data": {"list": [1, 2.5, None, True], "name": "Zoë"}, "big": 2**70}
    ).encode()
    document = json.loads(set_trace_id(raw, "t"))
    assert document["data"] == {"list": [1, 2.5, None, True], "name": "Zoë"}
    assert document["big"] == 2**70


def test_from_cloud_event_overrides_routing(cloud_event: bytes) -> None:
    document = from_cloud_event(cloud_event, "orders", "redis", "trace-1")
    assert document["topic"] == "orders"
    assert document["pubsubname"] == "redis"
    assert document[TRACE_ID_FIELD] == "trace-1"
    assert document["id"] == "A234-1234-1234"
    assert document["comexampleothervalue"] == 5


def test_from_cloud_event_invalid() -> None:
    with pytest.raises(MalformedPayloadError):
        from_cloud_event(b"not json", "t", "p", "1")


def test_from_raw_payload() -> None:
    document = from_raw_payload(b"\x00\x01raw", "orders", "kafka")
    assert uuid.UUID(document["id"])
    assert document["specversion"] == "1.0"
    assert document["datacontenttype"] == "application/octet-stream"
    assert document["source"] == "Dapr"
    assert document["type"] == "com.dapr.event.sent"
    assert document["topic"] == "orders"
    assert document["pubsubname"] == "kafka"
    assert base64.b64decode(document["data_base64"]) == b"\x00\x01raw"
    assert "data" not in document


def test_from_raw_payload_ids_are_unique() -> None:
    first = from_raw_payload(b"x", "t", "p")
    second = from_raw_payload(b"x", "t", "p")
    assert first["id"] != second["id"]


def test_deeply_nested_json_raises_malformed_payload() -> None:
    deep = b"[" * 200_000 + b"]" * 200_000
    with pytest.raises(MalformedPayloadError) as exc_info:
        set_trace_id(b'{"a":' + deep + b"}", "1")
    assert isinstance(exc_info.value.__cause__, ValueError)


def test_from_cloud_event_deeply_nested() -> None:
    deep = b"[" * 200_000 + b"]" * 200_000
    with pytest.raises(MalformedPayloadError):
        from_cloud_event(b'{"a":' + deep + b"}", "t", "p", "1")
