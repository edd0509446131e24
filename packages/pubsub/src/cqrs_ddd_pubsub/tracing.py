"""Trace propagation on serialized envelopes without a typed round-trip."""

from __future__ import annotations

import base64
import uuid
from typing import Any

from .constants import (
    CLOUD_EVENTS_SPEC_VERSION,
    DATA_BASE64_FIELD,
    DATA_CONTENT_TYPE_FIELD,
    DEFAULT_CLOUD_EVENT_SOURCE,
    DEFAULT_CLOUD_EVENT_TYPE,
    ID_FIELD,
    OCTET_STREAM_CONTENT_TYPE,
    PUBSUB_NAME_FIELD,
    SOURCE_FIELD,
    SPEC_VERSION_FIELD,
    TOPIC_FIELD,
    TRACE_ID_FIELD,
    TYPE_FIELD,
)
from .serialization import decode_document, encode_document


def set_trace_id(serialized_envelope: bytes, trace_id: str) -> bytes:
    """Return a copy of *serialized_envelope* with ``traceid`` set to *trace_id*.

    Every other field, including unknown extensions, keeps its value and
    position.

    Raises:
        MalformedPayloadError: If the input is not a JSON object.
    """
    document = decode_document(serialized_envelope)
    document[TRACE_ID_FIELD] = trace_id
    return encode_document(document)


def from_cloud_event(
    cloud_event: bytes,
    topic: str,
    pubsub_name: str,
    trace_id: str,
) -> dict[str, Any]:
    """Decode an existing CloudEvent and stamp it with routing and trace fields."""
    document = decode_document(cloud_event)
    document[TRACE_ID_FIELD] = trace_id
    document[TOPIC_FIELD] = topic
    document[PUBSUB_NAME_FIELD] = pubsub_name
    return document


def from_raw_payload(data: bytes, topic: str, pubsub_name: str) -> dict[str, Any]:
    """Wrap a raw (non-CloudEvent) payload received on the subscriber side.

    The id is random, so a redelivered message gets a new id, and the content
    type is unknown, so the payload is always carried as ``data_base64``.
    """
    return {
        ID_FIELD: str(uuid.uuid4()),
        SPEC_VERSION_FIELD: CLOUD_EVENTS_SPEC_VERSION,
        DATA_CONTENT_TYPE_FIELD: OCTET_STREAM_CONTENT_TYPE,
        SOURCE_FIELD: DEFAULT_CLOUD_EVENT_SOURCE,
        TYPE_FIELD: DEFAULT_CLOUD_EVENT_TYPE,
        TOPIC_FIELD: topic,
        PUBSUB_NAME_FIELD: pubsub_name,
        DATA_BASE64_FIELD: base64.b64encode(data).decode("ascii"),
    }
