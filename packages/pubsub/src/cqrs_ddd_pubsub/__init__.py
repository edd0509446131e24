"""CloudEvents envelopes for pub/sub messaging."""

from __future__ import annotations

from .constants import (
    CLOUD_EVENTS_SPEC_VERSION,
    DEFAULT_CLOUD_EVENT_SOURCE,
    DEFAULT_CLOUD_EVENT_TYPE,
    TRACE_ID_FIELD,
)
from .content import StructuredData, TextData, is_json_content_type, sniff_content
from .envelope import CloudEventsEnvelope, new_cloud_events_envelope
from .exceptions import (
    EnvelopeSerializationError,
    MalformedPayloadError,
    PubSubError,
)
from .expiration import (
    ExpirationPolicy,
    add_seconds_saturating,
    format_expiration,
    parse_expiration,
)
from .features import Feature
from .metadata import TTL_METADATA_KEY, try_get_ttl
from .serialization import EnvelopeSerializer, decode_document, encode_document
from .tracing import from_cloud_event, from_raw_payload, set_trace_id

__all__ = [
    "CLOUD_EVENTS_SPEC_VERSION",
    "DEFAULT_CLOUD_EVENT_SOURCE",
    "DEFAULT_CLOUD_EVENT_TYPE",
    "TRACE_ID_FIELD",
    "TTL_METADATA_KEY",
    "CloudEventsEnvelope",
    "EnvelopeSerializationError",
    "EnvelopeSerializer",
    "ExpirationPolicy",
    "Feature",
    "MalformedPayloadError",
    "PubSubError",
    "StructuredData",
    "TextData",
    "add_seconds_saturating",
    "decode_document",
    "encode_document",
    "format_expiration",
    "from_cloud_event",
    "from_raw_payload",
    "is_json_content_type",
    "new_cloud_events_envelope",
    "parse_expiration",
    "set_trace_id",
    "sniff_content",
    "try_get_ttl",
]
