"""Wire field names and fixed defaults for CloudEvents envelopes."""

from __future__ import annotations

CLOUD_EVENTS_SPEC_VERSION = "1.0"
DEFAULT_CLOUD_EVENT_TYPE = "com.dapr.event.sent"
DEFAULT_CLOUD_EVENT_SOURCE = "Dapr"

TEXT_PLAIN_CONTENT_TYPE = "text/plain"
JSON_CONTENT_TYPE = "application/json"
OCTET_STREAM_CONTENT_TYPE = "application/octet-stream"

# ── Wire fields ──────────────────────────────────────────────────
ID_FIELD = "id"
SOURCE_FIELD = "source"
TYPE_FIELD = "type"
SPEC_VERSION_FIELD = "specversion"
DATA_CONTENT_TYPE_FIELD = "datacontenttype"
DATA_FIELD = "data"
DATA_BASE64_FIELD = "data_base64"
TOPIC_FIELD = "topic"
PUBSUB_NAME_FIELD = "pubsubname"
TRACE_ID_FIELD = "traceid"
EXPIRATION_FIELD = "expiration"
