"""EnvelopeSerializer — CloudEvents JSON roundtrip and generic document codec."""

from __future__ import annotations

import json
from typing import Any

from pydantic import ValidationError

from .constants import (
    CLOUD_EVENTS_SPEC_VERSION,
    DATA_CONTENT_TYPE_FIELD,
    DATA_FIELD,
    EXPIRATION_FIELD,
    ID_FIELD,
    JSON_CONTENT_TYPE,
    PUBSUB_NAME_FIELD,
    SOURCE_FIELD,
    SPEC_VERSION_FIELD,
    TEXT_PLAIN_CONTENT_TYPE,
    TOPIC_FIELD,
    TRACE_ID_FIELD,
    TYPE_FIELD,
)
from .content import StructuredData, TextData, strict_json_loads
from .envelope import CloudEventsEnvelope
from .exceptions import EnvelopeSerializationError, MalformedPayloadError

# Wire field -> model attribute, in wire order.
_WIRE_FIELDS: dict[str, str] = {
    ID_FIELD: "id",
    SOURCE_FIELD: "source",
    TYPE_FIELD: "type",
    SPEC_VERSION_FIELD: "spec_version",
    DATA_CONTENT_TYPE_FIELD: "data_content_type",
    TOPIC_FIELD: "topic",
    PUBSUB_NAME_FIELD: "pubsub_name",
    TRACE_ID_FIELD: "trace_id",
    EXPIRATION_FIELD: "expiration",
}


def decode_document(raw: bytes) -> dict[str, Any]:
    """Decode *raw* into an insertion-ordered mapping.

    Raises:
        MalformedPayloadError: If *raw* is not a JSON object.
    """
    try:
        document = strict_json_loads(raw)
    except ValueError as e:
        raise MalformedPayloadError(f"Payload is not valid JSON: {e}") from e
    if not isinstance(document, dict):
        raise MalformedPayloadError(
            f"Expected a JSON object, got {type(document).__name__}"
        )
    return document


def encode_document(document: dict[str, Any], *, ensure_ascii: bool = False) -> bytes:
    """Encode a mapping as compact JSON bytes, preserving key order."""
    return json.dumps(
        document,
        ensure_ascii=ensure_ascii,
        allow_nan=False,
        separators=(",", ":"),
    ).encode("utf-8")


def _data_variant(value: Any) -> StructuredData | TextData:
    # Strings stay text, matching the builder for declared content types.
    if isinstance(value, str):
        return TextData(text=value)
    return StructuredData(value=value)


class EnvelopeSerializer:
    """Serialize/deserialize CloudEventsEnvelope to/from JSON bytes.

    Extensions are written as top-level fields and unknown top-level fields
    are read back into ``extensions``.
    """

    def __init__(self, *, ensure_ascii: bool = False) -> None:
        self._ensure_ascii = ensure_ascii

    def to_document(self, envelope: CloudEventsEnvelope) -> dict[str, Any]:
        """Return the wire mapping for *envelope*."""
        document: dict[str, Any] = {}
        for wire_name, attr in _WIRE_FIELDS.items():
            value = getattr(envelope, attr)
            if wire_name == EXPIRATION_FIELD and not value:
                continue
            document[wire_name] = value
            if wire_name == DATA_CONTENT_TYPE_FIELD:
                document[DATA_FIELD] = envelope.data.wire_value
        for key, value in envelope.extensions.items():
            document.setdefault(key, value)
        return document

    def serialize(self, envelope: CloudEventsEnvelope) -> bytes:
        """Encode envelope to JSON bytes."""
        try:
            return encode_document(
                self.to_document(envelope), ensure_ascii=self._ensure_ascii
            )
        except (TypeError, ValueError) as e:
            raise EnvelopeSerializationError(str(e)) from e

    def from_document(self, document: dict[str, Any]) -> CloudEventsEnvelope:
        """Build an envelope from a decoded wire mapping."""
        remaining = dict(document)
        spec_version = remaining.pop(SPEC_VERSION_FIELD, CLOUD_EVENTS_SPEC_VERSION)
        if spec_version != CLOUD_EVENTS_SPEC_VERSION:
            raise EnvelopeSerializationError(
                f"Unsupported CloudEvents specversion {spec_version!r}"
            )
        fields: dict[str, Any] = {}
        for wire_name, attr in _WIRE_FIELDS.items():
            if wire_name in remaining:
                fields[attr] = remaining.pop(wire_name)

        has_data = DATA_FIELD in remaining
        value = remaining.pop(DATA_FIELD, "")
        content_type = fields.get("data_content_type")
        if not content_type:
            content_type = (
                TEXT_PLAIN_CONTENT_TYPE
                if not has_data or isinstance(value, str)
                else JSON_CONTENT_TYPE
            )
            fields["data_content_type"] = content_type
        try:
            fields["data"] = _data_variant(value)
            return CloudEventsEnvelope(extensions=remaining, **fields)
        except ValidationError as e:
            raise EnvelopeSerializationError(str(e)) from e

    def deserialize(self, raw: bytes) -> CloudEventsEnvelope:
        """Decode JSON bytes to CloudEventsEnvelope.

        Raises:
            MalformedPayloadError: If *raw* is not a JSON object.
            EnvelopeSerializationError: If the object is not a valid envelope.
        """
        return self.from_document(decode_document(raw))
