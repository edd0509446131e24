"""Tests for pub/sub exceptions."""

from __future__ import annotations

from cqrs_ddd_pubsub.exceptions import (
    EnvelopeSerializationError,
    MalformedPayloadError,
    PubSubError,
)


def test_malformed_payload_is_pubsub_and_value_error() -> None:
    assert issubclass(MalformedPayloadError, PubSubError)
    assert issubclass(MalformedPayloadError, ValueError)


def test_serialization_error_is_pubsub_error() -> None:
    assert issubclass(EnvelopeSerializationError, PubSubError)
    assert not issubclass(EnvelopeSerializationError, MalformedPayloadError)
