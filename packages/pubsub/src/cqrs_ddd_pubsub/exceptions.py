"""Exceptions for cqrs-ddd-pubsub."""

from __future__ import annotations


class PubSubError(Exception):
    """Base class for all pub/sub envelope errors."""


class MalformedPayloadError(PubSubError, ValueError):
    """Raised when serialized bytes are not a JSON object.

    The payload itself is the problem, so redelivering it will not help.
    """


class EnvelopeSerializationError(PubSubError):
    """Raised when an envelope cannot be encoded or a document is not an envelope."""
