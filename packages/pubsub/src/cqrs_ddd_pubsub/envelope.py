"""CloudEventsEnvelope — standard wrapper for pub/sub messages."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Literal

from pydantic import BaseModel, Field

from .constants import (
    CLOUD_EVENTS_SPEC_VERSION,
    DEFAULT_CLOUD_EVENT_TYPE,
    TEXT_PLAIN_CONTENT_TYPE,
)
from .content import EnvelopeData, TextData, sniff_content
from .expiration import default_policy

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from .expiration import ExpirationPolicy
    from .features import Feature


class CloudEventsEnvelope(BaseModel):
    """CloudEvents 1.0 envelope carrying payload, routing and trace metadata.

    ``spec_version`` only accepts ``"1.0"`` and is frozen. ``expiration`` is the
    only field the TTL policy ever mutates.
    """

    id: str = ""
    source: str = ""
    type: str = DEFAULT_CLOUD_EVENT_TYPE
    spec_version: Literal["1.0"] = Field(
        default=CLOUD_EVENTS_SPEC_VERSION, frozen=True
    )
    data_content_type: str = Field(default=TEXT_PLAIN_CONTENT_TYPE, min_length=1)
    data: EnvelopeData = Field(default_factory=TextData)
    topic: str = ""
    pubsub_name: str = ""
    trace_id: str = ""
    expiration: str = Field(default="", description="RFC 3339 UTC, empty if no TTL")
    extensions: dict[str, Any] = Field(default_factory=dict)

    def apply_metadata(
        self,
        features: Iterable[Feature] | None,
        metadata: Mapping[str, str] | None,
        *,
        policy: ExpirationPolicy | None = None,
    ) -> None:
        """Apply the TTL from component *metadata* (see ExpirationPolicy)."""
        (policy or default_policy).apply_metadata(self, features, metadata)

    def has_expired(self, *, policy: ExpirationPolicy | None = None) -> bool:
        """Return True once the expiration has passed."""
        return (policy or default_policy).has_expired(self)


def new_cloud_events_envelope(
    id: str,  # noqa: A002
    source: str,
    event_type: str,
    type_version: str,
    topic: str,
    pubsub_name: str,
    data_content_type: str,
    data: bytes | None,
    trace_id: str,
) -> CloudEventsEnvelope:
    """Build an envelope for *data*.

    An empty *event_type* falls back to the default event type and the content
    type is sniffed when *data_content_type* is empty. *type_version* is a
    deprecated slot kept for call compatibility and has no effect.

    Never raises: bad inputs degrade to defaults.
    """
    del type_version
    content_type, value = sniff_content(data, data_content_type)
    return CloudEventsEnvelope(
        id=id,
        source=source,
        type=event_type or DEFAULT_CLOUD_EVENT_TYPE,
        data_content_type=content_type,
        data=value,
        topic=topic,
        pubsub_name=pubsub_name,
        trace_id=trace_id,
    )
