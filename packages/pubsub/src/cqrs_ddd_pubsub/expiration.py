"""ExpirationPolicy — message TTL and delivery-time expiry checks."""

from __future__ import annotations

import logging
import re
from datetime import datetime, timedelta, timezone
from typing import TYPE_CHECKING, Any

from .constants import EXPIRATION_FIELD
from .features import Feature
from .metadata import TTL_METADATA_KEY, try_get_ttl

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Mapping

    from .envelope import CloudEventsEnvelope

logger = logging.getLogger("cqrs_ddd.pubsub")

EXPIRATION_FORMAT = "%Y-%m-%dT%H:%M:%SZ"
_RFC3339_PATTERN = re.compile(
    r"([0-9]{4}-[0-9]{2}-[0-9]{2}T[0-9]{2}:[0-9]{2}:[0-9]{2})"
    r"(?:\.([0-9]+))?"
    r"(Z|[+-][0-9]{2}:[0-9]{2})"
)

MAX_EXPIRATION = datetime.max.replace(microsecond=0, tzinfo=timezone.utc)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def format_expiration(moment: datetime) -> str:
    """Format *moment* as RFC 3339 UTC with second precision."""
    return moment.astimezone(timezone.utc).strftime(EXPIRATION_FORMAT)


def parse_expiration(value: str) -> datetime | None:
    """Parse an RFC 3339 timestamp; return None for any other format.

    Fractional seconds beyond microseconds are truncated.
    """
    match = _RFC3339_PATTERN.fullmatch(value)
    if match is None:
        return None
    base, fraction, offset = match.groups()
    try:
        moment = datetime.strptime(f"{base}{offset}", "%Y-%m-%dT%H:%M:%S%z")
    except ValueError:
        return None
    if fraction:
        moment = moment.replace(microsecond=int(fraction[:6].ljust(6, "0")))
    return moment


def add_seconds_saturating(moment: datetime, seconds: int) -> datetime:
    """Return ``moment + seconds``, clamped to :data:`MAX_EXPIRATION`.

    The result is rounded up to a whole second so that formatting it never
    yields a time earlier than requested.
    """
    headroom = (MAX_EXPIRATION - moment).total_seconds()
    if seconds >= headroom:
        logger.debug("TTL of %ss saturated to %s", seconds, MAX_EXPIRATION)
        return MAX_EXPIRATION
    result = moment + timedelta(seconds=seconds)
    if result.microsecond:
        result = result.replace(microsecond=0) + timedelta(seconds=1)
    return result


class ExpirationPolicy:
    """Applies message TTLs and evaluates expiration.

    Stateless apart from its configuration, so a single instance can be shared
    across threads.
    """

    def __init__(
        self,
        *,
        ttl_metadata_key: str = TTL_METADATA_KEY,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        """Configure the policy.

        Args:
            ttl_metadata_key: Metadata key holding the TTL in seconds.
            clock: Zero-argument callable returning the current aware UTC
                time. Defaults to the system clock.
        """
        self.ttl_metadata_key = ttl_metadata_key
        self._clock = clock or _utc_now

    def now(self) -> datetime:
        """Return the current time from the configured clock."""
        return self._clock()

    def expiration_for(self, ttl_seconds: int) -> str:
        """Return the formatted expiration for a TTL starting now."""
        return format_expiration(add_seconds_saturating(self.now(), ttl_seconds))

    def apply_metadata(
        self,
        envelope: CloudEventsEnvelope,
        features: Iterable[Feature] | None,
        metadata: Mapping[str, str] | None,
    ) -> None:
        """Set ``envelope.expiration`` from the TTL in *metadata*.

        No-op when the component supports :attr:`Feature.MESSAGE_TTL` or when
        the TTL is missing or invalid; a previous expiration is then kept.
        """
        if Feature.MESSAGE_TTL.is_present(features):
            logger.debug(
                "Component handles message TTL natively; skipping envelope %r",
                envelope.id,
            )
            return
        ttl = try_get_ttl(metadata, self.ttl_metadata_key)
        if ttl is None:
            return
        envelope.expiration = self.expiration_for(ttl)

    def is_expired(self, expiration: str) -> bool:
        """Return True if *expiration* lies strictly before now.

        Empty or unparsable values count as not expired.
        """
        if not expiration:
            return False
        deadline = parse_expiration(expiration)
        if deadline is None:
            logger.warning(
                "Unparsable expiration %r treated as not expired", expiration
            )
            return False
        return deadline < self.now()

    def has_expired(self, envelope: CloudEventsEnvelope) -> bool:
        """Return True if the envelope's expiration has passed."""
        return self.is_expired(envelope.expiration)

    def has_expired_document(self, document: Mapping[str, Any]) -> bool:
        """Expiration check on a decoded wire document."""
        value = document.get(EXPIRATION_FIELD)
        if not isinstance(value, str):
            return False
        return self.is_expired(value)


default_policy = ExpirationPolicy()
