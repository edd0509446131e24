"""Component metadata lookups."""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping

logger = logging.getLogger("cqrs_ddd.pubsub")

TTL_METADATA_KEY = "ttlInSeconds"

# Larger TTLs saturate to the maximum expiration anyway.
MAX_TTL_SECONDS = 2**64

_TTL_PATTERN = re.compile(r"\+?[0-9]+")


def try_get_ttl(
    metadata: Mapping[str, str] | None,
    key: str = TTL_METADATA_KEY,
) -> int | None:
    """Return the TTL in whole seconds from *metadata*, or None.

    Missing or empty values return None silently. Values that are not a
    non-negative decimal integer are logged and ignored.
    """
    if not metadata:
        return None
    raw = metadata.get(key)
    if not raw:
        return None
    if _TTL_PATTERN.fullmatch(raw) is None:
        logger.warning(
            "Ignoring %s=%r: value must be a non-negative integer", key, raw
        )
        return None
    digits = raw.lstrip("+").lstrip("0")
    if len(digits) > len(str(MAX_TTL_SECONDS)):
        return MAX_TTL_SECONDS
    return min(int(digits or "0"), MAX_TTL_SECONDS)
