"""Capabilities a broker component implements natively."""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable


class Feature(str, Enum):
    """Capability flags advertised by a pub/sub component.

    When a component implements a behavior natively, the matching logic in this
    package is suppressed so the concern is not handled twice.
    """

    MESSAGE_TTL = "MESSAGE_TTL"
    SUBSCRIBE_WILDCARDS = "SUBSCRIBE_WILDCARDS"
    BULK_PUBLISH = "BULK_PUBLISH"

    def is_present(self, features: Iterable[Feature] | None) -> bool:
        """Return True if this feature is a member of *features*."""
        if not features:
            return False
        return self in frozenset(features)
