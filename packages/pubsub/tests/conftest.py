"""Pytest fixtures for pub/sub envelope tests."""

from __future__ import annotations

import sys
from datetime import datetime, timezone
from pathlib import Path

import pytest

# Ensure the pubsub package is importable when running pytest from repo root
# (e.g. without pip install -e .)
_pubsub_src = Path(__file__).resolve().parent.parent / "src"
if _pubsub_src.is_dir() and str(_pubsub_src) not in sys.path:
    sys.path.insert(0, str(_pubsub_src))

from cqrs_ddd_pubsub.expiration import ExpirationPolicy  # noqa: E402

CLOUD_EVENT = b"""{
    "specversion" : "1.0",
    "type" : "com.github.pull.create",
    "source" : "https://github.com/cloudevents/spec/pull",
    "subject" : "123",
    "id" : "A234-1234-1234",
    "comexampleextension1" : "value",
    "comexampleothervalue" : 5,
    "datacontenttype" : "text/xml",
    "data" : "<much wow=\\"xml\\"/>"
}"""


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2024, 5, 17, 12, 30, 15, 250000, tzinfo=timezone.utc)


@pytest.fixture
def fixed_policy(fixed_now: datetime) -> ExpirationPolicy:
    """Policy whose clock never advances."""
    return ExpirationPolicy(clock=lambda: fixed_now)


@pytest.fixture
def cloud_event() -> bytes:
    return CLOUD_EVENT
