"""Content sniffing — payload to content type and data variant."""

from __future__ import annotations

import json
import math
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from .constants import JSON_CONTENT_TYPE, TEXT_PLAIN_CONTENT_TYPE


class StructuredData(BaseModel):
    """Decoded structured payload (object, array, number, string, bool or null)."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["structured"] = "structured"
    value: Any = None

    @property
    def wire_value(self) -> Any:
        return self.value


class TextData(BaseModel):
    """Unstructured payload kept as text."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["text"] = "text"
    text: str = ""

    @property
    def wire_value(self) -> Any:
        return self.text


EnvelopeData = Annotated[
    StructuredData | TextData,
    Field(discriminator="kind"),
]


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Non-standard JSON constant {name!r}")


def _finite_float(literal: str) -> float:
    value = float(literal)
    if math.isinf(value):
        raise ValueError(f"Number out of range: {literal}")
    return value


def strict_json_loads(raw: bytes | str) -> Any:
    """Parse JSON, rejecting ``NaN``/``Infinity`` and out-of-range numbers.

    Documents nested too deeply for the decoder raise ``ValueError`` like any
    other malformed input.
    """
    try:
        return json.loads(
            raw, parse_constant=_reject_constant, parse_float=_finite_float
        )
    except RecursionError as e:
        raise ValueError("JSON document is nested too deeply") from e


def as_text(payload: bytes | None) -> str:
    """Decode *payload* as UTF-8, replacing undecodable bytes."""
    if not payload:
        return ""
    return payload.decode("utf-8", errors="replace")


def is_json_content_type(content_type: str) -> bool:
    """Return True for ``application/json`` and ``+json`` suffixed media types."""
    media_type = content_type.split(";", 1)[0].strip().lower()
    return media_type == JSON_CONTENT_TYPE or media_type.endswith("+json")


def sniff_content(
    payload: bytes | None,
    content_type: str = "",
) -> tuple[str, StructuredData | TextData]:
    """Derive ``(content_type, data)`` for an envelope.

    A declared content type is used verbatim and the payload is kept as text.
    Without one, the payload is probed as JSON; anything that does not parse
    falls back to plain text. Other formats (XML, CSV, ...) are not detected.
    """
    if content_type:
        return content_type, TextData(text=as_text(payload))

    if payload:
        try:
            value = strict_json_loads(payload)
        except ValueError:
            pass
        else:
            return JSON_CONTENT_TYPE, StructuredData(value=value)

    return TEXT_PLAIN_CONTENT_TYPE, TextData(text=as_text(payload))
