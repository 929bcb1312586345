"""flightxml.envelope

Helpers for the JSON envelope FlightXML wraps every answer in::

    {"AircraftTypeResult": {"manufacturer": "IAI", ...}}
"""
from __future__ import annotations

import json
from typing import Any

from .errors import EnvelopeParseError, MissingResultError

__all__ = [
    "MISSING",
    "parse_body",
    "result_field",
    "extract_field",
    "unwrap",
]


class _Missing:
    """Sentinel for an absent envelope field (distinct from a JSON null)."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "MISSING"


MISSING = _Missing()


def parse_body(text: str) -> Any:
    """Decode a response body, raising EnvelopeParseError on invalid JSON."""
    try:
        return json.loads(text)
    except ValueError as exc:
        raise EnvelopeParseError(exc, text=text) from exc


def result_field(method: str) -> str:
    return f"{method}Result"


def extract_field(envelope: Any, field_name: str) -> Any:
    """Return ``envelope[field_name]`` or MISSING.

    Envelopes that are not JSON objects (bare numbers, strings, arrays)
    never contain the field.
    """
    if not isinstance(envelope, dict):
        return MISSING
    return envelope.get(field_name, MISSING)


def unwrap(envelope: Any, method: str, strict: bool = False) -> Any:
    """Pull the ``<method>Result`` payload out of a parsed envelope.

    A missing field yields ``None`` unless ``strict`` is set, in which case
    MissingResultError is raised carrying the serialized envelope.
    """
    value = extract_field(envelope, result_field(method))
    if value is MISSING:
        if strict:
            raise MissingResultError(text=json.dumps(envelope))
        return None
    return value
