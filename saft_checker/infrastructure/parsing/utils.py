"""Shared parsing utilities for document extraction."""
from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation
from io import BytesIO
from pathlib import Path

_FRACTION_OR_ZONE = re.compile(r"(\.\d+)?(Z|[+-]\d{2}:?\d{2})?$")


def ensure_bytes(source: BytesIO | Path | bytes) -> bytes:
    if isinstance(source, bytes):
        return source
    if isinstance(source, BytesIO):
        return source.getvalue()
    if isinstance(source, Path):
        return source.read_bytes()
    raise TypeError(f"Unsupported source type: {type(source)!r}")


def clean_text(value: object) -> str:
    if value is None:
        return ""
    s = str(value).strip()
    if s.upper() == "NAN":
        return ""
    return s


def parse_decimal(value: object) -> Decimal:
    s = clean_text(value)
    if not s:
        return Decimal("0")
    s = s.replace(" ", "")
    if "," in s and "." not in s:
        s = s.replace(",", ".")
    try:
        result = Decimal(s)
    except InvalidOperation:
        return Decimal("0")
    if not result.is_finite():
        return Decimal("0")
    return result


def normalize_timestamp(value: str) -> str:
    """Drop fractional seconds and any timezone designator from an ISO timestamp.

    ``2024-01-05T10:15:00.123+01:00`` becomes ``2024-01-05T10:15:00``. A space
    separator is turned into ``T``.
    """
    s = clean_text(value)
    if not s:
        return ""
    if " " in s and "T" not in s:
        s = s.replace(" ", "T", 1)
    if "T" not in s:
        return s
    date_part, time_part = s.split("T", 1)
    time_part = _FRACTION_OR_ZONE.sub("", time_part)[:8]
    return f"{date_part}T{time_part}"
