"""Parsing of public document identifiers into series keys."""
from __future__ import annotations

import re

from .models import SeriesKey, UnparsedId

_PUBLIC_ID_PATTERN = re.compile(r"^(.+)/(\d+)$")


def parse_series_key(public_id: str) -> SeriesKey | UnparsedId:
    """Split ``"FT 2024/17"`` into ``SeriesKey("FT 2024", 17)``.

    The prefix is everything before the last ``/``. Identifiers without a
    purely numeric suffix yield ``UnparsedId``; such documents are counted but
    take no part in sequence or signature checks.
    """
    match = _PUBLIC_ID_PATTERN.match(public_id or "")
    if match is None:
        return UnparsedId(public_id=public_id)
    return SeriesKey(prefix=match.group(1), number=int(match.group(2)))
