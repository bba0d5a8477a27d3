from decimal import Decimal
from io import BytesIO
from pathlib import Path

import pytest

from saft_checker.infrastructure.parsing.utils import ensure_bytes, normalize_timestamp, parse_decimal


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("2024-01-05T10:15:00", "2024-01-05T10:15:00"),
        ("2024-01-05T10:15:00.999", "2024-01-05T10:15:00"),
        ("2024-01-05T10:15:00Z", "2024-01-05T10:15:00"),
        ("2024-01-05T10:15:00.1+01:00", "2024-01-05T10:15:00"),
        ("2024-01-05T10:15:00-0300", "2024-01-05T10:15:00"),
        ("2024-01-05 10:15:00", "2024-01-05T10:15:00"),
        ("2024-01-05", "2024-01-05"),
        ("", ""),
    ],
)
def test_normalize_timestamp(raw, expected):
    assert normalize_timestamp(raw) == expected


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("12.30", Decimal("12.30")),
        ("12,5", Decimal("12.5")),
        ("", Decimal("0")),
        ("nan", Decimal("0")),
        ("abc", Decimal("0")),
        ("Infinity", Decimal("0")),
        ("-Infinity", Decimal("0")),
        ("sNaN", Decimal("0")),
    ],
)
def test_parse_decimal(raw, expected):
    assert parse_decimal(raw) == expected


def test_ensure_bytes(tmp_path: Path):
    path = tmp_path / "data.bin"
    path.write_bytes(b"abc")

    assert ensure_bytes(b"abc") == b"abc"
    assert ensure_bytes(BytesIO(b"abc")) == b"abc"
    assert ensure_bytes(path) == b"abc"
    with pytest.raises(TypeError):
        ensure_bytes("abc")
