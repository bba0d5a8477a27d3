"""Spreadsheet parser producing canonical document records.

One row per document. ``DOCUMENT_NUMBER`` is a raw numeric identifier that is
turned into the ``"FS <series>/<number>"`` public id, and
``LANE_OPERATOR_PRICE`` holds the gross total in cents.
"""
from __future__ import annotations

import zipfile
from decimal import Decimal
from io import BytesIO
from pathlib import Path
from typing import Sequence

import pandas as pd
import xlrd

from saft_checker.config import SETTINGS
from saft_checker.domain.exceptions import DocumentExtractionError
from saft_checker.domain.models import DocumentRecord
from saft_checker.infrastructure.parsing.utils import (
    clean_text,
    ensure_bytes,
    normalize_timestamp,
    parse_decimal,
)

_XLS_MAGIC = b"\xd0\xcf\x11\xe0"


def _engine_for(raw_bytes: bytes) -> str:
    return "xlrd" if raw_bytes.startswith(_XLS_MAGIC) else "openpyxl"


def read_excel_raw(raw_bytes: bytes) -> pd.DataFrame:
    try:
        return pd.read_excel(
            BytesIO(raw_bytes),
            sheet_name=0,
            engine=_engine_for(raw_bytes),
            dtype=str,
            keep_default_na=False,
        )
    except (ValueError, OSError, KeyError, zipfile.BadZipFile, xlrd.XLRDError) as exc:
        raise DocumentExtractionError(f"Unable to read spreadsheet: {exc}") from exc


def format_public_id(document_number: str) -> str:
    number = clean_text(document_number)
    if not number:
        return ""
    length = SETTINGS.excel_series_length
    public_id = f"{SETTINGS.excel_invoice_prefix}{number[:length]}/{number[length:]}"
    return public_id[: SETTINGS.excel_public_id_length]


def split_emission_date(raw: str) -> tuple[str, str]:
    """Return ``(issue_date, system_entry_timestamp)`` for an emission date cell."""
    value = clean_text(raw)
    if not value:
        return "", ""
    if "T" in value:
        date_part, time_part = value.split("T", 1)
    elif " " in value:
        date_part, time_part = value.split(" ", 1)
    else:
        date_part, time_part = value, ""
    if not time_part:
        return date_part, f"{date_part}T00:00:00"
    return date_part, normalize_timestamp(f"{date_part}T{time_part}")


def minor_units_to_decimal(raw: str) -> Decimal:
    return parse_decimal(raw) / SETTINGS.minor_units_per_unit


def normalize_excel(df: pd.DataFrame) -> pd.DataFrame:
    columns = SETTINGS.excel_columns
    missing = [name for name in columns.values() if name not in df.columns]
    if missing:
        raise DocumentExtractionError(f"Spreadsheet is missing required columns: {', '.join(missing)}")
    work = df[list(columns.values())].copy()
    work.rename(columns={source: target for target, source in columns.items()}, inplace=True)
    for col in work.columns:
        work[col] = work[col].map(clean_text)
    return work


def excel_to_records(source: BytesIO | Path | bytes) -> Sequence[DocumentRecord]:
    raw_bytes = ensure_bytes(source)
    normalized = normalize_excel(read_excel_raw(raw_bytes))
    if normalized.empty:
        raise DocumentExtractionError("Spreadsheet contains no documents.")

    records: list[DocumentRecord] = []
    for position, row in enumerate(normalized.itertuples(index=False), start=1):
        issue_date, entry_timestamp = split_emission_date(row.emission_date)
        records.append(
            DocumentRecord(
                public_id=format_public_id(row.public_id),
                issue_date=issue_date,
                system_entry_timestamp=entry_timestamp,
                gross_total=minor_units_to_decimal(row.gross_total),
                signature_base64=row.signature or None,
                position=position,
            )
        )
    return records
