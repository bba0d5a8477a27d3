"""Central configuration for the SAF-T checker package."""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from decimal import Decimal

SAFT_PT_NAMESPACE = "urn:OECD:StandardAuditFile-Tax:PT_1.04_01"

# Spreadsheet column -> record field.
EXCEL_COLUMNS = {
    "public_id": "DOCUMENT_NUMBER",
    "emission_date": "EMISSION_DATE",
    "gross_total": "LANE_OPERATOR_PRICE",
    "signature": "SIGNATURE",
}


@dataclass(slots=True, frozen=True)
class Settings:
    saft_namespace: str
    hash_algorithm: str
    payload_separator: str
    excel_columns: dict[str, str] = field(default_factory=dict)
    excel_invoice_prefix: str = "FS "
    excel_series_length: int = 11
    excel_public_id_length: int = 22
    minor_units_per_unit: Decimal = Decimal("100")
    log_level: str = "INFO"


SETTINGS = Settings(
    saft_namespace=SAFT_PT_NAMESPACE,
    hash_algorithm="SHA-1",
    payload_separator=";",
    excel_columns=dict(EXCEL_COLUMNS),
    log_level=os.environ.get("SAFT_CHECKER_LOG_LEVEL", "INFO"),
)
