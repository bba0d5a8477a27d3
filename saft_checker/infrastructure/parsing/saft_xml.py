"""SAF-T (PT) XML parser producing canonical document records."""
from __future__ import annotations

import xml.etree.ElementTree as ET
from io import BytesIO
from pathlib import Path
from typing import Sequence

from saft_checker.config import SETTINGS
from saft_checker.domain.exceptions import DocumentExtractionError
from saft_checker.domain.models import DocumentRecord
from saft_checker.infrastructure.parsing.utils import (
    clean_text,
    ensure_bytes,
    normalize_timestamp,
    parse_decimal,
)


def read_saft_tree(source: BytesIO | Path | bytes) -> ET.Element:
    try:
        return ET.fromstring(ensure_bytes(source))
    except ET.ParseError as exc:
        raise DocumentExtractionError(f"XML is not well-formed: {exc}") from exc


def _child_text(element: ET.Element, tag: str, namespace: str) -> str | None:
    child = element.find(f"{{{namespace}}}{tag}")
    if child is None:
        return None
    return clean_text(child.text)


def invoice_to_record(invoice: ET.Element, position: int, namespace: str) -> DocumentRecord:
    return DocumentRecord(
        public_id=_child_text(invoice, "InvoiceNo", namespace) or "",
        issue_date=_child_text(invoice, "InvoiceDate", namespace) or "",
        system_entry_timestamp=normalize_timestamp(_child_text(invoice, "SystemEntryDate", namespace) or ""),
        gross_total=parse_decimal(_gross_total_text(invoice, namespace)),
        signature_base64=_child_text(invoice, "Hash", namespace) or None,
        position=position,
    )


def _gross_total_text(invoice: ET.Element, namespace: str) -> str | None:
    totals = invoice.find(f"{{{namespace}}}DocumentTotals")
    if totals is not None:
        value = _child_text(totals, "GrossTotal", namespace)
        if value is not None:
            return value
    node = invoice.find(f".//{{{namespace}}}GrossTotal")
    return None if node is None else clean_text(node.text)


def saft_to_records(
    source: BytesIO | Path | bytes,
    namespace: str | None = None,
) -> Sequence[DocumentRecord]:
    namespace = namespace or SETTINGS.saft_namespace
    root = read_saft_tree(source)
    invoices = list(root.iter(f"{{{namespace}}}Invoice"))
    if not invoices:
        raise DocumentExtractionError("No Invoice elements found.")
    return [invoice_to_record(invoice, idx, namespace) for idx, invoice in enumerate(invoices, start=1)]
