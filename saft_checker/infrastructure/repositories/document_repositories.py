"""File-backed repositories for fiscal documents."""
from __future__ import annotations

from io import BytesIO
from pathlib import Path
from typing import Sequence

from saft_checker.domain.exceptions import UnsupportedSourceError
from saft_checker.domain.models import DocumentRecord
from saft_checker.domain.repositories import DocumentRepository
from saft_checker.infrastructure.parsing.excel import excel_to_records
from saft_checker.infrastructure.parsing.saft_xml import saft_to_records
from saft_checker.infrastructure.parsing.utils import ensure_bytes

XML_SUFFIXES = {".xml"}
EXCEL_SUFFIXES = {".xlsx", ".xls"}


class SaftXmlDocumentRepository(DocumentRepository):
    def __init__(self, source: BytesIO | Path | bytes) -> None:
        self._source = ensure_bytes(source)

    def list_documents(self) -> Sequence[DocumentRecord]:
        return saft_to_records(self._source)


class ExcelDocumentRepository(DocumentRepository):
    def __init__(self, source: BytesIO | Path | bytes) -> None:
        self._source = ensure_bytes(source)

    def list_documents(self) -> Sequence[DocumentRecord]:
        return excel_to_records(self._source)


def open_document_repository(source: BytesIO | Path | bytes, filename: str | None = None) -> DocumentRepository:
    """Pick the extraction adapter from the file extension."""
    if filename is None:
        if not isinstance(source, Path):
            raise UnsupportedSourceError("A file name is required to detect the source format")
        filename = source.name
    suffix = Path(filename).suffix.lower()
    if suffix in XML_SUFFIXES:
        return SaftXmlDocumentRepository(source)
    if suffix in EXCEL_SUFFIXES:
        return ExcelDocumentRepository(source)
    raise UnsupportedSourceError(f"Unsupported file type '{suffix or filename}'; expected .xml, .xlsx or .xls")
