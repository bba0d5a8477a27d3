"""Domain models for SAF-T document chain validation.

These dataclasses capture the canonical, format-agnostic shape of a fiscal
document once it has been extracted from XML or a spreadsheet.
"""
from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum


@dataclass(frozen=True)
class DocumentRecord:
    """Normalized fiscal document as produced by an extraction adapter."""

    public_id: str
    issue_date: str
    system_entry_timestamp: str
    gross_total: Decimal
    signature_base64: str | None
    position: int


@dataclass(frozen=True)
class SeriesKey:
    """Series prefix and sequence number parsed from a public id."""

    prefix: str
    number: int


class FailureKind(str, Enum):
    SEQUENCE = "sequence-failure"
    SIGNATURE = "signature-failure"
    HASH_MISSING = "hash-missing"


@dataclass(frozen=True)
class ValidationOutcome:
    """Represents one failed check for one document."""

    kind: FailureKind
    position: int
    public_id: str
    message: str
    expected: int | None = None
    actual: int | None = None


@dataclass
class SeriesState:
    """Per-prefix state owned by a single validation run."""

    last_sequence_number: int | None = None
    last_signature: str | None = None


@dataclass(frozen=True)
class UnparsedId:
    """Public id that does not carry a ``<prefix>/<number>`` structure."""

    public_id: str
