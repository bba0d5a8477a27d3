"""Application-level DTOs for chain validation."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from saft_checker.domain.models import DocumentRecord
from saft_checker.domain.results import ValidationReport


@dataclass(slots=True, frozen=True)
class ValidationResponse:
    report: ValidationReport
    documents: Sequence[DocumentRecord]
