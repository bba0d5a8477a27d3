"""Domain-level results for chain validation."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Sequence

from .models import ValidationOutcome


class ValidationStatus(str, Enum):
    OK = "OK"
    NOK = "NOK"


@dataclass(frozen=True)
class ValidationReport:
    status: ValidationStatus
    processed_count: int
    series_count: int
    valid_count: int
    sequence_failure_count: int
    signature_failure_count: int
    message: str
    signatures_checked: bool
    failures: Sequence[ValidationOutcome] = field(default_factory=tuple)

    @property
    def is_ok(self) -> bool:
        return self.status is ValidationStatus.OK

    @classmethod
    def fatal(cls, message: str) -> "ValidationReport":
        """Report for a run that aborted before any document was processed."""
        return cls(
            status=ValidationStatus.NOK,
            processed_count=0,
            series_count=0,
            valid_count=0,
            sequence_failure_count=0,
            signature_failure_count=0,
            message=message,
            signatures_checked=False,
            failures=tuple(),
        )
