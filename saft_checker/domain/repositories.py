"""Repository interfaces anchoring the domain layer."""
from __future__ import annotations

from typing import Protocol, Sequence

from .models import DocumentRecord


class DocumentRepository(Protocol):
    """Provides document records in the source's native document order."""

    def list_documents(self) -> Sequence[DocumentRecord]:
        ...
