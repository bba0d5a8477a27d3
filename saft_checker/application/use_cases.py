"""Application services orchestrating the chain validation workflow."""
from __future__ import annotations

from dataclasses import dataclass

from saft_checker.application.dto import ValidationResponse
from saft_checker.domain.repositories import DocumentRepository
from saft_checker.domain.services import ChainValidator


@dataclass(slots=True)
class ChainValidationContext:
    repository: DocumentRepository
    validator: ChainValidator
    public_key_pem: str | bytes | None = None


class ValidateChainUseCase:
    def __init__(self, context: ChainValidationContext) -> None:
        self._context = context

    def execute(self) -> ValidationResponse:
        documents = self._context.repository.list_documents()
        report = self._context.validator.validate(documents, self._context.public_key_pem)
        return ValidationResponse(report=report, documents=documents)
