"""Sequence and signature chain validation for SAF-T fiscal documents."""
from saft_checker.application.use_cases import ChainValidationContext, ValidateChainUseCase
from saft_checker.domain.services import ChainValidator
from saft_checker.infrastructure.repositories.document_repositories import (
    ExcelDocumentRepository,
    SaftXmlDocumentRepository,
    open_document_repository,
)

__all__ = [
    "ChainValidationContext",
    "ChainValidator",
    "ExcelDocumentRepository",
    "SaftXmlDocumentRepository",
    "ValidateChainUseCase",
    "open_document_repository",
]
