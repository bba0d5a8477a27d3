"""Exceptions raised by the SAF-T checker."""


class SaftCheckerError(Exception):
    """Base exception for the package."""


class PublicKeyImportError(SaftCheckerError):
    """Raised when public key material cannot be imported."""


class DocumentExtractionError(SaftCheckerError):
    """Raised when a source file cannot be turned into document records."""


class UnsupportedSourceError(DocumentExtractionError):
    """Raised when the source file type is not recognised."""
