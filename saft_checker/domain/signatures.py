"""RSA signature helpers for the SAF-T document chain.

Each document's ``Hash`` is an RSA PKCS#1 v1.5 signature (SHA-1 digest) over
``InvoiceDate;SystemEntryDate;InvoiceNo;GrossTotal;PreviousHash`` where the
gross total carries exactly two decimals and ``PreviousHash`` is the stored
signature of the previous document of the same series.
"""
from __future__ import annotations

import base64
import binascii
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from cryptography import x509
from cryptography.exceptions import InvalidSignature, UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import padding
from cryptography.hazmat.primitives.asymmetric.rsa import RSAPublicKey

from saft_checker.config import SETTINGS

from .exceptions import PublicKeyImportError
from .models import DocumentRecord

_TWO_PLACES = Decimal("0.01")

_HASH_ALGORITHMS = {
    "SHA-1": hashes.SHA1,
    "SHA-256": hashes.SHA256,
}


def format_gross_total(value: Decimal) -> str:
    return str(value.quantize(_TWO_PLACES, rounding=ROUND_HALF_UP))


def build_signature_payload(record: DocumentRecord, previous_signature: str) -> str:
    return SETTINGS.payload_separator.join(
        [
            record.issue_date,
            record.system_entry_timestamp,
            record.public_id,
            format_gross_total(record.gross_total),
            previous_signature,
        ]
    )


def load_public_key(material: str | bytes) -> RSAPublicKey:
    """Import an RSA public key from PEM (SPKI or certificate) or bare base64 DER."""
    data = material.encode("utf-8") if isinstance(material, str) else material
    data = data.strip()
    try:
        if b"-----BEGIN CERTIFICATE-----" in data:
            key = x509.load_pem_x509_certificate(data).public_key()
        elif b"-----BEGIN" in data:
            key = serialization.load_pem_public_key(data)
        else:
            der = base64.b64decode(b"".join(data.split()), validate=True)
            key = serialization.load_der_public_key(der)
    except (ValueError, TypeError, UnsupportedAlgorithm, binascii.Error) as exc:
        raise PublicKeyImportError(str(exc) or exc.__class__.__name__) from exc
    if not isinstance(key, RSAPublicKey):
        raise PublicKeyImportError(f"Expected an RSA public key, got {type(key).__name__}")
    return key


class SignatureDecodeError(ValueError):
    """Raised when a stored signature is not valid base64."""


def decode_signature(signature_base64: str) -> bytes:
    try:
        return base64.b64decode("".join(signature_base64.split()), validate=True)
    except (binascii.Error, ValueError) as exc:
        raise SignatureDecodeError(str(exc)) from exc


@dataclass(frozen=True)
class SignatureVerifier:
    """Verifies chain signatures against a single imported public key."""

    public_key: RSAPublicKey
    hash_algorithm: str = SETTINGS.hash_algorithm

    def verify(self, signature: bytes, payload: str) -> bool:
        algorithm = _HASH_ALGORITHMS[self.hash_algorithm]()
        try:
            self.public_key.verify(signature, payload.encode("utf-8"), padding.PKCS1v15(), algorithm)
        except InvalidSignature:
            return False
        return True
