from typing import Callable, Sequence

import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa

from factories import make_record, sign_payload
from saft_checker.domain.models import DocumentRecord
from saft_checker.domain.signatures import build_signature_payload


@pytest.fixture(scope="session")
def private_key() -> rsa.RSAPrivateKey:
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="session")
def public_key_pem(private_key: rsa.RSAPrivateKey) -> bytes:
    return private_key.public_key().public_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    )


@pytest.fixture
def signed_chain(private_key: rsa.RSAPrivateKey) -> Callable[[Sequence[str]], list[DocumentRecord]]:
    """Build correctly chained records; the first of each series signs over an empty hash."""

    def build(public_ids: Sequence[str]) -> list[DocumentRecord]:
        previous: dict[str, str] = {}
        records: list[DocumentRecord] = []
        for position, public_id in enumerate(public_ids, start=1):
            prefix = public_id.rsplit("/", 1)[0]
            total = f"{position}.5"
            unsigned = make_record(public_id, position=position, signature=None, gross_total=total)
            signature = sign_payload(private_key, build_signature_payload(unsigned, previous.get(prefix, "")))
            previous[prefix] = signature
            records.append(make_record(public_id, position=position, signature=signature, gross_total=total))
        return records

    return build
