import base64
from decimal import Decimal

from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import padding, rsa

from saft_checker.domain.models import DocumentRecord


def make_record(
    public_id: str,
    position: int = 1,
    signature: str | None = "c2ln",
    gross_total: str = "10.00",
    issue_date: str = "2024-01-05",
    entry: str = "2024-01-05T10:15:00",
) -> DocumentRecord:
    return DocumentRecord(
        public_id=public_id,
        issue_date=issue_date,
        system_entry_timestamp=entry,
        gross_total=Decimal(gross_total),
        signature_base64=signature,
        position=position,
    )


def sign_payload(private_key: rsa.RSAPrivateKey, payload: str) -> str:
    signature = private_key.sign(payload.encode("utf-8"), padding.PKCS1v15(), hashes.SHA1())
    return base64.b64encode(signature).decode("ascii")


SAFT_NS = "urn:OECD:StandardAuditFile-Tax:PT_1.04_01"


def invoice_xml(number: str, hash_value: str | None = "aGFzaA==", gross: str = "12.3") -> str:
    hash_element = f"<Hash>{hash_value}</Hash>" if hash_value is not None else ""
    return f"""
    <Invoice>
      <InvoiceNo>{number}</InvoiceNo>
      {hash_element}
      <InvoiceDate>2024-02-01</InvoiceDate>
      <SystemEntryDate>2024-02-01T09:30:12.345</SystemEntryDate>
      <DocumentTotals>
        <TaxPayable>2.30</TaxPayable>
        <NetTotal>10.00</NetTotal>
        <GrossTotal>{gross}</GrossTotal>
      </DocumentTotals>
    </Invoice>"""


def saft_document(*invoices: str) -> bytes:
    body = "".join(invoices)
    return (
        f'<?xml version="1.0" encoding="UTF-8"?>'
        f'<AuditFile xmlns="{SAFT_NS}"><SourceDocuments><SalesInvoices>'
        f"<NumberOfEntries>{len(invoices)}</NumberOfEntries>{body}"
        f"</SalesInvoices></SourceDocuments></AuditFile>"
    ).encode("utf-8")
