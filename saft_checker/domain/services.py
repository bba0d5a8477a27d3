"""Domain services implementing the sequence and signature chain rules."""
from __future__ import annotations

from dataclasses import dataclass
from decimal import InvalidOperation
from enum import Enum
from typing import Iterable

from cryptography.hazmat.primitives.asymmetric.rsa import RSAPublicKey

from saft_checker.config import SETTINGS
from saft_checker.logging.logger import Log

from .exceptions import PublicKeyImportError
from .models import (
    DocumentRecord,
    FailureKind,
    SeriesKey,
    SeriesState,
    UnparsedId,
    ValidationOutcome,
)
from .results import ValidationReport, ValidationStatus
from .series import parse_series_key
from .signatures import (
    SignatureDecodeError,
    SignatureVerifier,
    build_signature_payload,
    decode_signature,
    load_public_key,
)

ALL_VALID_MESSAGE = "All documents are valid."
SOME_FAILED_MESSAGE = "Some documents failed validation."
NO_KEY_SUFFIX = " (Signature chain not checked: no public key provided.)"


@dataclass(frozen=True)
class SequenceVerdict:
    ok: bool
    expected: int | None = None
    previous: int | None = None


class ChainVerdictStatus(str, Enum):
    SKIPPED = "skipped"
    OK = "ok"
    FAILED = "failed"


@dataclass(frozen=True)
class ChainVerdict:
    status: ChainVerdictStatus
    kind: FailureKind | None = None
    reason: str = ""

    @property
    def failed(self) -> bool:
        return self.status is ChainVerdictStatus.FAILED


_SKIPPED = ChainVerdict(ChainVerdictStatus.SKIPPED)
_VERIFIED = ChainVerdict(ChainVerdictStatus.OK)


class SequenceTracker:
    """Tracks the last observed sequence number of every series."""

    def __init__(self, states: dict[str, SeriesState]) -> None:
        self._states = states

    def check(self, key: SeriesKey) -> SequenceVerdict:
        state = self._states.setdefault(key.prefix, SeriesState())
        previous = state.last_sequence_number
        # Tracks the observed number, not the expected one.
        state.last_sequence_number = key.number
        if previous is None or key.number == previous + 1:
            return SequenceVerdict(ok=True, previous=previous)
        return SequenceVerdict(ok=False, expected=previous + 1, previous=previous)


class ChainVerifier:
    """Verifies each document's signature against the previous one of its series."""

    def __init__(self, states: dict[str, SeriesState], verifier: SignatureVerifier | None) -> None:
        self._states = states
        self._verifier = verifier

    @property
    def enabled(self) -> bool:
        return self._verifier is not None

    def verify(self, key: SeriesKey, record: DocumentRecord) -> ChainVerdict:
        state = self._states.setdefault(key.prefix, SeriesState())
        previous_signature = state.last_signature
        # The link advances regardless of the verdict.
        state.last_signature = record.signature_base64 or ""

        if self._verifier is None:
            return _SKIPPED
        if not record.signature_base64:
            return ChainVerdict(ChainVerdictStatus.FAILED, FailureKind.HASH_MISSING, "Missing signature (Hash).")
        if previous_signature is None:
            return _SKIPPED
        return self._verify_link(record, previous_signature)

    def _verify_link(self, record: DocumentRecord, previous_signature: str) -> ChainVerdict:
        try:
            payload = build_signature_payload(record, previous_signature)
        except InvalidOperation:
            return ChainVerdict(
                ChainVerdictStatus.FAILED,
                FailureKind.SIGNATURE,
                f"Invalid gross total: {record.gross_total}",
            )
        try:
            signature = decode_signature(record.signature_base64 or "")
        except SignatureDecodeError as exc:
            return ChainVerdict(
                ChainVerdictStatus.FAILED,
                FailureKind.SIGNATURE,
                f"Failed to decode base64 signature: {exc}",
            )
        try:
            valid = self._verifier.verify(signature, payload)
        except ValueError as exc:
            return ChainVerdict(
                ChainVerdictStatus.FAILED,
                FailureKind.SIGNATURE,
                f"Signature verification error: {exc}",
            )
        if not valid:
            return ChainVerdict(
                ChainVerdictStatus.FAILED,
                FailureKind.SIGNATURE,
                f"Signature verification failed. String: '{payload}'. Hash: '{record.signature_base64}'",
            )
        return _VERIFIED


class ValidationAggregator:
    """Folds per-document verdicts into a ValidationReport."""

    def __init__(self, signatures_checked: bool) -> None:
        self._signatures_checked = signatures_checked
        self._processed = 0
        self._valid = 0
        self._sequence_failures = 0
        self._signature_failures = 0
        self._prefixes: set[str] = set()
        self._failures: list[ValidationOutcome] = []

    def add_unparsed(self, record: DocumentRecord) -> None:
        self._processed += 1
        Log.debug(f"Document {record.position} '{record.public_id}' has no series structure; skipped")

    def add(
        self,
        record: DocumentRecord,
        key: SeriesKey,
        sequence: SequenceVerdict,
        chain: ChainVerdict,
    ) -> None:
        self._processed += 1
        self._prefixes.add(key.prefix)

        if not sequence.ok:
            self._sequence_failures += 1
            self._append(
                ValidationOutcome(
                    kind=FailureKind.SEQUENCE,
                    position=record.position,
                    public_id=record.public_id,
                    message=(
                        f"Non-sequential InvoiceNo in series '{key.prefix}': "
                        f"{sequence.previous} followed by {key.number} (expected {sequence.expected})"
                    ),
                    expected=sequence.expected,
                    actual=key.number,
                )
            )
        if chain.failed:
            self._signature_failures += 1
            self._append(
                ValidationOutcome(
                    kind=chain.kind or FailureKind.SIGNATURE,
                    position=record.position,
                    public_id=record.public_id,
                    message=chain.reason,
                )
            )
        if sequence.ok and not chain.failed:
            self._valid += 1

    def _append(self, outcome: ValidationOutcome) -> None:
        Log.debug(f"Document {outcome.position} '{outcome.public_id}' {outcome.kind.value}: {outcome.message}")
        self._failures.append(outcome)

    def build_report(self) -> ValidationReport:
        failed = self._sequence_failures > 0 or self._signature_failures > 0
        status = ValidationStatus.NOK if failed else ValidationStatus.OK
        message = SOME_FAILED_MESSAGE if failed else ALL_VALID_MESSAGE
        if not self._signatures_checked:
            message += NO_KEY_SUFFIX
        return ValidationReport(
            status=status,
            processed_count=self._processed,
            series_count=len(self._prefixes),
            valid_count=self._valid,
            sequence_failure_count=self._sequence_failures,
            signature_failure_count=self._signature_failures,
            message=message,
            signatures_checked=self._signatures_checked,
            failures=tuple(self._failures),
        )


class ChainValidator:
    """Runs the single forward pass over a document sequence.

    All per-series state lives in the run started by :meth:`validate`, so one
    validator can be reused and re-running the same input gives the same
    report.
    """

    def __init__(self, hash_algorithm: str | None = None) -> None:
        self._hash_algorithm = hash_algorithm or SETTINGS.hash_algorithm

    def validate(
        self,
        records: Iterable[DocumentRecord],
        public_key: str | bytes | RSAPublicKey | None = None,
    ) -> ValidationReport:
        verifier: SignatureVerifier | None = None
        if public_key is not None:
            try:
                rsa_key = public_key if isinstance(public_key, RSAPublicKey) else load_public_key(public_key)
            except PublicKeyImportError as exc:
                Log.error(f"Public key import failed: {exc}")
                return ValidationReport.fatal(f"Failed to import public key: {exc}")
            verifier = SignatureVerifier(rsa_key, hash_algorithm=self._hash_algorithm)

        states: dict[str, SeriesState] = {}
        tracker = SequenceTracker(states)
        chain = ChainVerifier(states, verifier)
        aggregator = ValidationAggregator(signatures_checked=chain.enabled)

        if not chain.enabled:
            Log.warning("No public key supplied; signature chain will not be checked")
        Log.info(f"Validating document chain (signatures {'on' if chain.enabled else 'off'})")
        for record in records:
            key = parse_series_key(record.public_id)
            if isinstance(key, UnparsedId):
                aggregator.add_unparsed(record)
                continue
            sequence_verdict = tracker.check(key)
            chain_verdict = chain.verify(key, record)
            aggregator.add(record, key, sequence_verdict, chain_verdict)

        report = aggregator.build_report()
        Log.info(
            f"Validation finished: status={report.status.value} processed={report.processed_count} "
            f"series={report.series_count} valid={report.valid_count} "
            f"sequence_failures={report.sequence_failure_count} "
            f"signature_failures={report.signature_failure_count}"
        )
        return report
