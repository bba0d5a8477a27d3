"""Command-line entrypoint for SAF-T chain validation."""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

from saft_checker.application.use_cases import ChainValidationContext, ValidateChainUseCase
from saft_checker.config import SETTINGS
from saft_checker.domain.exceptions import DocumentExtractionError
from saft_checker.domain.services import ChainValidator
from saft_checker.infrastructure.repositories.document_repositories import open_document_repository
from saft_checker.logging.logger import Log
from saft_checker.presentation.report import render_csv, render_text

EXIT_OK = 0
EXIT_NOK = 1
EXIT_EXTRACTION_ERROR = 2


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Validate the sequence and signature chain of a SAF-T file")
    parser.add_argument("source", type=Path, help="Path to a SAF-T XML file or a .xlsx/.xls export")
    parser.add_argument("--key", type=Path, help="PEM public key used to verify the signature chain")
    parser.add_argument("--csv", type=Path, help="Write the failed documents to this CSV file")
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=SETTINGS.log_level,
        help="Logging level",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv if argv is not None else sys.argv[1:])
    Log.configure(args.log_level)

    try:
        public_key_pem = args.key.read_bytes() if args.key else None
        repository = open_document_repository(args.source)
        context = ChainValidationContext(
            repository=repository,
            validator=ChainValidator(),
            public_key_pem=public_key_pem,
        )
        response = ValidateChainUseCase(context).execute()
    except (DocumentExtractionError, OSError) as exc:
        Log.error(f"Could not read {args.source}: {exc}")
        print(f"Error: {exc}", file=sys.stderr)
        return EXIT_EXTRACTION_ERROR

    report = response.report
    print(render_text(report))
    if args.csv:
        args.csv.write_bytes(render_csv(report.failures))
    return EXIT_OK if report.is_ok else EXIT_NOK


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
