"""Report renderers for chain validation results."""
from __future__ import annotations

import csv
import html
import io
from typing import Sequence

from saft_checker.domain.models import ValidationOutcome
from saft_checker.domain.results import ValidationReport

FAILURE_COLUMNS = ["position", "public_id", "kind", "message"]


def failures_to_rows(failures: Sequence[ValidationOutcome]) -> list[dict[str, str]]:
    rows: list[dict[str, str]] = []
    for item in failures:
        rows.append(
            {
                "position": str(item.position),
                "public_id": item.public_id,
                "kind": item.kind.value,
                "message": item.message,
            }
        )
    return rows


def summary_rows(report: ValidationReport) -> list[tuple[str, object]]:
    return [
        ("Status", report.status.value),
        ("Processed documents", report.processed_count),
        ("Series", report.series_count),
        ("Valid documents", report.valid_count),
        ("Sequence failures", report.sequence_failure_count),
        ("Signature failures", report.signature_failure_count),
    ]


def render_csv(failures: Sequence[ValidationOutcome]) -> bytes:
    rows = failures_to_rows(failures)
    buffer = io.StringIO()
    writer = csv.DictWriter(buffer, fieldnames=FAILURE_COLUMNS)
    writer.writeheader()
    writer.writerows(rows)
    return buffer.getvalue().encode("utf-8")


def render_html(report: ValidationReport) -> str:
    summary = "".join(f"<li>{label}: {html.escape(str(value))}</li>" for label, value in summary_rows(report))
    parts = [f"<p>{html.escape(report.message)}</p>", f"<ul>{summary}</ul>"]
    rows = failures_to_rows(report.failures)
    if rows:
        header = "".join(f"<th>{col}</th>" for col in FAILURE_COLUMNS)
        body_parts = []
        for row in rows:
            body_parts.append("<tr>" + "".join(f"<td>{html.escape(value)}</td>" for value in row.values()) + "</tr>")
        parts.append(f"<table><thead><tr>{header}</tr></thead><tbody>{''.join(body_parts)}</tbody></table>")
    return "".join(parts)


def render_text(report: ValidationReport) -> str:
    lines = ["Validation Summary", "=================="]
    lines.extend(f"{label}: {value}" for label, value in summary_rows(report))
    lines.append("")
    lines.append(report.message)
    if report.failures:
        lines.append("")
        lines.append("Failed documents:")
        for outcome in report.failures:
            lines.append(f"- #{outcome.position} {outcome.public_id} [{outcome.kind.value}] {outcome.message}")
    return "\n".join(lines)
