import csv
import io

from factories import make_record
from saft_checker.domain.results import ValidationReport
from saft_checker.domain.services import ChainValidator
from saft_checker.presentation.report import failures_to_rows, render_csv, render_html, render_text


def failing_report() -> ValidationReport:
    return ChainValidator().validate([make_record("A/1", position=1), make_record("A/<3>", position=2), make_record("A/5", position=3)])


def test_failures_to_rows():
    rows = failures_to_rows(failing_report().failures)

    assert rows == [
        {
            "position": "3",
            "public_id": "A/5",
            "kind": "sequence-failure",
            "message": "Non-sequential InvoiceNo in series 'A': 1 followed by 5 (expected 2)",
        }
    ]


def test_render_csv_has_header_even_without_failures():
    content = render_csv(()).decode("utf-8")

    assert content.strip() == "position,public_id,kind,message"


def test_render_csv_rows():
    reader = csv.DictReader(io.StringIO(render_csv(failing_report().failures).decode("utf-8")))

    assert [row["public_id"] for row in reader] == ["A/5"]


def test_render_html_escapes_values():
    report = ChainValidator().validate([make_record("<b>/1", position=1), make_record("<b>/3", position=2)])

    rendered = render_html(report)

    assert "<table>" in rendered
    assert "&lt;b&gt;/3" in rendered
    assert "<b>/3" not in rendered


def test_render_text_summary():
    text = render_text(failing_report())

    assert "Status: NOK" in text
    assert "Processed documents: 3" in text
    assert "Series: 1" in text
    assert "- #3 A/5 [sequence-failure]" in text
