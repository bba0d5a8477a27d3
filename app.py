"""Streamlit front-end for SAF-T chain validation."""
from __future__ import annotations

from typing import Sequence

import pandas as pd
import streamlit as st

from saft_checker import ChainValidationContext, ChainValidator, ValidateChainUseCase, open_document_repository
from saft_checker.application.dto import ValidationResponse
from saft_checker.config import SETTINGS
from saft_checker.domain.exceptions import DocumentExtractionError
from saft_checker.domain.models import DocumentRecord
from saft_checker.domain.results import ValidationReport
from saft_checker.logging.logger import Log
from saft_checker.presentation.report import failures_to_rows, render_csv, render_html, summary_rows


st.set_page_config(page_title="SAF-T Validator", layout="wide")
st.title("SAF-T File Validator")
st.caption("Checks document numbering and the signature chain of a SAF-T XML file or spreadsheet export.")
Log.configure(SETTINGS.log_level)


def records_to_dataframe(records: Sequence[DocumentRecord]) -> pd.DataFrame:
    return pd.DataFrame(
        [
            {
                "position": r.position,
                "public_id": r.public_id,
                "issue_date": r.issue_date,
                "system_entry": r.system_entry_timestamp,
                "gross_total": str(r.gross_total),
                "signature": r.signature_base64 or "",
            }
            for r in records
        ]
    )


def run_validation(source_bytes: bytes, filename: str, key_bytes: bytes | None) -> ValidationResponse:
    context = ChainValidationContext(
        repository=open_document_repository(source_bytes, filename),
        validator=ChainValidator(),
        public_key_pem=key_bytes,
    )
    return ValidateChainUseCase(context).execute()


if "result" not in st.session_state:
    st.session_state["result"] = None

col1, col2 = st.columns(2)
with col1:
    source_file = st.file_uploader("Select SAF-T file", type=["xml", "xlsx", "xls"])
with col2:
    key_file = st.file_uploader("Select public key file (optional)", type=["pem", "crt", "cer", "key"])

run_btn = st.button("Validate", disabled=not source_file)
if run_btn and source_file:
    with st.spinner("Validating..."):
        try:
            response = run_validation(source_file.read(), source_file.name, key_file.read() if key_file else None)
        except DocumentExtractionError as exc:
            st.session_state["result"] = None
            st.error(str(exc))
        else:
            st.session_state["result"] = {
                "report": response.report,
                "documents": response.documents,
                "csv": render_csv(response.report.failures),
                "html": render_html(response.report),
            }

result = st.session_state.get("result")
if result:
    report: ValidationReport = result["report"]
    if report.is_ok:
        st.success(report.message)
    else:
        st.error(report.message)

    metric_cols = st.columns(len(summary_rows(report)))
    for column, (label, value) in zip(metric_cols, summary_rows(report)):
        column.metric(label, value)

    if report.failures:
        with st.expander(f"Failed documents ({len(report.failures)})"):
            st.dataframe(pd.DataFrame(failures_to_rows(report.failures)), hide_index=True)
            st.download_button(
                "Download failures CSV",
                data=result["csv"],
                file_name="saft_failures.csv",
                mime="text/csv",
            )
            st.download_button(
                "Download report HTML",
                data=result["html"].encode("utf-8"),
                file_name="saft_report.html",
                mime="text/html",
            )

    with st.expander("Extracted documents"):
        st.dataframe(records_to_dataframe(result["documents"]), hide_index=True)
