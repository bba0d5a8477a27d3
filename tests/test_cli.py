from pathlib import Path

import pytest

from factories import invoice_xml, saft_document
from saft_checker.cli import EXIT_EXTRACTION_ERROR, EXIT_NOK, EXIT_OK, main


def write_saft(tmp_path: Path, *numbers: str) -> Path:
    path = tmp_path / "saft.xml"
    path.write_bytes(saft_document(*(invoice_xml(number) for number in numbers)))
    return path


def test_cli_ok_without_key(tmp_path: Path, capsys):
    path = write_saft(tmp_path, "FT A/1", "FT A/2")

    assert main([str(path)]) == EXIT_OK
    out = capsys.readouterr().out
    assert "Status: OK" in out
    assert "Signature chain not checked" in out


def test_cli_nok_writes_csv(tmp_path: Path, capsys):
    path = write_saft(tmp_path, "FT A/1", "FT A/3")
    csv_path = tmp_path / "failures.csv"

    assert main([str(path), "--csv", str(csv_path)]) == EXIT_NOK
    assert "FT A/3" in csv_path.read_text(encoding="utf-8")


def test_cli_bad_key_is_nok(tmp_path: Path, capsys):
    path = write_saft(tmp_path, "FT A/1")
    key = tmp_path / "key.pem"
    key.write_text("not a key")

    assert main([str(path), "--key", str(key)]) == EXIT_NOK
    assert "Failed to import public key" in capsys.readouterr().out


def test_cli_extraction_error(tmp_path: Path, capsys):
    path = tmp_path / "saft.xml"
    path.write_text("<broken")

    assert main([str(path)]) == EXIT_EXTRACTION_ERROR
    assert "not well-formed" in capsys.readouterr().err


def test_cli_missing_file(tmp_path: Path):
    assert main([str(tmp_path / "missing.xml")]) == EXIT_EXTRACTION_ERROR


def test_cli_rejects_unknown_log_level(tmp_path: Path):
    path = write_saft(tmp_path, "FT A/1")

    with pytest.raises(SystemExit):
        main([str(path), "--log-level", "loud"])


def test_cli_log_level_is_case_insensitive(tmp_path: Path):
    path = write_saft(tmp_path, "FT A/1")

    assert main([str(path), "--log-level", "debug"]) == EXIT_OK
