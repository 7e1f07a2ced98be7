"""Tests for the command-line interface."""

import json

import pytest

from config import ConfigurationManager
from main import collect_inputs, main
from ledger_ocr.utils.exceptions import UnsupportedFileTypeError


@pytest.fixture(autouse=True)
def fresh_config():
    ConfigurationManager.reset()
    yield
    ConfigurationManager.reset()


@pytest.fixture
def invoice_dir(tmp_path):
    folder = tmp_path / "invoices"
    folder.mkdir()
    (folder / "abc.txt").write_text(
        "ABC Traders\n15/03/2024\nRice 10 50 550\nTotal 550\n", encoding='utf-8'
    )
    (folder / "notes.md").write_text("not an invoice", encoding='utf-8')
    return folder


class TestCollectInputs:
    """Tests for input discovery."""

    def test_directory_filters_extensions(self, invoice_dir):
        assert [p.name for p in collect_inputs(str(invoice_dir))] == ["abc.txt"]

    def test_unsupported_file(self, invoice_dir):
        with pytest.raises(UnsupportedFileTypeError):
            collect_inputs(str(invoice_dir / "notes.md"))

    def test_missing_path(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            collect_inputs(str(tmp_path / "nowhere"))


class TestMain:
    """Tests for main()."""

    def test_text_invoice_to_json(self, invoice_dir, tmp_path):
        output = tmp_path / "out.json"
        code = main(["--input", str(invoice_dir / "abc.txt"), "--output", str(output), "--quiet"])

        assert code == 0
        records = json.loads(output.read_text(encoding='utf-8'))
        assert records[0]['source'] == "abc.txt"
        assert records[0]['data']['total'] == 500

    def test_directory_to_excel(self, invoice_dir, tmp_path):
        output = tmp_path / "ledger.xlsx"
        code = main(["--input", str(invoice_dir), "--output", str(output), "--quiet"])

        assert code == 0
        assert output.exists()

    def test_missing_input(self, tmp_path):
        assert main(["--input", str(tmp_path / "nowhere"), "--quiet"]) == 1

    def test_empty_directory(self, tmp_path):
        assert main(["--input", str(tmp_path), "--quiet"]) == 1

    def test_missing_config_file(self, invoice_dir, tmp_path):
        code = main([
            "--input", str(invoice_dir / "abc.txt"),
            "--config", str(tmp_path / "missing.yaml"),
            "--quiet"
        ])

        assert code == 1
