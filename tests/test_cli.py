"""
Tests for the command-line interface.
"""

from pathlib import Path

import pytest
from typer.testing import CliRunner

from sheet_export.cli import app

runner = CliRunner()


class TestCli:
    """Smoke tests for the sheet-export commands."""

    @pytest.fixture
    def contacts_file(self, tmp_path, contacts_xlsx) -> Path:
        path = tmp_path / "contacts.xlsx"
        path.write_bytes(contacts_xlsx)
        return path

    def test_headers(self, contacts_file):
        result = runner.invoke(app, ["headers", "--input", str(contacts_file)])

        assert result.exit_code == 0
        for header in ["Name", "Phone", "Mobile", "City"]:
            assert header in result.output

    def test_preview(self, contacts_file):
        result = runner.invoke(
            app,
            ["preview", "-i", str(contacts_file), "-f", "City", "-q", "berlin", "-c", "Name", "-c", "City"],
        )

        assert result.exit_code == 0
        assert "Ann" in result.output
        assert "Dora" not in result.output
        assert "of 2 matching rows" in result.output

    def test_export_writes_file(self, contacts_file, tmp_path):
        out_dir = tmp_path / "out"
        result = runner.invoke(
            app,
            ["export", "-i", str(contacts_file), "-F", "csv", "-c", "Name", "-c", "City", "-o", str(out_dir)],
        )

        assert result.exit_code == 0
        written = out_dir / "contacts_export.csv"
        assert written.exists()
        assert written.read_text(encoding="utf-8").startswith("Name,City\n")

    def test_export_vcf(self, contacts_file, tmp_path):
        result = runner.invoke(
            app,
            ["export", "-i", str(contacts_file), "-F", "vcf", "-c", "Phone", "--suffix", "Work", "-o", str(tmp_path)],
        )

        assert result.exit_code == 0
        text = (tmp_path / "contacts_export.vcf").read_text(encoding="utf-8")
        assert "FN:Ann Work" in text

    def test_export_without_columns_fails(self, contacts_file, tmp_path):
        result = runner.invoke(app, ["export", "-i", str(contacts_file), "-o", str(tmp_path)])

        assert result.exit_code == 1
        assert "No export columns selected" in result.output
        assert not list(tmp_path.glob("*_export.*"))

    def test_unsupported_extension(self, tmp_path):
        path = tmp_path / "contacts.csv"
        path.write_text("Name\nAnn\n", encoding="utf-8")

        result = runner.invoke(app, ["headers", "-i", str(path)])

        assert result.exit_code == 1
        assert "Invalid file type" in result.output

    def test_version(self):
        result = runner.invoke(app, ["version"])

        assert result.exit_code == 0
        assert "0.1.0" in result.output
