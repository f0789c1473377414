#!/usr/bin/env python3
"""
Tests for scripts/generate_report.py.
"""

import sys
from pathlib import Path

# Add project root and scripts/ to path
sys.path.insert(0, str(Path(__file__).parent.parent))
sys.path.insert(0, str(Path(__file__).parent.parent / "scripts"))

import generate_report as cli
from reporting.engine import ReportGenerationError


def test_cli_writes_report(tmp_path, capsys):
    output = tmp_path / "Oilseed_Investment_Strategy.pdf"

    assert cli.main(["--output", str(output), "--check-fixtures"]) == 0

    assert output.read_bytes().startswith(b"%PDF")
    assert f"Report saved: {output}" in capsys.readouterr().out


def test_cli_reports_failure(tmp_path, capsys, monkeypatch):
    def broken(output_path=None):
        raise ReportGenerationError("Report layout failed: bad font")

    monkeypatch.setattr(cli, "generate_report", broken)

    assert cli.main(["--output", str(tmp_path / "x.pdf")]) == 1
    out = capsys.readouterr().out
    assert "Failed to generate PDF" in out
    assert not (tmp_path / "x.pdf").exists()
