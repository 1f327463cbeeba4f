#!/usr/bin/env python3
"""Tests for analysis report generators."""

import json

import pytest
from openpyxl import load_workbook

from conftest import make_package
from zb_migrate.analysis import classify_packages
from zb_migrate.exceptions import ReportGenerationError
from zb_migrate.models import MigrationReport
from zb_migrate.reporting import (
    HumanReadableReporter,
    JSONReporter,
    MarkdownReporter,
    create_reporter,
    render_migration_summary,
)
from zb_migrate.reporting.excel_reporter import ExcelReporter
from zb_migrate.reporting.text_reporter import strip_colors, supports_color


@pytest.fixture
def analysis_report():
    packages = [
        make_package("openssl", version="3.2.0"),
        make_package("curl", ["openssl"], version="8.5.0"),
        make_package("git", ["curl"], version="2.43.0"),
        make_package("jq", version="1.7.1"),
    ]
    return classify_packages(packages, {"openssl"})


class TestJSONReporter:
    """Test JSONReporter output."""

    def test_structure(self, analysis_report) -> None:
        """Test buckets, summary and metadata."""
        data = json.loads(JSONReporter().generate_report(analysis_report))

        assert [p["name"] for p in data["risky"]] == ["curl", "git"]
        assert data["risky"][0]["risk"] == "risky"
        assert data["risky"][0]["match"] == "direct"
        assert data["risky"][1]["match"] == "transitive"
        assert data["summary"] == {
            "total_packages": 4,
            "safe": 1,
            "risky": 2,
            "keep_in_source": 1,
            "risky_direct": 1,
            "risky_transitive": 1,
            "safe_rate": 25.0,
            "has_issues": True,
        }
        assert data["metadata"]["generator"] == "zb-migrate"
        assert data["metadata"]["generated_at"].endswith("Z")

    def test_without_metadata(self, analysis_report) -> None:
        """Test metadata can be left out."""
        data = json.loads(JSONReporter(include_metadata=False).generate_report(analysis_report))

        assert "metadata" not in data

    def test_writes_file(self, analysis_report, tmp_path) -> None:
        """Test output is written when a path is given."""
        path = tmp_path / "report.json"

        content = JSONReporter().generate_report(analysis_report, output_path=str(path))

        assert path.read_text(encoding="utf-8") == content

    def test_unwritable_path_raises(self, analysis_report, tmp_path) -> None:
        """Test write failures become ReportGenerationError."""
        with pytest.raises(ReportGenerationError):
            JSONReporter().generate_report(analysis_report, output_path=str(tmp_path / "missing" / "r.json"))


class TestHumanReadableReporter:
    """Test the console summary."""

    def test_sections(self, analysis_report) -> None:
        """Test headings, row markers and recommendations."""
        text = HumanReadableReporter(use_colors=False).generate_report(analysis_report)

        assert "=== Package Migration Analysis ===" in text
        assert "Total packages analyzed: 4" in text
        assert "--- Safe to Migrate (1) ---" in text
        assert "  [OK] jq @ 1.7.1" in text
        assert "  [!] curl @ 8.5.0" in text
        assert "      Problematic deps: openssl" in text
        assert "  [X] openssl @ 3.2.0" in text
        assert "   zb-migrate migrate --packages jq" in text
        assert "\x1b[" not in text

    def test_colors(self, analysis_report) -> None:
        """Test ANSI colors are applied when enabled and stripped for files."""
        text = HumanReadableReporter(use_colors=True).generate_report(analysis_report)

        assert "\x1b[92m" in text
        assert "\x1b[" not in strip_colors(text)

    def test_file_output_has_no_colors(self, analysis_report, tmp_path) -> None:
        """Test that files never receive escape codes."""
        path = tmp_path / "report.txt"

        HumanReadableReporter(use_colors=True).generate_report(analysis_report, output_path=str(path))

        assert "\x1b[" not in path.read_text(encoding="utf-8")

    def test_safe_preview_is_limited(self) -> None:
        """Test only the first safe packages are suggested."""
        report = classify_packages([make_package(f"p{i}") for i in range(7)], set())

        text = HumanReadableReporter(use_colors=False, safe_preview_count=3).generate_report(report)

        assert "migrate --packages p0,p1,p2\n" in text
        assert "(showing first 3 of 7 safe packages)" in text

    def test_supports_color_respects_no_color(self, monkeypatch) -> None:
        """Test NO_COLOR disables colors."""
        monkeypatch.setenv("NO_COLOR", "1")

        assert supports_color() is False


class TestMarkdownReporter:
    """Test MarkdownReporter output."""

    def test_tables(self, analysis_report) -> None:
        """Test summary and package tables."""
        text = MarkdownReporter(include_metadata=False).generate_report(analysis_report)

        assert text.startswith("# Package Migration Analysis")
        assert "| **Total Packages** | 4 |" in text
        assert "## Risky Packages (2)" in text
        assert "| `curl` | 8.5.0 | Depends on 1 problematic package(s) | `openssl` |" in text
        assert "## Report Information" not in text

    def test_empty_bucket(self) -> None:
        """Test empty buckets render a placeholder."""
        text = MarkdownReporter().generate_report(classify_packages([make_package("jq")], set()))

        assert "## Risky Packages (0)\n\n_None._" in text


class TestExcelReporter:
    """Test ExcelReporter workbooks."""

    def test_workbook_sheets(self, analysis_report, tmp_path) -> None:
        """Test the saved workbook has a summary and one sheet per verdict."""
        path = tmp_path / "report.xlsx"

        ExcelReporter().generate_report(analysis_report, output_path=str(path))

        workbook = load_workbook(str(path))
        assert workbook.sheetnames == ["Summary", "Safe", "Risky", "Keep in Homebrew"]
        risky = workbook["Risky"]
        assert risky["A2"].value == "curl"
        assert risky["D2"].value == "direct"
        assert risky["E3"].value == "openssl"

    def test_in_memory(self, analysis_report) -> None:
        """Test generation without a path reports the workbook size."""
        message = ExcelReporter().generate_report(analysis_report)

        assert message.startswith("Excel workbook generated")


class TestFactoryAndSummary:
    """Test create_reporter and render_migration_summary."""

    @pytest.mark.parametrize("format_name, reporter_type", [
        ("json", JSONReporter),
        ("markdown", MarkdownReporter),
        ("text", HumanReadableReporter),
        ("excel", ExcelReporter),
    ])
    def test_create_reporter(self, format_name: str, reporter_type) -> None:
        """Test each supported format maps to its reporter."""
        assert isinstance(create_reporter(format_name), reporter_type)

    def test_unknown_format(self) -> None:
        """Test unknown formats are rejected."""
        with pytest.raises(ValueError):
            create_reporter("pdf")

    def test_migration_summary(self) -> None:
        """Test counts and failure details."""
        report = MigrationReport(
            total_formulae=3,
            total_casks=1,
            successful=["jq"],
            failed=[("git", "no bottle")],
            skipped=[("firefox", "Casks not yet supported")],
        )

        text = render_migration_summary(report)

        assert "=== Migration Summary ===" in text
        assert "Successful: 1" in text
        assert "  git - no bottle" in text
        assert "  firefox - Casks not yet supported" in text
