"""
JSON report generator for migration analysis results.
"""

import json
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from .base import ReportGenerator
from ..models import AnalysisReport


class JSONReporter(ReportGenerator):
    """
    JSON report generator that serves as the foundation for all other report formats.
    Generates structured JSON output with migration analysis results.
    """

    def __init__(self, include_metadata: bool = True, pretty_print: bool = True):
        """
        Initialize JSON reporter.

        Args:
            include_metadata: Whether to include metadata like timestamps
            pretty_print: Whether to format JSON with indentation
        """
        self.include_metadata = include_metadata
        self.pretty_print = pretty_print

    def generate_report(self, analysis_report: AnalysisReport, output_path: Optional[str] = None) -> str:
        """
        Generate JSON report from analysis results.

        Args:
            analysis_report: AnalysisReport to generate report from
            output_path: Optional path to write report to file

        Returns:
            JSON report content as string
        """
        report_data = self._build_report_structure(analysis_report)

        if self.pretty_print:
            json_content = json.dumps(report_data, indent=2, ensure_ascii=False)
        else:
            json_content = json.dumps(report_data, ensure_ascii=False)

        if output_path:
            self.write_output(json_content, output_path)

        return json_content

    def get_format_name(self) -> str:
        """Get the name of the report format."""
        return "json"

    def get_structured_data(self, analysis_report: AnalysisReport) -> Dict[str, Any]:
        """
        Get structured data without converting to JSON string.
        Used by other reporters that need the data structure.

        Args:
            analysis_report: Analysis results to structure

        Returns:
            Dictionary containing structured report data
        """
        return self._build_report_structure(analysis_report)

    def _build_report_structure(self, analysis_report: AnalysisReport) -> Dict[str, Any]:
        report = analysis_report.to_dict()
        report["summary"] = self._build_summary(analysis_report)

        if self.include_metadata:
            report["metadata"] = self._build_metadata()

        return report

    def _build_summary(self, analysis_report: AnalysisReport) -> Dict[str, Any]:
        """Build summary section of the report."""
        total = analysis_report.total_packages
        safe = len(analysis_report.safe_to_migrate)
        risky = len(analysis_report.risky)
        keep = len(analysis_report.should_keep_in_source)

        direct = sum(1 for a in analysis_report.risky if a.match and a.match.value == "direct")

        return {
            "total_packages": total,
            "safe": safe,
            "risky": risky,
            "keep_in_source": keep,
            "risky_direct": direct,
            "risky_transitive": risky - direct,
            "safe_rate": round((safe / total * 100) if total > 0 else 0, 2),
            "has_issues": risky > 0 or keep > 0,
        }

    def _build_metadata(self) -> Dict[str, Any]:
        """Build metadata section of the report."""
        from ..version import TOOL_NAME, get_version

        return {
            "generated_at": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "generator": TOOL_NAME,
            "version": get_version(),
            "report_format": self.get_format_name(),
        }
