"""
Markdown report generator for migration analysis results.
"""

from typing import Any, Dict, List, Optional

from .base import ReportGenerator
from .json_reporter import JSONReporter
from ..models import AnalysisReport


class MarkdownReporter(ReportGenerator):
    """
    Markdown report generator that creates human-readable reports.
    Uses JSONReporter internally for data structuring.
    """

    def __init__(self, include_metadata: bool = True):
        """
        Initialize Markdown reporter.

        Args:
            include_metadata: Whether to include metadata section
        """
        self.include_metadata = include_metadata
        self.json_reporter = JSONReporter(include_metadata=include_metadata)

    def generate_report(self, analysis_report: AnalysisReport, output_path: Optional[str] = None) -> str:
        """
        Generate Markdown report from analysis results.

        Args:
            analysis_report: AnalysisReport to generate report from
            output_path: Optional path to write report to file

        Returns:
            Markdown report content as string
        """
        data = self.json_reporter.get_structured_data(analysis_report)
        markdown_content = self._build_markdown_report(data)

        if output_path:
            self.write_output(markdown_content, output_path)

        return markdown_content

    def get_format_name(self) -> str:
        """Get the name of the report format."""
        return "markdown"

    def _build_markdown_report(self, data: Dict[str, Any]) -> str:
        sections = [self._build_title_section(data)]

        if self.include_metadata and "metadata" in data:
            sections.append(self._build_metadata_section(data["metadata"]))

        sections.append(self._build_summary_section(data["summary"]))
        sections.append(self._build_package_table("Safe to Migrate", data["safe_to_migrate"], show_deps=False))
        sections.append(self._build_package_table("Risky Packages", data["risky"], show_deps=True))
        sections.append(self._build_package_table("Keep in Homebrew", data["should_keep_in_source"], show_deps=False))

        return "\n\n".join(sections) + "\n"

    def _build_title_section(self, data: Dict[str, Any]) -> str:
        summary = data["summary"]
        return (
            "# Package Migration Analysis\n\n"
            f"**{summary['safe']} safe, {summary['risky']} risky and "
            f"{summary['keep_in_source']} to keep in Homebrew out of "
            f"{summary['total_packages']} packages.**"
        )

    def _build_metadata_section(self, metadata: Dict[str, Any]) -> str:
        return f"""## Report Information

- **Generated:** {metadata['generated_at']}
- **Generator:** {metadata['generator']} v{metadata['version']}"""

    def _build_summary_section(self, summary: Dict[str, Any]) -> str:
        return f"""## Summary

| Metric | Value |
|--------|-------|
| **Total Packages** | {summary['total_packages']} |
| **Safe to Migrate** | {summary['safe']} ({summary['safe_rate']}%) |
| **Risky (direct)** | {summary['risky_direct']} |
| **Risky (transitive)** | {summary['risky_transitive']} |
| **Keep in Homebrew** | {summary['keep_in_source']} |"""

    def _build_package_table(self, title: str, packages: List[Dict[str, Any]], show_deps: bool) -> str:
        heading = f"## {title} ({len(packages)})"
        if not packages:
            return f"{heading}\n\n_None._"

        if show_deps:
            rows = ["| Package | Version | Reason | Problematic Dependencies |",
                    "|---------|---------|--------|--------------------------|"]
            for pkg in packages:
                deps = ", ".join(f"`{d}`" for d in pkg["problematic_dependencies"])
                rows.append(f"| `{pkg['name']}` | {pkg['version']} | {pkg['reason']} | {deps} |")
        else:
            rows = ["| Package | Version | Reason |",
                    "|---------|---------|--------|"]
            for pkg in packages:
                rows.append(f"| `{pkg['name']}` | {pkg['version']} | {pkg['reason']} |")

        return heading + "\n\n" + "\n".join(rows)
