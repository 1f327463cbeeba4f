"""
Human-readable text report generator for migration analysis results.
"""

import os
import re
import sys
from typing import Any, Dict, List, Optional

from .base import ReportGenerator
from .json_reporter import JSONReporter
from ..models import AnalysisReport, MigrationReport

ANSI_ESCAPE = re.compile(r'\x1B(?:[@-Z\\-_]|\[[0-?]*[ -/]*[@-~])')


def supports_color(stream=None) -> bool:
    """
    Auto-detect if the terminal supports color output.

    Returns:
        True if colors are supported, False otherwise
    """
    stream = stream or sys.stdout

    if os.environ.get('NO_COLOR'):
        return False

    # Check for common CI environments that support colors (independent of TTY)
    ci_with_colors = ['GITHUB_ACTIONS', 'GITLAB_CI', 'BUILDKITE']
    if any(os.environ.get(var) for var in ci_with_colors):
        return True

    if not hasattr(stream, 'isatty') or not stream.isatty():
        return False

    term = os.environ.get('TERM', '').lower()
    return 'color' in term or term in ['xterm', 'xterm-256color', 'screen']


def strip_colors(text: str) -> str:
    """Remove ANSI color codes from text."""
    return ANSI_ESCAPE.sub('', text)


class HumanReadableReporter(ReportGenerator):
    """
    Human-readable text report generator for console output.
    Uses JSONReporter internally for data structuring and includes color coding.
    """

    # ANSI color codes
    COLORS = {
        'RED': '\033[91m',
        'GREEN': '\033[92m',
        'YELLOW': '\033[93m',
        'CYAN': '\033[96m',
        'BOLD': '\033[1m',
        'DIM': '\033[2m',
        'RESET': '\033[0m'
    }

    def __init__(self, use_colors: bool = None, safe_preview_count: int = 5,
                 command_name: str = "zb-migrate"):
        """
        Initialize human-readable text reporter.

        Args:
            use_colors: Whether to use ANSI color codes. Auto-detects if None.
            safe_preview_count: Safe packages listed in the first recommendation
            command_name: Command shown in recommendations
        """
        self.use_colors = supports_color() if use_colors is None else use_colors
        self.safe_preview_count = safe_preview_count
        self.command_name = command_name
        self.json_reporter = JSONReporter(include_metadata=False)

    def generate_report(self, analysis_report: AnalysisReport, output_path: Optional[str] = None) -> str:
        """
        Generate human-readable text report from analysis results.

        Args:
            analysis_report: AnalysisReport to generate report from
            output_path: Optional path to write report to file

        Returns:
            Text report content as string
        """
        data = self.json_reporter.get_structured_data(analysis_report)
        text_content = self._build_text_report(data)

        # Files never get color codes
        if output_path:
            self.write_output(strip_colors(text_content), output_path)

        return text_content

    def get_format_name(self) -> str:
        """Get the name of the report format."""
        return "text"

    def _colorize(self, text: str, color: str) -> str:
        if not self.use_colors or color not in self.COLORS:
            return text

        return f"{self.COLORS[color]}{text}{self.COLORS['RESET']}"

    def _build_text_report(self, data: Dict[str, Any]) -> str:
        sections = [
            self._build_summary_section(data),
        ]

        if data["safe_to_migrate"]:
            sections.append(self._build_safe_section(data["safe_to_migrate"]))
        if data["risky"]:
            sections.append(self._build_risky_section(data["risky"]))
        if data["should_keep_in_source"]:
            sections.append(self._build_keep_section(data["should_keep_in_source"]))

        sections.append(self._build_recommendations_section(data))

        return "\n\n".join(sections) + "\n"

    def _build_summary_section(self, data: Dict[str, Any]) -> str:
        summary = data["summary"]
        lines = [
            self._colorize("=== Package Migration Analysis ===", 'BOLD'),
            "",
            f"Total packages analyzed: {summary['total_packages']}",
            "",
            "Summary:",
            f"  Safe to migrate:        {self._colorize(str(summary['safe']), 'GREEN')} packages",
            f"  Risky (use caution):    {self._colorize(str(summary['risky']), 'YELLOW')} packages",
            f"  Keep in Homebrew:       {self._colorize(str(summary['keep_in_source']), 'RED')} packages",
        ]
        return "\n".join(lines)

    def _build_safe_section(self, packages: List[Dict[str, Any]]) -> str:
        lines = [
            self._colorize(f"--- Safe to Migrate ({len(packages)}) ---", 'GREEN'),
            "These packages have no known issues and can be safely migrated:",
            "",
        ]
        for pkg in packages:
            lines.append(f"  {self._colorize('[OK]', 'GREEN')} {pkg['name']} @ {pkg['version']}")
        return "\n".join(lines)

    def _build_risky_section(self, packages: List[Dict[str, Any]]) -> str:
        lines = [
            self._colorize(f"--- Risky Packages ({len(packages)}) ---", 'YELLOW'),
            "These packages depend on problematic packages. Migration may work but test carefully:",
            "",
        ]
        for pkg in packages:
            lines.append(f"  {self._colorize('[!]', 'YELLOW')} {pkg['name']} @ {pkg['version']}")
            lines.append(f"      Reason: {pkg['reason']}")
            if pkg["problematic_dependencies"]:
                lines.append(f"      Problematic deps: {', '.join(pkg['problematic_dependencies'])}")
        return "\n".join(lines)

    def _build_keep_section(self, packages: List[Dict[str, Any]]) -> str:
        lines = [
            self._colorize(f"--- Keep in Homebrew ({len(packages)}) ---", 'RED'),
            "These packages are known to have issues and should remain in Homebrew:",
            "",
        ]
        for pkg in packages:
            lines.append(f"  {self._colorize('[X]', 'RED')} {pkg['name']} @ {pkg['version']}")
            lines.append(f"      Reason: {pkg['reason']}")
        return "\n".join(lines)

    def _build_recommendations_section(self, data: Dict[str, Any]) -> str:
        lines = [self._colorize("=== Recommendations ===", 'BOLD'), ""]
        safe = data["safe_to_migrate"]

        if safe:
            preview = ",".join(pkg["name"] for pkg in safe[:self.safe_preview_count])
            lines.append("1. Start by migrating safe packages:")
            lines.append(f"   {self.command_name} migrate --packages {preview}")
            if len(safe) > self.safe_preview_count:
                lines.append(f"   (showing first {self.safe_preview_count} of {len(safe)} safe packages)")
            lines.append("")

        if data["risky"]:
            lines.append("2. For risky packages, migrate one at a time and test:")
            lines.append(f"   {self.command_name} migrate --packages <package-name>")
            lines.append("   # Then test the package before proceeding")
            lines.append("")

        if data["should_keep_in_source"]:
            lines.append("3. Leave problematic packages in Homebrew:")
            lines.append("   These packages are core dependencies that many other packages rely on.")
            lines.append("   Migrating them may break other software.")

        return "\n".join(lines).rstrip()


def render_migration_summary(report: MigrationReport) -> str:
    """
    Render the summary printed after a migration run.

    Args:
        report: MigrationReport of the run

    Returns:
        Plain text summary
    """
    lines = [
        "",
        "=== Migration Summary ===",
        f"Total formulae: {report.total_formulae}",
        f"Total casks: {report.total_casks}",
        f"Successful: {len(report.successful)}",
        f"Failed: {len(report.failed)}",
        f"Skipped: {len(report.skipped)}",
    ]

    if report.failed:
        lines.append("")
        lines.append("Failed packages:")
        lines.extend(f"  {name} - {reason}" for name, reason in report.failed)

    if report.skipped:
        lines.append("")
        lines.append("Skipped packages:")
        lines.extend(f"  {name} - {reason}" for name, reason in report.skipped)

    return "\n".join(lines)
