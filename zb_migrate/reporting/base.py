"""
Base report generator interface.
"""

from abc import ABC, abstractmethod
from typing import Optional

from ..exceptions import ReportGenerationError
from ..models import AnalysisReport


class ReportGenerator(ABC):
    """
    Renders an AnalysisReport in one output format.

    Subclasses return the rendered content and, when given a path, also
    write it there through ``write_output``.
    """

    @abstractmethod
    def generate_report(self, analysis_report: AnalysisReport, output_path: Optional[str] = None) -> str:
        """
        Render the analysis report.

        Args:
            analysis_report: Classified packages to render
            output_path: Optional file to write the rendering to

        Returns:
            Rendered report, or a short description for binary formats
        """

    @abstractmethod
    def get_format_name(self) -> str:
        """Name used on the command line for this format."""

    def write_output(self, content: str, output_path: str) -> None:
        """Write text content, wrapping I/O failures in ReportGenerationError."""
        try:
            with open(output_path, 'w', encoding='utf-8') as f:
                f.write(content)
        except OSError as e:
            raise ReportGenerationError(str(e), self.get_format_name(), output_path) from e
