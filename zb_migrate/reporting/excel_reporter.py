"""
Excel report generator for migration analysis results.
"""

import io
from typing import Any, Dict, List, Optional

from openpyxl import Workbook
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side

from .base import ReportGenerator
from .json_reporter import JSONReporter
from ..exceptions import ReportGenerationError
from ..models import AnalysisReport


class ExcelReporter(ReportGenerator):
    """
    Excel report generator with a summary sheet and one sheet per verdict.
    Uses JSONReporter internally for data structuring.
    """

    SHEETS = (
        ("Safe", "safe_to_migrate"),
        ("Risky", "risky"),
        ("Keep in Homebrew", "should_keep_in_source"),
    )

    def __init__(self):
        self.json_reporter = JSONReporter(include_metadata=True)

        # Define styles
        self.header_font = Font(bold=True, color="FFFFFF")
        self.header_fill = PatternFill(start_color="366092", end_color="366092", fill_type="solid")
        self.fills = {
            "safe": PatternFill(start_color="C6EFCE", end_color="C6EFCE", fill_type="solid"),
            "risky": PatternFill(start_color="FFEB9C", end_color="FFEB9C", fill_type="solid"),
            "keep_in_source": PatternFill(start_color="FFC7CE", end_color="FFC7CE", fill_type="solid"),
        }
        self.center_alignment = Alignment(horizontal="center", vertical="center")
        self.border = Border(
            left=Side(style="thin"),
            right=Side(style="thin"),
            top=Side(style="thin"),
            bottom=Side(style="thin")
        )

    def generate_report(self, analysis_report: AnalysisReport, output_path: Optional[str] = None) -> str:
        """
        Generate Excel report from analysis results.

        Args:
            analysis_report: AnalysisReport to generate report from
            output_path: Optional path to write report to file

        Returns:
            Description of where the workbook went
        """
        data = self.json_reporter.get_structured_data(analysis_report)
        workbook = self.create_workbook(data)

        if output_path:
            try:
                workbook.save(output_path)
            except OSError as e:
                raise ReportGenerationError(str(e), self.get_format_name(), output_path) from e
            return f"Excel report saved to {output_path}"

        buffer = io.BytesIO()
        workbook.save(buffer)
        return f"Excel workbook generated ({len(buffer.getvalue())} bytes)"

    def get_format_name(self) -> str:
        """Get the name of the report format."""
        return "excel"

    def create_workbook(self, data: Dict[str, Any]) -> Workbook:
        """
        Create complete Excel workbook from structured data.

        Args:
            data: Structured report data from JSON reporter

        Returns:
            Configured Excel workbook
        """
        wb = Workbook()
        wb.remove(wb.active)

        self._create_summary_sheet(wb, data)
        for title, key in self.SHEETS:
            self._create_packages_sheet(wb, title, data[key])

        wb.active = wb["Summary"]
        return wb

    def _create_summary_sheet(self, workbook: Workbook, data: Dict[str, Any]) -> None:
        ws = workbook.create_sheet("Summary")
        summary = data["summary"]

        ws["A1"] = "Package Migration Analysis"
        ws["A1"].font = Font(size=16, bold=True)
        ws.merge_cells("A1:C1")

        current_row = 3
        if "metadata" in data:
            metadata = data["metadata"]
            ws[f"A{current_row}"] = "Generated:"
            ws[f"B{current_row}"] = metadata["generated_at"]
            current_row += 1
            ws[f"A{current_row}"] = "Generator:"
            ws[f"B{current_row}"] = f"{metadata['generator']} v{metadata['version']}"
            current_row += 2

        headers = ["Verdict", "Count"]
        self._write_header_row(ws, current_row, headers)
        current_row += 1

        rows = [
            ("Safe to migrate", summary["safe"], "safe"),
            ("Risky", summary["risky"], "risky"),
            ("Keep in Homebrew", summary["keep_in_source"], "keep_in_source"),
            ("Total", summary["total_packages"], None),
        ]
        for label, count, fill_key in rows:
            label_cell = ws.cell(row=current_row, column=1, value=label)
            count_cell = ws.cell(row=current_row, column=2, value=count)
            count_cell.alignment = self.center_alignment
            for cell in (label_cell, count_cell):
                cell.border = self.border
                if fill_key:
                    cell.fill = self.fills[fill_key]
            current_row += 1

        ws.column_dimensions["A"].width = 22
        ws.column_dimensions["B"].width = 28

    def _create_packages_sheet(self, workbook: Workbook, title: str, packages: List[Dict[str, Any]]) -> None:
        ws = workbook.create_sheet(title)
        headers = ["Package", "Version", "Reason", "Match", "Problematic Dependencies"]
        self._write_header_row(ws, 1, headers)

        for row, pkg in enumerate(packages, 2):
            values = [
                pkg["name"],
                pkg["version"],
                pkg["reason"],
                pkg["match"] or "",
                ", ".join(pkg["problematic_dependencies"]),
            ]
            for col, value in enumerate(values, 1):
                cell = ws.cell(row=row, column=col, value=value)
                cell.border = self.border
                cell.fill = self.fills[pkg["risk"]]

        for column, width in zip("ABCDE", (28, 14, 60, 12, 40)):
            ws.column_dimensions[column].width = width

    def _write_header_row(self, ws, row: int, headers: List[str]) -> None:
        for col, header in enumerate(headers, 1):
            cell = ws.cell(row=row, column=col, value=header)
            cell.font = self.header_font
            cell.fill = self.header_fill
            cell.alignment = self.center_alignment
            cell.border = self.border
