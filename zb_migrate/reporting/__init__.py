"""
Reporting Module

Contains report generators for different output formats (JSON, Markdown, Excel, text).
"""

from .base import ReportGenerator
from .json_reporter import JSONReporter
from .markdown_reporter import MarkdownReporter
from .text_reporter import HumanReadableReporter, render_migration_summary


def create_reporter(format_name: str, **kwargs) -> ReportGenerator:
    """
    Create a report generator for a format name.

    Args:
        format_name: One of "text", "json", "markdown", "excel"
        **kwargs: Passed to the text reporter

    Returns:
        ReportGenerator for the format
    """
    if format_name == "json":
        return JSONReporter()
    if format_name == "markdown":
        return MarkdownReporter()
    if format_name == "excel":
        from .excel_reporter import ExcelReporter
        return ExcelReporter()
    if format_name == "text":
        return HumanReadableReporter(**kwargs)
    raise ValueError(f"Unsupported report format: {format_name}")


__all__ = [
    'ReportGenerator',
    'JSONReporter',
    'MarkdownReporter',
    'HumanReadableReporter',
    'create_reporter',
    'render_migration_summary',
]
