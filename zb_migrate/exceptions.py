"""
Custom exceptions for the Zerobrew migration tool.
"""


class ZbMigrateError(Exception):
    """Base exception class for all zb-migrate errors."""
    pass


class PackageManagerError(ZbMigrateError):
    """Raised when the source package manager cannot be queried."""

    def __init__(self, message: str, command: str = None):
        self.command = command

        if command:
            message = f"Command '{command}' failed: {message}"

        super().__init__(message)


class StateError(ZbMigrateError):
    """Raised when the migration state file cannot be read or written."""

    def __init__(self, message: str, file_path: str = None):
        self.file_path = file_path

        if file_path:
            message = f"Migration state error in '{file_path}': {message}"

        super().__init__(message)


class DenyListError(ZbMigrateError):
    """Raised when a deny list file is malformed."""

    def __init__(self, message: str, file_path: str = None):
        self.file_path = file_path

        if file_path:
            message = f"Deny list error in '{file_path}': {message}"

        super().__init__(message)


class ExportError(ZbMigrateError):
    """Raised when a Brewfile manifest cannot be written."""

    def __init__(self, message: str, file_path: str = None):
        self.file_path = file_path

        if file_path:
            message = f"Failed to write Brewfile '{file_path}': {message}"

        super().__init__(message)


class AnalysisError(ZbMigrateError):
    """Raised when an analysis report violates its invariants."""
    pass


class ConfigurationError(ZbMigrateError):
    """Raised when configuration is invalid."""
    pass


class ReportGenerationError(ZbMigrateError):
    """Raised when report generation fails."""

    def __init__(self, message: str, format_name: str = None, output_path: str = None):
        self.format_name = format_name
        self.output_path = output_path

        if format_name:
            message = f"Report generation error for format '{format_name}': {message}"
            if output_path:
                message += f" (output: {output_path})"

        super().__init__(message)
