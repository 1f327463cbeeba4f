"""
Version management for the Zerobrew migration tool.

This module provides centralized version information to avoid hardcoding
version numbers throughout the codebase.
"""

from . import __version__

TOOL_NAME = "zb-migrate"


def get_version() -> str:
    """
    Get the current version of the Zerobrew migration tool.

    Returns:
        Version string (e.g., "0.1.0")
    """
    return __version__


def get_full_name_with_version() -> str:
    """
    Get the full tool name with version.

    Returns:
        Full name string (e.g., "zb-migrate v0.1.0")
    """
    return f"{TOOL_NAME} v{__version__}"
