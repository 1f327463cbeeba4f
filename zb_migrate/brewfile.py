"""
Brewfile manifest export.
"""

import logging
from typing import Sequence

from .exceptions import ExportError
from .models import Package

logger = logging.getLogger(__name__)


def render_brewfile(formulae: Sequence[Package], casks: Sequence[Package]) -> str:
    """
    Render a Brewfile-compatible manifest for Zerobrew.

    Args:
        formulae: Installed formulae
        casks: Installed casks

    Returns:
        Brewfile content
    """
    lines = [
        "# Zerobrew Migration Brewfile",
        "# Generated from Homebrew installation",
        "",
    ]

    taps = sorted({package.tap for package in formulae if package.tap})
    lines.extend(f'tap "{tap}"' for tap in taps)
    lines.append("")

    lines.extend(f'brew "{package.name}"' for package in formulae)
    lines.append("")

    lines.extend(f'cask "{package.name}"' for package in casks)

    return "\n".join(lines) + "\n"


def write_brewfile(path: str, formulae: Sequence[Package], casks: Sequence[Package]) -> None:
    """
    Write the Brewfile manifest to ``path``.

    Raises:
        ExportError: If the file cannot be written
    """
    content = render_brewfile(formulae, casks)
    try:
        with open(path, 'w', encoding='utf-8') as f:
            f.write(content)
    except OSError as e:
        raise ExportError(str(e), file_path=str(path)) from e
    logger.debug(f"Wrote Brewfile with {len(formulae)} formulae and {len(casks)} casks to {path}")
