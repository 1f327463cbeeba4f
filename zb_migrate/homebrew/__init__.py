"""
Package manager collaborators: Homebrew queries and Zerobrew installs.
"""

from .client import BrewClient, parse_tap_from_info, parse_versions_output
from .installer import ZerobrewInstaller

__all__ = ['BrewClient', 'ZerobrewInstaller', 'parse_tap_from_info', 'parse_versions_output']
