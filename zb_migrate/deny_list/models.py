"""
Data models for deny list functionality.
"""

from dataclasses import dataclass
from typing import Tuple


@dataclass
class DenyListEntry:
    """Represents a package that should stay with the source package manager."""
    name: str
    reason: str


@dataclass(frozen=True)
class RationaleRule:
    """Maps exact names or name prefixes to a human-readable rationale."""
    rationale: str
    names: Tuple[str, ...] = ()
    prefixes: Tuple[str, ...] = ()

    def matches(self, package_name: str) -> bool:
        if package_name in self.names:
            return True
        return any(package_name.startswith(prefix) for prefix in self.prefixes)
