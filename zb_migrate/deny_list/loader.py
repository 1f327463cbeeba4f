"""
Deny list loader for loading and managing problematic packages.
"""

import json
import logging
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Optional, Sequence

from ..exceptions import DenyListError
from .defaults import DEFAULT_RATIONALE, KNOWN_PROBLEMATIC_PACKAGES, RATIONALE_RULES
from .models import DenyListEntry, RationaleRule

logger = logging.getLogger(__name__)


def lookup_rationale(package_name: str, rules: Sequence[RationaleRule] = RATIONALE_RULES) -> str:
    """
    Get a human-readable reason why a package is problematic.

    Args:
        package_name: Package name to explain
        rules: Ordered rationale rules, first match wins

    Returns:
        Rationale string, or the generic rationale when no rule matches
    """
    for rule in rules:
        if rule.matches(package_name):
            return rule.rationale
    return DEFAULT_RATIONALE


class DenyList:
    """
    Set of package names that should not be migrated automatically.

    Names are matched exactly. Each name may carry an explicit reason;
    names without one fall back to the rationale table.
    """

    def __init__(self, entries: Optional[Dict[str, Optional[str]]] = None,
                 rationale_rules: Sequence[RationaleRule] = RATIONALE_RULES):
        self._entries: Dict[str, Optional[str]] = dict(entries or {})
        self.rationale_rules = tuple(rationale_rules)

    @classmethod
    def from_names(cls, names: Iterable[str]) -> 'DenyList':
        return cls({name: None for name in names})

    @classmethod
    def builtin(cls) -> 'DenyList':
        """Deny list holding the built-in known problematic packages."""
        return cls.from_names(KNOWN_PROBLEMATIC_PACKAGES)

    @classmethod
    def coerce(cls, value) -> 'DenyList':
        """Accept a DenyList or any iterable of names."""
        if isinstance(value, DenyList):
            return value
        return cls.from_names(value)

    @property
    def names(self) -> frozenset:
        return frozenset(self._entries)

    def add(self, name: str, reason: Optional[str] = None) -> None:
        self._entries[name] = reason

    def remove(self, name: str) -> None:
        self._entries.pop(name, None)

    def get_reason(self, package_name: str) -> str:
        reason = self._entries.get(package_name)
        if reason:
            return reason
        return lookup_rationale(package_name, self.rationale_rules)

    def entries(self) -> List[DenyListEntry]:
        return [DenyListEntry(name=name, reason=self.get_reason(name)) for name in sorted(self._entries)]

    def __contains__(self, package_name: object) -> bool:
        return package_name in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"DenyList({len(self._entries)} packages)"


class DenyListLoader:
    """Loads deny list entries from JSON files."""

    def __init__(self, deny_list: Optional[DenyList] = None):
        self.deny_list = deny_list if deny_list is not None else DenyList()

    def load_from_file(self, file_path: str) -> None:
        """
        Load deny list from JSON file.

        Args:
            file_path: Path to deny list JSON file

        Raises:
            DenyListError: If the file is not valid JSON or has the wrong structure
        """
        try:
            with open(file_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except FileNotFoundError:
            logger.warning(f"Deny list file not found: {file_path}")
            return
        except json.JSONDecodeError as e:
            logger.error(f"Invalid JSON in deny list file {file_path}: {e}")
            raise DenyListError(f"Invalid JSON format: {e}", file_path=file_path) from e

        self._validate_deny_list(data, file_path)
        entries_before = len(self.deny_list)
        self._load_deny_entries(data)
        entries_added = len(self.deny_list) - entries_before

        logger.info(f"Loaded {entries_added} deny list entries from {file_path}")

    def load_from_multiple_files(self, file_paths: List[str]) -> None:
        """
        Load deny lists from multiple JSON files.

        Args:
            file_paths: List of paths to deny list JSON files
        """
        for file_path in file_paths:
            self.load_from_file(file_path)

        logger.info(f"Deny list holds {len(self.deny_list)} entries after loading {len(file_paths)} files")

    def load_from_directory(self, directory_path: str) -> None:
        """
        Load all JSON files from a directory as deny lists.

        Args:
            directory_path: Path to directory containing deny list JSON files
        """
        directory = Path(directory_path)
        if not directory.exists() or not directory.is_dir():
            logger.warning(f"Deny list directory not found: {directory_path}")
            return

        json_files = sorted(directory.glob('*.json'))
        if not json_files:
            logger.info(f"No JSON files found in deny list directory: {directory_path}")
            return

        logger.info(f"Found {len(json_files)} deny list files in {directory_path}")
        self.load_from_multiple_files([str(f) for f in json_files])

    def _validate_deny_list(self, data, file_path: str) -> None:
        """Validate deny list structure."""
        if not isinstance(data, dict):
            raise DenyListError("Deny list must be a JSON object", file_path=file_path)

        if "deny_list" not in data:
            raise DenyListError("Missing 'deny_list' key", file_path=file_path)

        if not isinstance(data["deny_list"], list):
            raise DenyListError("'deny_list' must be an array", file_path=file_path)

        for index, entry in enumerate(data["deny_list"]):
            if not isinstance(entry, dict) or not entry.get("name"):
                raise DenyListError(f"Entry {index} must be an object with a 'name'", file_path=file_path)

    def _load_deny_entries(self, data: dict) -> None:
        """Load deny entries from parsed JSON."""
        for entry_data in data["deny_list"]:
            self.deny_list.add(entry_data["name"], entry_data.get("reason"))
