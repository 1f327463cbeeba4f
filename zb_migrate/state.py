"""
Persistence of migration state between runs.
"""

import json
import logging
import os
from pathlib import Path
from typing import Optional, Sequence

from .exceptions import ConfigurationError, StateError
from .models import MigrationReport, MigrationState, Package

logger = logging.getLogger(__name__)

STATE_DIR_NAME = ".zerobrew"
STATE_FILE_NAME = "migration_state.json"


def default_state_path() -> Path:
    """
    Location of the state file under the user's home directory.

    Raises:
        ConfigurationError: If HOME is not set
    """
    home = os.environ.get("HOME")
    if not home:
        raise ConfigurationError(
            "HOME environment variable is not set.\n"
            "This is required to locate the zerobrew configuration directory.\n"
            "Suggestion: Ensure you are running in a proper shell environment."
        )
    return Path(home) / STATE_DIR_NAME / STATE_FILE_NAME


class StateStore:
    """Reads and writes MigrationState as JSON."""

    def __init__(self, path: Optional[str] = None):
        self.path = Path(path).expanduser() if path else default_state_path()

    def load(self) -> MigrationState:
        """
        Load migration state.

        Returns:
            Saved state, or an empty state when no file exists yet

        Raises:
            StateError: If the file exists but cannot be parsed
        """
        if not self.path.exists():
            return MigrationState()

        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
            return MigrationState.from_dict(data)
        except (OSError, ValueError, KeyError, TypeError, AttributeError) as e:
            raise StateError(str(e), file_path=str(self.path)) from e

    def save(self, state: MigrationState) -> None:
        """Write migration state, creating the state directory if needed."""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, 'w', encoding='utf-8') as f:
                json.dump(state.to_dict(), f, indent=2)
        except OSError as e:
            raise StateError(str(e), file_path=str(self.path)) from e

        logger.debug(f"Saved migration state to {self.path}")

    def record(self, report: MigrationReport, packages: Sequence[Package],
               homebrew_prefix: str = "") -> MigrationState:
        """
        Merge the outcome of a migration run into the saved state.

        Args:
            report: Report of the run
            packages: Packages that were considered in the run
            homebrew_prefix: Detected Homebrew prefix

        Returns:
            The updated state, already saved
        """
        state = self.load()
        if homebrew_prefix:
            state.homebrew_prefix = homebrew_prefix

        by_name = {package.name: package for package in packages}
        for name in report.successful:
            package = by_name.get(name)
            if package is not None:
                state.migrated_packages[name] = package
            if name in state.failed_packages:
                state.failed_packages.remove(name)

        for name, _ in report.failed:
            if name not in state.failed_packages:
                state.failed_packages.append(name)

        self.save(state)
        return state
