"""
Homebrew query interface.

Every call shells out to ``brew``; parsing of its output lives in module
level functions so it can be exercised without Homebrew installed.
"""

import json
import logging
import subprocess
import time
from dataclasses import replace
from typing import List, Optional, Set

from ..exceptions import PackageManagerError
from ..models import Package

logger = logging.getLogger(__name__)

CORE_TAP = "homebrew/core"

HOMEBREW_INSTALL_HINT = (
    "To install Homebrew, run:\n"
    "  /bin/bash -c \"$(curl -fsSL https://raw.githubusercontent.com/Homebrew/install/HEAD/install.sh)\"\n\n"
    "For more information, visit: https://brew.sh"
)


def parse_versions_output(output: str, is_cask: bool = False,
                          pinned: Optional[Set[str]] = None) -> List[Package]:
    """
    Parse ``brew list --versions`` output.

    Lines with fewer than two whitespace separated fields are ignored. When
    several versions are installed only the first one listed is kept.

    Args:
        output: Raw command output
        is_cask: Whether the listing is of casks
        pinned: Names of pinned formulae

    Returns:
        Packages in listing order
    """
    pinned = pinned or set()
    packages = []

    for line in output.splitlines():
        parts = line.split()
        if len(parts) < 2:
            continue
        name, version = parts[0], parts[1]
        packages.append(Package(
            name=name,
            version=version,
            is_cask=is_cask,
            pinned=not is_cask and name in pinned,
        ))

    return packages


def parse_lines(output: str) -> List[str]:
    """Non-empty, stripped lines of command output."""
    return [line.strip() for line in output.splitlines() if line.strip()]


def parse_tap_from_info(output: str) -> Optional[str]:
    """
    Extract a formula's tap from ``brew info --json=v2`` output.

    Returns:
        Tap name, or None for homebrew/core and unparsable output
    """
    try:
        data = json.loads(output)
        tap = data["formulae"][0]["tap"]
    except (ValueError, KeyError, IndexError, TypeError):
        return None

    if not isinstance(tap, str) or tap == CORE_TAP:
        return None
    return tap


class BrewClient:
    """Queries a Homebrew installation through the ``brew`` command."""

    def __init__(self, brew_command: str = "brew", timeout: Optional[float] = 600.0):
        """
        Initialize the client.

        Args:
            brew_command: Executable used to run Homebrew
            timeout: Per-command timeout in seconds
        """
        self.brew_command = brew_command
        self.timeout = timeout

    def _run(self, args: List[str]) -> subprocess.CompletedProcess:
        """Run a brew command, logging timing and output at debug level."""
        command = [self.brew_command] + args
        command_text = " ".join(command)
        logger.debug(f"Running: {command_text}")

        start = time.time()
        result = subprocess.run(command, capture_output=True, text=True, timeout=self.timeout)
        elapsed = time.time() - start

        logger.debug(f"Command completed in {elapsed:.2f}s")
        logger.debug(f"Exit code: {result.returncode}")
        if result.stderr and result.stderr.strip():
            logger.debug(f"stderr: {result.stderr.strip()}")
        return result

    def detect_prefix(self) -> str:
        """
        Detect the Homebrew installation prefix.

        Raises:
            PackageManagerError: If brew is missing or reports an error
        """
        try:
            result = self._run(["--prefix"])
        except FileNotFoundError as e:
            raise PackageManagerError(
                f"Homebrew does not appear to be installed.\n\n{HOMEBREW_INSTALL_HINT}",
                command=f"{self.brew_command} --prefix",
            ) from e
        except subprocess.TimeoutExpired as e:
            raise PackageManagerError("timed out", command=f"{self.brew_command} --prefix") from e

        if result.returncode != 0:
            raise PackageManagerError(
                "Failed to detect Homebrew prefix.\n\n"
                f"Error output: {result.stderr.strip()}\n\n"
                "Suggestions:\n"
                "- Ensure Homebrew is properly installed and configured\n"
                "- Try running 'brew doctor' to diagnose issues\n"
                "- Check that 'brew' is in your PATH",
                command=f"{self.brew_command} --prefix",
            )

        return result.stdout.strip()

    def list_formulae(self) -> List[Package]:
        """
        List installed formulae without taps or dependencies.

        Raises:
            PackageManagerError: If the listing cannot be obtained
        """
        command_text = f"{self.brew_command} list --formula --versions"
        try:
            result = self._run(["list", "--formula", "--versions"])
        except FileNotFoundError as e:
            raise PackageManagerError(
                "Could not execute 'brew list'.\n\n"
                "Suggestions:\n"
                "- Verify Homebrew is installed: run 'brew --version'\n"
                "- Try running 'brew update' to refresh Homebrew",
                command=command_text,
            ) from e
        except subprocess.TimeoutExpired as e:
            raise PackageManagerError("timed out", command=command_text) from e

        if result.returncode != 0:
            raise PackageManagerError(
                "Failed to list Homebrew formulae.\n\n"
                f"Error output: {result.stderr.strip()}\n\n"
                "Suggestions:\n"
                "- Run 'brew doctor' to check for issues\n"
                "- Try 'brew update' to refresh package information",
                command=command_text,
            )

        pinned = self.get_pinned_packages()
        packages = parse_versions_output(result.stdout, pinned=pinned)
        logger.debug(f"Found {len(packages)} installed formulae")
        return packages

    def list_formulae_detailed(self) -> List[Package]:
        """List installed formulae with dependencies and taps loaded."""
        packages = self.list_formulae()
        total = len(packages)
        logger.info(f"Loading package details for {total} formulae...")

        detailed = []
        for i, package in enumerate(packages, 1):
            logger.debug(f"Loading {i}/{total}: {package.name}")
            detailed.append(replace(package,
                                    dependencies=self.get_dependencies(package.name),
                                    tap=self.get_tap(package.name)))

        logger.info(f"Loaded {total} packages")
        return detailed

    def list_casks(self) -> List[Package]:
        """List installed casks; an unusable cask listing yields no casks."""
        try:
            result = self._run(["list", "--cask", "--versions"])
        except (FileNotFoundError, subprocess.TimeoutExpired) as e:
            raise PackageManagerError(
                "Could not execute 'brew list --cask'.\n\n"
                "Suggestions:\n"
                "- Verify Homebrew is installed: run 'brew --version'",
                command=f"{self.brew_command} list --cask --versions",
            ) from e

        if result.returncode != 0:
            logger.debug("Cask listing failed, assuming no casks are installed")
            return []

        return parse_versions_output(result.stdout, is_cask=True)

    def get_pinned_packages(self) -> Set[str]:
        """Names of pinned formulae."""
        try:
            result = self._run(["list", "--pinned"])
        except (FileNotFoundError, subprocess.TimeoutExpired) as e:
            logger.warning(f"Could not list pinned formulae: {e}")
            return set()

        if result.returncode != 0:
            return set()
        return set(parse_lines(result.stdout))

    def get_dependencies(self, name: str) -> List[str]:
        """Installed dependencies of a formula, empty when they cannot be determined."""
        try:
            result = self._run(["deps", "--installed", name])
        except (FileNotFoundError, subprocess.TimeoutExpired) as e:
            logger.warning(f"Could not load dependencies for {name}: {e}")
            return []

        if result.returncode != 0:
            return []
        return parse_lines(result.stdout)

    def get_tap(self, name: str) -> Optional[str]:
        """Tap a formula came from, None for homebrew/core or unknown."""
        try:
            result = self._run(["info", "--json=v2", name])
        except (FileNotFoundError, subprocess.TimeoutExpired) as e:
            logger.warning(f"Could not load tap for {name}: {e}")
            return None

        if result.returncode != 0:
            return None
        return parse_tap_from_info(result.stdout)

    def uninstall(self, name: str) -> bool:
        """
        Remove a formula from Homebrew, ignoring its dependants.

        Returns:
            True if brew reported success
        """
        try:
            result = self._run(["uninstall", "--ignore-dependencies", name])
        except (FileNotFoundError, subprocess.TimeoutExpired) as e:
            logger.warning(f"Failed to uninstall {name} from Homebrew: {e}")
            return False

        if result.returncode != 0:
            logger.warning(f"Failed to uninstall {name} from Homebrew: {result.stderr.strip()}")
            return False
        return True
