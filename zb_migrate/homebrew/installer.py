"""
Zerobrew installer invocation.
"""

import logging
import subprocess
import time
from typing import Optional

from ..models import MigrateResult, Package

logger = logging.getLogger(__name__)


class ZerobrewInstaller:
    """Installs packages with the ``zb`` command."""

    def __init__(self, command: str = "zb", timeout: Optional[float] = 600.0):
        self.command = command
        self.timeout = timeout

    def install(self, package: Package) -> MigrateResult:
        """
        Install one package through Zerobrew.

        A failing install is reported in the result, never raised.

        Args:
            package: Package to install

        Returns:
            MigrateResult describing the outcome
        """
        command = [self.command, "install", package.name]
        logger.info(f"Migrating: {package.name} ({package.version})")
        logger.debug(f"Running: {' '.join(command)}")

        start = time.time()
        try:
            result = subprocess.run(command, capture_output=True, text=True, timeout=self.timeout)
        except FileNotFoundError as e:
            logger.debug(f"Command failed after {time.time() - start:.2f}s: {e}")
            return MigrateResult.failed(package.name, package.version, f"Failed to run {self.command}: {e}")
        except subprocess.TimeoutExpired:
            logger.debug(f"Command timed out after {self.timeout}s")
            return MigrateResult.failed(
                package.name, package.version,
                f"{self.command} install timed out after {self.timeout}s",
            )

        logger.debug(f"Command completed in {time.time() - start:.2f}s")
        logger.debug(f"Exit code: {result.returncode}")
        if result.stdout and result.stdout.strip():
            logger.debug(f"stdout: {result.stdout.strip()}")
        if result.stderr and result.stderr.strip():
            logger.debug(f"stderr: {result.stderr.strip()}")

        if result.returncode == 0:
            return MigrateResult.succeeded(package.name, package.version)

        reason = result.stderr.strip() or f"{self.command} install exited with status {result.returncode}"
        return MigrateResult.failed(package.name, package.version, reason)
