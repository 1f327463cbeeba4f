"""Pytest configuration and shared fixtures for zb-migrate tests.

Fixtures here stand in for the Homebrew and Zerobrew command line tools so
that analysis and migration flows run without either being installed.
"""

from typing import Dict, List, Optional, Set

import pytest

from zb_migrate.models import MigrateResult, Package
from zb_migrate.state import StateStore


def make_package(name: str, deps: Optional[List[str]] = None, version: str = "1.0",
                 **kwargs) -> Package:
    """Shorthand for a Package with dependency names."""
    return Package(name=name, version=version, dependencies=list(deps or []), **kwargs)


class FakeBrewClient:
    """In-memory replacement for BrewClient."""

    def __init__(self, formulae: List[Package], casks: Optional[List[Package]] = None,
                 prefix: str = "/opt/homebrew"):
        self.formulae = formulae
        self.casks = casks or []
        self.prefix = prefix
        self.uninstalled: List[str] = []
        self.fail_uninstall: Set[str] = set()

    def detect_prefix(self) -> str:
        return self.prefix

    def list_formulae(self) -> List[Package]:
        return list(self.formulae)

    def list_formulae_detailed(self) -> List[Package]:
        return list(self.formulae)

    def list_casks(self) -> List[Package]:
        return list(self.casks)

    def uninstall(self, name: str) -> bool:
        if name in self.fail_uninstall:
            return False
        self.uninstalled.append(name)
        return True


class FakeInstaller:
    """Records install calls; names in ``failures`` fail with the given reason."""

    def __init__(self, failures: Optional[Dict[str, str]] = None):
        self.failures = failures or {}
        self.installed: List[str] = []

    def install(self, package: Package) -> MigrateResult:
        self.installed.append(package.name)
        if package.name in self.failures:
            return MigrateResult.failed(package.name, package.version, self.failures[package.name])
        return MigrateResult.succeeded(package.name, package.version)


@pytest.fixture
def state_store(tmp_path) -> StateStore:
    """StateStore writing below a temporary directory."""
    return StateStore(str(tmp_path / ".zerobrew" / "migration_state.json"))


@pytest.fixture
def sample_formulae() -> List[Package]:
    """Small installation: git and curl both need openssl@3."""
    return [
        make_package("openssl@3", version="3.2.0"),
        make_package("curl", ["openssl@3"], version="8.5.0"),
        make_package("git", ["curl"], version="2.43.0"),
        make_package("jq", version="1.7.1"),
    ]


@pytest.fixture
def echo_lines() -> List[str]:
    """List collecting lines passed to an ``echo`` callable."""
    return []
