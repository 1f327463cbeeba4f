"""
Core data models for the Zerobrew migration tool.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple


class MigrationRisk(Enum):
    """Enumeration of possible migration verdicts."""
    SAFE = "safe"
    RISKY = "risky"
    KEEP_IN_SOURCE = "keep_in_source"


class DependencyMatch(Enum):
    """How a risky package reaches a problematic dependency."""
    DIRECT = "direct"
    TRANSITIVE = "transitive"


@dataclass
class Package:
    """Represents an installed package with its metadata."""
    name: str
    version: str
    tap: Optional[str] = None  # Originating repository, None for homebrew/core
    is_cask: bool = False
    dependencies: List[str] = None  # Direct dependency names, may be dangling
    pinned: bool = False

    def __post_init__(self):
        """Initialize dependencies as empty list if None."""
        if self.dependencies is None:
            self.dependencies = []

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "version": self.version,
            "tap": self.tap,
            "is_cask": self.is_cask,
            "dependencies": list(self.dependencies),
            "pinned": self.pinned,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Package':
        return cls(
            name=data["name"],
            version=data.get("version", ""),
            tap=data.get("tap"),
            is_cask=data.get("is_cask", False),
            dependencies=list(data.get("dependencies") or []),
            pinned=data.get("pinned", False),
        )


@dataclass
class PackageAnalysis:
    """Migration verdict for a single package."""
    name: str
    version: str
    risk: MigrationRisk
    reason: str
    problematic_dependencies: List[str] = field(default_factory=list)
    match: Optional[DependencyMatch] = None  # Only set for risky packages

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "version": self.version,
            "risk": self.risk.value,
            "reason": self.reason,
            "problematic_dependencies": list(self.problematic_dependencies),
            "match": self.match.value if self.match else None,
        }


@dataclass
class AnalysisReport:
    """Complete analysis report for all analyzed packages."""
    safe_to_migrate: List[PackageAnalysis]
    risky: List[PackageAnalysis]
    should_keep_in_source: List[PackageAnalysis]
    total_packages: int

    def sort(self) -> None:
        """Sort every bucket by package name."""
        self.safe_to_migrate.sort(key=lambda a: a.name)
        self.risky.sort(key=lambda a: a.name)
        self.should_keep_in_source.sort(key=lambda a: a.name)

    def all_results(self) -> List[PackageAnalysis]:
        return self.safe_to_migrate + self.risky + self.should_keep_in_source

    def to_dict(self) -> Dict[str, Any]:
        return {
            "safe_to_migrate": [a.to_dict() for a in self.safe_to_migrate],
            "risky": [a.to_dict() for a in self.risky],
            "should_keep_in_source": [a.to_dict() for a in self.should_keep_in_source],
            "total_packages": self.total_packages,
        }


@dataclass
class MigrateResult:
    """Outcome of migrating a single package."""
    name: str
    version: str
    success: bool
    reason: Optional[str] = None

    @classmethod
    def succeeded(cls, name: str, version: str) -> 'MigrateResult':
        return cls(name=name, version=version, success=True)

    @classmethod
    def failed(cls, name: str, version: str, reason: str) -> 'MigrateResult':
        return cls(name=name, version=version, success=False, reason=reason)


@dataclass
class MigrationReport:
    """Summary of a migration run."""
    total_formulae: int = 0
    total_casks: int = 0
    successful: List[str] = field(default_factory=list)
    failed: List[Tuple[str, str]] = field(default_factory=list)
    skipped: List[Tuple[str, str]] = field(default_factory=list)

    def add_result(self, result: MigrateResult) -> None:
        if result.success:
            self.successful.append(result.name)
        else:
            self.failed.append((result.name, result.reason or ""))


@dataclass
class MigrationState:
    """Cross-run record of which packages were migrated."""
    migrated_packages: Dict[str, Package] = field(default_factory=dict)
    failed_packages: List[str] = field(default_factory=list)
    homebrew_prefix: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "migrated_packages": {name: pkg.to_dict() for name, pkg in self.migrated_packages.items()},
            "failed_packages": list(self.failed_packages),
            "homebrew_prefix": self.homebrew_prefix,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'MigrationState':
        migrated = {
            name: Package.from_dict(pkg_data)
            for name, pkg_data in (data.get("migrated_packages") or {}).items()
        }
        return cls(
            migrated_packages=migrated,
            failed_packages=list(data.get("failed_packages") or []),
            homebrew_prefix=data.get("homebrew_prefix") or "",
        )
