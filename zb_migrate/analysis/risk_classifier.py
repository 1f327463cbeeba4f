"""
Risk classification of packages against a deny list.
"""

import logging
import time
from typing import Iterable, List, Sequence, Set, Union

from ..deny_list import DenyList
from ..models import AnalysisReport, DependencyMatch, MigrationRisk, Package, PackageAnalysis
from .base import RiskAnalyzer
from .graph import DependencyGraph
from .report_builder import build_analysis_report

logger = logging.getLogger(__name__)

SAFE_REASON = "No known problematic dependencies"


class RiskClassifier(RiskAnalyzer):
    """
    Buckets packages into safe, risky and keep-in-source.

    A package whose own name is denied stays with the source package
    manager. Otherwise it is risky when a denied name is reachable through
    its dependencies, and safe when none is.
    """

    def __init__(self, deny_list: Union[DenyList, Iterable[str]]):
        """
        Initialize the classifier.

        Args:
            deny_list: DenyList or plain iterable of denied package names
        """
        self.deny_list = DenyList.coerce(deny_list)

    def classify(self, packages: Sequence[Package]) -> AnalysisReport:
        """
        Classify every package.

        Args:
            packages: Packages with their direct dependency names

        Returns:
            AnalysisReport with name-sorted buckets
        """
        start_time = time.time()
        graph = DependencyGraph.build(packages)
        safe: List[PackageAnalysis] = []
        risky: List[PackageAnalysis] = []
        keep: List[PackageAnalysis] = []

        logger.info(f"Categorizing {len(packages)} packages...")

        for package in packages:
            analysis = self.classify_package(package, graph)
            if analysis.risk == MigrationRisk.KEEP_IN_SOURCE:
                keep.append(analysis)
            elif analysis.risk == MigrationRisk.RISKY:
                risky.append(analysis)
            else:
                safe.append(analysis)

        report = build_analysis_report(len(packages), safe, risky, keep)
        logger.debug(f"Classification finished in {time.time() - start_time:.3f}s")
        return report

    def classify_package(self, package: Package, graph: DependencyGraph) -> PackageAnalysis:
        """
        Classify a single package.

        Args:
            package: Package to classify
            graph: Graph used to expand transitive dependencies

        Returns:
            PackageAnalysis verdict for the package
        """
        if package.name in self.deny_list:
            return PackageAnalysis(
                name=package.name,
                version=package.version,
                risk=MigrationRisk.KEEP_IN_SOURCE,
                reason=self.deny_list.get_reason(package.name),
            )

        # Duplicate names resolve to the graph's record
        dependencies = graph.dependencies_of(package.name) if package.name in graph else package.dependencies
        direct = _unique(dep for dep in dependencies if dep in self.deny_list)
        if direct:
            return PackageAnalysis(
                name=package.name,
                version=package.version,
                risk=MigrationRisk.RISKY,
                reason=f"Depends on {len(direct)} problematic package(s)",
                problematic_dependencies=direct,
                match=DependencyMatch.DIRECT,
            )

        transitive = find_transitive_problematic_deps(package, graph, self.deny_list)
        if transitive:
            return PackageAnalysis(
                name=package.name,
                version=package.version,
                risk=MigrationRisk.RISKY,
                reason=f"Has transitive dependency on {len(transitive)} problematic package(s)",
                problematic_dependencies=transitive,
                match=DependencyMatch.TRANSITIVE,
            )

        return PackageAnalysis(
            name=package.name,
            version=package.version,
            risk=MigrationRisk.SAFE,
            reason=SAFE_REASON,
        )

    # RiskAnalyzer interface
    def analyze_packages(self, packages: Sequence[Package]) -> AnalysisReport:
        return self.classify(packages)


def classify_packages(packages: Sequence[Package],
                      deny_list: Union[DenyList, Iterable[str]]) -> AnalysisReport:
    """Classify ``packages`` against ``deny_list``."""
    return RiskClassifier(deny_list).classify(packages)


def find_transitive_problematic_deps(package: Package, graph: DependencyGraph,
                                     deny_list: Union[DenyList, Set[str]]) -> List[str]:
    """
    Find denied names anywhere in a package's dependency closure.

    Depth-first from the package's node in ``graph``, each name inspected
    once. The search continues through denied packages. Names are returned
    in first-discovered order.

    Args:
        package: Package whose dependencies are searched, a node of ``graph``
        graph: Graph used to expand dependencies
        deny_list: Names considered problematic

    Returns:
        Denied dependency names, deduplicated
    """
    return [name for name in graph.reachable_from(package.name) if name in deny_list]


def _unique(names: Iterable[str]) -> List[str]:
    seen: Set[str] = set()
    result = []
    for name in names:
        if name not in seen:
            seen.add(name)
            result.append(name)
    return result
