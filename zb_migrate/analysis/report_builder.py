"""
Aggregation of per-package verdicts into an AnalysisReport.
"""

from typing import Sequence

from ..exceptions import AnalysisError
from ..models import AnalysisReport, PackageAnalysis


def build_analysis_report(total: int,
                          safe: Sequence[PackageAnalysis],
                          risky: Sequence[PackageAnalysis],
                          keep: Sequence[PackageAnalysis]) -> AnalysisReport:
    """
    Build a sorted analysis report.

    Args:
        total: Number of packages that were analyzed
        safe: Verdicts for packages safe to migrate
        risky: Verdicts for packages with problematic dependencies
        keep: Verdicts for packages that should stay with the source manager

    Returns:
        AnalysisReport with every bucket sorted by name

    Raises:
        AnalysisError: If the bucket sizes do not add up to ``total``
    """
    bucketed = len(safe) + len(risky) + len(keep)
    if bucketed != total:
        raise AnalysisError(
            f"Analysis covers {bucketed} packages but {total} were analyzed "
            f"(safe={len(safe)}, risky={len(risky)}, keep={len(keep)})"
        )

    report = AnalysisReport(
        safe_to_migrate=list(safe),
        risky=list(risky),
        should_keep_in_source=list(keep),
        total_packages=total,
    )
    report.sort()
    return report
