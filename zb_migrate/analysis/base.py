"""
Abstract base classes for analysis functionality.
"""

from abc import ABC, abstractmethod
from typing import Sequence

from ..models import AnalysisReport, Package


class RiskAnalyzer(ABC):
    """Abstract base class for migration risk analysis."""

    @abstractmethod
    def analyze_packages(self, packages: Sequence[Package]) -> AnalysisReport:
        """
        Analyze a list of packages for migration risk.

        Args:
            packages: List of Package objects to analyze

        Returns:
            AnalysisReport containing the complete analysis
        """
        pass
