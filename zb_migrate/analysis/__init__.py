"""
Analysis Module

Contains the dependency graph, install ordering and migration risk classification.
"""

from .base import RiskAnalyzer
from .graph import DependencyGraph
from .ordering import order_packages
from .report_builder import build_analysis_report
from .risk_classifier import (
    RiskClassifier,
    classify_packages,
    find_transitive_problematic_deps,
)

__all__ = [
    'RiskAnalyzer',
    'DependencyGraph',
    'order_packages',
    'build_analysis_report',
    'RiskClassifier',
    'classify_packages',
    'find_transitive_problematic_deps',
]
