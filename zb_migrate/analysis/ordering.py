"""
Dependency-respecting install ordering.
"""

import logging
from typing import List, Sequence

from ..models import Package
from .graph import DependencyGraph

logger = logging.getLogger(__name__)


def order_packages(packages: Sequence[Package]) -> List[Package]:
    """
    Order packages so every package comes after its dependencies.

    Depth-first post-order over the input in its original order. Dependency
    names that do not resolve to an input package are skipped. A cycle does
    not raise: the package met first on the cycle keeps its position and the
    back edge is ignored.

    Args:
        packages: Packages to order

    Returns:
        The same packages in install order, each name once
    """
    ordered = list(DependencyGraph.build(packages).postorder())
    logger.debug(f"Ordered {len(ordered)} packages for migration")
    return ordered
