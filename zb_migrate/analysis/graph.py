"""
Dependency graph over a flat package listing, backed by NetworkX.
"""

import logging
from typing import Iterator, List, Optional, Sequence

import networkx as nx

from ..models import Package

logger = logging.getLogger(__name__)

# Node attribute holding the Package; None marks a dangling dependency name
PACKAGE_ATTR = "package"


class DependencyGraph:
    """
    Directed graph with an edge from each package to every dependency name.

    Package nodes are added in input order, so traversals that start from
    every node visit packages in the order they were listed. Dependency
    names without a Package are kept as leaf nodes and never treated as
    packages.
    """

    def __init__(self, digraph: Optional["nx.DiGraph[str]"] = None):
        self.digraph: "nx.DiGraph[str]" = digraph if digraph is not None else nx.DiGraph()

    @classmethod
    def build(cls, packages: Sequence[Package]) -> 'DependencyGraph':
        """
        Build a graph from a flat package listing.

        Duplicate names keep the position of their first occurrence and the
        record (and edges) of their last one.

        Args:
            packages: Packages as supplied by the enumeration collaborator

        Returns:
            DependencyGraph over the given packages
        """
        G: nx.DiGraph[str] = nx.DiGraph()
        for package in packages:
            G.add_node(package.name, **{PACKAGE_ATTR: package})

        package_names = list(G.nodes)
        for name in package_names:
            for dep_name in G.nodes[name][PACKAGE_ATTR].dependencies:
                if dep_name not in G:
                    G.add_node(dep_name, **{PACKAGE_ATTR: None})
                G.add_edge(name, dep_name)

        graph = cls(G)
        if not nx.is_directed_acyclic_graph(G):
            logger.debug("Dependency cycles present, keeping first-seen order")
        return graph

    def get(self, name: str) -> Optional[Package]:
        if name not in self.digraph:
            return None
        return self.digraph.nodes[name][PACKAGE_ATTR]

    def dependencies_of(self, name: str) -> List[str]:
        """Direct dependency names of a package, empty for unknown names."""
        if self.get(name) is None:
            return []
        return list(self.digraph.successors(name))

    def postorder(self) -> Iterator[Package]:
        """
        Packages in depth-first post-order over the whole graph.

        Every node is visited once with a visited set shared across start
        nodes, so a cycle is broken at the edge that leads back into it.
        """
        for name in nx.dfs_postorder_nodes(self.digraph):
            package = self.get(name)
            if package is not None:
                yield package

    def reachable_from(self, name: str) -> List[str]:
        """
        Names reachable from ``name``, in depth-first discovery order.

        The start node itself is not included. Dangling names are included.
        """
        if name not in self.digraph:
            return []
        return [node for node in nx.dfs_preorder_nodes(self.digraph, name) if node != name]

    def names(self) -> List[str]:
        return [name for name, package in self.digraph.nodes(data=PACKAGE_ATTR) if package is not None]

    def __contains__(self, name: object) -> bool:
        return self.get(name) is not None if isinstance(name, str) else False

    def __iter__(self) -> Iterator[Package]:
        return (package for _, package in self.digraph.nodes(data=PACKAGE_ATTR) if package is not None)

    def __len__(self) -> int:
        return len(self.names())

    def __repr__(self) -> str:
        return f"DependencyGraph({len(self)} packages)"
