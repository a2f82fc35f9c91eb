"""
Graph Builder.

Walks the network rows once, in file order, and derives:
- the graph-visible Nodes (known routes only),
- the directed requirement Edges between known routes,
- the per-route DependencyIndex, which keeps every row including the
  ones that reference routes or DLCs missing from the lookup.

The DependencyIndex is intentionally a superset of what the graph shows:
an unresolved DLC still appears in its locomotive's requirement list.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List

from .graph import RequirementGraph
from .resolver import IdentifierResolver
from .types import DependencyEntry, Edge, Node, RequirementRow

logger = logging.getLogger(__name__)

DependencyIndex = Dict[str, List[DependencyEntry]]


@dataclass
class BuildResult:
    """
    Immutable-by-convention output of one build.

    Attributes:
        graph: The requirement graph holding nodes and edges.
        regions: Distinct node regions, first-seen order.
        dependency_index: Route short name to its locomotive entries.
        unresolved: Distinct short names missing from the lookup, first-seen order.
    """

    graph: RequirementGraph
    regions: List[str] = field(default_factory=list)
    dependency_index: DependencyIndex = field(default_factory=dict)
    unresolved: List[str] = field(default_factory=list)

    @property
    def nodes(self) -> List[Node]:
        return list(self.graph.iter_nodes())

    @property
    def edges(self) -> List[Edge]:
        return list(self.graph.iter_edges())

    def entries_for(self, route_id: str) -> List[DependencyEntry]:
        return self.dependency_index.get(route_id, [])


class GraphBuilder:
    """
    Builds a BuildResult from requirement rows and a resolver.

    Example:
        ```python
        result = GraphBuilder(resolver).build(rows)
        [edge.id for edge in result.edges]
        ```
    """

    def __init__(self, resolver: IdentifierResolver):
        self.resolver = resolver

    def build(self, rows: Iterable[RequirementRow]) -> BuildResult:
        graph = RequirementGraph()
        result = BuildResult(graph=graph)
        unresolved: Dict[str, None] = {}
        regions: Dict[str, None] = {}
        skipped = 0

        def add_node(node: Node) -> None:
            if graph.add_node(node):
                regions.setdefault(node.region, None)

        for row in rows:
            if not row.route:
                skipped += 1
                continue

            source = self.resolver.resolve(row.route)
            if source.known:
                add_node(Node.from_identity(source))
            else:
                unresolved.setdefault(source.short_name, None)

            required = [self.resolver.resolve(token) for token in row.required_dlcs]
            result.dependency_index.setdefault(row.route, []).append(
                DependencyEntry(locomotive=row.locomotive, required_dlcs=required)
            )

            for target in required:
                if not target.known:
                    unresolved.setdefault(target.short_name, None)
                    continue
                add_node(Node.from_identity(target))
                if source.known:
                    graph.upsert_edge(source.short_name, target.short_name, row.locomotive)

        result.regions = list(regions)
        result.unresolved = list(unresolved)

        if skipped:
            logger.debug(f"Skipped {skipped} network rows without a route")
        logger.debug(
            f"Built graph: {graph.node_count} nodes, {graph.edge_count} edges, "
            f"{len(result.dependency_index)} indexed routes, {len(result.unresolved)} unresolved names"
        )
        return result
