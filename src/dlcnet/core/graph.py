"""
Requirement Graph implementation backed by rustworkx.

It manages:
- The bimap between route short names and rustworkx integer indices.
- Directed requirement edges keyed by the exact (source, target) pair.
- Neighbourhood queries (direct and transitive requirements, dependents).

Insertion order is preserved for nodes and edges, so two graphs built from
the same rows serialize identically.
"""

from collections import defaultdict
from typing import Any, Dict, Iterator, List, Optional, Set, Tuple

import rustworkx as rx

from .types import Edge, Node


class RequirementGraph:
    """
    Directed graph of routes and the DLC routes they require.

    Features:
    - O(1) node lookup via ID-to-Index bimap
    - Edge upsert that appends locomotives instead of duplicating edges
    - Rust backend for transitive traversals
    """

    def __init__(self):
        self._graph = rx.PyDiGraph(multigraph=False)
        self._id_to_idx: Dict[str, int] = {}
        self._idx_to_id: Dict[int, str] = {}
        self._edges: Dict[Tuple[str, str], Edge] = {}

    def add_node(self, node: Node) -> bool:
        """
        Add a node unless its id is already present.

        Returns:
            True if the node was created.
        """
        if node.id in self._id_to_idx:
            return False
        idx = self._graph.add_node(node)
        self._id_to_idx[node.id] = idx
        self._idx_to_id[idx] = node.id
        return True

    def upsert_edge(self, source_id: str, target_id: str, locomotive: str | None) -> Edge:
        """
        Record that ``locomotive`` on ``source_id`` needs ``target_id``.

        Creates the directed edge on first sight, otherwise appends the
        locomotive to the existing edge. Both endpoints must already exist.
        """
        if source_id not in self._id_to_idx or target_id not in self._id_to_idx:
            raise KeyError(f"Edge endpoints must be graph nodes: {source_id!r} -> {target_id!r}")

        edge = self._edges.get((source_id, target_id))
        if edge is None:
            edge = Edge(
                id=Edge.key(source_id, target_id),
                source=source_id,
                target=target_id,
                locomotives=[locomotive],
            )
            self._edges[(source_id, target_id)] = edge
            self._graph.add_edge(self._id_to_idx[source_id], self._id_to_idx[target_id], edge)
        else:
            edge.locomotives.append(locomotive)
        return edge

    def get_node(self, node_id: str) -> Optional[Node]:
        """Retrieve a node by ID."""
        idx = self._id_to_idx.get(node_id)
        if idx is None:
            return None
        return self._graph[idx]

    def has_node(self, node_id: str) -> bool:
        return node_id in self._id_to_idx

    def get_edge(self, source_id: str, target_id: str) -> Optional[Edge]:
        return self._edges.get((source_id, target_id))

    def has_edge(self, source_id: str, target_id: str) -> bool:
        """Check if a directed edge exists. Direction matters."""
        return (source_id, target_id) in self._edges

    def requirements_of(self, node_id: str) -> List[str]:
        """Routes directly required by ``node_id``, in edge order."""
        return [target for (source, target) in self._edges if source == node_id]

    def dependents_of(self, node_id: str) -> List[str]:
        """Routes whose locomotives require ``node_id``, in edge order."""
        return [source for (source, target) in self._edges if target == node_id]

    def all_requirements_of(self, node_id: str) -> Set[str]:
        """All node IDs reachable along requirement edges."""
        if node_id not in self._id_to_idx:
            return set()
        descendant_indices = rx.descendants(self._graph, self._id_to_idx[node_id])
        return {self._idx_to_id[idx] for idx in descendant_indices}

    def iter_nodes(self) -> Iterator[Node]:
        return (self._graph[idx] for idx in self._graph.node_indices())

    def iter_edges(self) -> Iterator[Edge]:
        return iter(self._edges.values())

    @property
    def node_count(self) -> int:
        return self._graph.num_nodes()

    @property
    def edge_count(self) -> int:
        return self._graph.num_edges()

    def get_stats(self) -> Dict[str, Any]:
        nodes_by_region: Dict[str, int] = defaultdict(int)
        for node in self.iter_nodes():
            nodes_by_region[node.region] += 1

        isolated = [
            self._idx_to_id[idx]
            for idx in self._graph.node_indices()
            if self._graph.in_degree(idx) == 0 and self._graph.out_degree(idx) == 0
        ]

        return {
            "total_nodes": self.node_count,
            "total_edges": self.edge_count,
            "nodes_by_region": dict(nodes_by_region),
            "isolated": len(isolated),
            "backend": "rustworkx",
        }

    def to_dict(self) -> Dict[str, Any]:
        return {
            "nodes": [node.model_dump() for node in self.iter_nodes()],
            "edges": [edge.model_dump() for edge in self.iter_edges()],
            "stats": self.get_stats(),
        }
