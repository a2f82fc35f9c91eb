"""Unit tests for the rustworkx-backed requirement graph."""

import pytest

from dlcnet.core.graph import RequirementGraph
from dlcnet.core.types import Node


def node(node_id, region="US"):
    return Node(id=node_id, label=node_id, region=region, full_name=f"Route {node_id}")


class TestRequirementGraph:
    @pytest.fixture
    def graph(self):
        g = RequirementGraph()
        for nid, region in [("A", "US"), ("B", "DE"), ("C", "US"), ("D", "UK")]:
            g.add_node(node(nid, region))
        g.upsert_edge("A", "B", "L1")
        g.upsert_edge("B", "C", "L2")
        g.upsert_edge("A", "B", "L3")
        return g

    def test_add_node_is_idempotent(self, graph):
        assert graph.add_node(node("A")) is False
        assert graph.node_count == 4

    def test_upsert_appends_locomotive(self, graph):
        assert graph.edge_count == 2
        assert graph.get_edge("A", "B").locomotives == ["L1", "L3"]

    def test_upsert_requires_existing_endpoints(self, graph):
        with pytest.raises(KeyError):
            graph.upsert_edge("A", "missing", "L9")

    def test_neighbours(self, graph):
        assert graph.requirements_of("A") == ["B"]
        assert graph.dependents_of("B") == ["A"]
        assert graph.all_requirements_of("A") == {"B", "C"}
        assert graph.all_requirements_of("missing") == set()

    def test_stats(self, graph):
        stats = graph.get_stats()
        assert stats["total_nodes"] == 4
        assert stats["total_edges"] == 2
        assert stats["nodes_by_region"] == {"US": 2, "DE": 1, "UK": 1}
        assert stats["isolated"] == 1

    def test_to_dict_preserves_order(self, graph):
        data = graph.to_dict()
        assert [n["id"] for n in data["nodes"]] == ["A", "B", "C", "D"]
        assert [e["id"] for e in data["edges"]] == ["A-B", "B-C"]
