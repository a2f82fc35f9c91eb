"""Unit tests for selection highlighting."""

import pytest

from dlcnet.core.builder import GraphBuilder
from dlcnet.core.highlight import Selection, SelectionHighlighter
from dlcnet.core.resolver import IdentifierResolver
from dlcnet.core.types import EdgeClass, LookupEntry, NodeClass, RequirementRow


class TestSelectionHighlighter:
    @pytest.fixture
    def result(self, lookup_rows, network_rows):
        resolver = IdentifierResolver([LookupEntry.model_validate(r) for r in lookup_rows])
        return GraphBuilder(resolver).build([RequirementRow.model_validate(r) for r in network_rows])

    @pytest.fixture
    def highlighter(self, result):
        return SelectionHighlighter(result.dependency_index)

    def test_required_closure_is_deduplicated(self, highlighter):
        # RTB is required by two locomotives of RTA
        assert highlighter.required_closure("RTA") == {"RTB", "RTX"}

    def test_required_closure_of_unknown_route(self, highlighter):
        assert highlighter.required_closure("RTZ") == {"RTD"}
        assert highlighter.required_closure("nothing") == set()

    def test_classify_nodes(self, highlighter, result):
        classes = highlighter.classify("RTA", result.nodes, result.edges)

        assert classes.node_class["RTA"] is NodeClass.SELECTED
        assert classes.node_class["RTB"] is NodeClass.REQUIRED
        assert classes.node_class["RTC"] is NodeClass.NORMAL
        assert classes.node_class["RTD"] is NodeClass.NORMAL
        assert "RTX" not in classes.node_class

    def test_classify_edges(self, highlighter, result):
        classes = highlighter.classify("RTA", result.nodes, result.edges)

        assert classes.edge_class["RTA-RTB"] is EdgeClass.HIGHLIGHTED
        # Incoming edge from a dependent is not highlighted
        assert classes.edge_class["RTB-RTA"] is EdgeClass.NORMAL
        assert classes.edge_class["RTB-RTC"] is EdgeClass.NORMAL
        assert classes.highlighted_edges() == ["RTA-RTB"]

    def test_no_selection_is_all_normal(self, highlighter, result):
        classes = highlighter.classify(None, result.nodes, result.edges)

        assert set(classes.node_class.values()) == {NodeClass.NORMAL}
        assert set(classes.edge_class.values()) == {EdgeClass.NORMAL}


class TestSelection:
    def test_transitions(self):
        selection = Selection()
        assert not selection.is_active

        selection.select("RTA")
        assert selection.selected_id == "RTA"

        selection.select("RTB")
        assert selection.selected_id == "RTB"

        selection.clear()
        assert selection.selected_id is None
