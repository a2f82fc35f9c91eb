"""
Selection highlighting.

Classifies nodes and edges relative to a selected route so a renderer
can emphasise the DLCs that route needs. The classification is a pure
function of the DependencyIndex; the only state here is the small
Selection machine owned by whoever drives the UI.
"""

from typing import Dict, Iterable, List, Mapping, Sequence, Set

from pydantic import BaseModel, Field

from .types import DependencyEntry, Edge, EdgeClass, Node, NodeClass


class Classification(BaseModel):
    """Per-id highlight classes for one selection."""

    node_class: Dict[str, NodeClass] = Field(default_factory=dict)
    edge_class: Dict[str, EdgeClass] = Field(default_factory=dict)

    def selected(self) -> List[str]:
        return [nid for nid, cls in self.node_class.items() if cls is NodeClass.SELECTED]

    def required(self) -> List[str]:
        return [nid for nid, cls in self.node_class.items() if cls is NodeClass.REQUIRED]

    def highlighted_edges(self) -> List[str]:
        return [eid for eid, cls in self.edge_class.items() if cls is EdgeClass.HIGHLIGHTED]


class SelectionHighlighter:
    """Stateless highlighter over a DependencyIndex."""

    def __init__(self, dependency_index: Mapping[str, Sequence[DependencyEntry]]):
        self._index = dependency_index

    def required_closure(self, route_id: str | None) -> Set[str]:
        """Every short name required by any locomotive of ``route_id``."""
        if route_id is None:
            return set()
        return {
            dlc.short_name
            for entry in self._index.get(route_id, ())
            for dlc in entry.required_dlcs
        }

    def classify(
        self,
        selected_id: str | None,
        nodes: Iterable[Node],
        edges: Iterable[Edge],
    ) -> Classification:
        required = self.required_closure(selected_id)
        node_class: Dict[str, NodeClass] = {}
        for node in nodes:
            if selected_id is not None and node.id == selected_id:
                node_class[node.id] = NodeClass.SELECTED
            elif node.id in required:
                node_class[node.id] = NodeClass.REQUIRED
            else:
                node_class[node.id] = NodeClass.NORMAL

        edge_class = {
            edge.id: (
                EdgeClass.HIGHLIGHTED
                if selected_id is not None and edge.source == selected_id and edge.target in required
                else EdgeClass.NORMAL
            )
            for edge in edges
        }
        return Classification(node_class=node_class, edge_class=edge_class)


class Selection:
    """
    Two-state selection machine: NoSelection and NodeSelected(id).

    Clicking a node selects it (or switches to it); ``clear()`` returns to
    NoSelection, which the click-on-empty-canvas gesture maps to.
    """

    def __init__(self):
        self._selected: str | None = None

    @property
    def selected_id(self) -> str | None:
        return self._selected

    @property
    def is_active(self) -> bool:
        return self._selected is not None

    def select(self, node_id: str) -> None:
        self._selected = node_id

    def clear(self) -> None:
        self._selected = None
