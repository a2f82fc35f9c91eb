"""
Network Engine - the facade a renderer talks to.

Owns the current build (nodes, edges, DependencyIndex), the LayoutEngine
positioning it and the selection state. A renderer subscribes to
position changes, reads ``snapshot()`` on every notification and asks
``classify()`` / ``route_details()`` when the selection changes.

Loading is all-or-nothing: the graph is fully built before any layout
exists, and a failed load leaves no graph behind.
"""

import asyncio
import logging
from pathlib import Path
from typing import Any, Callable, Iterable, List, Mapping, Optional, Set

from pydantic import BaseModel, Field

from .config import LayoutSettings
from .core.builder import BuildResult, DependencyIndex, GraphBuilder
from .core.highlight import Classification, Selection, SelectionHighlighter
from .core.resolver import IdentifierResolver
from .core.types import DependencyEntry, Edge, LoadState, Node, ResolvedIdentity
from .layout.scheduler import FrameScheduler
from .layout.simulation import LayoutEngine, UnknownNodeError
from .layout.state import Point
from .loader import DataLoadError, load_tables, parse_lookup_rows, parse_network_rows

logger = logging.getLogger(__name__)

PositionListener = Callable[["NetworkEngine"], None]

# Default for classify(): use whatever is selected
CURRENT_SELECTION = object()


# --- Read Models ---

class NodeView(BaseModel):
    """A node as the renderer draws it."""
    id: str
    label: str
    region: str
    full_name: str
    x: float
    y: float


class GraphSnapshot(BaseModel):
    """Positions and topology at one instant."""
    nodes: List[NodeView] = Field(default_factory=list)
    edges: List[Edge] = Field(default_factory=list)
    regions: List[str] = Field(default_factory=list)


class RequiredDLC(BaseModel):
    """One required DLC as listed in the info panel."""
    identity: ResolvedIdentity
    in_selection: bool = False


class LocomotiveRequirement(BaseModel):
    locomotive: str | None
    required: List[RequiredDLC] = Field(default_factory=list)


class RouteDetails(BaseModel):
    """
    Info panel content for one route.

    ``unrestricted`` lists locomotives that need no DLC beyond the route
    itself; ``has_requirements`` is False when no locomotive needs one.
    """
    route_id: str
    display_name: str
    region: str
    locomotives: List[LocomotiveRequirement] = Field(default_factory=list)
    unrestricted: List[str | None] = Field(default_factory=list)

    @property
    def locomotive_count(self) -> int:
        return len(self.locomotives)

    @property
    def has_requirements(self) -> bool:
        return any(item.required for item in self.locomotives)


class NetworkEngine:
    """
    Load, layout and selection for one DLC network.

    Example:
        ```python
        engine = NetworkEngine()
        engine.load_files("route_lookup.csv", "dlc_network.csv")
        engine.layout.run()
        engine.select_node("RTA")
        engine.classify()
        ```
    """

    def __init__(
        self,
        settings: Optional[LayoutSettings] = None,
        scheduler: Optional[FrameScheduler] = None,
        autostart: bool = True,
    ):
        self.settings = settings or LayoutSettings()
        self.scheduler = scheduler
        self.autostart = autostart

        self.state = LoadState.EMPTY
        self.load_error: Optional[Exception] = None
        self.result: Optional[BuildResult] = None
        self.resolver: Optional[IdentifierResolver] = None
        self.layout: Optional[LayoutEngine] = None
        self.selection = Selection()
        self._highlighter: Optional[SelectionHighlighter] = None
        self._listeners: List[PositionListener] = []

    # --- Loading ---

    def load_graph(
        self,
        lookup_rows: Iterable[Mapping[str, Any]],
        network_rows: Iterable[Mapping[str, Any]],
    ) -> BuildResult:
        """
        Build a new graph from raw table rows, replacing the current one.

        Raises:
            DataLoadError: If a row fails validation. The engine is left in
                the FAILED state with no graph.
        """
        self._begin_load()
        try:
            lookup = parse_lookup_rows(lookup_rows)
            network = parse_network_rows(network_rows)
        except DataLoadError as e:
            self._fail(e)
            raise
        return self._install(lookup, network)

    def load_files(self, lookup_path: str | Path, network_path: str | Path) -> BuildResult:
        """Load both CSV tables from disk and build the graph."""
        self._begin_load()
        try:
            lookup, network = load_tables(lookup_path, network_path)
        except DataLoadError as e:
            self._fail(e)
            raise
        return self._install(lookup, network)

    async def load_files_async(self, lookup_path: str | Path, network_path: str | Path) -> BuildResult:
        """
        Read the tables off the event loop, then build on it.

        The layout only sees the graph once the whole load has completed.
        """
        self._begin_load()
        try:
            lookup, network = await asyncio.to_thread(load_tables, lookup_path, network_path)
        except DataLoadError as e:
            self._fail(e)
            raise
        return self._install(lookup, network)

    def _begin_load(self) -> None:
        self._discard()
        self.state = LoadState.LOADING
        self.load_error = None

    def _fail(self, error: Exception) -> None:
        logger.error(f"Failed to load network data: {error}")
        self._discard()
        self.state = LoadState.FAILED
        self.load_error = error

    def _discard(self) -> None:
        if self.layout is not None:
            self.layout.stop()
        self.layout = None
        self.result = None
        self.resolver = None
        self._highlighter = None
        self.selection.clear()

    def _install(self, lookup, network) -> BuildResult:
        try:
            resolver = IdentifierResolver(lookup)
            result = GraphBuilder(resolver).build(network)
        except Exception as e:
            error = DataLoadError(f"Failed to build network graph: {e}")
            self._fail(error)
            raise error from e
        self.resolver = resolver

        layout_kwargs = {"settings": self.settings}
        if self.scheduler is not None:
            layout_kwargs["scheduler"] = self.scheduler
        layout = LayoutEngine(result.nodes, result.edges, **layout_kwargs)
        layout.add_tick_listener(self._on_tick)

        self.result = result
        self.layout = layout
        self._highlighter = SelectionHighlighter(result.dependency_index)
        self.state = LoadState.READY
        logger.info(
            f"Network ready: {result.graph.node_count} routes, {result.graph.edge_count} requirements, "
            f"{len(result.regions)} regions"
        )
        if self.autostart:
            layout.start()
        return result

    # --- Lifecycle ---

    def start(self) -> None:
        self._require_layout().start()

    def stop(self) -> None:
        if self.layout is not None:
            self.layout.stop()

    def reheat(self, alpha: Optional[float] = None) -> None:
        self._require_layout().reheat(alpha)

    # --- Position notifications ---

    def add_position_listener(self, listener: PositionListener) -> None:
        self._listeners.append(listener)

    def remove_position_listener(self, listener: PositionListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _on_tick(self, layout: LayoutEngine) -> None:
        for listener in list(self._listeners):
            listener(self)

    # --- Drag ---

    def on_drag_start(self, node_id: str, point: Point) -> None:
        self._require_layout().on_drag_start(node_id, point)

    def on_drag_move(self, node_id: str, point: Point) -> None:
        self._require_layout().on_drag_move(node_id, point)

    def on_drag_end(self, node_id: str) -> None:
        self._require_layout().on_drag_end(node_id)

    # --- Selection ---

    def select_node(self, node_id: str | None) -> None:
        """Select a node, switch to another, or clear with ``None``."""
        if node_id is None:
            self.selection.clear()
            return
        result = self._require_result()
        if not result.graph.has_node(node_id):
            raise UnknownNodeError(node_id)
        self.selection.select(node_id)

    def required_closure(self, route_id: str) -> Set[str]:
        return self._require_highlighter().required_closure(route_id)

    def classify(self, selected_id: Any = CURRENT_SELECTION) -> Classification:
        """
        Classify against ``selected_id``, by default the current selection.

        ``classify(None)`` gives the no-selection classification whatever is
        currently selected.
        """
        result = self._require_result()
        if selected_id is CURRENT_SELECTION:
            selected_id = self.selection.selected_id
        return self._require_highlighter().classify(selected_id, result.nodes, result.edges)

    def route_details(self, route_id: str) -> RouteDetails:
        """Info panel content for any indexed or known route."""
        result = self._require_result()
        identity = self.resolver.resolve(route_id)
        node = result.graph.get_node(route_id)
        closure = self.required_closure(route_id)

        entries: List[DependencyEntry] = result.entries_for(route_id)
        locomotives = [
            LocomotiveRequirement(
                locomotive=entry.locomotive,
                required=[
                    RequiredDLC(identity=dlc, in_selection=dlc.short_name in closure)
                    for dlc in entry.required_dlcs
                ],
            )
            for entry in entries
        ]
        return RouteDetails(
            route_id=route_id,
            display_name=node.full_name if node else identity.display_name,
            region=identity.region,
            locomotives=locomotives,
            unrestricted=[entry.locomotive for entry in entries if not entry.needs_extra_dlc],
        )

    # --- Read model ---

    @property
    def nodes(self) -> List[Node]:
        return self._require_result().nodes

    @property
    def edges(self) -> List[Edge]:
        return self._require_result().edges

    @property
    def regions(self) -> List[str]:
        return list(self._require_result().regions)

    @property
    def dependency_index(self) -> DependencyIndex:
        return self._require_result().dependency_index

    def snapshot(self) -> GraphSnapshot:
        result = self._require_result()
        layout = self._require_layout()
        views = []
        for node in result.nodes:
            x, y = layout.state.position(node.id)
            views.append(NodeView(**node.model_dump(), x=x, y=y))
        return GraphSnapshot(nodes=views, edges=result.edges, regions=list(result.regions))

    def _require_result(self) -> BuildResult:
        if self.result is None:
            raise RuntimeError(f"No graph loaded (state: {self.state})")
        return self.result

    def _require_layout(self) -> LayoutEngine:
        if self.layout is None:
            raise RuntimeError(f"No graph loaded (state: {self.state})")
        return self.layout

    def _require_highlighter(self) -> SelectionHighlighter:
        self._require_result()
        return self._highlighter
