"""
Layout Engine - force-directed placement of the requirement graph.

The engine owns the LayoutState of one graph build and advances it one
tick per frame:

    1. alpha moves toward alpha_target by alpha_decay
    2. every force adds its alpha-scaled contribution
    3. free nodes integrate (velocity damped, then added to position);
       pinned nodes snap to their fixed coordinates with zero velocity

Ticking stops once alpha falls below alpha_min or the per-run tick
budget is spent (frames ticked while a drag is held do not count). A
stopped engine keeps its state and can be restarted or reheated.

Dragging is a two-state machine (Idle, Dragging): a drag pins the node
and keeps the simulation warm until it is released.
"""

import logging
from enum import StrEnum
from typing import Any, Callable, List, Optional, Sequence

from ..config import LayoutSettings
from ..core.types import Edge, Node
from .forces import Force, default_forces
from .scheduler import FrameScheduler, ManualScheduler
from .state import LayoutState, Point

logger = logging.getLogger(__name__)

TickListener = Callable[["LayoutEngine"], None]
ErrorListener = Callable[["LayoutEngine", "SimulationError"], None]


class SimulationError(Exception):
    """Raised when the simulation produces a non-finite position or velocity."""

    def __init__(self, tick: int, message: str):
        self.tick = tick
        super().__init__(f"Tick {tick}: {message}")


class DragStateError(Exception):
    """Raised for drag events that do not match the current drag state."""
    pass


class UnknownNodeError(KeyError):
    """Raised when a node id is not part of the current graph."""

    def __init__(self, node_id: str):
        self.node_id = node_id
        super().__init__(node_id)

    def __str__(self) -> str:
        return f"Unknown node: {self.node_id!r}"


class DragPhase(StrEnum):
    IDLE = "idle"
    DRAGGING = "dragging"


class LayoutEngine:
    """
    Tick-driven force simulation over a fixed node set.

    Attributes:
        state: Positions, velocities and pins, indexed by node order.
        alpha: Current simulation energy.
        alpha_target: Energy the simulation relaxes toward (0 at rest).
        tick_count: Ticks executed since construction.
        error: The SimulationError that halted the engine, if any.

    Example:
        ```python
        engine = LayoutEngine(result.nodes, result.edges)
        engine.run()
        engine.state.positions()
        ```
    """

    def __init__(
        self,
        nodes: Sequence[Node],
        edges: Sequence[Edge],
        settings: Optional[LayoutSettings] = None,
        scheduler: Optional[FrameScheduler] = None,
        forces: Optional[List[Force]] = None,
    ):
        self.settings = settings or LayoutSettings()
        self.scheduler = scheduler or ManualScheduler()
        self.state = LayoutState([node.id for node in nodes], center=self.settings.center)

        links = [(self.state.index[edge.source], self.state.index[edge.target]) for edge in edges]
        self.forces = forces if forces is not None else default_forces(links, len(self.state), self.settings)

        self.alpha = self.settings.alpha_start
        self.alpha_target = 0.0
        self.tick_count = 0
        self.error: Optional[SimulationError] = None

        self._handle: Any = None
        self._running = False
        self._run_ticks = 0
        self._drag_phase = DragPhase.IDLE
        self._drag_node: Optional[str] = None
        self._tick_listeners: List[TickListener] = []
        self._error_listeners: List[ErrorListener] = []

    # --- Observers ---

    def add_tick_listener(self, listener: TickListener) -> None:
        """Register a callback fired after every scheduled tick."""
        self._tick_listeners.append(listener)

    def remove_tick_listener(self, listener: TickListener) -> None:
        if listener in self._tick_listeners:
            self._tick_listeners.remove(listener)

    def add_error_listener(self, listener: ErrorListener) -> None:
        self._error_listeners.append(listener)

    # --- Status ---

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def at_rest(self) -> bool:
        return not self._running and self.alpha_target == 0

    @property
    def drag_phase(self) -> DragPhase:
        return self._drag_phase

    @property
    def dragged_node(self) -> Optional[str]:
        return self._drag_node

    # --- Lifecycle ---

    def start(self) -> None:
        """Resume ticking. No-op while already running."""
        if self.error is not None:
            raise self.error
        self._run_ticks = 0
        if self._running:
            return
        self._running = True
        self._schedule()
        logger.debug(f"Layout started at alpha={self.alpha:.4f}")

    def stop(self) -> None:
        """Halt ticking and cancel the pending frame. Idempotent."""
        if self._handle is not None:
            self.scheduler.cancel(self._handle)
            self._handle = None
        if self._running:
            self._running = False
            logger.debug(f"Layout stopped after {self.tick_count} ticks")

    def reheat(self, alpha: Optional[float] = None) -> None:
        """Raise alpha back up (default: alpha_start) and resume ticking."""
        self.alpha = self.settings.alpha_start if alpha is None else alpha
        self.start()

    def tick(self) -> float:
        """
        Advance the simulation by one step.

        Returns:
            The alpha value used for this step.

        Raises:
            SimulationError: If the step produced a non-finite value. The
                engine is stopped before the error propagates.
        """
        s = self.settings
        self.alpha += (self.alpha_target - self.alpha) * s.alpha_decay

        for force in self.forces:
            force.apply(self.state, self.alpha)

        st = self.state
        pinned = st.pinned
        free = ~pinned
        damping = 1.0 - s.velocity_decay
        st.vx[free] *= damping
        st.vy[free] *= damping
        st.x[free] += st.vx[free]
        st.y[free] += st.vy[free]
        st.x[pinned] = st.fx[pinned]
        st.y[pinned] = st.fy[pinned]
        st.vx[pinned] = 0.0
        st.vy[pinned] = 0.0

        self.tick_count += 1

        if not st.is_finite():
            self.error = SimulationError(self.tick_count, "non-finite position or velocity")
            logger.error(f"Layout diverged, halting simulation: {self.error}")
            self.stop()
            raise self.error

        return self.alpha

    def run(self, max_ticks: Optional[int] = None) -> int:
        """
        Tick synchronously until rest or ``max_ticks`` (default: settings.max_ticks).

        Returns:
            The number of ticks executed.
        """
        limit = max_ticks if max_ticks is not None else self.settings.max_ticks
        ticks = 0
        while ticks < limit and not self._cooled():
            self.tick()
            ticks += 1
        if ticks >= limit and not self._cooled():
            logger.warning(f"Layout did not settle within {limit} ticks (alpha={self.alpha:.4f})")
        return ticks

    # --- Drag State Machine ---

    def on_drag_start(self, node_id: str, point: Point) -> None:
        """
        Pin ``node_id`` where it currently is and warm the simulation.

        ``point`` is the pointer position; the pin only follows it from the
        first move event.
        """
        self._require_node(node_id)
        if self._drag_phase is DragPhase.DRAGGING:
            raise DragStateError(f"Already dragging {self._drag_node!r}, cannot start {node_id!r}")

        if self.alpha_target == 0:
            self.alpha_target = self.settings.drag_alpha_target
            self.start()
        self.state.pin(node_id, self.state.position(node_id))
        self._drag_phase = DragPhase.DRAGGING
        self._drag_node = node_id
        logger.debug(f"Drag started on {node_id} at pointer {point}")

    def on_drag_move(self, node_id: str, point: Point) -> None:
        """Move the pin to the pointer. Takes effect on the next tick."""
        self._require_drag(node_id)
        self.state.pin(node_id, point)

    def on_drag_end(self, node_id: str) -> None:
        """Release the pin and let the simulation cool back to rest."""
        self._require_drag(node_id)
        self.alpha_target = 0.0
        self.state.unpin(node_id)
        self._drag_phase = DragPhase.IDLE
        self._drag_node = None
        logger.debug(f"Drag ended on {node_id}")

    # --- Internals ---

    def _cooled(self) -> bool:
        return self.alpha < self.settings.alpha_min

    def _schedule(self) -> None:
        self._handle = self.scheduler.schedule(self._on_frame)

    def _on_frame(self) -> None:
        self._handle = None
        if not self._running:
            return

        try:
            self.tick()
        except SimulationError as e:
            for listener in self._error_listeners:
                listener(self, e)
            return

        # A held drag never cools; the budget only counts once it is released
        if self._drag_phase is DragPhase.DRAGGING:
            self._run_ticks = 0
        else:
            self._run_ticks += 1
        if self._cooled():
            logger.info(f"Layout at rest after {self.tick_count} ticks")
            self.stop()
        elif self._run_ticks >= self.settings.max_ticks:
            logger.warning(f"Tick budget of {self.settings.max_ticks} spent, stopping layout")
            self.stop()

        # Listeners of the final tick already see is_running == False
        for listener in list(self._tick_listeners):
            listener(self)

        if self._running and self._handle is None:
            self._schedule()

    def _require_node(self, node_id: str) -> None:
        if node_id not in self.state:
            raise UnknownNodeError(node_id)

    def _require_drag(self, node_id: str) -> None:
        self._require_node(node_id)
        if self._drag_phase is not DragPhase.DRAGGING or self._drag_node != node_id:
            raise DragStateError(f"No drag in progress for {node_id!r}")
