"""Force-directed layout simulation."""

from .scheduler import AsyncioFrameScheduler, ManualScheduler
from .simulation import DragPhase, DragStateError, LayoutEngine, SimulationError, UnknownNodeError
from .state import LayoutState

__all__ = [
    "AsyncioFrameScheduler",
    "DragPhase",
    "DragStateError",
    "LayoutEngine",
    "LayoutState",
    "ManualScheduler",
    "SimulationError",
    "UnknownNodeError",
]
