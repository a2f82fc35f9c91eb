"""
Per-node simulation state.

Positions, velocities and pins live in parallel numpy arrays indexed by
node order, so the forces can work on whole columns at once. A pin is
stored as a finite ``fx``/``fy``; NaN means the node is free.
"""

import math
from typing import Dict, List, Sequence, Tuple

import numpy as np

Point = Tuple[float, float]

# Golden-angle spiral used to seed distinct initial positions
INITIAL_RADIUS = 10.0
INITIAL_ANGLE = math.pi * (3 - math.sqrt(5))


class LayoutState:
    """
    Mutable layout of one graph build.

    Attributes:
        ids: Node ids in index order.
        x, y: Current positions.
        vx, vy: Current velocities.
        fx, fy: Pinned coordinates, NaN while the node is free.
    """

    def __init__(self, ids: Sequence[str], center: Point = (0.0, 0.0)):
        self.ids: List[str] = list(ids)
        self.index: Dict[str, int] = {node_id: i for i, node_id in enumerate(self.ids)}
        n = len(self.ids)

        # Phyllotaxis seeding: deterministic and never coincident
        i = np.arange(n, dtype=float)
        radius = INITIAL_RADIUS * np.sqrt(0.5 + i)
        angle = i * INITIAL_ANGLE
        self.x = center[0] + radius * np.cos(angle)
        self.y = center[1] + radius * np.sin(angle)

        self.vx = np.zeros(n)
        self.vy = np.zeros(n)
        self.fx = np.full(n, np.nan)
        self.fy = np.full(n, np.nan)

    def __len__(self) -> int:
        return len(self.ids)

    def __contains__(self, node_id: str) -> bool:
        return node_id in self.index

    @property
    def pinned(self) -> np.ndarray:
        """Boolean mask of pinned nodes."""
        return ~np.isnan(self.fx)

    def position(self, node_id: str) -> Point:
        i = self.index[node_id]
        return float(self.x[i]), float(self.y[i])

    def velocity(self, node_id: str) -> Point:
        i = self.index[node_id]
        return float(self.vx[i]), float(self.vy[i])

    def pin(self, node_id: str, point: Point) -> None:
        i = self.index[node_id]
        self.fx[i], self.fy[i] = point

    def unpin(self, node_id: str) -> None:
        i = self.index[node_id]
        self.fx[i] = np.nan
        self.fy[i] = np.nan

    def is_pinned(self, node_id: str) -> bool:
        return bool(self.pinned[self.index[node_id]])

    def is_finite(self) -> bool:
        return bool(
            np.isfinite(self.x).all()
            and np.isfinite(self.y).all()
            and np.isfinite(self.vx).all()
            and np.isfinite(self.vy).all()
        )

    def positions(self) -> Dict[str, Point]:
        return {node_id: (float(self.x[i]), float(self.y[i])) for i, node_id in enumerate(self.ids)}
