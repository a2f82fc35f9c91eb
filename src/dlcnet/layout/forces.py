"""
Force contributions of the layout simulation.

Each force reads the current LayoutState and nudges velocities (or, for
centering, positions) in place. Forces are alpha-scaled where the model
calls for it, so integration only has to add velocity to position.

    LinkForce      springs every edge toward a rest length
    ManyBodyForce  pairwise inverse-square repulsion
    CenterForce    shifts the centroid toward the viewport center
    CollideForce   separates overlapping node discs
    AxisForce      weak per-axis pull toward the viewport center
"""

from abc import ABC, abstractmethod
from typing import Iterable, List, Sequence, Tuple

import numpy as np

from ..config import LayoutSettings
from .state import LayoutState


class Force(ABC):
    """Base class for one named force contribution."""

    name: str = "force"

    @abstractmethod
    def apply(self, state: LayoutState, alpha: float) -> None:
        ...


class LinkForce(Force):
    """
    Spring force along edges.

    The correction ``(distance - rest) / distance`` is split between both
    endpoints, weighted toward the endpoint with fewer links (``bias``),
    and damped per link by ``1 / min(degree)`` so hubs are not torn apart.
    """

    name = "link"

    def __init__(self, links: Iterable[Tuple[int, int]], n: int, distance: float):
        pairs = np.array(list(links), dtype=int).reshape(-1, 2)
        self.source = pairs[:, 0]
        self.target = pairs[:, 1]
        self.distance = distance

        degree = np.bincount(np.concatenate([self.source, self.target]), minlength=n).astype(float)
        ds = degree[self.source]
        dt = degree[self.target]
        self.strength = 1.0 / np.maximum(np.minimum(ds, dt), 1.0)
        self.bias = ds / np.maximum(ds + dt, 1.0)

    def apply(self, state: LayoutState, alpha: float) -> None:
        if not len(self.source):
            return
        s, t = self.source, self.target
        dx = state.x[t] + state.vx[t] - state.x[s] - state.vx[s]
        dy = state.y[t] + state.vy[t] - state.y[s] - state.vy[s]
        length = np.hypot(dx, dy)
        safe = np.where(length > 0, length, 1.0)
        k = np.where(length > 0, (length - self.distance) / safe, 0.0) * alpha * self.strength
        dx *= k
        dy *= k
        np.subtract.at(state.vx, t, dx * self.bias)
        np.subtract.at(state.vy, t, dy * self.bias)
        np.add.at(state.vx, s, dx * (1 - self.bias))
        np.add.at(state.vy, s, dy * (1 - self.bias))


class ManyBodyForce(Force):
    """
    Direct O(n^2) inverse-square interaction between every node pair.

    A negative strength repels. Squared distances below ``min_distance``
    squared are clamped, so coincident nodes never produce infinities.
    """

    name = "charge"

    def __init__(self, strength: float, min_distance: float):
        self.strength = strength
        self.min_distance2 = min_distance * min_distance

    def apply(self, state: LayoutState, alpha: float) -> None:
        if len(state) < 2:
            return
        dx = state.x[np.newaxis, :] - state.x[:, np.newaxis]
        dy = state.y[np.newaxis, :] - state.y[:, np.newaxis]
        dist2 = np.maximum(dx * dx + dy * dy, self.min_distance2)
        np.fill_diagonal(dist2, np.inf)
        w = self.strength * alpha / dist2
        state.vx += (dx * w).sum(axis=1)
        state.vy += (dy * w).sum(axis=1)


class CenterForce(Force):
    """Translates all nodes so the centroid moves toward ``center``."""

    name = "center"

    def __init__(self, center: Tuple[float, float], strength: float):
        self.cx, self.cy = center
        self.strength = strength

    def apply(self, state: LayoutState, alpha: float) -> None:
        if not len(state):
            return
        state.x -= (state.x.mean() - self.cx) * self.strength
        state.y -= (state.y.mean() - self.cy) * self.strength


class CollideForce(Force):
    """
    Keeps node discs of ``radius`` from overlapping.

    Works on predicted positions (position + velocity). Every overlapping
    pair is pushed apart along its axis by the full overlap, shared equally,
    and the pass repeats ``iterations`` times within the tick.
    """

    name = "collide"

    def __init__(self, radius: float, iterations: int = 1, strength: float = 1.0):
        self.radius = radius
        self.iterations = iterations
        self.strength = strength

    def apply(self, state: LayoutState, alpha: float) -> None:
        n = len(state)
        if n < 2 or self.radius <= 0:
            return
        clearance = 2 * self.radius
        i, j = np.triu_indices(n, k=1)
        for _ in range(self.iterations):
            px = state.x + state.vx
            py = state.y + state.vy
            dx = px[i] - px[j]
            dy = py[i] - py[j]
            dist2 = dx * dx + dy * dy
            overlap = dist2 < clearance * clearance
            if not overlap.any():
                return
            oi, oj = i[overlap], j[overlap]
            dx, dy, dist2 = dx[overlap], dy[overlap], dist2[overlap]

            # Coincident predictions get a fixed tiny axis so they can separate
            coincident = dist2 == 0
            dx = np.where(coincident, 1e-6, dx)
            dist = np.sqrt(np.where(coincident, 1e-12, dist2))

            k = (clearance - dist) / dist * self.strength * 0.5
            np.add.at(state.vx, oi, dx * k)
            np.add.at(state.vy, oi, dy * k)
            np.subtract.at(state.vx, oj, dx * k)
            np.subtract.at(state.vy, oj, dy * k)


class AxisForce(Force):
    """Pulls each node toward ``target`` on a single axis."""

    def __init__(self, axis: str, target: float, strength: float):
        if axis not in ("x", "y"):
            raise ValueError(f"Unknown axis: {axis}")
        self.axis = axis
        self.name = axis
        self.target = target
        self.strength = strength

    def apply(self, state: LayoutState, alpha: float) -> None:
        if self.axis == "x":
            state.vx += (self.target - state.x) * self.strength * alpha
        else:
            state.vy += (self.target - state.y) * self.strength * alpha


def default_forces(
    links: Sequence[Tuple[int, int]],
    n: int,
    settings: LayoutSettings,
) -> List[Force]:
    """Build the standard five-force stack from LayoutSettings."""
    cx, cy = settings.center
    return [
        LinkForce(links, n, settings.link_distance),
        ManyBodyForce(settings.charge_strength, settings.min_distance),
        CenterForce(settings.center, settings.center_strength),
        CollideForce(settings.collide_radius, settings.collide_iterations),
        AxisForce("x", cx, settings.axis_strength),
        AxisForce("y", cy, settings.axis_strength),
    ]
