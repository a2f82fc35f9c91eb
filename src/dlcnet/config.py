"""
Global Configuration and Layout Defaults.

This module centralizes the tuning constants of the force simulation and
the column contract of the two input tables. The numbers mirror the
layout the route map has always used, so a fresh load settles into the
same qualitative picture.
"""

from typing import Tuple

from pydantic import BaseModel, ConfigDict, Field, model_validator

# --- Input Table Contract ---
LOOKUP_COLUMNS: Tuple[str, ...] = ("Route", "Short Name", "Region")
NETWORK_REQUIRED_COLUMNS: Tuple[str, ...] = ("Route", "Loco")
NETWORK_OPTIONAL_COLUMNS: Tuple[str, ...] = ("Required DLC",)

# Region assigned to any short name the lookup table does not know
UNKNOWN_REGION = "Unknown"

# --- Force Parameters ---
LINK_DISTANCE = 30.0
CHARGE_STRENGTH = -100.0
CENTER_STRENGTH = 0.1
COLLIDE_RADIUS = 20.0
AXIS_STRENGTH = 0.07

# Repulsion never divides by less than this distance
MIN_DISTANCE = 1.0

# --- Alpha Schedule ---
ALPHA_START = 1.0
ALPHA_MIN = 0.001
# ~2.3% per tick: reaches ALPHA_MIN from 1.0 in 300 ticks
ALPHA_DECAY = 1.0 - ALPHA_MIN ** (1.0 / 300)
DRAG_ALPHA_TARGET = 0.3

# Fraction of velocity lost every tick (friction)
VELOCITY_DECAY = 0.4

# --- Safety Limits ---
# Hard cap on ticks per run, guards against a disabled alpha decay
MAX_TICKS = 10_000

# --- Viewport & Scheduling ---
VIEWPORT_WIDTH = 960.0
VIEWPORT_HEIGHT = 600.0
FRAME_INTERVAL = 1.0 / 60


class LayoutSettings(BaseModel):
    """
    Validated parameter set for one LayoutEngine.

    Defaults come from the module constants above; any field can be
    overridden per engine (e.g. a mobile viewport or a debugging run with
    alpha_decay=0).
    """

    model_config = ConfigDict(frozen=True)

    width: float = Field(default=VIEWPORT_WIDTH, gt=0)
    height: float = Field(default=VIEWPORT_HEIGHT, gt=0)

    link_distance: float = Field(default=LINK_DISTANCE, ge=0)
    charge_strength: float = CHARGE_STRENGTH
    center_strength: float = Field(default=CENTER_STRENGTH, ge=0, le=1)
    collide_radius: float = Field(default=COLLIDE_RADIUS, ge=0)
    collide_iterations: int = Field(default=1, ge=1)
    axis_strength: float = Field(default=AXIS_STRENGTH, ge=0, le=1)
    min_distance: float = Field(default=MIN_DISTANCE, gt=0)

    alpha_start: float = Field(default=ALPHA_START, gt=0, le=1)
    alpha_min: float = Field(default=ALPHA_MIN, gt=0)
    alpha_decay: float = Field(default=ALPHA_DECAY, ge=0, lt=1)
    drag_alpha_target: float = Field(default=DRAG_ALPHA_TARGET, ge=0, le=1)
    velocity_decay: float = Field(default=VELOCITY_DECAY, ge=0, lt=1)

    max_ticks: int = Field(default=MAX_TICKS, gt=0)
    frame_interval: float = Field(default=FRAME_INTERVAL, ge=0)

    @model_validator(mode="after")
    def _check_alpha_range(self) -> "LayoutSettings":
        if self.alpha_min >= self.alpha_start:
            raise ValueError("alpha_min must be below alpha_start")
        return self

    @property
    def center(self) -> Tuple[float, float]:
        """Viewport center that the centering and axis forces pull toward."""
        return self.width / 2, self.height / 2
