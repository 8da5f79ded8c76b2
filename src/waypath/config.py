from __future__ import annotations

import math
import dataclasses
from dataclasses import dataclass, fields

import numpy as np

# Dense samples evaluated per Bezier segment (t = 0, 0.01, ..., 1.0).
# The curvature proxy in velocity.py reads inter-sample spacing, so changing
# this changes the speed profile of geometrically identical paths.
SAMPLES_PER_SEGMENT = 101

# Vertical offset of the exit handle placed by SplineChain.append_anchor.
APPEND_HANDLE_OFFSET = 24.0

# How far past the last waypoint the exported ghost row sits.
GHOST_EXTENSION = 20.0

# Hit radius for picking control points.
PICK_RADIUS = 5.0

# Starting segment of a fresh path (field coordinates, inches).
DEFAULT_SEGMENT = np.array(
    [[-32.3, -6.3], [-41.0, 49.0], [-42.0, 52.0], [5.2, 6.12]], dtype=np.float64
)
DEFAULT_SEGMENT.flags.writeable = False


@dataclass(frozen=True)
class ProfileParameters:
    """
    Scalars consumed by the velocity profile and the resampler.

    max_speed and turn_multiplier bound the curvature-proxy cap,
    max_deceleration bounds the backward feasibility pass and spacing is the
    target distance between consecutive waypoints.
    """

    max_speed: float = 62.83
    max_deceleration: float = 20.0
    turn_multiplier: float = 50.0
    spacing: float = 2.0

    def __post_init__(self) -> None:
        for f in fields(self):
            object.__setattr__(self, f.name, float(getattr(self, f.name)))
        self.validate()

    def validate(self) -> None:
        for f in fields(self):
            if not math.isfinite(getattr(self, f.name)):
                raise ValueError(f"{f.name} must be finite")
        if self.max_speed < 0:
            raise ValueError("max_speed must be >= 0")
        if self.max_deceleration < 0:
            raise ValueError("max_deceleration must be >= 0")
        if self.turn_multiplier < 0:
            raise ValueError("turn_multiplier must be >= 0")
        if self.spacing <= 0:
            raise ValueError("spacing must be positive")

    def replace(self, **changes: float) -> ProfileParameters:
        return dataclasses.replace(self, **changes)


DEFAULT_PARAMETERS = ProfileParameters()
