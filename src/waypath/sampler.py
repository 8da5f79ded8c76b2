from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from beartype import beartype
from jaxtyping import jaxtyped

from ..utils import debug_helpers
from .bezier import bezier_param_grid, eval_cubic_bezier
from .config import SAMPLES_PER_SEGMENT
from .path_types import PointArray, ScalarArray, SegmentArray
from .spline_chain import SplineChain


def _frozen(arr: np.ndarray) -> np.ndarray:
    out = np.array(arr, dtype=np.float64)
    out.flags.writeable = False
    return out


@dataclass(frozen=True)
class DenseSamples:
    """
    Dense dissection of a whole chain.

    points: (N,2) curve samples in path order
    arc_length: (N,) cumulative distance from the first sample
    speed: (N,) target speed, or None before profiling
    """

    points: np.ndarray
    arc_length: np.ndarray
    speed: np.ndarray | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "points", _frozen(self.points))
        object.__setattr__(self, "arc_length", _frozen(self.arc_length))
        if self.speed is not None:
            object.__setattr__(self, "speed", _frozen(self.speed))
            if self.speed.shape != self.arc_length.shape:
                raise ValueError("speed must have one entry per sample")
        if self.points.ndim != 2 or self.points.shape[1] != 2:
            raise ValueError("points must have shape (N,2)")
        if self.arc_length.shape != (self.points.shape[0],):
            raise ValueError("arc_length must have one entry per sample")

    def __len__(self) -> int:
        return int(self.points.shape[0])

    @property
    def total_length(self) -> float:
        if len(self) == 0:
            return 0.0
        return float(self.arc_length[-1])

    def with_speed(self, speed: np.ndarray) -> DenseSamples:
        return DenseSamples(self.points, self.arc_length, speed)


@jaxtyped(typechecker=beartype)
def concat_segment_samples(
    segments: SegmentArray,
    n_samples: int = SAMPLES_PER_SEGMENT,
) -> PointArray:
    """
    Evaluate every segment on the uniform grid and join them in order.

    The last sample of each non-terminal segment coincides with the first
    sample of the next one and is dropped.
    """
    ts = bezier_param_grid(n_samples)
    K = segments.shape[0]
    parts: list[np.ndarray] = []
    for k in range(K):
        pts = eval_cubic_bezier(segments[k], ts)
        if k != K - 1:
            pts = pts[:-1]
        parts.append(pts)
    return np.concatenate(parts, axis=0)


@jaxtyped(typechecker=beartype)
def cumulative_arc_length(points: PointArray) -> ScalarArray:
    """arc[0] = 0, arc[i] = arc[i-1] + |points[i] - points[i-1]|."""

    arc = np.zeros(points.shape[0], dtype=np.float64)
    if points.shape[0] > 1:
        step = np.linalg.norm(np.diff(points, axis=0), axis=1)
        arc[1:] = np.cumsum(step)
    return arc


def dense_samples(
    chain: SplineChain,
    n_samples: int = SAMPLES_PER_SEGMENT,
) -> DenseSamples:
    points = concat_segment_samples(chain.segments(), n_samples)
    arc = cumulative_arc_length(points)
    debug_helpers.log_array("dense_points", points)
    debug_helpers.log_array("dense_arc_length", arc)
    return DenseSamples(points, arc)
