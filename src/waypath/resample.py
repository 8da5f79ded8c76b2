from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

from ..utils import debug
from .sampler import DenseSamples, _frozen
from .vector import distance, divide, lerp

# Relative slack when counting how many spacings fit in the path, so a length
# that is an exact multiple of the spacing survives float summation error.
_COUNT_RTOL = 1e-9


@dataclass(frozen=True)
class Waypoints:
    """
    Evenly spaced output of the engine.

    points: (M,2) waypoint positions
    speed: (M,) target speed at each waypoint
    arc_length: (M,) distance along the dense path at which each waypoint sits
    """

    points: np.ndarray
    speed: np.ndarray
    arc_length: np.ndarray

    def __post_init__(self) -> None:
        object.__setattr__(self, "points", _frozen(self.points))
        object.__setattr__(self, "speed", _frozen(self.speed))
        object.__setattr__(self, "arc_length", _frozen(self.arc_length))
        M = self.points.shape[0]
        if self.points.ndim != 2 or self.points.shape[1] != 2:
            raise ValueError("points must have shape (M,2)")
        if self.speed.shape != (M,) or self.arc_length.shape != (M,):
            raise ValueError("speed and arc_length must have one entry per waypoint")

    def __len__(self) -> int:
        return int(self.points.shape[0])

    def with_speed(self, speed: np.ndarray) -> Waypoints:
        return Waypoints(self.points, speed, self.arc_length)

    def rows(self) -> list[tuple[float, float, float]]:
        return [
            (float(p[0]), float(p[1]), float(v))
            for p, v in zip(self.points, self.speed)
        ]


def waypoint_count(total_length: float, spacing: float) -> int:
    """floor(total_length / spacing); 0 when the spacing exceeds the path."""

    if spacing <= 0:
        raise ValueError("spacing must be positive")
    return int(math.floor(total_length / spacing * (1.0 + _COUNT_RTOL)))


def resample(dense: DenseSamples, spacing: float) -> Waypoints:
    """
    Walk the profiled dense samples and pick points every `spacing` units of
    arc length.

    For each target arc length u the sample j with the largest arc[j] <= u is
    found. An exact hit is emitted unchanged; otherwise the position is
    interpolated between j and j+1 and the speed is copied from whichever of
    the two is closer. The true terminal sample always closes the sequence.
    """
    if dense.speed is None:
        raise ValueError("dense samples must be profiled before resampling")
    N = len(dense)
    if N == 0:
        raise ValueError("cannot resample an empty sample set")

    pts = dense.points
    arc = dense.arc_length
    speed = dense.speed
    L = dense.total_length
    n = waypoint_count(L, spacing)

    out_pts: list[np.ndarray] = []
    out_speed: list[float] = []
    out_arc: list[float] = []
    for k in range(n):
        u = (k / n) * L
        j = int(np.searchsorted(arc, u, side="right")) - 1
        j = min(max(j, 0), N - 1)
        if arc[j] == u or j == N - 1:
            out_pts.append(pts[j])
            out_speed.append(float(speed[j]))
            out_arc.append(float(arc[j]))
            continue
        t = divide(u - float(arc[j]), float(arc[j + 1] - arc[j]))
        p = lerp(pts[j], pts[j + 1], t)
        nearer = j if distance(pts[j], p) < distance(pts[j + 1], p) else j + 1
        out_pts.append(p)
        out_speed.append(float(speed[nearer]))
        out_arc.append(u)

    out_pts.append(pts[N - 1])
    out_speed.append(float(speed[N - 1]))
    out_arc.append(float(arc[N - 1]))

    debug.log(
        f"resample: length={L:.6g} spacing={spacing:.6g} "
        f"interior={n} waypoints={len(out_pts)}"
    )
    return Waypoints(
        np.asarray(out_pts, dtype=np.float64),
        np.asarray(out_speed, dtype=np.float64),
        np.asarray(out_arc, dtype=np.float64),
    )
