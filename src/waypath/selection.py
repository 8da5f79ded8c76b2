from __future__ import annotations

from collections.abc import Iterable, Sequence

import numpy as np

from ..utils import debug
from .path_types import IndexArray, PointArray
from .resample import Waypoints
from .velocity import apply_deceleration_limit


def points_in_rect(
    points: PointArray,
    corner_a: Sequence[float] | np.ndarray,
    corner_b: Sequence[float] | np.ndarray,
) -> IndexArray:
    """
    Indices of points strictly inside the axis-aligned box spanned by two
    opposite corners (given in any order). Points on an edge are excluded.
    """
    P = np.asarray(points, dtype=np.float64)
    if P.ndim != 2 or P.shape[1] != 2:
        raise ValueError("points must have shape (N,2)")
    a = np.asarray(corner_a, dtype=np.float64)
    b = np.asarray(corner_b, dtype=np.float64)
    lo = np.minimum(a, b)
    hi = np.maximum(a, b)
    inside = np.all((P > lo) & (P < hi), axis=1)
    return np.flatnonzero(inside).astype(np.int64)


def indices_in_range(first: int, last: int, count: int) -> np.ndarray:
    """Inclusive index range [first, last], clipped to a sequence of `count` items."""

    if first > last:
        first, last = last, first
    lo = max(int(first), 0)
    hi = min(int(last), count - 1)
    if hi < lo:
        return np.zeros(0, dtype=np.int64)
    return np.arange(lo, hi + 1, dtype=np.int64)


def scale_speeds(
    waypoints: Waypoints,
    indices: Iterable[int] | np.ndarray,
    factor: float,
    max_deceleration: float,
) -> Waypoints:
    """
    Multiply the speed of the selected waypoints by `factor`, then re-run the
    backward deceleration pass over the waypoint sequence.

    The curvature cap is not reapplied, so a manual override may exceed it,
    but never the deceleration bound.
    """
    if not np.isfinite(factor) or factor < 0:
        raise ValueError("factor must be finite and >= 0")
    idx = np.unique(np.asarray(list(indices), dtype=np.int64))
    if idx.size and (idx.min() < 0 or idx.max() >= len(waypoints)):
        raise IndexError("waypoint index out of range")
    speed = np.array(waypoints.speed, dtype=np.float64)
    speed[idx] *= float(factor)
    speed = apply_deceleration_limit(
        np.asarray(waypoints.points), speed, float(max_deceleration)
    )
    debug.log(f"scale_speeds: {idx.size} waypoints x{factor:.6g}")
    return waypoints.with_speed(speed)
