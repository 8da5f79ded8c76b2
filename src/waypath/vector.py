from __future__ import annotations

import math

import numpy as np
from beartype import beartype
from jaxtyping import jaxtyped

from .errors import InvalidOperation
from .path_types import Point2


@jaxtyped(typechecker=beartype)
def distance(a: Point2, b: Point2) -> float:
    """Euclidean distance between two points."""

    return float(math.hypot(float(b[0] - a[0]), float(b[1] - a[1])))


def divide(numerator: float, denominator: float) -> float:
    """Scalar division that refuses to produce inf/NaN."""

    if denominator == 0:
        raise InvalidOperation(f"division of {numerator!r} by zero")
    return numerator / denominator


@jaxtyped(typechecker=beartype)
def normalize(v: Point2) -> Point2:
    """Unit vector along v; a zero-length vector raises InvalidOperation."""

    length = math.hypot(float(v[0]), float(v[1]))
    return np.array(
        [divide(float(v[0]), length), divide(float(v[1]), length)], dtype=np.float64
    )


@jaxtyped(typechecker=beartype)
def interpolate(d: float, start: Point2, toward: Point2) -> Point2:
    """
    Point at distance d from `start` along the direction of `toward`.
    d may exceed |toward - start|, which extends the ray past `toward`.
    Coincident points resolve to the +x direction (atan2(0, 0) == 0).
    """
    angle = math.atan2(float(toward[1] - start[1]), float(toward[0] - start[0]))
    return np.array(
        [start[0] + d * math.cos(angle), start[1] + d * math.sin(angle)],
        dtype=np.float64,
    )


@jaxtyped(typechecker=beartype)
def reflect(handle: Point2, anchor: Point2) -> Point2:
    """Point reflection of a handle through an anchor (the C1 mirror)."""

    return (2.0 * np.asarray(anchor, dtype=np.float64)) - handle


@jaxtyped(typechecker=beartype)
def lerp(a: Point2, b: Point2, t: float) -> Point2:
    return a + t * (b - a)
