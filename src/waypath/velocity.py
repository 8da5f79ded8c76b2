from __future__ import annotations

import math

import numpy as np
from beartype import beartype
from jaxtyping import jaxtyped

from ..utils import debug, debug_helpers
from .config import ProfileParameters
from .path_types import PointArray, ScalarArray
from .sampler import DenseSamples


@jaxtyped(typechecker=beartype)
def curvature_speed_caps(
    points: PointArray,
    max_speed: float,
    turn_multiplier: float,
) -> ScalarArray:
    """
    Forward pass: speed[i] = min(max_speed, turn_multiplier * |p[i+1] - p[i]|).

    Samples come from a fixed parameter step, so they bunch up on tight turns
    and spread out on straights; their spacing stands in for curvature.
    The last sample repeats the value of the one before it.
    """
    N = points.shape[0]
    speed = np.zeros(N, dtype=np.float64)
    if N < 2:
        return speed
    step = np.linalg.norm(np.diff(points, axis=0), axis=1)
    speed[:-1] = np.minimum(max_speed, turn_multiplier * step)
    speed[-1] = speed[-2]
    return speed


@jaxtyped(typechecker=beartype)
def apply_deceleration_limit(
    points: PointArray,
    speed: ScalarArray,
    max_deceleration: float,
) -> ScalarArray:
    """
    Backward pass: stop at the last point and never ask for more braking than
    max_deceleration allows over the distance that remains.

    speed[N-1] = 0
    speed[i] = min(speed[i], sqrt(speed[i+1]^2 + 2 * max_deceleration * d_i))
    """
    out = np.array(speed, dtype=np.float64)
    N = out.shape[0]
    if N < 2:
        return out
    step = np.linalg.norm(np.diff(points, axis=0), axis=1)
    out[-1] = 0.0
    for i in range(N - 2, -1, -1):
        reachable = math.sqrt(out[i + 1] ** 2 + 2.0 * max_deceleration * step[i])
        if reachable < out[i]:
            out[i] = reachable
    return out


@jaxtyped(typechecker=beartype)
def profile_speeds(
    points: PointArray,
    max_speed: float,
    max_deceleration: float,
    turn_multiplier: float,
) -> ScalarArray:
    caps = curvature_speed_caps(points, max_speed, turn_multiplier)
    return apply_deceleration_limit(points, caps, max_deceleration)


def profile_dense(dense: DenseSamples, params: ProfileParameters) -> DenseSamples:
    """Return a copy of `dense` tagged with its two-pass speed profile."""

    if len(dense) < 2:
        debug.log(f"velocity: {len(dense)} samples, nothing to profile")
        return dense.with_speed(np.zeros(len(dense), dtype=np.float64))
    speed = profile_speeds(
        np.asarray(dense.points),
        params.max_speed,
        params.max_deceleration,
        params.turn_multiplier,
    )
    debug_helpers.log_array("dense_speed", speed)
    return dense.with_speed(speed)
