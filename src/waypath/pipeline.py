from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from ..utils import debug
from .config import ProfileParameters
from .resample import Waypoints, resample
from .sampler import DenseSamples, dense_samples
from .spline_chain import SplineChain
from .velocity import profile_dense


@dataclass(frozen=True)
class PathProfile:
    """Everything derived from one chain + parameter snapshot."""

    segments: np.ndarray
    params: ProfileParameters
    dense: DenseSamples
    waypoints: Waypoints

    @property
    def total_length(self) -> float:
        return self.dense.total_length


def generate_path(chain: SplineChain, params: ProfileParameters) -> PathProfile:
    """
    Run sampler -> velocity profile -> resampler on a chain.

    Nothing is shared with the chain afterwards: the returned profile holds
    its own read-only copies.
    """
    segments = chain.segments()
    segments.flags.writeable = False
    dense = profile_dense(dense_samples(chain), params)
    waypoints = resample(dense, params.spacing)
    debug.log(
        f"generate_path: segments={chain.segment_count} dense={len(dense)} "
        f"waypoints={len(waypoints)} length={dense.total_length:.6g}"
    )
    return PathProfile(segments, params, dense, waypoints)
