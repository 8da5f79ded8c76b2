from __future__ import annotations

import numpy as np
from beartype import beartype
from jaxtyping import jaxtyped

from .config import SAMPLES_PER_SEGMENT
from .path_types import CurvePoints, ParamGrid, Segment, SegmentArray


def bezier_param_grid(n_samples: int = SAMPLES_PER_SEGMENT) -> ParamGrid:
    """
    Uniform parameter values t = i / (n_samples - 1), i = 0..n_samples-1.

    Built from integer steps so the default grid is exactly {0, 0.01, ..., 1.0}
    without accumulated float drift.
    """
    if n_samples < 2:
        raise ValueError("n_samples must be >= 2")
    return np.arange(n_samples, dtype=np.float64) / float(n_samples - 1)


@jaxtyped(typechecker=beartype)
def eval_cubic_bezier(segment: Segment, ts: ParamGrid) -> CurvePoints:
    """Evaluate B(t) = (1-t)^3 p0 + 3t(1-t)^2 p1 + 3t^2(1-t) p2 + t^3 p3 for every t."""

    t = np.asarray(ts, dtype=np.float64)
    mt = 1.0 - t
    basis = np.stack(
        [mt * mt * mt, 3.0 * t * mt * mt, 3.0 * t * t * mt, t * t * t], axis=1
    )
    return basis @ np.asarray(segment, dtype=np.float64)


@jaxtyped(typechecker=beartype)
def sample_segment(
    segment: Segment,
    n_samples: int = SAMPLES_PER_SEGMENT,
) -> CurvePoints:
    return eval_cubic_bezier(segment, bezier_param_grid(n_samples))


def beziers_to_svg_path_d(
    segs: SegmentArray,
    *,
    precision: int = 3,
    flip_y: bool = False,
) -> str:
    """Build an SVG path 'd' string from cubic Bezier segments."""

    if len(segs) == 0:
        return ""
    fmt = f".{{:d}}f".format(int(precision))
    sy = -1.0 if flip_y else 1.0

    def f(x: float) -> str:
        return format(float(x), fmt)

    def pt(p: np.ndarray) -> str:
        return f"{f(p[0])},{f(sy * p[1])}"

    parts = [f"M {pt(segs[0][0])}"]
    for _p0, c1, c2, p3 in segs:
        parts.append(f"C {pt(c1)} {pt(c2)} {pt(p3)}")
    return " ".join(parts)
