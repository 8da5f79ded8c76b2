from __future__ import annotations

import numpy as np
from svgpathtools import CubicBezier, Line, Path, svg2paths2  # type: ignore[reportMissingTypeStubs]

from ..utils import debug
from .errors import MalformedInput
from .spline_chain import SplineChain


def _xy(z: complex, flip_y: bool) -> list[float]:
    return [float(z.real), -float(z.imag) if flip_y else float(z.imag)]


def path_to_segments(path: Path, *, flip_y: bool = True) -> np.ndarray:
    """
    (K,4,2) control points of an svgpathtools Path.

    Cubic segments map directly; straight lines become cubics with handles at
    one and two thirds. Any other segment type is rejected. SVG is y-down, so
    y is negated unless flip_y is False.
    """
    segs: list[list[list[float]]] = []
    for seg in path:
        if isinstance(seg, CubicBezier):
            ctrl = [seg.start, seg.control1, seg.control2, seg.end]
        elif isinstance(seg, Line):
            d = seg.end - seg.start
            ctrl = [seg.start, seg.start + d / 3.0, seg.start + 2.0 * d / 3.0, seg.end]
        else:
            raise MalformedInput(
                f"unsupported SVG segment type: {type(seg).__name__}"
            )
        segs.append([_xy(z, flip_y) for z in ctrl])
    if not segs:
        raise MalformedInput("SVG path has no segments")
    return np.asarray(segs, dtype=np.float64)


def load_chain_from_svg(svg_path: str, *, flip_y: bool = True) -> SplineChain:
    """
    Build a chain from the first <path> of an SVG file.

    Handles are taken as drawn; mirrored joints are not enforced, the same as
    for chains read from a path file.
    """
    paths = svg2paths2(svg_path)[0]
    if len(paths) == 0:
        raise MalformedInput("No <path> found in SVG.")
    p: Path = paths[0]
    if len(paths) > 1:
        debug.warn(f"{svg_path} has {len(paths)} paths; using the first one")
    if not p.iscontinuous():
        raise MalformedInput("SVG path is not continuous")
    chain = SplineChain.from_segments(path_to_segments(p, flip_y=flip_y))
    debug.log(f"svg_io: loaded {chain.segment_count} segments from {svg_path}")
    return chain
