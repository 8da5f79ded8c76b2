from __future__ import annotations

from pathlib import Path

import numpy as np

from ..utils import debug
from .config import DEFAULT_PARAMETERS, GHOST_EXTENSION, ProfileParameters
from .errors import MalformedInput
from .path_types import Point2
from .resample import Waypoints
from .spline_chain import SplineChain
from .vector import distance, interpolate

END_MARKER = "endData"
FIELD_SEP = ", "


def _fmt(x: float) -> str:
    # Shortest round-trip repr, written as "2" rather than "2.0".
    s = repr(float(x))
    if s.endswith(".0"):
        s = s[:-2]
    if s == "-0":
        s = "0"
    return s


def _row(values: list[float]) -> str:
    return FIELD_SEP.join(_fmt(v) for v in values)


def _parse_floats(line: str, expected: int, what: str, lineno: int) -> list[float]:
    parts = [p.strip() for p in line.split(",")]
    if len(parts) != expected:
        raise MalformedInput(
            f"line {lineno}: {what} needs {expected} fields, got {len(parts)}"
        )
    try:
        return [float(p) for p in parts]
    except ValueError as exc:
        raise MalformedInput(f"line {lineno}: {what} has a non-numeric field") from exc


def ghost_point(chain: SplineChain, waypoints: Waypoints) -> Point2:
    """
    Synthetic target GHOST_EXTENSION units past the last waypoint, on the ray
    from the final segment's p2 handle through that waypoint.
    """
    if len(waypoints) == 0:
        raise ValueError("waypoints are empty")
    last_handle = chain.handles[-1, 1]
    last = np.asarray(waypoints.points[-1], dtype=np.float64)
    return interpolate(
        distance(last_handle, last) + GHOST_EXTENSION, last_handle, last
    )


def dumps_path(
    chain: SplineChain,
    params: ProfileParameters,
    waypoints: Waypoints,
) -> str:
    """
    Encode waypoints, the ghost row, the three profile scalars and the chain's
    control points in the path file layout:

        x, y, speed          one row per waypoint
        gx, gy, 0            ghost row
        endData
        <max_deceleration>
        <max_speed>
        <turn_multiplier>
        p0x, p0y, p1x, p1y, p2x, p2y, p3x, p3y   one row per segment
    """
    lines = [_row([x, y, v]) for x, y, v in waypoints.rows()]
    g = ghost_point(chain, waypoints)
    lines.append(_row([g[0], g[1], 0.0]))
    lines.append(END_MARKER)
    lines.append(_fmt(params.max_deceleration))
    lines.append(_fmt(params.max_speed))
    lines.append(_fmt(params.turn_multiplier))
    for seg in chain.segments():
        lines.append(_row(seg.reshape(-1).tolist()))
    return "\n".join(lines) + "\n"


def _find_marker(lines: list[str]) -> int:
    for i, line in enumerate(lines):
        if line.strip() == END_MARKER:
            return i
    raise MalformedInput(f"missing '{END_MARKER}' marker")


def loads_path(
    text: str,
    *,
    spacing: float = DEFAULT_PARAMETERS.spacing,
) -> tuple[SplineChain, ProfileParameters]:
    """
    Decode the chain and profile parameters from path file text.

    Waypoint rows are ignored; they are regenerated from the chain. The file
    does not carry the waypoint spacing, so it is supplied by the caller.
    """
    lines = text.splitlines()
    i = _find_marker(lines)
    if len(lines) - i - 1 < 3:
        raise MalformedInput("expected three parameter rows after the marker")
    scalars = [
        _parse_floats(lines[i + 1 + r], 1, "parameter row", i + 2 + r)[0]
        for r in range(3)
    ]
    max_deceleration, max_speed, turn_multiplier = scalars
    try:
        params = ProfileParameters(
            max_speed=max_speed,
            max_deceleration=max_deceleration,
            turn_multiplier=turn_multiplier,
            spacing=spacing,
        )
    except ValueError as exc:
        raise MalformedInput(f"invalid profile parameters: {exc}") from exc

    rows: list[list[float]] = []
    for lineno, line in enumerate(lines[i + 4 :], start=i + 5):
        if not line.strip():
            continue
        rows.append(_parse_floats(line, 8, "segment row", lineno))
    if not rows:
        raise MalformedInput("no segment rows after the parameters")
    segments = np.asarray(rows, dtype=np.float64).reshape(-1, 4, 2)
    chain = SplineChain.from_segments(segments)
    debug.log(f"loads_path: segments={chain.segment_count}")
    return chain, params


def loads_waypoint_rows(text: str, *, drop_ghost: bool = True) -> np.ndarray:
    """(M,3) array of the x, y, speed rows stored before the marker."""

    lines = text.splitlines()
    i = _find_marker(lines)
    rows = [
        _parse_floats(line, 3, "waypoint row", lineno)
        for lineno, line in enumerate(lines[:i], start=1)
        if line.strip()
    ]
    if drop_ghost and rows:
        rows = rows[:-1]
    return np.asarray(rows, dtype=np.float64).reshape(-1, 3)


def save_path(
    out_path: str | Path,
    chain: SplineChain,
    params: ProfileParameters,
    waypoints: Waypoints,
) -> None:
    Path(out_path).write_text(dumps_path(chain, params, waypoints), encoding="utf-8")


def load_path(
    in_path: str | Path,
    *,
    spacing: float = DEFAULT_PARAMETERS.spacing,
) -> tuple[SplineChain, ProfileParameters]:
    return loads_path(Path(in_path).read_text(encoding="utf-8"), spacing=spacing)
