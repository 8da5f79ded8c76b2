from __future__ import annotations

import colorsys

import numpy as np
import svgwrite  # type: ignore[reportMissingTypeStubs]

from .bezier import beziers_to_svg_path_d
from .pipeline import PathProfile


def speed_color(speed: float, max_speed: float) -> str:
    """
    Hex colour for a speed: hue runs from red (stopped) through green to cyan
    (max_speed), HSL(speed / max_speed * 180, 100%, 50%).
    """
    frac = 0.0 if max_speed <= 0 else float(speed) / float(max_speed)
    hue = (frac * 180.0) % 360.0
    r, g, b = colorsys.hls_to_rgb(hue / 360.0, 0.5, 1.0)
    return "#{:02x}{:02x}{:02x}".format(
        int(round(r * 255)), int(round(g * 255)), int(round(b * 255))
    )


def export_path_svg(
    out_path: str,
    profile: PathProfile,
    *,
    waypoint_radius: float = 1.0,
    control_radius: float = 2.5,
    show_controls: bool = True,
    pad: float = 10.0,
    canvas_size: tuple[float, float] | tuple[str, str] | None = None,
) -> None:
    """
    Write a preview of a generated path: chain outline, control polygon and
    waypoints coloured by target speed.

    Field coordinates are y-up; the drawing flips y so the preview matches the
    field view.
    """
    segs = np.asarray(profile.segments)
    pts = np.asarray(profile.waypoints.points)
    speed = np.asarray(profile.waypoints.speed)

    allp = np.vstack([segs.reshape(-1, 2), pts])
    minx, miny = allp.min(axis=0)
    maxx, maxy = allp.max(axis=0)
    viewbox = (
        float(minx - pad),
        float(-maxy - pad),
        float((maxx - minx) + 2 * pad),
        float((maxy - miny) + 2 * pad),
    )

    if canvas_size is None:
        dwg = svgwrite.Drawing(out_path, profile="tiny")
    else:
        dwg = svgwrite.Drawing(out_path, profile="tiny", size=canvas_size)
    dwg.attribs["viewBox"] = f"{viewbox[0]} {viewbox[1]} {viewbox[2]} {viewbox[3]}"

    def flip(p: np.ndarray) -> tuple[float, float]:
        return (float(p[0]), float(-p[1]))

    dwg.add(
        dwg.path(
            d=beziers_to_svg_path_d(segs, flip_y=True),
            stroke="#777777",
            fill="none",
            stroke_width=0.5,
        )
    )

    if show_controls:
        for p0, c1, c2, p3 in segs:
            for a, b in ((p0, c1), (c2, p3)):
                dwg.add(
                    dwg.line(
                        start=flip(a), end=flip(b), stroke="#000000", stroke_width=0.5
                    )
                )
        controls = [segs[0][0]] + [p for seg in segs for p in seg[1:]]
        for c in controls:
            dwg.add(
                dwg.circle(
                    center=flip(c),
                    r=control_radius,
                    fill="#32a144",
                    opacity=0.45,
                )
            )

    max_speed = profile.params.max_speed
    for i in range(pts.shape[0] - 1):
        dwg.add(
            dwg.line(
                start=flip(pts[i]),
                end=flip(pts[i + 1]),
                stroke=speed_color(speed[i], max_speed),
                stroke_width=waypoint_radius,
            )
        )
    for p, v in zip(pts, speed):
        dwg.add(
            dwg.circle(
                center=flip(p), r=waypoint_radius, fill=speed_color(v, max_speed)
            )
        )

    dwg.save()
