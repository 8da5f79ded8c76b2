from __future__ import annotations

import argparse
from pathlib import Path

import matplotlib
import numpy as np

from ..waypath.config import DEFAULT_PARAMETERS
from ..waypath.path_io import loads_path, loads_waypoint_rows
from ..waypath.pipeline import generate_path
from . import debug
from .plots import plot_path_layout, plot_speed_profile


def plot_profile(
    path_file: Path,
    out_dir: Path,
    prefix: str,
    show: bool,
    spacing: float,
) -> list[Path]:
    if not show:
        matplotlib.use("Agg")
    text = path_file.read_text(encoding="utf-8")
    chain, params = loads_path(text, spacing=spacing)
    stored = loads_waypoint_rows(text)
    profile = generate_path(chain, params)
    debug.log(
        f"plot_profile: stored_rows={stored.shape[0]} "
        f"regenerated={len(profile.waypoints)}"
    )

    stored_speed: np.ndarray | None = None
    if stored.shape[0] == len(profile.waypoints):
        stored_speed = stored[:, 2]

    out_dir.mkdir(parents=True, exist_ok=True)
    speed_png = out_dir / f"{prefix}_speed_profile.png"
    layout_png = out_dir / f"{prefix}_layout.png"
    plot_speed_profile(
        speed_png,
        np.asarray(profile.dense.arc_length),
        np.asarray(profile.dense.speed),
        np.asarray(profile.waypoints.arc_length),
        np.asarray(profile.waypoints.speed),
        params.max_speed,
        stored_speed=stored_speed,
    )
    plot_path_layout(
        layout_png,
        np.asarray(profile.dense.points),
        np.asarray(profile.waypoints.points),
        np.asarray(profile.waypoints.speed),
        params.max_speed,
    )

    if show:
        import matplotlib.pyplot as plt

        plt.show()
    return [speed_png, layout_png]


def main() -> None:
    ap = argparse.ArgumentParser(description="Plot the speed profile of a path file")
    ap.add_argument("--input", required=True, help="Path file (path.txt)")
    ap.add_argument(
        "--out-dir",
        default=None,
        help="Output directory for plots (defaults to the input's directory)",
    )
    ap.add_argument(
        "--prefix",
        default=None,
        help="Output filename prefix (defaults to the input's stem)",
    )
    ap.add_argument(
        "--spacing",
        type=float,
        default=DEFAULT_PARAMETERS.spacing,
        help="Waypoint spacing used when regenerating the path",
    )
    ap.add_argument("--show", action="store_true", help="Show plots interactively")
    ap.add_argument("-v", "--verbose", action="store_true", help="Enable debug logs")
    args = ap.parse_args()
    debug.set_verbose(args.verbose)

    path_file = Path(args.input)
    out_dir = Path(args.out_dir) if args.out_dir is not None else path_file.parent
    prefix = args.prefix if args.prefix is not None else path_file.stem

    for out in plot_profile(path_file, out_dir, prefix, args.show, args.spacing):
        print(f"Saved: {out}")


if __name__ == "__main__":
    main()
