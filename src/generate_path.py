from __future__ import annotations

import argparse
from typing import Protocol, cast

from .utils import debug, debug_helpers
from .waypath.config import DEFAULT_PARAMETERS
from .waypath.export_svg import export_path_svg
from .waypath.path_io import load_path, save_path
from .waypath.session import PathSession
from .waypath.spline_chain import SplineChain
from .waypath.svg_io import load_chain_from_svg


class CliArgs(Protocol):
    input: str | None
    input_svg: str | None
    output: str
    svg: str | None
    append: list[tuple[float, float]]
    scale: list[tuple[int, int, float]]
    max_speed: float | None
    max_decel: float | None
    turn_multiplier: float | None
    spacing: float
    verbose: bool


def parse_xy(text: str) -> tuple[float, float]:
    parts = text.split(",")
    if len(parts) != 2:
        raise argparse.ArgumentTypeError(f"expected X,Y but got {text!r}")
    try:
        return float(parts[0]), float(parts[1])
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"non-numeric point {text!r}") from exc


def parse_scale(text: str) -> tuple[int, int, float]:
    parts = text.split(":")
    if len(parts) != 3:
        raise argparse.ArgumentTypeError(f"expected FIRST:LAST:PERCENT but got {text!r}")
    try:
        return int(parts[0]), int(parts[1]), float(parts[2])
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"bad scale value {text!r}") from exc


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        description="Generate evenly spaced, speed-tagged waypoints from a Bezier path"
    )
    source = ap.add_mutually_exclusive_group()
    source.add_argument("--input", default=None, help="Existing path file to start from")
    source.add_argument(
        "--input-svg",
        default=None,
        help="SVG whose first <path> provides the starting chain",
    )
    ap.add_argument("--output", required=True, help="Path file to write")
    ap.add_argument("--svg", default=None, help="Optional SVG preview to write")
    ap.add_argument(
        "--append",
        type=parse_xy,
        action="append",
        default=[],
        metavar="X,Y",
        help="Append an anchor (repeatable, applied in order)",
    )
    ap.add_argument(
        "--scale",
        type=parse_scale,
        action="append",
        default=[],
        metavar="FIRST:LAST:PERCENT",
        help="Scale the speed of waypoints FIRST..LAST to PERCENT (repeatable)",
    )

    # Profile parameters; unset values come from the input file or the defaults
    ap.add_argument("--max-speed", type=float, default=None)
    ap.add_argument("--max-decel", type=float, default=None)
    ap.add_argument("--turn-multiplier", type=float, default=None)
    ap.add_argument(
        "--spacing",
        type=float,
        default=DEFAULT_PARAMETERS.spacing,
        help="Target distance between waypoints",
    )
    ap.add_argument("-v", "--verbose", action="store_true", help="Enable debug logs")
    return ap


def main(argv: list[str] | None = None) -> None:
    args = cast(CliArgs, build_parser().parse_args(argv))
    debug.set_verbose(args.verbose)

    if args.input is not None:
        chain, params = load_path(args.input, spacing=args.spacing)
        debug.log(f"loaded {args.input}: {chain.segment_count} segments")
    elif args.input_svg is not None:
        chain = load_chain_from_svg(args.input_svg)
        params = DEFAULT_PARAMETERS.replace(spacing=args.spacing)
    else:
        chain = SplineChain.default()
        params = DEFAULT_PARAMETERS.replace(spacing=args.spacing)

    overrides: dict[str, float] = {}
    if args.max_speed is not None:
        overrides["max_speed"] = args.max_speed
    if args.max_decel is not None:
        overrides["max_deceleration"] = args.max_decel
    if args.turn_multiplier is not None:
        overrides["turn_multiplier"] = args.turn_multiplier
    params = params.replace(**overrides)

    session = PathSession(chain, params)
    for point in args.append:
        session.append_anchor(point)
    debug_helpers.log_array("segments", session.profile.segments)

    for first, last, percent in args.scale:
        picked = session.select_range(first, last)
        if picked.size == 0:
            debug.warn(f"scale {first}:{last} selects no waypoints")
            continue
        session.scale_selection(percent)

    save_path(args.output, session.chain, session.params, session.waypoints)
    if args.svg is not None:
        export_path_svg(args.svg, session.profile)
        debug.log(f"preview written to {args.svg}")
    print(
        f"Saved: {args.output}  waypoints={len(session.waypoints)}  "
        f"length={session.profile.total_length:.6g}"
    )


if __name__ == "__main__":
    main()
