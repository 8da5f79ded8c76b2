from . import (
    bezier,
    config,
    errors,
    export_svg,
    path_io,
    pipeline,
    resample,
    sampler,
    selection,
    session,
    spline_chain,
    svg_io,
    vector,
    velocity,
)

__all__ = [
    "bezier",
    "config",
    "errors",
    "export_svg",
    "path_io",
    "pipeline",
    "resample",
    "sampler",
    "selection",
    "session",
    "spline_chain",
    "svg_io",
    "vector",
    "velocity",
]
