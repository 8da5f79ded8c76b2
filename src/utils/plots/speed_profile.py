from __future__ import annotations

from pathlib import Path

import numpy as np


def plot_speed_profile(
    out_path: Path,
    dense_arc: np.ndarray,
    dense_speed: np.ndarray,
    waypoint_arc: np.ndarray,
    waypoint_speed: np.ndarray,
    max_speed: float,
    stored_speed: np.ndarray | None = None,
) -> None:
    import matplotlib.pyplot as plt

    fig, ax = plt.subplots(figsize=(8.5, 5.0), dpi=120)
    ax.plot(dense_arc, dense_speed, label="dense profile", linewidth=1.0, alpha=0.7)
    ax.plot(
        waypoint_arc,
        waypoint_speed,
        label="waypoints",
        linestyle="none",
        marker="o",
        markersize=3.0,
    )
    if stored_speed is not None and stored_speed.shape == waypoint_arc.shape:
        ax.plot(
            waypoint_arc,
            stored_speed,
            label="stored in file",
            linestyle="none",
            marker="x",
            markersize=4.0,
        )
    ax.axhline(max_speed, color="#777777", linestyle="--", linewidth=1.0, label="max_speed")
    ax.set_xlabel("arc length")
    ax.set_ylabel("speed")
    ax.grid(True, alpha=0.3)
    ax.legend(loc="best")
    fig.tight_layout()
    fig.savefig(out_path, dpi=160)
