from __future__ import annotations

from pathlib import Path

import numpy as np


def plot_path_layout(
    out_path: Path,
    dense_points: np.ndarray,
    waypoint_points: np.ndarray,
    waypoint_speed: np.ndarray,
    max_speed: float,
) -> None:
    import matplotlib.pyplot as plt

    fig, ax = plt.subplots(figsize=(6.5, 6.5), dpi=120)
    ax.plot(dense_points[:, 0], dense_points[:, 1], color="#777777", linewidth=0.8)
    sc = ax.scatter(
        waypoint_points[:, 0],
        waypoint_points[:, 1],
        c=waypoint_speed,
        cmap="viridis",
        vmin=0.0,
        vmax=max(max_speed, 1e-9),
        s=10.0,
    )
    fig.colorbar(sc, ax=ax, label="speed")
    ax.set_aspect("equal")
    ax.set_xlabel("x")
    ax.set_ylabel("y")
    ax.grid(True, alpha=0.3)
    fig.tight_layout()
    fig.savefig(out_path, dpi=160)
