from pathlib import Path

from src.utils.plot_profile import plot_profile
from src.waypath.config import DEFAULT_PARAMETERS
from src.waypath.path_io import save_path
from src.waypath.pipeline import generate_path
from src.waypath.spline_chain import SplineChain


def test_plot_profile_writes_pngs(tmp_path: Path) -> None:
    chain = SplineChain.default()
    chain.append_anchor((30.0, 40.0))
    path_file = tmp_path / "path.txt"
    save_path(path_file, chain, DEFAULT_PARAMETERS, generate_path(chain, DEFAULT_PARAMETERS).waypoints)

    outs = plot_profile(path_file, tmp_path / "plots", "demo", False, DEFAULT_PARAMETERS.spacing)
    assert [p.name for p in outs] == ["demo_speed_profile.png", "demo_layout.png"]
    for p in outs:
        assert p.exists() and p.stat().st_size > 0
