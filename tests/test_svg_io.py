from pathlib import Path

import numpy as np
import pytest

from src.waypath.errors import MalformedInput
from src.waypath.svg_io import load_chain_from_svg


def _write_svg(tmp_path: Path, *paths: str) -> str:
    body = "".join(f'<path d="{d}" fill="none" stroke="black"/>' for d in paths)
    out = tmp_path / "input.svg"
    out.write_text(
        f'<svg xmlns="http://www.w3.org/2000/svg" viewBox="-50 -50 100 100">{body}</svg>',
        encoding="utf-8",
    )
    return str(out)


def test_cubic_and_line_segments(tmp_path: Path) -> None:
    svg = _write_svg(tmp_path, "M 0,0 C 0,-8 0,-16 0,-24 L 9,-24")
    chain = load_chain_from_svg(svg)
    assert chain.segment_count == 2
    np.testing.assert_allclose(
        chain.segment(0), [[0.0, 0.0], [0.0, 8.0], [0.0, 16.0], [0.0, 24.0]]
    )
    np.testing.assert_allclose(
        chain.segment(1), [[0.0, 24.0], [3.0, 24.0], [6.0, 24.0], [9.0, 24.0]]
    )


def test_without_flip(tmp_path: Path) -> None:
    svg = _write_svg(tmp_path, "M 1,2 C 3,4 5,6 7,8")
    chain = load_chain_from_svg(svg, flip_y=False)
    np.testing.assert_allclose(chain.segment(0), [[1.0, 2.0], [3.0, 4.0], [5.0, 6.0], [7.0, 8.0]])


def test_first_path_wins(tmp_path: Path) -> None:
    svg = _write_svg(tmp_path, "M 0,0 L 3,0", "M 10,10 L 20,20")
    chain = load_chain_from_svg(svg)
    np.testing.assert_allclose(chain.end, [3.0, 0.0])


@pytest.mark.parametrize(
    "d",
    ["M 0,0 A 5,5 0 0,1 10,0", "M 0,0 L 1,0 M 5,5 L 6,6"],
    ids=["arc", "discontinuous"],
)
def test_rejected_paths(tmp_path: Path, d: str) -> None:
    with pytest.raises(MalformedInput):
        load_chain_from_svg(_write_svg(tmp_path, d))


def test_no_path(tmp_path: Path) -> None:
    with pytest.raises(MalformedInput):
        load_chain_from_svg(_write_svg(tmp_path))
