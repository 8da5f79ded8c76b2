import numpy as np
import pytest

from src.waypath.bezier import (
    bezier_param_grid,
    beziers_to_svg_path_d,
    eval_cubic_bezier,
    sample_segment,
)

SEG = np.array([[0.0, 0.0], [1.0, 2.0], [3.0, 2.0], [4.0, 0.0]], dtype=np.float64)


def test_param_grid_is_exact_hundredths() -> None:
    ts = bezier_param_grid()
    assert ts.shape == (101,)
    assert ts[0] == 0.0
    assert ts[-1] == 1.0
    assert ts[1] == 0.01
    assert ts[50] == 0.5


def test_param_grid_rejects_single_sample() -> None:
    with pytest.raises(ValueError):
        bezier_param_grid(1)


def test_eval_hits_anchors_exactly() -> None:
    pts = eval_cubic_bezier(SEG, np.array([0.0, 1.0]))
    np.testing.assert_array_equal(pts[0], SEG[0])
    np.testing.assert_array_equal(pts[1], SEG[3])


def test_eval_matches_bernstein_formula() -> None:
    t = 0.3
    p0, p1, p2, p3 = SEG
    expected = (
        (1 - t) ** 3 * p0
        + 3 * t * (1 - t) ** 2 * p1
        + 3 * t**2 * (1 - t) * p2
        + t**3 * p3
    )
    got = eval_cubic_bezier(SEG, np.array([t]))[0]
    np.testing.assert_allclose(got, expected, atol=1e-12)


def test_evenly_spaced_handles_give_linear_motion() -> None:
    seg = np.array([[0.0, 0.0], [0.0, 8.0], [0.0, 16.0], [0.0, 24.0]])
    pts = sample_segment(seg)
    assert pts.shape == (101, 2)
    np.testing.assert_allclose(pts[:, 0], 0.0)
    np.testing.assert_allclose(pts[:, 1], 24.0 * bezier_param_grid(), atol=1e-12)


def test_svg_path_string() -> None:
    d = beziers_to_svg_path_d(SEG[None, ...], precision=1)
    assert d == "M 0.0,0.0 C 1.0,2.0 3.0,2.0 4.0,0.0"
    flipped = beziers_to_svg_path_d(SEG[None, ...], precision=1, flip_y=True)
    assert "C 1.0,-2.0 3.0,-2.0" in flipped


def test_svg_path_string_empty() -> None:
    assert beziers_to_svg_path_d(np.zeros((0, 4, 2))) == ""
