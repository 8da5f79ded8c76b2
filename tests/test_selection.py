import numpy as np
import pytest

from src.waypath.resample import Waypoints
from src.waypath.selection import indices_in_range, points_in_rect, scale_speeds


def _waypoints(speeds: list[float]) -> Waypoints:
    n = len(speeds)
    xs = np.arange(n, dtype=np.float64) * 2.0
    pts = np.stack([xs, np.zeros(n)], axis=1)
    return Waypoints(pts, np.asarray(speeds, dtype=np.float64), xs)


def test_points_in_rect_is_strict() -> None:
    pts = np.array([[0.0, 0.0], [1.0, 1.0], [2.0, 2.0], [1.0, 2.0], [3.0, 3.0]])
    np.testing.assert_array_equal(points_in_rect(pts, (0.0, 0.0), (2.0, 2.5)), [1, 3])
    np.testing.assert_array_equal(points_in_rect(pts, (2.5, 2.5), (0.5, 0.5)), [1, 2, 3])
    assert points_in_rect(pts, (5.0, 5.0), (6.0, 6.0)).size == 0


def test_indices_in_range() -> None:
    np.testing.assert_array_equal(indices_in_range(5, 3, 10), [3, 4, 5])
    np.testing.assert_array_equal(indices_in_range(-2, 2, 3), [0, 1, 2])
    assert indices_in_range(5, 8, 3).size == 0


def test_scale_respects_deceleration() -> None:
    wp = _waypoints([10.0, 10.0, 10.0, 10.0, 0.0])
    out = scale_speeds(wp, [1, 2], 3.0, 20.0)
    # braking budget over 2 units at 20: v^2 grows by 80 per step
    np.testing.assert_allclose(
        out.speed, [10.0, np.sqrt(240.0), np.sqrt(160.0), np.sqrt(80.0), 0.0]
    )
    np.testing.assert_array_equal(wp.speed, [10.0, 10.0, 10.0, 10.0, 0.0])
    np.testing.assert_array_equal(out.points, wp.points)


def test_scale_down_is_kept() -> None:
    wp = _waypoints([10.0, 10.0, 10.0, 0.0])
    out = scale_speeds(wp, np.array([0]), 0.5, 20.0)
    np.testing.assert_allclose(out.speed, [5.0, 10.0, np.sqrt(80.0), 0.0])


def test_scale_rejects_bad_input() -> None:
    wp = _waypoints([1.0, 1.0, 0.0])
    with pytest.raises(ValueError):
        scale_speeds(wp, [0], -1.0, 20.0)
    with pytest.raises(ValueError):
        scale_speeds(wp, [0], float("nan"), 20.0)
    with pytest.raises(IndexError):
        scale_speeds(wp, [3], 2.0, 20.0)
