import numpy as np
import pytest

from src.waypath.config import DEFAULT_SEGMENT, ProfileParameters
from src.waypath.session import PathSession
from src.waypath.spline_chain import SplineChain

STRAIGHT = [[0.0, 0.0], [0.0, 8.0], [0.0, 16.0], [0.0, 24.0]]
PARAMS = ProfileParameters(
    max_speed=50.0, max_deceleration=20.0, turn_multiplier=50.0, spacing=2.0
)


def test_default_session() -> None:
    session = PathSession()
    np.testing.assert_array_equal(session.chain.segment(0), DEFAULT_SEGMENT)
    assert len(session.waypoints) > 1
    assert session.selection.size == 0


def test_edits_swap_in_a_new_profile() -> None:
    session = PathSession()
    before = session.profile
    n_before = len(before.waypoints)

    assert session.append_anchor((40.0, 40.0))
    after = session.profile
    assert after is not before
    assert after.segments.shape == (2, 4, 2)
    assert len(before.waypoints) == n_before
    assert before.segments.shape == (1, 4, 2)

    assert not session.append_anchor(None)
    assert session.profile is after


def test_remove_single_segment_is_noop() -> None:
    session = PathSession()
    profile = session.profile
    assert not session.remove_anchor("back")
    assert session.profile is profile


def test_click_picks_or_appends() -> None:
    session = PathSession()
    assert session.click((-41.0, 49.0)) == (0, "p1")
    assert session.chain.segment_count == 1

    assert session.click((100.0, 100.0)) is None
    assert session.chain.segment_count == 2
    np.testing.assert_array_equal(session.chain.end, [100.0, 100.0])

    assert not session.remove_end_at((300.0, 300.0))
    assert session.remove_end_at((100.5, 100.0))
    assert session.chain.segment_count == 1


def test_edit_clears_selection() -> None:
    session = PathSession()
    np.testing.assert_array_equal(session.select_range(0, 3), [0, 1, 2, 3])
    session.drag_anchor(0, "p3", (10.0, 10.0))
    assert session.selection.size == 0

    session.select_range(1, 2)
    session.drag_control_point(0, "p2", (-40.0, 60.0))
    assert session.selection.size == 0


def test_set_parameters() -> None:
    session = PathSession(SplineChain.from_segment(STRAIGHT), PARAMS)
    assert len(session.waypoints) == 13
    session.set_parameters(spacing=4.0)
    assert session.params.spacing == 4.0
    assert len(session.waypoints) == 7

    with pytest.raises(ValueError):
        session.set_parameters(spacing=0.0)
    assert session.params.spacing == 4.0


def test_scale_selection_reconciles_with_deceleration() -> None:
    session = PathSession(SplineChain.from_segment(STRAIGHT), PARAMS)
    dense = session.profile.dense
    before = session.waypoints.speed.copy()

    session.select_range(3, 5)
    after = session.scale_selection(150.0).speed

    assert after[3] == pytest.approx(18.0)
    assert after[4] == pytest.approx(np.sqrt(304.0), rel=1e-6)
    assert after[5] == pytest.approx(np.sqrt(224.0), rel=1e-6)
    np.testing.assert_array_equal(after[:3], before[:3])
    np.testing.assert_array_equal(after[6:], before[6:])
    assert session.profile.dense is dense
    assert session.selection.size == 0


def test_select_rect_and_empty_scale() -> None:
    session = PathSession(SplineChain.from_segment(STRAIGHT), PARAMS)
    np.testing.assert_array_equal(session.select_rect((1.0, 3.0), (-1.0, 9.0)), [2, 3, 4])

    session.clear_selection()
    wp = session.waypoints
    assert session.scale_selection(50.0) is wp
