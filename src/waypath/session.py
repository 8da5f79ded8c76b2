from __future__ import annotations

from collections.abc import Sequence

import numpy as np

from ..utils import debug
from .config import DEFAULT_PARAMETERS, ProfileParameters
from .path_types import AnchorSlot, ChainEnd, ControlSlot, HandleSlot
from .pipeline import PathProfile, generate_path
from .resample import Waypoints
from .selection import indices_in_range, points_in_rect, scale_speeds
from .spline_chain import SplineChain

PointLike = Sequence[float] | np.ndarray


class PathSession:
    """
    Editable path state: one chain, its parameters, the derived profile and
    the current waypoint selection.

    Every edit rebuilds the profile from scratch and swaps it in with a single
    assignment, so a reader holding `session.profile` always sees a complete,
    consistent snapshot. Edits also clear the selection, whose indices refer
    to the previous waypoint sequence.
    """

    def __init__(
        self,
        chain: SplineChain | None = None,
        params: ProfileParameters = DEFAULT_PARAMETERS,
    ) -> None:
        self._chain = chain if chain is not None else SplineChain.default()
        self._params = params
        self._selection = np.zeros(0, dtype=np.int64)
        self._profile = generate_path(self._chain, self._params)

    @property
    def chain(self) -> SplineChain:
        return self._chain

    @property
    def params(self) -> ProfileParameters:
        return self._params

    @property
    def profile(self) -> PathProfile:
        return self._profile

    @property
    def waypoints(self) -> Waypoints:
        return self._profile.waypoints

    @property
    def selection(self) -> np.ndarray:
        return self._selection.copy()

    def _recompute(self) -> None:
        profile = generate_path(self._chain, self._params)
        self._selection = np.zeros(0, dtype=np.int64)
        self._profile = profile

    def replace_chain(
        self,
        chain: SplineChain,
        params: ProfileParameters | None = None,
    ) -> None:
        self._chain = chain
        if params is not None:
            self._params = params
        self._recompute()

    def set_parameters(self, **changes: float) -> None:
        self._params = self._params.replace(**changes)
        self._recompute()

    def append_anchor(self, point: PointLike | None) -> bool:
        changed = self._chain.append_anchor(point)
        if changed:
            self._recompute()
        return changed

    def remove_anchor(self, end: ChainEnd) -> bool:
        changed = self._chain.remove_anchor(end)
        if changed:
            self._recompute()
        return changed

    def drag_anchor(
        self, segment_index: int, which_end: AnchorSlot, new_position: PointLike
    ) -> None:
        self._chain.drag_anchor(segment_index, which_end, new_position)
        self._recompute()

    def drag_handle(
        self, segment_index: int, which: HandleSlot, new_position: PointLike
    ) -> None:
        self._chain.drag_handle(segment_index, which, new_position)
        self._recompute()

    def drag_control_point(
        self, segment_index: int, slot: ControlSlot, new_position: PointLike
    ) -> None:
        self._chain.move_control_point(segment_index, slot, new_position)
        self._recompute()

    def click(self, point: PointLike) -> tuple[int, ControlSlot] | None:
        """
        Pick the control point under `point`; when nothing is hit, append an
        anchor there instead. Returns the picked control point, if any.
        """
        self.clear_selection()
        hit = self._chain.pick(point)
        if hit is None:
            self.append_anchor(point)
        return hit

    def remove_end_at(self, point: PointLike) -> bool:
        self.clear_selection()
        end = self._chain.pick_end(point)
        if end is None:
            return False
        return self.remove_anchor(end)

    def select_rect(self, corner_a: PointLike, corner_b: PointLike) -> np.ndarray:
        self._selection = points_in_rect(self.waypoints.points, corner_a, corner_b)
        return self.selection

    def select_range(self, first: int, last: int) -> np.ndarray:
        self._selection = indices_in_range(first, last, len(self.waypoints))
        return self.selection

    def clear_selection(self) -> None:
        self._selection = np.zeros(0, dtype=np.int64)

    def scale_selection(self, percent: float) -> Waypoints:
        """
        Scale the selected waypoints' speed to `percent` of its current value
        (100 keeps it) and reconcile the profile with the deceleration limit.
        Only the waypoints are touched; the dense profile is left as is.
        """
        if self._selection.size == 0:
            debug.log("scale_selection: empty selection, nothing to do")
            return self.waypoints
        waypoints = scale_speeds(
            self.waypoints,
            self._selection,
            float(percent) / 100.0,
            self._params.max_deceleration,
        )
        self._profile = PathProfile(
            self._profile.segments,
            self._profile.params,
            self._profile.dense,
            waypoints,
        )
        self._selection = np.zeros(0, dtype=np.int64)
        return waypoints
