from __future__ import annotations

from collections.abc import Sequence

import numpy as np
from beartype import beartype
from jaxtyping import jaxtyped

from .config import APPEND_HANDLE_OFFSET, DEFAULT_SEGMENT, PICK_RADIUS
from .errors import MalformedInput
from .path_types import (
    AnchorArray,
    AnchorSlot,
    ChainEnd,
    ControlSlot,
    HandleArray,
    HandleSlot,
    Point2,
    Segment,
    SegmentArray,
)
from .vector import distance, reflect

_SLOTS: tuple[ControlSlot, ...] = ("p0", "p1", "p2", "p3")


def _as_point(value: Sequence[float] | np.ndarray) -> Point2:
    p = np.asarray(value, dtype=np.float64)
    if p.shape != (2,):
        raise ValueError(f"point must have shape (2,), got {p.shape}")
    return p.copy()


class SplineChain:
    """
    Ordered chain of cubic Bezier segments sharing their anchors.

    Anchors are stored once: `anchors` is (K+1, 2) and `handles` is (K, 2, 2)
    with handles[k, 0] = p1 and handles[k, 1] = p2 of segment k, so segment k
    is (anchors[k], handles[k, 0], handles[k, 1], anchors[k+1]) and adjacent
    segments cannot disagree about their joint.

    Edit operations keep interior handles mirrored through their anchor:
    handles[k-1, 1] - anchors[k] == -(handles[k, 0] - anchors[k]).
    Chains built from raw segment data (from_segments) are accepted as given.
    """

    def __init__(self, anchors: AnchorArray, handles: HandleArray) -> None:
        anchors = np.array(anchors, dtype=np.float64)
        handles = np.array(handles, dtype=np.float64)
        if anchors.ndim != 2 or anchors.shape[1] != 2:
            raise ValueError("anchors must have shape (K+1,2)")
        if handles.ndim != 3 or handles.shape[1:] != (2, 2):
            raise ValueError("handles must have shape (K,2,2)")
        if handles.shape[0] < 1:
            raise ValueError("a chain needs at least one segment")
        if anchors.shape[0] != handles.shape[0] + 1:
            raise ValueError("anchors must hold exactly one more row than handles")
        if not (np.isfinite(anchors).all() and np.isfinite(handles).all()):
            raise ValueError("control points contain non-finite coordinates")
        self._anchors = anchors
        self._handles = handles

    @classmethod
    def from_segment(cls, segment: Segment | Sequence[Sequence[float]]) -> SplineChain:
        return cls.from_segments(np.asarray(segment, dtype=np.float64)[None, ...])

    @classmethod
    def from_segments(
        cls,
        segments: SegmentArray | Sequence[Sequence[Sequence[float]]],
        *,
        atol: float = 1e-6,
    ) -> SplineChain:
        """
        Build a chain from (K,4,2) control points without re-mirroring handles.

        Raises MalformedInput when a segment does not start where the previous
        one ends.
        """
        S = np.asarray(segments, dtype=np.float64)
        if S.ndim != 3 or S.shape[1:] != (4, 2):
            raise MalformedInput(f"segments must have shape (K,4,2), got {S.shape}")
        if S.shape[0] < 1:
            raise MalformedInput("a chain needs at least one segment")
        for k in range(1, S.shape[0]):
            if not np.allclose(S[k - 1, 3], S[k, 0], rtol=0.0, atol=atol):
                raise MalformedInput(
                    f"segment {k} starts at {S[k, 0].tolist()} but segment {k - 1} "
                    f"ends at {S[k - 1, 3].tolist()}"
                )
        anchors = np.vstack([S[:, 0], S[-1:, 3]])
        handles = S[:, 1:3].copy()
        try:
            return cls(anchors, handles)
        except ValueError as exc:
            raise MalformedInput(str(exc)) from exc

    @classmethod
    def default(cls) -> SplineChain:
        return cls.from_segment(DEFAULT_SEGMENT)

    def copy(self) -> SplineChain:
        return SplineChain(self._anchors, self._handles)

    @property
    def segment_count(self) -> int:
        return int(self._handles.shape[0])

    @property
    def anchor_count(self) -> int:
        return int(self._anchors.shape[0])

    @property
    def anchors(self) -> AnchorArray:
        return self._anchors.copy()

    @property
    def handles(self) -> HandleArray:
        return self._handles.copy()

    @property
    def start(self) -> Point2:
        return self._anchors[0].copy()

    @property
    def end(self) -> Point2:
        return self._anchors[-1].copy()

    def segment(self, index: int) -> Segment:
        k = self._check_segment(index)
        return np.stack(
            [
                self._anchors[k],
                self._handles[k, 0],
                self._handles[k, 1],
                self._anchors[k + 1],
            ]
        )

    def segments(self) -> SegmentArray:
        S = np.empty((self.segment_count, 4, 2), dtype=np.float64)
        S[:, 0] = self._anchors[:-1]
        S[:, 1:3] = self._handles
        S[:, 3] = self._anchors[1:]
        return S

    def control_points(self) -> SegmentArray:
        """(K,4,2) array of p0, p1, p2, p3 per segment; same as segments()."""

        return self.segments()

    def mirror_error(self) -> float:
        """Largest deviation from the handle mirror at any interior anchor."""

        if self.segment_count < 2:
            return 0.0
        joints = self._anchors[1:-1]
        incoming = self._handles[:-1, 1] - joints
        outgoing = self._handles[1:, 0] - joints
        return float(np.max(np.linalg.norm(incoming + outgoing, axis=1)))

    def append_anchor(self, point: Sequence[float] | np.ndarray | None) -> bool:
        """
        Extend the chain to `point` with a new segment.

        The new p1 mirrors the previous p2 through the shared anchor and the
        new p2 sits APPEND_HANDLE_OFFSET below the new anchor. Returns False
        (and leaves the chain untouched) for missing or non-finite geometry.
        """
        if point is None:
            return False
        p3 = np.asarray(point, dtype=np.float64)
        if p3.shape != (2,) or not np.isfinite(p3).all():
            return False
        p0 = self._anchors[-1]
        p1 = reflect(self._handles[-1, 1], p0)
        p2 = np.array([p3[0], p3[1] - APPEND_HANDLE_OFFSET], dtype=np.float64)
        self._anchors = np.vstack([self._anchors, p3[None, :]])
        self._handles = np.concatenate(
            [self._handles, np.stack([p1, p2])[None, ...]], axis=0
        )
        return True

    def remove_anchor(self, end: ChainEnd) -> bool:
        """
        Drop the first ("front") or last ("back") segment.

        A single-segment chain is left unchanged. The handle exposed at the new
        endpoint keeps its position; it is not re-mirrored.
        """
        if end not in ("front", "back"):
            raise ValueError(f"end must be 'front' or 'back', got {end!r}")
        if self.segment_count <= 1:
            return False
        if end == "front":
            self._anchors = self._anchors[1:].copy()
            self._handles = self._handles[1:].copy()
        else:
            self._anchors = self._anchors[:-1].copy()
            self._handles = self._handles[:-1].copy()
        return True

    def drag_anchor(
        self,
        segment_index: int,
        which_end: AnchorSlot,
        new_position: Sequence[float] | np.ndarray,
    ) -> None:
        """Move an anchor and translate both handles attached to it by the same delta."""

        k = self._check_segment(segment_index)
        if which_end == "p0":
            a = k
        elif which_end == "p3":
            a = k + 1
        else:
            raise ValueError(f"which_end must be 'p0' or 'p3', got {which_end!r}")
        target = _as_point(new_position)
        delta = target - self._anchors[a]
        self._anchors[a] = target
        if a < self.segment_count:
            self._handles[a, 0] += delta
        if a > 0:
            self._handles[a - 1, 1] += delta

    def drag_handle(
        self,
        segment_index: int,
        which: HandleSlot,
        new_position: Sequence[float] | np.ndarray,
    ) -> None:
        """Move a handle and re-mirror its partner across the shared anchor."""

        k = self._check_segment(segment_index)
        target = _as_point(new_position)
        if which == "p1":
            self._handles[k, 0] = target
            if k > 0:
                self._handles[k - 1, 1] = reflect(target, self._anchors[k])
        elif which == "p2":
            self._handles[k, 1] = target
            if k < self.segment_count - 1:
                self._handles[k + 1, 0] = reflect(target, self._anchors[k + 1])
        else:
            raise ValueError(f"which must be 'p1' or 'p2', got {which!r}")

    def move_control_point(
        self,
        segment_index: int,
        slot: ControlSlot,
        new_position: Sequence[float] | np.ndarray,
    ) -> None:
        if slot in ("p0", "p3"):
            self.drag_anchor(segment_index, slot, new_position)
        else:
            self.drag_handle(segment_index, slot, new_position)

    @jaxtyped(typechecker=beartype)
    def _pick(self, p: Point2, radius: float) -> tuple[int, ControlSlot] | None:
        for k in range(self.segment_count):
            seg = self.segment(k)
            for slot, q in zip(_SLOTS, seg):
                if distance(p, q) < radius:
                    return k, slot
        return None

    def pick(
        self,
        point: Sequence[float] | np.ndarray,
        radius: float = PICK_RADIUS,
    ) -> tuple[int, ControlSlot] | None:
        """First control point within `radius`, scanning segments then p0..p3."""

        return self._pick(_as_point(point), float(radius))

    def pick_end(
        self,
        point: Sequence[float] | np.ndarray,
        radius: float = PICK_RADIUS,
    ) -> ChainEnd | None:
        p = _as_point(point)
        if distance(p, self._anchors[0]) < radius:
            return "front"
        if distance(p, self._anchors[-1]) < radius:
            return "back"
        return None

    def _check_segment(self, index: int) -> int:
        if not 0 <= index < self.segment_count:
            raise IndexError(
                f"segment index {index} out of range for {self.segment_count} segments"
            )
        return int(index)

    def __len__(self) -> int:
        return self.segment_count

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SplineChain):
            return NotImplemented
        return np.array_equal(self._anchors, other._anchors) and np.array_equal(
            self._handles, other._handles
        )

    def __repr__(self) -> str:
        return f"SplineChain(segments={self.segment_count})"
