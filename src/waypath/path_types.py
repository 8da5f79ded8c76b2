from __future__ import annotations

from typing import Literal, TypeAlias

import numpy as np
from jaxtyping import Float, Int

Point2: TypeAlias = Float[np.ndarray, "2"]
Segment: TypeAlias = Float[np.ndarray, "4 2"]
SegmentArray: TypeAlias = Float[np.ndarray, "K 4 2"]
AnchorArray: TypeAlias = Float[np.ndarray, "A 2"]
HandleArray: TypeAlias = Float[np.ndarray, "K 2 2"]
PointArray: TypeAlias = Float[np.ndarray, "N 2"]
ScalarArray: TypeAlias = Float[np.ndarray, "N"]
ParamGrid: TypeAlias = Float[np.ndarray, "T"]
CurvePoints: TypeAlias = Float[np.ndarray, "T 2"]
IndexArray: TypeAlias = Int[np.ndarray, "S"]

ChainEnd: TypeAlias = Literal["front", "back"]
AnchorSlot: TypeAlias = Literal["p0", "p3"]
HandleSlot: TypeAlias = Literal["p1", "p2"]
ControlSlot: TypeAlias = Literal["p0", "p1", "p2", "p3"]
