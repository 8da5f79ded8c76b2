from __future__ import annotations

import numpy as np

from . import debug


def log_array(name: str, arr: np.ndarray) -> None:
    if not debug.is_verbose():
        return
    if arr.size == 0:
        debug.log(f"{name}: shape={arr.shape} dtype={arr.dtype} empty")
        return
    finite_mask = np.isfinite(arr)
    if finite_mask.any():
        finite_vals = arr[finite_mask]
        min_val = float(np.min(finite_vals))
        max_val = float(np.max(finite_vals))
    else:
        min_val = float("nan")
        max_val = float("nan")
    debug.log(
        f"{name}: shape={arr.shape} dtype={arr.dtype} "
        f"finite_all={bool(finite_mask.all())} min={min_val:.6g} max={max_val:.6g}"
    )
