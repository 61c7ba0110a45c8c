from __future__ import annotations

from typing import Tuple

import numpy as np


def sample_range(start: int, end: int, step: int) -> Tuple[int, ...]:
    """Integers from ``start`` to ``end`` inclusive, every ``step``.

    The last sample is always ``end`` itself, even when ``end - start`` is not
    a multiple of ``step`` (0, 10, ..., 240, 247 for ``end=247``).
    """
    if step <= 0:
        raise ValueError(f"step must be positive, got {step}")
    if end < start:
        return ()

    values = np.arange(start, end, step, dtype=np.int64)
    return tuple(int(v) for v in values) + (int(end),)


def to_logarithmic(logarithmic: bool, value: float) -> float:
    """Map a raw axis value to its displayed coordinate."""
    if not logarithmic:
        return value
    return float(np.log10(value))
