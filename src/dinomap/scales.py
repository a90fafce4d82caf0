# src/dinomap/scales.py
import math
from typing import Iterable, Tuple

import numpy as np

from .config import RADIUS_RANGE


def _sqrt(v: float) -> float:
    # sign-preserving, like a pow scale with exponent 0.5
    return -math.sqrt(-v) if v < 0 else math.sqrt(v)


class SqrtScale:
    """Square-root scale mapping ``domain`` onto ``range``."""

    def __init__(self, domain: Tuple[float, float], range: Tuple[float, float], clamp: bool = True):
        self.domain = (float(domain[0]), float(domain[1]))
        self.range = (float(range[0]), float(range[1]))
        self.clamp = clamp

    def __call__(self, value: float) -> float:
        if value is None or math.isnan(value):
            return float("nan")
        d0, d1 = _sqrt(self.domain[0]), _sqrt(self.domain[1])
        r0, r1 = self.range
        t = 0.5 if d1 == d0 else (_sqrt(value) - d0) / (d1 - d0)
        if self.clamp:
            t = min(1.0, max(0.0, t))
        return r0 + t * (r1 - r0)


def size_scale(lengths: Iterable[float], radius_range: Tuple[float, float] = RADIUS_RANGE) -> SqrtScale:
    """Radius scale over [0, longest body length]; a 0/NaN/empty max falls back to 1."""
    arr = np.asarray(list(lengths), dtype=float)
    top = np.nanmax(arr) if arr.size and not np.isnan(arr).all() else 0.0
    return SqrtScale((0.0, float(top) or 1.0), radius_range)
