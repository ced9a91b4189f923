"""
Geometry and helper functions for game mechanics
"""

from __future__ import annotations
import math
import random
from typing import Tuple, Optional
import numpy as np


def distance(x1: float, y1: float, x2: float, y2: float) -> float:
    """Euclidean distance between two points"""
    return math.hypot(x2 - x1, y2 - y1)


def normalize(x: float, y: float, eps: float = 1e-8) -> Tuple[float, float]:
    """Normalize a vector to unit length; (0, 0) means no direction"""
    l = math.hypot(x, y)
    if l < eps:
        return 0.0, 0.0
    return x / l, y / l


def clamp(x: float, lo: float, hi: float) -> float:
    """Clamp value between low and high bounds"""
    return lo if x < lo else hi if x > hi else x


def random_range(lo: float, hi: float) -> float:
    """Uniform random float in [lo, hi)"""
    return random.random() * (hi - lo) + lo


def circle_collide(x1, y1, r1, x2, y2, r2) -> bool:
    """Check if two circles overlap (touching does not count)"""
    return distance(x1, y1, x2, y2) < r1 + r2


def format_timer(ms: float) -> str:
    """Format milliseconds as MM:SS"""
    ms = max(0, int(ms))
    minutes = ms // 60_000
    seconds = (ms % 60_000) // 1000
    return f"{minutes:02d}:{seconds:02d}"


def seed_everything(py_seed: Optional[int]):
    """Seed all random number generators"""
    if py_seed is None:
        return
    random.seed(py_seed)
    np.random.seed(py_seed)


def health_ratio(health: float, max_health: float) -> float:
    """Health as a [0, 1] fraction for bars"""
    return clamp(health / max_health, 0.0, 1.0)


def health_label(health: float, max_health: float) -> str:
    """Health label, rounded up, e.g. '25 / 100'"""
    return f"{math.ceil(health)} / {max_health}"
