"""
Grid Allocation and Random Initialisation

All fields are float64 arrays shaped (width, height[, depth]) and
indexed [x, y(, k)]. Randomness comes from an explicitly seeded numpy
Generator; nothing here touches a process-global RNG.
"""

import time

import numpy as np


def make_rng(seed=None):
    """Return a Generator seeded from `seed` (default: wall-clock ns)."""
    if seed is None:
        seed = time.time_ns()
    return np.random.default_rng(seed)


def make_grid_2d(width, height):
    return np.zeros((width, height), dtype=np.float64)


def make_grid_3d(width, height, depth):
    return np.zeros((width, height, depth), dtype=np.float64)


def make_random_grid_2d(width, height, rng):
    """Uniform noise on [-1, 1)."""
    return rng.uniform(-1.0, 1.0, size=(width, height))
