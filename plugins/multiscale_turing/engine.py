"""
Multi-Scale Turing Pattern Engine

Each iteration visits every cell and, for each scale, compares the mean
of the field over a small (activator) disc with the mean over a larger
(inhibitor) disc. The scale whose activator and inhibitor agree most
closely wins, and the cell is nudged up or down by that scale's small
amount depending on which mean is larger. Once every cell is updated the
field is stretched back to span [-1, +1].

Cells are updated in place, x outer and y inner, so later cells in a pass
see values already nudged earlier in the same pass.

A scale with symmetry n > 1 averages its variation over n rotations of
the cell about the grid centre (by 360/n, 360/(n-1), ..., 360 degrees).
The activator and inhibitor kept for the sign test are those of the
final, unrotated sample.

Reference: Jonathan McCabe, "Cyclic Symmetric Multi-Scale Turing
Patterns" (2010)
"""

import hashlib

import numpy as np
from numba import njit

from .config import Configuration
from .disc import disc_mean
from .geometry import clamp, rotate_about
from .grids import make_grid_2d, make_grid_3d, make_random_grid_2d, make_rng


@njit(cache=True)
def _iterate_scales(field, activator_radii, inhibitor_radii, small_amounts,
                    weights, symmetries, activators, inhibitors, variations):
    width, height = field.shape
    xc = width // 2
    yc = height // 2
    n_scales = small_amounts.shape[0]

    for x in range(width):
        for y in range(height):
            for k in range(n_scales):
                weight = weights[k]
                sym = symmetries[k]
                if sym > 1:
                    activator = 0.0
                    inhibitor = 0.0
                    total = 0.0
                    for n in range(sym, 0, -1):
                        # n == 1 is a full turn, taken as exactly 0 degrees
                        angle = (360.0 / n) % 360.0
                        rx, ry = rotate_about(x, y, angle, xc, yc)
                        rx = clamp(0, rx, width - 1)
                        ry = clamp(0, ry, height - 1)
                        activator = disc_mean(rx, ry, activator_radii[k], field) * weight
                        inhibitor = disc_mean(rx, ry, inhibitor_radii[k], field) * weight
                        total += abs(activator - inhibitor)
                    activators[x, y, k] = activator
                    inhibitors[x, y, k] = inhibitor
                    variations[x, y, k] = total / sym
                else:
                    activator = disc_mean(x, y, activator_radii[k], field) * weight
                    inhibitor = disc_mean(x, y, inhibitor_radii[k], field) * weight
                    activators[x, y, k] = activator
                    inhibitors[x, y, k] = inhibitor
                    variations[x, y, k] = abs(activator - inhibitor)

            # best scale has the smallest variation, first one wins ties
            best = 0
            for k in range(1, n_scales):
                if variations[x, y, k] < variations[x, y, best]:
                    best = k

            if activators[x, y, best] > inhibitors[x, y, best]:
                field[x, y] += small_amounts[best]
            else:
                field[x, y] -= small_amounts[best]


def renormalise(field):
    """Linearly rescale field in place to span [-1, +1].

    A constant field is left untouched.
    """
    smallest = field.min()
    largest = field.max()
    if largest == smallest:
        return field
    field -= smallest
    field /= (largest - smallest)
    field *= 2.0
    field -= 1.0
    return field


class MultiScaleTuring:
    """Owns the pattern field and the per-scale scratch buffers."""

    def __init__(self, width, height, scales, seed=None, field=None):
        """
        Args:
            width, height: Grid dimensions in cells
            scales: Sequence of Scale, or of 5-tuples in Scale field order
                (largest first by convention)
            seed: Seed for the initial noise (default: wall-clock ns)
            field: Optional initial field of shape (width, height) with
                values in [-1, 1]; replaces the random noise
        """
        cfg = Configuration(width, height, scales).validate()
        self.width = cfg.width
        self.height = cfg.height
        self.scales = tuple(cfg.scales)
        self.generation = 0

        self.rng = make_rng(seed)
        if field is None:
            self.field = make_random_grid_2d(self.width, self.height, self.rng)
        else:
            self.field = self._checked_field(field)

        # Scale parameters as arrays for the compiled kernel
        self._activator_radii = np.array(
            [s.activator_radius for s in self.scales], dtype=np.int64)
        self._inhibitor_radii = np.array(
            [s.inhibitor_radius for s in self.scales], dtype=np.int64)
        self._small_amounts = np.array(
            [s.small_amount for s in self.scales], dtype=np.float64)
        self._weights = np.array(
            [s.weight for s in self.scales], dtype=np.float64)
        self._symmetries = np.array(
            [s.symmetry for s in self.scales], dtype=np.int64)

        # Per-scale scratch, only meaningful during an iteration
        depth = len(self.scales)
        self.activators = make_grid_3d(self.width, self.height, depth)
        self.inhibitors = make_grid_3d(self.width, self.height, depth)
        self.variations = make_grid_3d(self.width, self.height, depth)

    @classmethod
    def from_config(cls, cfg, seed=None):
        return cls(cfg.width, cfg.height, cfg.scales, seed=seed)

    def _checked_field(self, field):
        arr = np.array(field, dtype=np.float64)
        if arr.shape != (self.width, self.height):
            raise ValueError(
                f"initial field has shape {arr.shape}, "
                f"expected {(self.width, self.height)}")
        if not np.all(np.isfinite(arr)) or arr.min() < -1.0 or arr.max() > 1.0:
            raise ValueError("initial field values must lie in [-1, 1]")
        return arr

    def apply_scales(self):
        """Nudge every cell by its best scale's step, without renormalising.

        Fills activators, inhibitors and variations as a side effect.
        """
        _iterate_scales(self.field, self._activator_radii, self._inhibitor_radii,
                        self._small_amounts, self._weights, self._symmetries,
                        self.activators, self.inhibitors, self.variations)
        return self.field

    def next_iteration(self):
        """Advance one pass: per-cell scale update, then renormalise."""
        self.apply_scales()
        self.normalise()
        self.generation += 1
        return self.field

    def step_n(self, n):
        """Advance n iterations. Returns the field."""
        for _ in range(n):
            self.next_iteration()
        return self.field

    def normalise(self):
        renormalise(self.field)

    def field_view(self):
        """Read-only view of the live field, indexed [x, y]."""
        view = self.field.view()
        view.flags.writeable = False
        return view

    def snapshot(self):
        """Owned copy of the current field."""
        return self.field.copy()

    def digest(self):
        """SHA-256 hex digest of the field's bytes."""
        return hashlib.sha256(np.ascontiguousarray(self.field).tobytes()).hexdigest()

    @property
    def stats(self):
        return {
            "generation": self.generation,
            "min": float(self.field.min()),
            "max": float(self.field.max()),
            "mean": float(self.field.mean()),
        }


def make_engine(width, height, scales, seed=None):
    return MultiScaleTuring(width, height, scales, seed=seed)
