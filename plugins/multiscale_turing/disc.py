"""
Disc Averager

Mean of field values inside a closed disc on the integer lattice, with
cells outside the grid skipped (no wrap-around, no reflection).

The disc mean is biased toward zero by a single phantom sample: the
divisor counts included cells starting from 1, not 0. Every generated
image depends on this, and it keeps the divisor non-zero for a disc that
is clipped away entirely.
"""

from numba import njit

from .geometry import point_in_circle


@njit(cache=True)
def disc_mean(x, y, r, field):
    """Average of field[i, j] over the disc of radius r centred at (x, y).

    Only the half-open bounding square [x - r, x + r) x [y - r, y + r) is
    visited, so the cells at x + r and y + r never contribute. A radius
    of 0 is the centre cell alone, giving field[x, y] / 2.
    """
    if r == 0:
        return field[x, y] / 2.0

    width, height = field.shape
    total = 0.0
    count = 1
    for i in range(x - r, x + r):
        if i < 0 or i >= width:
            continue
        for j in range(y - r, y + r):
            if j < 0 or j >= height:
                continue
            if point_in_circle(i, j, x, y, r):
                total += field[i, j]
                count += 1
    return total / count
