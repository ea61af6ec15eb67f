"""
Geometry and Rounding Helpers

Integer primitives used by the scale iterator (circle membership,
rotation about a centre, clamping) plus the float rounding helpers used
by the colour policies.

The integer helpers are compiled with numba so the iteration kernel can
call them from nopython code. They remain ordinary callables from Python.
"""

import math

import numpy as np
from numba import njit


@njit(cache=True)
def point_in_circle(xp, yp, x, y, r):
    """Is (xp, yp) inside or on the circle of radius r centred at (x, y)?"""
    dx = xp - x
    dy = yp - y
    return dx * dx + dy * dy <= r * r


@njit(cache=True)
def rotate_about(x, y, angle, xc, yc):
    """Rotate (x, y) by angle degrees about (xc, yc).

    The rotated coordinates are truncated toward zero before being
    translated back, so results can differ by one cell from a rounded
    rotation.
    """
    theta = math.radians(angle)
    sin = math.sin(theta)
    cos = math.cos(theta)
    dx = x - xc
    dy = y - yc
    x1 = int(dx * cos - dy * sin)
    y1 = int(dy * cos + dx * sin)
    return x1 + xc, y1 + yc


@njit(cache=True)
def clamp(lo, n, hi):
    return max(lo, min(n, hi))


def constrain(lo, n, hi):
    """Float clamp that accepts scalars or arrays."""
    return np.minimum(np.maximum(lo, n), hi)


def round_half_away(num):
    """Round half away from zero (0.5 -> 1, -0.5 -> -1)."""
    return np.trunc(num + np.copysign(0.5, num))


def to_fixed(num, precision):
    """Round num to the given number of decimal places, half away from zero."""
    scale = 10.0 ** precision
    return round_half_away(num * scale) / scale
