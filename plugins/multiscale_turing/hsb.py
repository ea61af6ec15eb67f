"""
HSB (== HSV) Colour with Alpha

Colours are non-premultiplied (H, S, B, A) with H in [0, 360] degrees and
S, B, A in [0, 1]. Conversions are vectorised over arrays whose last
axis holds the four channels, so a whole colour field converts in one
call; the HSBA tuple wraps the same code for single colours.

See: https://en.wikipedia.org/wiki/HSL_and_HSV#HSV_to_RGB
"""

from typing import NamedTuple

import numpy as np

from .geometry import constrain

_LO = np.array([0.0, 0.0, 0.0, 0.0])
_HI = np.array([360.0, 1.0, 1.0, 1.0])


class HSBA(NamedTuple):
    h: float
    s: float
    b: float
    a: float = 1.0

    def to_rgba(self):
        """Convert to an (r, g, b, a) tuple of bytes."""
        rgba = hsba_to_rgba(np.array([self], dtype=np.float64))[0]
        return tuple(int(v) for v in rgba)


def make_hsba(h, s, b, a=1.0):
    """Build an HSBA with every channel clamped into its range."""
    return HSBA(float(constrain(0.0, h, 360.0)), float(constrain(0.0, s, 1.0)),
                float(constrain(0.0, b, 1.0)), float(constrain(0.0, a, 1.0)))


def clamp_hsba(hsba):
    """Clamp an [..., 4] HSBA array into range (returns a new array)."""
    return constrain(_LO, np.asarray(hsba, dtype=np.float64), _HI)


def hsba_to_rgba_unit(hsba):
    """Convert [..., 4] HSBA to [..., 4] RGBA floats in [0, 1]."""
    hsba = clamp_hsba(hsba)
    h, s, v, a = hsba[..., 0], hsba[..., 1], hsba[..., 2], hsba[..., 3]

    c = v * s
    k = h / 60.0
    x = c * (1.0 - np.abs(np.mod(k, 2.0) - 1.0))
    zero = np.zeros_like(c)

    # sextants are closed on the right: [0, 1], (1, 2], ..., (5, 6]
    sextants = [k <= 1, k <= 2, k <= 3, k <= 4, k <= 5]
    r = np.select(sextants, [c, x, zero, zero, x], default=c)
    g = np.select(sextants, [x, c, c, x, zero], default=zero)
    b = np.select(sextants, [zero, zero, x, c, c], default=x)

    m = v - c
    return np.stack([r + m, g + m, b + m, a], axis=-1)


def hsba_to_rgba(hsba):
    """Convert [..., 4] HSBA to [..., 4] uint8 RGBA, rounding half up."""
    unit = hsba_to_rgba_unit(hsba)
    return np.floor(unit * 255.0 + 0.5).astype(np.uint8)


def rgba_unit_to_hsba(rgba):
    """Inverse of hsba_to_rgba_unit for [..., 4] float RGBA in [0, 1].

    Hue is 0 when the colour is grey and saturation is 0 when it is black.
    """
    rgba = np.asarray(rgba, dtype=np.float64)
    r, g, b, a = rgba[..., 0], rgba[..., 1], rgba[..., 2], rgba[..., 3]

    v = np.maximum(np.maximum(r, g), b)
    c = v - np.minimum(np.minimum(r, g), b)
    with np.errstate(divide="ignore", invalid="ignore"):
        s = np.where(v > 0, c / np.where(v > 0, v, 1.0), 0.0)
        safe_c = np.where(c > 0, c, 1.0)
        k = np.select(
            [c == 0, v == r, v == g],
            [0.0, np.mod((g - b) / safe_c, 6.0), (b - r) / safe_c + 2.0],
            default=(r - g) / safe_c + 4.0,
        )
    return np.stack([k * 60.0, s, v, a], axis=-1)
