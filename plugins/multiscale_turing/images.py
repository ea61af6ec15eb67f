"""
Pattern Images

An image pairs an engine with a way of turning its field into pixels.
Both kinds expose the same two calls, next_iteration() and pixmap(), so
a driver can run either interchangeably:

  - GrayImage:  field value -> gray level
  - ColorImage: change in field value per iteration -> HSB colour

Images own their engine; they are not engines themselves. Pixmaps are
indexed [x, y] like the field and carry RGBA bytes in the last axis.
"""

from abc import ABC, abstractmethod

import numpy as np

from .engine import MultiScaleTuring
from .geometry import constrain, to_fixed
from .hsb import clamp_hsba, hsba_to_rgba

# Channel indices in a colour field
H, S, B, A = 0, 1, 2, 3


def grayscale_pixmap(engine):
    """Map field values in [-1, 1] to gray bytes, truncating."""
    field = engine.field_view()
    return np.trunc((field + 1.0) / 2.0 * 255.0).astype(np.uint8)


def gray_to_rgba(gray):
    """Expand a [w, h] gray pixmap to opaque [w, h, 4] RGBA."""
    rgba = np.empty(gray.shape + (4,), dtype=np.uint8)
    rgba[..., :3] = gray[..., np.newaxis]
    rgba[..., 3] = 255
    return rgba


# --- Colour update policies ---

def update_hue_from_delta(colors, delta):
    """Hue tracks the change directly; saturation, brightness fixed."""
    colors[..., H] = constrain(0.0, (delta + 1.0) / 2.0 * 360.0, 360.0)
    colors[..., S] = 1.0
    colors[..., B] = 0.5
    colors[..., A] = 1.0


def update_grainy(colors, delta):
    """Nudge the first channel still strictly inside its range.

    The delta is scaled by 100 and rounded to two places; cells whose
    rounded delta is zero keep their colour. Hue is tried first, then
    saturation, then brightness.
    """
    step = to_fixed(delta * 100.0, 2)
    moving = step != 0.0
    h, s, b = colors[..., H], colors[..., S], colors[..., B]

    in_h = moving & (0.0 < h) & (h < 360.0)
    in_s = moving & ~in_h & (0.0 < s) & (s < 1.0)
    in_b = moving & ~in_h & ~in_s & (0.0 < b) & (b < 1.0)

    colors[..., H] = np.where(in_h, constrain(0.0, h + step, 360.0), h)
    colors[..., S] = np.where(in_s, constrain(0.0, s + step, 1.0), s)
    colors[..., B] = np.where(in_b, constrain(0.0, b + step, 1.0), b)


COLOR_POLICIES = {
    "hue": update_hue_from_delta,
    "grainy": update_grainy,
}

# Fixed for every ColorImage in this build
COLOR_POLICY = "hue"


class PatternImage(ABC):
    """An engine plus a rendering of its field."""

    def __init__(self, engine):
        self.engine = engine

    @property
    def width(self):
        return self.engine.width

    @property
    def height(self):
        return self.engine.height

    @abstractmethod
    def next_iteration(self):
        """Advance the underlying engine by one pass."""

    @abstractmethod
    def pixmap(self):
        """Return the current [width, height, 4] uint8 RGBA pixmap."""


class GrayImage(PatternImage):

    def next_iteration(self):
        self.engine.next_iteration()

    def pixmap(self):
        return gray_to_rgba(grayscale_pixmap(self.engine))


class ColorImage(PatternImage):
    """Colours each cell by how much its field value moved last pass."""

    def __init__(self, engine, seed_color=None):
        """
        Args:
            engine: MultiScaleTuring to own and iterate
            seed_color: (H, S, B, A) given to every cell, clamped into range.
                None gives each cell a random hue with S=0.5, B=1, A=1,
                drawn from the engine's generator.
        """
        super().__init__(engine)
        w, h = engine.width, engine.height
        self.colors = np.empty((w, h, 4), dtype=np.float64)
        if seed_color is None:
            self.colors[..., H] = engine.rng.uniform(0.0, 360.0, size=(w, h))
            self.colors[..., S] = 0.5
            self.colors[..., B] = 1.0
            self.colors[..., A] = 1.0
        else:
            self.colors[...] = clamp_hsba(seed_color)

        self._update = COLOR_POLICIES[COLOR_POLICY]
        self._prev = np.empty((w, h), dtype=np.float64)
        self._delta = np.empty((w, h), dtype=np.float64)

    def next_iteration(self):
        np.copyto(self._prev, self.engine.field)
        self.engine.next_iteration()
        np.subtract(self.engine.field, self._prev, out=self._delta)
        self._update(self.colors, self._delta)

    def pixmap(self):
        return hsba_to_rgba(self.colors)

    def rgb_pixmap(self):
        return self.pixmap()


def make_gray_image(width, height, scales, seed=None):
    return GrayImage(MultiScaleTuring(width, height, scales, seed=seed))


def make_color_image(width, height, scales, seed_color=None, seed=None):
    return ColorImage(MultiScaleTuring(width, height, scales, seed=seed),
                      seed_color=seed_color)


IMAGE_CLASSES = {
    "gray": GrayImage,
    "rgb": ColorImage,
}
