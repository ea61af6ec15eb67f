"""
PNG Output

Pixmaps are indexed [x, y]; Pillow wants rows first, so they are
transposed to [y, x] before encoding as 8-bit non-premultiplied RGBA.
"""

import numpy as np
from PIL import Image

from .images import gray_to_rgba

FRAME_PATTERN = "image_{:03d}.png"


def frame_filename(i):
    return FRAME_PATTERN.format(i)


def write_png(path, rgba):
    """Write an [x, y, 4] uint8 pixmap to path."""
    rgba = np.asarray(rgba, dtype=np.uint8)
    if rgba.ndim != 3 or rgba.shape[2] != 4:
        raise ValueError(f"expected an [x, y, 4] pixmap, got shape {rgba.shape}")
    img = Image.fromarray(np.ascontiguousarray(rgba.transpose(1, 0, 2)))
    img.save(path, format="PNG")
    return path


def write_gray_png(path, gray):
    return write_png(path, gray_to_rgba(np.asarray(gray, dtype=np.uint8)))
