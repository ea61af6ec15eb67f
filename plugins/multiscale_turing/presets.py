"""
Turing Scale Presets

Each preset is a named list of scales known to produce interesting
multi-scale patterns. Scales are ordered largest first.
"""

from .config import DEFAULT_SCALES, Scale

PRESETS = {
    "default": {
        "name": "Four Scale",
        "description": "Default set: radii 20/10/5/1, rotational symmetry 2",
        "scales": list(DEFAULT_SCALES),
    },
    "five_scale": {
        "name": "Five Scale",
        "description": "Adds a coarse 100/200 band with 3-fold symmetry",
        "scales": [Scale(100, 200, 0.05, 1.0, 3)] + list(DEFAULT_SCALES),
    },
    "plain": {
        "name": "Plain",
        "description": "Default radii without rotational averaging",
        "scales": [
            Scale(20, 40, 0.04, 1.0, 1),
            Scale(10, 20, 0.03, 1.0, 1),
            Scale(5, 10, 0.02, 1.0, 1),
            Scale(1, 2, 0.01, 1.0, 1),
        ],
    },
}

PRESET_ORDER = ["default", "five_scale", "plain"]


def get_preset(name):
    """Get a preset by name. Returns None if not found."""
    return PRESETS.get(name)


def list_presets():
    """Return list of (key, name, description) for all presets."""
    return [(k, PRESETS[k]["name"], PRESETS[k]["description"])
            for k in PRESET_ORDER]
