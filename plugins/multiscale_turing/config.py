"""
Image Configuration

A configuration is the grid size plus an ordered list of Turing scales.
It can be read from and written to a JSON object of the form:

    {
      "Width": 600,
      "Height": 600,
      "Scales": [
        {"ActivatorRadius": 20, "InhibitorRadius": 40,
         "SmallAmount": 0.04, "Weight": 1, "Symmetry": 2},
        ...
      ]
    }

Field names are exact. Radii, Symmetry, Width and Height are integers;
SmallAmount and Weight are floats.
"""

import json
import math
import numbers
from dataclasses import dataclass, field
from typing import List, Tuple


class ConfigurationError(ValueError):
    """An image configuration that cannot produce a valid engine."""


_SCALE_FIELDS = (
    ("ActivatorRadius", "activator_radius", int),
    ("InhibitorRadius", "inhibitor_radius", int),
    ("SmallAmount", "small_amount", float),
    ("Weight", "weight", float),
    ("Symmetry", "symmetry", int),
)


def _as_int(value, name):
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise ConfigurationError(f"{name} must be an integer, got {value!r}")
    if not isinstance(value, numbers.Integral):
        if not float(value).is_integer():
            raise ConfigurationError(f"{name} must be an integer, got {value!r}")
    return int(value)


def _as_float(value, name):
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise ConfigurationError(f"{name} must be a number, got {value!r}")
    return float(value)


@dataclass(frozen=True)
class Scale:
    """One spatial band of the multi-scale reaction-diffusion rule."""

    activator_radius: int
    inhibitor_radius: int
    small_amount: float
    weight: float = 1.0
    symmetry: int = 1

    def validate(self):
        if self.activator_radius < 1:
            raise ConfigurationError(
                f"activator radius must be >= 1, got {self.activator_radius}")
        if self.inhibitor_radius <= self.activator_radius:
            raise ConfigurationError(
                f"inhibitor radius ({self.inhibitor_radius}) must be larger "
                f"than activator radius ({self.activator_radius})")
        if not (self.small_amount > 0 and math.isfinite(self.small_amount)):
            raise ConfigurationError(
                f"small amount must be a positive number, got {self.small_amount}")
        if not math.isfinite(self.weight):
            raise ConfigurationError(f"weight must be finite, got {self.weight}")
        if self.symmetry < 1:
            raise ConfigurationError(
                f"symmetry must be >= 1, got {self.symmetry}")

    def to_dict(self):
        return {key: getattr(self, attr) for key, attr, _ in _SCALE_FIELDS}

    @classmethod
    def from_dict(cls, data):
        if not isinstance(data, dict):
            raise ConfigurationError(f"scale must be a JSON object, got {data!r}")
        kwargs = {}
        for key, attr, kind in _SCALE_FIELDS:
            if key not in data:
                raise ConfigurationError(f"scale is missing field {key!r}")
            convert = _as_int if kind is int else _as_float
            kwargs[attr] = convert(data[key], key)
        return cls(**kwargs)

    @classmethod
    def coerce(cls, scale):
        """Build a checked Scale from a Scale or a plain 5-tuple.

        Integer fields accept integral floats (2.0) but not 2.5.
        """
        if isinstance(scale, cls):
            values = tuple(getattr(scale, attr) for _, attr, _ in _SCALE_FIELDS)
        else:
            try:
                values = tuple(scale)
            except TypeError:
                raise ConfigurationError(
                    f"scale must be a Scale or a tuple, got {scale!r}") from None
        if len(values) != len(_SCALE_FIELDS):
            raise ConfigurationError(
                f"scale needs {len(_SCALE_FIELDS)} values, got {scale!r}")
        kwargs = {}
        for (key, attr, kind), value in zip(_SCALE_FIELDS, values):
            convert = _as_int if kind is int else _as_float
            kwargs[attr] = convert(value, key)
        return cls(**kwargs)


# (activator_radius, inhibitor_radius, small_amount, weight, symmetry)
DEFAULT_SCALES: Tuple[Scale, ...] = (
    Scale(20, 40, 0.04, 1.0, 2),
    Scale(10, 20, 0.03, 1.0, 2),
    Scale(5, 10, 0.02, 1.0, 2),
    Scale(1, 2, 0.01, 1.0, 2),
)

DEFAULT_WIDTH = 600
DEFAULT_HEIGHT = 600


@dataclass
class Configuration:
    width: int
    height: int
    scales: List[Scale] = field(default_factory=lambda: list(DEFAULT_SCALES))

    def validate(self):
        """Raise ConfigurationError unless this config can build an engine.

        Width, height and scales are normalised in place (plain tuples
        become Scale, integral floats become int).
        """
        self.width = _as_int(self.width, "Width")
        self.height = _as_int(self.height, "Height")
        if self.width <= 0 or self.height <= 0:
            raise ConfigurationError(
                f"image size must be positive, got {self.width}x{self.height}")
        if not self.scales:
            raise ConfigurationError("at least one scale is required")
        try:
            scales = list(self.scales)
        except TypeError:
            raise ConfigurationError(
                f"scales must be a sequence, got {self.scales!r}") from None
        self.scales = [Scale.coerce(s) for s in scales]
        for scale in self.scales:
            scale.validate()
        return self

    def to_dict(self):
        return {
            "Width": self.width,
            "Height": self.height,
            "Scales": [s.to_dict() for s in self.scales],
        }

    @classmethod
    def from_dict(cls, data):
        if not isinstance(data, dict):
            raise ConfigurationError(
                f"configuration must be a JSON object, got {type(data).__name__}")
        for key in ("Width", "Height", "Scales"):
            if key not in data:
                raise ConfigurationError(f"configuration is missing field {key!r}")
        if not isinstance(data["Scales"], list):
            raise ConfigurationError("Scales must be a JSON array")
        return cls(
            width=_as_int(data["Width"], "Width"),
            height=_as_int(data["Height"], "Height"),
            scales=[Scale.from_dict(s) for s in data["Scales"]],
        )

    def to_json(self):
        return json.dumps(self.to_dict(), indent=2)


def default_config(width=DEFAULT_WIDTH, height=DEFAULT_HEIGHT):
    return Configuration(width, height, list(DEFAULT_SCALES))


def read_config(path):
    """Load and validate a Configuration from a JSON file.

    File errors propagate as OSError; malformed or invalid content raises
    ConfigurationError.
    """
    with open(path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"{path}: invalid JSON ({e})") from e
    return Configuration.from_dict(data).validate()


def write_config(cfg, path):
    with open(path, "w", encoding="utf-8") as f:
        f.write(cfg.to_json())
        f.write("\n")
