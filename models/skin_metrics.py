# models/skin_metrics.py
"""
Pixel color sampling on a flattened RGBA frame buffer

A sample at (x, y) reads the pixel at
``round(y) * width * 4 + round(x) * 4`` and derives three ratios:

- brightness = (R + G + B) / (3 * 255)   in [0, 1]
- redness    = R / (G + B + 1)           unbounded above
- oiliness   = G / (R + B + 1)           unbounded above
"""

import math
from dataclasses import dataclass, asdict
from typing import Any, Dict

import numpy as np

from core.exceptions import LandmarkOutOfBoundsException

CHANNELS = 4  # RGBA

OUT_OF_BOUNDS_CLAMP = "clamp"
OUT_OF_BOUNDS_ERROR = "error"


def round_half_up(value: float) -> int:
    """Round .5 upwards (browser Math.round), not to even"""
    return int(math.floor(value + 0.5))


def sample_index(x: float, y: float, width: int) -> int:
    """Offset of the R byte for point (x, y) in a flattened RGBA buffer"""
    return round_half_up(y) * width * CHANNELS + round_half_up(x) * CHANNELS


@dataclass(frozen=True)
class PixelSample:
    """Brightness / redness / oiliness at a single pixel"""
    brightness: float
    redness: float
    oiliness: float

    @classmethod
    def from_rgb(cls, r: int, g: int, b: int) -> "PixelSample":
        r, g, b = int(r), int(g), int(b)
        return cls(
            brightness=(r + g + b) / (3 * 255),
            redness=r / (g + b + 1),
            oiliness=g / (r + b + 1),
        )

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)


@dataclass(frozen=True)
class SkinMetrics:
    """Unweighted mean of the forehead, cheek and chin samples"""
    brightness: float
    redness: float
    oiliness: float

    @classmethod
    def average(cls, forehead: PixelSample, cheek: PixelSample, chin: PixelSample) -> "SkinMetrics":
        samples = (forehead, cheek, chin)
        return cls(
            brightness=sum(s.brightness for s in samples) / 3,
            redness=sum(s.redness for s in samples) / 3,
            oiliness=sum(s.oiliness for s in samples) / 3,
        )

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)

    def to_percent(self) -> Dict[str, int]:
        """Metrics as integer percentages (value * 100, rounded half-up)"""
        return {name: round_half_up(value * 100) for name, value in asdict(self).items()}


def _resolve_point(
    x: float,
    y: float,
    width: int,
    height: int,
    out_of_bounds: str
) -> tuple:
    """Return (x, y) inside the frame according to the out-of-bounds policy"""
    px, py = round_half_up(x), round_half_up(y)
    if 0 <= px < width and 0 <= py < height:
        return x, y

    if out_of_bounds == OUT_OF_BOUNDS_ERROR:
        raise LandmarkOutOfBoundsException(x, y, width, height)
    if out_of_bounds != OUT_OF_BOUNDS_CLAMP:
        raise ValueError(f"Unknown out-of-bounds policy: {out_of_bounds}")

    return min(max(px, 0), width - 1), min(max(py, 0), height - 1)


def sample_pixel(
    rgba: Any,
    x: float,
    y: float,
    out_of_bounds: str = OUT_OF_BOUNDS_CLAMP
) -> PixelSample:
    """
    Sample the frame at a landmark point

    Args:
        rgba: (height, width, 4) uint8 array
        x, y: point in pixel coordinates
        out_of_bounds: "clamp" (nearest edge pixel) or "error"

    Returns:
        PixelSample for the addressed pixel
    """
    frame = np.asarray(rgba)
    if frame.ndim != 3 or frame.shape[2] != CHANNELS:
        raise ValueError(f"Expected an RGBA frame, got shape {frame.shape}")

    height, width = frame.shape[:2]
    x, y = _resolve_point(x, y, width, height, out_of_bounds)

    data = frame.reshape(-1)
    index = sample_index(x, y, width)
    r, g, b = data[index], data[index + 1], data[index + 2]
    return PixelSample.from_rgb(r, g, b)
