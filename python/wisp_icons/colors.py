"""HSL colour helpers for the crystal icon synthesizer."""

from __future__ import annotations

import math
from typing import Tuple

import numpy as np

RGB = Tuple[int, int, int]


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def hsl_to_rgb(h: float, s: float, l: float) -> RGB:
    """Convert an HSL triple to 8-bit RGB.

    Args:
        h: Hue in degrees, [0, 360)
        s: Saturation in percent, [0, 100]
        l: Lightness in percent, [0, 100]

    Returns:
        Tuple of (R, G, B) values in 0-255 range. Halves round up, so the
        result is stable across platforms for the same inputs.
    """
    h = h / 360.0
    s = s / 100.0
    l = l / 100.0
    a = s * min(l, 1.0 - l)

    def channel(n: int) -> int:
        k = (n + h * 12.0) % 12.0
        return _round_half_up((l - a * max(min(k - 3.0, 9.0 - k, 1.0), -1.0)) * 255.0)

    return (channel(0), channel(8), channel(4))


def jitter_hsl_to_rgb(
    h: float,
    s: float,
    l: float,
    variation: float,
    rng: np.random.Generator,
) -> RGB:
    """Convert HSL to RGB after shifting lightness by a uniform offset.

    The offset is drawn from ``[-variation / 2, variation / 2)`` and the
    result is clamped to [0, 100].
    """
    jittered = l + float(rng.random()) * variation - variation / 2.0
    jittered = min(max(jittered, 0.0), 100.0)
    return hsl_to_rgb(h, s, jittered)


def rgb_to_hex(rgb: RGB) -> str:
    """Format an RGB tuple as ``#rrggbb``."""
    return "#{:02x}{:02x}{:02x}".format(*(int(c) for c in rgb[:3]))
