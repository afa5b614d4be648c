# python/wisp_icons/synth.py
# Procedural "crystal" icon synthesizer producing RGBA numpy buffers
# Exists to give every playlist a distinct generated cover without any image assets
# RELEVANT FILES: python/wisp_icons/raster.py, python/wisp_icons/colors.py, tests/test_synth.py
from __future__ import annotations

import logging
from typing import Optional

import numpy as np

from ._validate import size_wh
from .colors import hsl_to_rgb, jitter_hsl_to_rgb, rgb_to_hex
from .config import ConfigSource, load_crystal_config
from .raster import fill_triangle, nearest_neighbors

logger = logging.getLogger(__name__)


def random_points(
    rng: np.random.Generator,
    count: int,
    width: int,
    height: int,
    margin: int,
) -> np.ndarray:
    """Draw ``count`` integer points, each coordinate in ``[-margin, size + margin)``.

    Returns:
        int64 array of shape (count, 2) holding (x, y) pairs.
    """
    xs = rng.integers(-margin, width + margin, size=count)
    ys = rng.integers(-margin, height + margin, size=count)
    return np.column_stack((xs, ys)).astype(np.int64)


def synthesize(
    width: int,
    height: int,
    *,
    seed: Optional[int] = None,
    rng: Optional[np.random.Generator] = None,
    config: ConfigSource = None,
) -> np.ndarray:
    """Render a crystal pattern into a new RGBA buffer.

    A solid background in a random hue is overlaid with ``config.layers``
    facet layers. Each layer scatters points (some off-canvas), joins every
    point to its two nearest neighbours and fills the resulting triangles in
    a progressively lighter, jittered shade of the base colour. Later
    triangles overwrite earlier ones.

    Args:
        width: Image width in pixels
        height: Image height in pixels
        seed: Seed for a fresh ``numpy.random.default_rng``; ignored when ``rng`` is given
        rng: Generator to draw from
        config: CrystalConfig, mapping, JSON path, or None for defaults

    Returns:
        C-contiguous uint8 array of shape (height, width, 4); alpha is 255 everywhere.

    Raises:
        InvalidDimensionError: if width or height is not a positive integer
    """
    w, h = size_wh(width, height)
    cfg = load_crystal_config(config)
    gen = rng if rng is not None else np.random.default_rng(seed)

    hue = int(gen.integers(0, 360))
    saturation = int(gen.integers(cfg.saturation_range[0], cfg.saturation_range[1]))
    lightness = cfg.base_lightness

    background = hsl_to_rgb(hue, saturation, lightness)
    pixels = np.empty((h, w, 4), dtype=np.uint8)
    pixels[..., :3] = background
    pixels[..., 3] = 255
    logger.debug(
        "Crystal %dx%d base hsl(%d, %d%%, %g%%) -> %s",
        w, h, hue, saturation, lightness, rgb_to_hex(background),
    )

    for i in range(cfg.layers):
        points = random_points(gen, cfg.points_per_layer, w, h, cfg.margin)
        fill = jitter_hsl_to_rgb(
            hue, saturation, lightness + i * cfg.lightness_step, cfg.lightness_variation, gen
        ) + (255,)

        written = 0
        for idx in range(len(points)):
            first, second = nearest_neighbors(points, idx, k=2)
            written += fill_triangle(pixels, points[idx], points[first], points[second], fill)
        logger.debug("Layer %d fill %s wrote %d pixels", i, rgb_to_hex(fill), written)

    return pixels
