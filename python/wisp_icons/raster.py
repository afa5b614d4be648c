# python/wisp_icons/raster.py
# Integer triangle rasterization and neighbour search for crystal facets
# RELEVANT FILES: python/wisp_icons/synth.py, tests/test_raster.py
from __future__ import annotations

import logging
from typing import List, Optional, Sequence, Tuple

import numpy as np

logger = logging.getLogger(__name__)

Point = Tuple[int, int]


def _signed_area2(a: Point, b: Point, c: Point) -> int:
    """Twice the signed area of triangle ``abc``."""
    ax, ay = a
    bx, by = b
    cx, cy = c
    return -by * cx + ay * (-bx + cx) + ax * (by - cy) + bx * cy


def triangle_mask(
    a: Point,
    b: Point,
    c: Point,
    x0: int,
    y0: int,
    x1: int,
    y1: int,
) -> Optional[np.ndarray]:
    """Barycentric inside-test over the inclusive box ``[x0, x1] x [y0, y1]``.

    A sample ``(x, y)`` is inside when both barycentric weights are >= 0 and
    their sum is <= 1. The weights are kept scaled by twice the signed area so
    the comparison stays in exact integer arithmetic; edges are inclusive.

    Returns:
        Boolean array of shape ``(y1 - y0 + 1, x1 - x0 + 1)``, or None when the
        triangle has zero area.
    """
    ax, ay = int(a[0]), int(a[1])
    bx, by = int(b[0]), int(b[1])
    cx, cy = int(c[0]), int(c[1])
    area2 = _signed_area2((ax, ay), (bx, by), (cx, cy))
    if area2 == 0:
        return None

    py, px = np.mgrid[y0:y1 + 1, x0:x1 + 1].astype(np.int64)
    s = (ay * cx - ax * cy) + (cy - ay) * px + (ax - cx) * py
    t = (ax * by - ay * bx) + (ay - by) * px + (bx - ax) * py
    if area2 > 0:
        return (s >= 0) & (t >= 0) & (s + t <= area2)
    return (s <= 0) & (t <= 0) & (s + t >= area2)


def fill_triangle(
    pixels: np.ndarray,
    a: Point,
    b: Point,
    c: Point,
    color: Sequence[int],
) -> int:
    """Overwrite every pixel of ``pixels`` (H, W, 4) inside triangle ``abc``.

    The bounding box is clipped to the canvas. Collinear vertices and boxes
    entirely off-canvas leave the buffer untouched.

    Returns:
        Number of pixels written.
    """
    height, width = pixels.shape[:2]
    xs = (int(a[0]), int(b[0]), int(c[0]))
    ys = (int(a[1]), int(b[1]), int(c[1]))
    x0 = max(0, min(xs))
    x1 = min(width - 1, max(xs))
    y0 = max(0, min(ys))
    y1 = min(height - 1, max(ys))
    if x0 > x1 or y0 > y1:
        return 0

    mask = triangle_mask(a, b, c, x0, y0, x1, y1)
    if mask is None:
        logger.debug("Skipping degenerate triangle %s %s %s", a, b, c)
        return 0

    pixels[y0:y1 + 1, x0:x1 + 1][mask] = np.asarray(color, dtype=np.uint8)
    return int(mask.sum())


def nearest_neighbors(points: np.ndarray, index: int, k: int = 2) -> List[int]:
    """Indices of the ``k`` points closest to ``points[index]``.

    Distance is Euclidean; ties keep generation order. The point itself is
    excluded, coincident copies of it at other indices are not.
    """
    pts = np.asarray(points, dtype=np.int64)
    others = np.array([j for j in range(len(pts)) if j != index], dtype=np.intp)
    if others.size == 0:
        return []
    delta = pts[others] - pts[index]
    # squared distance orders identically and keeps ties exact
    dist2 = delta[:, 0] * delta[:, 0] + delta[:, 1] * delta[:, 1]
    order = np.argsort(dist2, kind="stable")
    return [int(j) for j in others[order][:k]]
