"""
Region growing from the image border.

The background region is every pixel reachable from a matching border pixel
through 8-connected matching neighbors. Matching compares squared RGB
distances, so no square root is taken in the traversal.
"""

from __future__ import annotations

from collections import deque
import logging
import numbers
from typing import Deque, Tuple

import numpy as np

from .background import BackgroundColor, tolerance_threshold
from .errors import InvalidToleranceError

logger = logging.getLogger(__name__)


NEIGHBOR_OFFSETS: Tuple[Tuple[int, int], ...] = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
)


def validate_tolerance(tolerance: int) -> int:
    if isinstance(tolerance, bool) or not isinstance(tolerance, numbers.Integral):
        raise InvalidToleranceError(f"tolerance must be an integer, got {tolerance!r}")
    if tolerance < 0:
        raise InvalidToleranceError(f"tolerance must be >= 0, got {tolerance}")
    return int(tolerance)


def squared_distance(pixels: np.ndarray, background: BackgroundColor) -> np.ndarray:
    """Per-pixel squared Euclidean RGB distance to the background mean."""
    diff = pixels[..., :3].astype(np.float64) - background.as_array()
    return np.einsum("ijk,ijk->ij", diff, diff)


def is_background(pixel, background: BackgroundColor, threshold: float) -> bool:
    """
    True when the pixel's squared distance to the mean is below ``threshold``.

    An exact match always counts, so a tolerance of 0 still admits pixels
    sitting exactly on the mean.
    """
    dr = float(pixel[0]) - background.r
    dg = float(pixel[1]) - background.g
    db = float(pixel[2]) - background.b
    dist_sq = dr * dr + dg * dg + db * db
    return dist_sq == 0.0 or dist_sq < threshold


def background_matches(pixels: np.ndarray, background: BackgroundColor, threshold: float) -> np.ndarray:
    """Vectorized ``is_background`` over the whole grid."""
    dist_sq = squared_distance(pixels, background)
    return (dist_sq == 0.0) | (dist_sq < threshold)


def _border_coordinates(height: int, width: int):
    for x in range(width):
        yield 0, x
        yield height - 1, x
    for y in range(height):
        yield y, 0
        yield y, width - 1


def flood_fill_mask(pixels: np.ndarray, background: BackgroundColor, tolerance: int) -> np.ndarray:
    """
    Multi-source BFS over 8-connected neighbors seeded from the border.

    Returns a boolean (H, W) mask, True for background. A coordinate is
    marked when it is enqueued, so it is never queued twice.
    """
    tolerance = validate_tolerance(tolerance)
    height, width = pixels.shape[:2]

    matches_np = background_matches(pixels, background, tolerance_threshold(tolerance))
    if not matches_np.any():
        logger.debug("flood_fill: no pixel within tolerance=%d", tolerance)
        return np.zeros((height, width), dtype=bool)

    # Nested lists index much faster than numpy scalars in the BFS loop.
    matches = matches_np.tolist()
    marked = [[False] * width for _ in range(height)]

    queue: Deque[Tuple[int, int]] = deque()
    for y, x in _border_coordinates(height, width):
        if matches[y][x] and not marked[y][x]:
            marked[y][x] = True
            queue.append((y, x))
    seeds = len(queue)

    while queue:
        y, x = queue.popleft()
        for dy, dx in NEIGHBOR_OFFSETS:
            ny = y + dy
            nx = x + dx
            if 0 <= ny < height and 0 <= nx < width:
                row = marked[ny]
                if not row[nx] and matches[ny][nx]:
                    row[nx] = True
                    queue.append((ny, nx))

    mask = np.array(marked, dtype=bool).reshape(height, width)
    logger.debug("flood_fill: seeds=%d masked=%d of %d", seeds, int(mask.sum()), mask.size)
    return mask
