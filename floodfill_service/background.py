"""Border sampling and background color estimation."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from .errors import ImageDecodeError


@dataclass(frozen=True)
class BackgroundColor:
    r: float
    g: float
    b: float

    def as_array(self) -> np.ndarray:
        return np.array([self.r, self.g, self.b], dtype=np.float64)


def sample_border_pixels(pixels: np.ndarray) -> np.ndarray:
    """
    Collect RGB samples from the top row, bottom row, left and right columns.

    Corners are sampled by both a row and a column, and a single-row or
    single-column image contributes that line twice. Both weightings are
    kept as is, so the sample count is always ``2 * (width + height)``.
    """
    rgb = pixels[..., :3]
    return np.concatenate(
        [
            rgb[0, :],
            rgb[-1, :],
            rgb[:, 0],
            rgb[:, -1],
        ]
    ).reshape(-1, 3)


def estimate_background_color(pixels: np.ndarray) -> BackgroundColor:
    """Mean border color in float64; alpha is ignored."""
    if pixels.ndim != 3 or pixels.shape[0] == 0 or pixels.shape[1] == 0:
        raise ImageDecodeError(f"Failed to load image: cannot sample border of shape {pixels.shape}")
    mean = sample_border_pixels(pixels).astype(np.float64).mean(axis=0)
    return BackgroundColor(r=float(mean[0]), g=float(mean[1]), b=float(mean[2]))


# 442**2 * 3 exceeds the largest possible squared RGB distance (3 * 255**2).
SATURATED_TOLERANCE = 442


def tolerance_threshold(tolerance: int) -> float:
    """
    Squared RGB distance bound equivalent to ``tolerance`` per channel.

    Tolerances at or above ``SATURATED_TOLERANCE`` all admit every color, so
    they are clamped before squaring.
    """
    return float(min(tolerance, SATURATED_TOLERANCE)) ** 2 * 3.0
