"""Mask application with distance-based alpha feathering along the cut edge."""

from __future__ import annotations

import logging
import math
from pathlib import Path

import cv2
import numpy as np

from . import config
from .errors import InvalidFeatherRadiusError

logger = logging.getLogger(__name__)


DEFAULT_FEATHER_RADIUS = 2


def nearest_unmasked_distance(mask: np.ndarray, radius: int) -> np.ndarray:
    """
    Distance from each pixel to the nearest unmasked pixel in its window.

    The window is the (2r+1) square around the pixel, clipped to the image;
    positions outside the image never count as unmasked. Pixels with no
    unmasked pixel in the window get ``inf``. Offsets are capped at the image
    extent since longer ones can only land outside it.
    """
    height, width = mask.shape
    ry = min(radius, height - 1)
    rx = min(radius, width - 1)
    unmasked = np.pad(~mask, ((ry, ry), (rx, rx)), mode="constant", constant_values=False)
    nearest = np.full((height, width), np.inf, dtype=np.float64)
    for dy in range(-ry, ry + 1):
        for dx in range(-rx, rx + 1):
            window = unmasked[ry + dy : ry + dy + height, rx + dx : rx + dx + width]
            nearest = np.where(window, np.minimum(nearest, math.hypot(dy, dx)), nearest)
    return nearest


def feather_alpha(distance: np.ndarray, radius: int) -> np.ndarray:
    """Alpha ramp ``round(255 * d / r)`` inside the radius, 0 beyond it."""
    if radius <= 0:
        return np.zeros(distance.shape, dtype=np.uint8)
    within = distance <= radius
    ramp = np.rint(255.0 * np.where(within, distance, 0.0) / radius)
    return np.clip(ramp, 0, 255).astype(np.uint8)


def _maybe_dump_debug(mask: np.ndarray, alpha_u8: np.ndarray, debug_dir: Path) -> None:
    """Optionally write debug visualizations when DEBUG is enabled."""
    try:
        debug_dir.mkdir(parents=True, exist_ok=True)
        mask_path = debug_dir / "mask.png"
        alpha_path = debug_dir / "alpha.png"

        cv2.imwrite(str(mask_path), mask.astype(np.uint8) * 255)
        cv2.imwrite(str(alpha_path), alpha_u8)
        logger.debug("feather: wrote debug outputs to %s", debug_dir)
    except Exception as exc:  # noqa: BLE001
        logger.warning("feather: failed to write debug outputs: %s", exc)


def apply_feathered_mask(
    pixels: np.ndarray,
    mask: np.ndarray,
    radius: int = DEFAULT_FEATHER_RADIUS,
) -> np.ndarray:
    """
    Lower alpha of masked pixels in place and return ``pixels``.

    Masked pixels within ``radius`` of a kept pixel get a partial alpha that
    grows with the distance; deeper ones become fully transparent. Alpha is
    never raised and unmasked pixels are not touched.
    """
    if mask.shape != pixels.shape[:2]:
        raise ValueError(f"mask shape {mask.shape} does not match image shape {pixels.shape[:2]}")
    if radius < 0:
        raise InvalidFeatherRadiusError(f"feather radius must be >= 0, got {radius}")

    distance = nearest_unmasked_distance(mask, radius)
    ramp = feather_alpha(distance, radius)

    alpha = pixels[..., 3]
    pixels[..., 3] = np.where(mask, np.minimum(alpha, ramp), alpha)

    edge = mask & (distance <= radius)
    logger.debug(
        "feather: radius=%d masked=%d edge=%d interior=%d",
        radius,
        int(mask.sum()),
        int(edge.sum()),
        int(mask.sum() - edge.sum()),
    )

    settings = config.get_settings()
    if settings.debug:
        _maybe_dump_debug(mask, np.ascontiguousarray(pixels[..., 3]), Path(settings.debug_output_dir))
    return pixels
