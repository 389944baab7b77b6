"""
High-level background removal pipeline.

`remove_background` is the main entry point used by the HTTP API, the batch
worker and the local CLI. It keeps orchestration simple:
text in -> decode -> border color -> flood fill -> feather -> PNG data URL out.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Optional, Tuple

from . import config
from .background import BackgroundColor, estimate_background_color
from .decoding import decode_transfer_payload, load_pixel_grid_from_bytes
from .encoding import encode_png, to_data_url
from .feathering import apply_feathered_mask
from .flood_fill import flood_fill_mask, validate_tolerance

logger = logging.getLogger(__name__)


@dataclass
class RemovalResult:
    png_bytes: bytes
    size: Tuple[int, int]  # (width, height)
    background: BackgroundColor
    masked_pixels: int


def remove_background_bytes(
    image_bytes: bytes,
    tolerance: int,
    feather_radius: Optional[int] = None,
) -> RemovalResult:
    """
    Full pipeline from encoded image bytes to RGBA PNG bytes.

    Raises:
        BackgroundRemovalError: when input is invalid or a codec step fails.
    """
    logger.info("remove_background called with tolerance: %s", tolerance)
    tolerance = validate_tolerance(tolerance)
    radius = config.resolve_feather_radius(feather_radius)

    decoded = load_pixel_grid_from_bytes(image_bytes)
    width, height = decoded.size
    logger.info("Image size: %dx%d format=%s", width, height, decoded.source_format)

    background = estimate_background_color(decoded.pixels)
    logger.info(
        "Average background color: R=%.0f, G=%.0f, B=%.0f",
        background.r,
        background.g,
        background.b,
    )

    mask = flood_fill_mask(decoded.pixels, background, tolerance)
    masked = int(mask.sum())
    logger.debug("remove_background: masked %d of %d pixels", masked, mask.size)

    pixels = apply_feathered_mask(decoded.pixels, mask, radius=radius)
    png_bytes = encode_png(pixels)
    logger.info("remove_background: Success")

    return RemovalResult(
        png_bytes=png_bytes,
        size=(width, height),
        background=background,
        masked_pixels=masked,
    )


def remove_background(
    image_data: str,
    tolerance: int,
    feather_radius: Optional[int] = None,
) -> str:
    """
    Remove the border-connected background of a base64 or ``data:`` URL image.

    Returns ``data:image/png;base64,...``; nothing is returned on failure.
    """
    image_bytes = decode_transfer_payload(image_data)
    result = remove_background_bytes(image_bytes, tolerance, feather_radius=feather_radius)
    return to_data_url(result.png_bytes)
