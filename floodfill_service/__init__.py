"""
Flood-fill background removal service package.

Exposes reusable primitives for decoding images, estimating the border
background color, growing the background region, feathering the cut edge,
and serving the FastAPI application.
"""

from .errors import (
    BackgroundRemovalError,
    ImageDecodeError,
    ImageEncodeError,
    InvalidFeatherRadiusError,
    InvalidToleranceError,
    TransferDecodeError,
)
from .pipeline import remove_background, remove_background_bytes

__all__ = [
    "BackgroundRemovalError",
    "ImageDecodeError",
    "ImageEncodeError",
    "InvalidFeatherRadiusError",
    "InvalidToleranceError",
    "TransferDecodeError",
    "remove_background",
    "remove_background_bytes",
]
