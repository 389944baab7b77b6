"""
Payload decoding: text transfer encoding -> image bytes -> RGBA pixel grid.

Accepts raw base64 or a ``data:`` URL. Anything Pillow can open is a valid
image codec here; the decoded grid is always 8-bit RGBA.
"""

from __future__ import annotations

import base64
import binascii
from dataclasses import dataclass
from io import BytesIO
from typing import Optional, Tuple

import numpy as np
from PIL import Image

from .errors import ImageDecodeError, TransferDecodeError


@dataclass
class DecodedImage:
    pixels: np.ndarray  # (H, W, 4) uint8, RGBA, writable
    size: Tuple[int, int]  # (width, height)
    source_format: Optional[str] = None


def strip_transfer_prefix(image_data: str) -> str:
    """Drop a ``<metadata>,`` prefix; only text after the first comma is payload."""
    if "," in image_data:
        _, payload = image_data.split(",", 1)
    else:
        payload = image_data
    return payload.strip()


def decode_transfer_payload(image_data: str) -> bytes:
    payload = strip_transfer_prefix(image_data)
    if not payload:
        raise TransferDecodeError("Failed to decode base64: empty payload")
    try:
        return base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise TransferDecodeError(f"Failed to decode base64: {exc}") from exc


def load_pixel_grid_from_bytes(image_bytes: bytes) -> DecodedImage:
    """
    Decode an image and copy it into an owned RGBA array.

    Zero-sized images are rejected here so later stages can index the
    border rows and columns safely.
    """
    try:
        image = Image.open(BytesIO(image_bytes))
        source_format = image.format
        rgba = image.convert("RGBA")
    except Exception as exc:  # noqa: BLE001
        raise ImageDecodeError(f"Failed to load image: {exc}") from exc

    width, height = rgba.size
    if width == 0 or height == 0:
        raise ImageDecodeError(f"Failed to load image: empty image {width}x{height}")

    pixels = np.array(rgba, dtype=np.uint8)
    return DecodedImage(pixels=pixels, size=(width, height), source_format=source_format)
