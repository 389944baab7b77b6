"""PNG encoding of the processed grid and ``data:`` URL wrapping."""

from __future__ import annotations

import base64
from io import BytesIO

import numpy as np
from PIL import Image

from .errors import ImageEncodeError

PNG_DATA_URL_PREFIX = "data:image/png;base64,"


def encode_png(pixels: np.ndarray) -> bytes:
    try:
        out = Image.fromarray(np.ascontiguousarray(pixels))
        if out.mode != "RGBA":
            raise ValueError(f"expected RGBA pixels, got mode {out.mode}")
        buf = BytesIO()
        out.save(buf, format="PNG")
    except Exception as exc:  # noqa: BLE001
        raise ImageEncodeError(f"Failed to encode result: {exc}") from exc
    return buf.getvalue()


def to_data_url(png_bytes: bytes) -> str:
    return PNG_DATA_URL_PREFIX + base64.b64encode(png_bytes).decode("ascii")
