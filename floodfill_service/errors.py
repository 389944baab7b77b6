"""
Typed failures for the background removal pipeline.

All errors subclass ``ValueError`` so callers that treat bad input as a
ValueError (the HTTP layer maps it to 400) keep working unchanged.
"""

from __future__ import annotations


class BackgroundRemovalError(ValueError):
    """Base class; ``stage`` names the pipeline step that failed."""

    stage = "unknown"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class TransferDecodeError(BackgroundRemovalError):
    stage = "transfer-decode"


class ImageDecodeError(BackgroundRemovalError):
    stage = "image-decode"


class ImageEncodeError(BackgroundRemovalError):
    stage = "image-encode"


class InvalidToleranceError(BackgroundRemovalError):
    stage = "validate"


class InvalidFeatherRadiusError(BackgroundRemovalError):
    stage = "validate"
