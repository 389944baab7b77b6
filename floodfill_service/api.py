"""
FastAPI layer exposing flood-fill background removal.

Endpoints:
 - GET /health
 - POST /remove-bg
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field

from . import config
from .decoding import decode_transfer_payload
from .encoding import to_data_url
from .errors import BackgroundRemovalError
from .pipeline import remove_background_bytes

settings = config.get_settings()
logging.basicConfig(level=getattr(logging, settings.log_level.upper(), logging.INFO))
logger = logging.getLogger(__name__)

app = FastAPI(title="Flood-Fill Background Removal Service", version="0.1.0")


class RemoveBgRequest(BaseModel):
    imageData: str  # base64 or data URL
    tolerance: Optional[int] = Field(None, ge=0)
    featherRadius: Optional[int] = Field(None, ge=0, le=settings.max_feather_radius)


class RemoveBgResponse(BaseModel):
    imageData: str
    width: int
    height: int


@app.get("/health")
def health():
    return {"status": "ok"}


@app.post("/remove-bg", response_model=RemoveBgResponse)
def remove_bg(body: RemoveBgRequest):
    tolerance = settings.default_tolerance if body.tolerance is None else body.tolerance
    if tolerance > settings.max_tolerance:
        raise HTTPException(status_code=400, detail=f"tolerance must be <= {settings.max_tolerance}")

    try:
        image_bytes = decode_transfer_payload(body.imageData)
        result = remove_background_bytes(image_bytes, tolerance, feather_radius=body.featherRadius)
    except BackgroundRemovalError as exc:
        logger.warning("remove_background failed at %s: %s", exc.stage, exc)
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except ValueError as ve:
        raise HTTPException(status_code=400, detail=str(ve)) from ve
    except Exception as exc:  # noqa: BLE001
        logger.exception("Background removal failed: %s", exc)
        raise HTTPException(status_code=500, detail="Background removal failed") from exc

    width, height = result.size
    return RemoveBgResponse(imageData=to_data_url(result.png_bytes), width=width, height=height)
