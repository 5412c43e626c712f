"""POST /api/detect — run shape detection on one image."""

from __future__ import annotations

import base64
import binascii
import logging
from dataclasses import replace

from fastapi import APIRouter, Depends, HTTPException

from shapedetect.config import Settings
from shapedetect.dependencies import get_detector, get_settings
from shapedetect.engine.detector import ShapeDetector
from shapedetect.errors import DetectionError, ImageTooLargeError, InvalidImageError
from shapedetect.imaging import decode_image
from shapedetect.models.requests import DetectImageRequest, DetectRequest
from shapedetect.models.responses import DetectResponse

logger = logging.getLogger(__name__)

router = APIRouter()


def _b64decode(data: str, field: str) -> bytes:
    try:
        return base64.b64decode(data, validate=True)
    except (binascii.Error, ValueError) as e:
        raise HTTPException(status_code=422, detail=f"{field} is not valid base64: {e}") from e


def _check_size(width: int, height: int, cfg: Settings) -> None:
    if width * height > cfg.max_image_pixels:
        raise HTTPException(
            status_code=413,
            detail=f"image has {width * height} pixels, limit is {cfg.max_image_pixels}",
        )


# Plain def: FastAPI runs the CPU-bound pipeline in its threadpool
@router.post("/detect", response_model=DetectResponse)
def detect(
    req: DetectRequest,
    detector: ShapeDetector = Depends(get_detector),
    cfg: Settings = Depends(get_settings),
) -> DetectResponse:
    _check_size(req.width, req.height, cfg)
    pixels = _b64decode(req.pixels, "pixels")
    try:
        result = detector.detect(pixels, req.width, req.height)
    except InvalidImageError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e
    except DetectionError as e:
        logger.error("detect failed: %s", e)
        raise HTTPException(status_code=500, detail=str(e)) from e
    return DetectResponse.from_result(result)


@router.post("/detect/image", response_model=DetectResponse)
def detect_image(
    req: DetectImageRequest,
    detector: ShapeDetector = Depends(get_detector),
    cfg: Settings = Depends(get_settings),
) -> DetectResponse:
    data = _b64decode(req.image, "image")
    try:
        pixels, width, height = decode_image(data, max_pixels=cfg.max_image_pixels)
        if req.threshold is not None:
            detector = ShapeDetector(replace(detector.config, luminance_threshold=req.threshold))
        result = detector.detect(pixels, width, height)
    except ImageTooLargeError as e:
        raise HTTPException(status_code=413, detail=str(e)) from e
    except InvalidImageError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e
    except DetectionError as e:
        logger.error("detect/image failed: %s", e)
        raise HTTPException(status_code=500, detail=str(e)) from e

    logger.debug("detect/image: %dx%d -> %d shapes", width, height, len(result.shapes))
    return DetectResponse.from_result(result)
