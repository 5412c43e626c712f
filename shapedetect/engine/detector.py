"""Single-image entry point: validate pixels, run the pipeline, build the result."""

from __future__ import annotations

import logging
import time
from typing import Union

import numpy as np
from numpy.typing import NDArray

from shapedetect.engine.config import DetectionConfig
from shapedetect.engine.context import ComponentData
from shapedetect.engine.pipeline import Pipeline, create_pipeline
from shapedetect.engine.results import BoundingBox, DetectedShape, DetectionResult, Point
from shapedetect.errors import DetectionError, InvalidImageError

logger = logging.getLogger(__name__)

PixelBuffer = Union[bytes, bytearray, memoryview, NDArray[np.uint8]]


def as_rgba(pixels: PixelBuffer, width: int, height: int) -> NDArray[np.uint8]:
    """Validate a flat RGBA buffer and view it as (height, width, 4)."""
    for name, value in (("width", width), ("height", height)):
        if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
            raise InvalidImageError(f"{name} must be an integer, got {type(value).__name__}")
        if value <= 0:
            raise InvalidImageError(f"{name} must be positive, got {value}")

    if isinstance(pixels, np.ndarray):
        if pixels.dtype != np.uint8:
            raise InvalidImageError(f"pixel array must be uint8, got {pixels.dtype}")
        flat = pixels.reshape(-1)
    elif isinstance(pixels, (bytes, bytearray, memoryview)):
        flat = np.frombuffer(pixels, dtype=np.uint8)
    else:
        raise InvalidImageError(f"unsupported pixel buffer type {type(pixels).__name__}")

    expected = int(width) * int(height) * 4
    if flat.size != expected:
        raise InvalidImageError(
            f"buffer holds {flat.size} bytes, expected {expected} for {width}x{height} RGBA"
        )
    return flat.reshape(int(height), int(width), 4)


def _to_shape(comp: ComponentData) -> DetectedShape:
    xmin, ymin, _, _ = comp.bbox
    return DetectedShape(
        type=comp.shape_type,
        confidence=comp.confidence,
        bounding_box=BoundingBox(x=xmin, y=ymin, width=comp.width, height=comp.height),
        center=Point(x=comp.centroid[0], y=comp.centroid[1]),
        area=comp.area,
    )


class ShapeDetector:
    """Runs the detection pipeline on one image per call.

    Holds no per-image state, so one instance can serve concurrent callers.
    """

    def __init__(self, config: DetectionConfig | None = None, pipeline: Pipeline | None = None) -> None:
        self.pipeline = pipeline or create_pipeline(config)

    @property
    def config(self) -> DetectionConfig:
        return self.pipeline.config

    def detect(self, pixels: PixelBuffer, width: int, height: int) -> DetectionResult:
        start = time.perf_counter()

        rgba = as_rgba(pixels, width, height)
        ctx = self.pipeline.run(self.pipeline.new_context(rgba))
        if ctx.errors:
            raise DetectionError(ctx.errors)

        shapes = tuple(_to_shape(c) for c in ctx.components if c.shape_type is not None)
        elapsed = (time.perf_counter() - start) * 1000

        logger.info(
            "Detected %d shapes in %dx%d image (%d components) in %.1fms",
            len(shapes),
            width,
            height,
            ctx.num_components,
            elapsed,
        )
        return DetectionResult(
            shapes=shapes,
            processing_time=elapsed,
            image_width=int(width),
            image_height=int(height),
        )


def detect_shapes(
    pixels: PixelBuffer,
    width: int,
    height: int,
    config: DetectionConfig | None = None,
) -> DetectionResult:
    """Detect shapes in a flat RGBA buffer of width*height*4 bytes."""
    return ShapeDetector(config).detect(pixels, width, height)
