"""FastAPI dependency injection."""

from __future__ import annotations

from functools import lru_cache

from shapedetect.config import Settings, settings
from shapedetect.engine.config import DetectionConfig
from shapedetect.engine.detector import ShapeDetector


def get_settings() -> Settings:
    return settings


@lru_cache(maxsize=1)
def get_detector() -> ShapeDetector:
    return ShapeDetector(DetectionConfig(luminance_threshold=float(settings.luminance_threshold)))
