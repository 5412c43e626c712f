"""ShapeDetect raster shape detection engine."""

from shapedetect.engine.registry import transform, Layer, get_registry
from shapedetect.engine.context import DetectionContext, ComponentData
from shapedetect.engine.pipeline import Pipeline

__all__ = [
    "transform",
    "Layer",
    "get_registry",
    "DetectionContext",
    "ComponentData",
    "Pipeline",
]
