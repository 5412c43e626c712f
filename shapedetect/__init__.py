"""Detect circles, triangles, rectangles, pentagons, stars and lines in raster images."""

from shapedetect.engine.config import DetectionConfig
from shapedetect.engine.detector import ShapeDetector, detect_shapes
from shapedetect.engine.results import BoundingBox, DetectedShape, DetectionResult, Point
from shapedetect.errors import DetectionError, ImageTooLargeError, InvalidImageError

__version__ = "0.1.0"

__all__ = [
    "detect_shapes",
    "ShapeDetector",
    "DetectionConfig",
    "DetectionResult",
    "DetectedShape",
    "BoundingBox",
    "Point",
    "InvalidImageError",
    "ImageTooLargeError",
    "DetectionError",
]
