"""Immutable output records of one detection run."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

SHAPE_TYPES = ("circle", "triangle", "rectangle", "pentagon", "star", "line")


@dataclass(frozen=True)
class Point:
    x: float
    y: float


@dataclass(frozen=True)
class BoundingBox:
    x: int
    y: int
    width: int
    height: int


@dataclass(frozen=True)
class DetectedShape:
    type: str
    confidence: float
    bounding_box: BoundingBox
    center: Point
    area: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type,
            "confidence": self.confidence,
            "boundingBox": {
                "x": self.bounding_box.x,
                "y": self.bounding_box.y,
                "width": self.bounding_box.width,
                "height": self.bounding_box.height,
            },
            "center": {"x": self.center.x, "y": self.center.y},
            "area": self.area,
        }


@dataclass(frozen=True)
class DetectionResult:
    shapes: tuple[DetectedShape, ...] = field(default_factory=tuple)
    processing_time: float = 0.0  # milliseconds
    image_width: int = 0
    image_height: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "shapes": [s.to_dict() for s in self.shapes],
            "processingTime": self.processing_time,
            "imageWidth": self.image_width,
            "imageHeight": self.image_height,
        }
