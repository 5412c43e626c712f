"""API response models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from shapedetect.engine.results import DetectionResult


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str = "0.1.0"
    transforms_registered: int = 0


class BoundingBoxModel(_CamelModel):
    x: int
    y: int
    width: int
    height: int


class PointModel(_CamelModel):
    x: float
    y: float


class DetectedShapeModel(_CamelModel):
    type: str
    confidence: float
    bounding_box: BoundingBoxModel
    center: PointModel
    area: int


class DetectResponse(_CamelModel):
    shapes: list[DetectedShapeModel] = Field(default_factory=list)
    processing_time: float = 0.0
    image_width: int = 0
    image_height: int = 0

    @classmethod
    def from_result(cls, result: DetectionResult) -> "DetectResponse":
        return cls.model_validate(result.to_dict())
