"""API request models."""

from __future__ import annotations

from pydantic import BaseModel, Field


class DetectRequest(BaseModel):
    width: int = Field(..., gt=0, description="Image width in pixels")
    height: int = Field(..., gt=0, description="Image height in pixels")
    pixels: str = Field(..., description="Base64 RGBA bytes, row-major, width*height*4 long")


class DetectImageRequest(BaseModel):
    image: str = Field(..., description="Base64 encoded image file (PNG, JPEG, ...)")
    threshold: float | None = Field(
        default=None,
        ge=0,
        le=256,
        description="Override the luminance threshold",
    )
