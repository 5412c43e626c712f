"""DetectionContext — the single mutable state object flowing through all stages.

Per-component results → ComponentData.*
Per-image results → DetectionContext.* (mask, component counts, etc.)

A fresh context is built for every call, so nothing here is shared between
concurrent detections.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import numpy as np
from numpy.typing import NDArray

from shapedetect.engine.config import DetectionConfig


def _empty_points(dtype: type = np.int64) -> NDArray:
    return np.empty((0, 2), dtype=dtype)


@dataclass
class ComponentData:
    """One 4-connected foreground region and everything derived from it."""

    id: int
    # Member pixels: Nx2 array of (x, y), flood-fill discovery order
    pixels: NDArray[np.int64] = field(default_factory=_empty_points)
    # Bounding box: (xmin, ymin, xmax, ymax), inclusive pixel extents
    bbox: tuple[int, int, int, int] = (0, 0, 0, 0)
    # Plain mean of member coordinates
    centroid: tuple[float, float] = (0.0, 0.0)
    # Members with a 4-neighbor outside the component
    perimeter: int = 0
    # Membership grid over bbox, padded by one background pixel on every side
    grid: NDArray[np.bool_] | None = None
    # Boundary pixels (8-neighbor test), unordered
    contour: NDArray[np.int64] = field(default_factory=_empty_points)
    # Boundary pixels in Moore-trace order
    ordered_contour: NDArray[np.int64] = field(default_factory=_empty_points)
    # Merged curvature corners (float, cluster means)
    corners: NDArray[np.float64] = field(default_factory=lambda: _empty_points(np.float64))
    # Douglas-Peucker polygon of the ordered contour
    simplified: NDArray[np.int64] = field(default_factory=_empty_points)
    # Computed geometric features (circularity, aspect_ratio, ...)
    features: dict[str, Any] = field(default_factory=dict)
    # Classification outcome; shape_type None = unclassified
    shape_type: str | None = None
    confidence: float = 0.0

    @property
    def area(self) -> int:
        return int(len(self.pixels))

    @property
    def width(self) -> int:
        return self.bbox[2] - self.bbox[0] + 1

    @property
    def height(self) -> int:
        return self.bbox[3] - self.bbox[1] + 1

    @property
    def grid_origin(self) -> tuple[int, int]:
        """Image coordinate of grid[0, 0] (the padding corner)."""
        return (self.bbox[0] - 1, self.bbox[1] - 1)


@dataclass
class DetectionContext:
    """Shared state flowing through the entire pipeline for one image."""

    # RGBA pixels, shape (height, width, 4)
    rgba: NDArray[np.uint8] = field(default_factory=lambda: np.zeros((0, 0, 4), dtype=np.uint8))
    width: int = 0
    height: int = 0
    config: DetectionConfig = field(default_factory=DetectionConfig)

    # Binary mask, shape (height, width); 1 = foreground. Read-only once built.
    mask: NDArray[np.uint8] | None = None
    # Components surviving the noise/scale filter, in seed order
    components: list[ComponentData] = field(default_factory=list)
    # Bookkeeping from labeling/filtering
    labeled_count: int = 0
    discarded_noise: int = 0
    discarded_oversize: int = 0

    # --- Pipeline metadata ---
    completed_transforms: set[str] = field(default_factory=set)
    errors: dict[str, str] = field(default_factory=dict)

    @property
    def num_components(self) -> int:
        return len(self.components)

    @property
    def image_area(self) -> int:
        return self.width * self.height
