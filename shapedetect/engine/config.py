"""Detection configuration — numeric tuning for every pipeline stage."""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class DetectionConfig:
    """Thresholds the classifier confidences were tuned against."""

    # Binarization: foreground iff mean(R, G, B) < threshold
    luminance_threshold: float = 128.0

    # Noise / scale filter
    min_component_pixels: int = 20
    max_area_ratio: float = 0.8  # of width*height; larger is background/border

    # Corner detection (curvature window over the ordered contour)
    corner_window_scale: float = 0.1  # window = sqrt(area) * scale
    corner_window_min: int = 2
    corner_window_max: int = 10
    corner_angle_threshold: float = math.pi * 0.7  # ~126°
    min_contour_for_corners: int = 10

    # Corner merging
    merge_distance_min: float = 5.0
    merge_distance_scale: float = 0.06  # of sqrt(area)

    # Douglas-Peucker tolerance (pixels)
    simplify_epsilon: float = 2.0

    def corner_window(self, area: float) -> int:
        window = int(math.floor(math.sqrt(area) * self.corner_window_scale))
        return max(self.corner_window_min, min(self.corner_window_max, window))

    def merge_distance(self, area: float) -> float:
        return max(self.merge_distance_min, math.sqrt(area) * self.merge_distance_scale)
