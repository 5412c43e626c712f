"""T2.03 — Corner Detection + Merging.

Turn angle at each contour point against the points `window` steps before
and after it (cyclic); angles under the threshold are corner candidates.
Candidates closer than the merge distance collapse to their mean in one
greedy pass. Contours under min_contour_for_corners points are returned
whole: every point counts as a corner.
"""

from __future__ import annotations

from shapedetect.engine.context import DetectionContext
from shapedetect.engine.registry import Layer, transform
from shapedetect.utils.geometry import merge_nearby_points, turn_angles


@transform(
    id="T2.03",
    layer=Layer.CONTOUR,
    dependencies=["T2.02"],
    description="Detect curvature corners and merge near-duplicates",
)
def corner_detection(ctx: DetectionContext) -> None:
    cfg = ctx.config
    for comp in ctx.components:
        contour = comp.ordered_contour
        if len(contour) < cfg.min_contour_for_corners:
            comp.corners = contour.astype(float)
            continue

        window = cfg.corner_window(comp.area)
        angles = turn_angles(contour, window)
        candidates = contour[angles < cfg.corner_angle_threshold]

        comp.features["corner_window"] = window
        comp.features["corner_candidates"] = int(len(candidates))
        comp.corners = merge_nearby_points(candidates, cfg.merge_distance(comp.area))
