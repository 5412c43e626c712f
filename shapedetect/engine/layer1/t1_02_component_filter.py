"""T1.02 — Noise / Scale Filter + early feature summary.

Drops components under min_component_pixels (noise) or over
max_area_ratio of the image (background, frame borders). Survivors get
bbox, centroid, padded membership grid and the 4-neighbor perimeter.
"""

from __future__ import annotations

import logging

from shapedetect.engine.context import DetectionContext
from shapedetect.engine.registry import Layer, transform
from shapedetect.utils.geometry import centroid
from shapedetect.utils.morphology import boundary_mask, component_grid

logger = logging.getLogger(__name__)


@transform(
    id="T1.02",
    layer=Layer.SEGMENTATION,
    dependencies=["T1.01"],
    description="Filter noise/oversize components and summarize survivors",
)
def component_filter(ctx: DetectionContext) -> None:
    cfg = ctx.config
    max_area = ctx.image_area * cfg.max_area_ratio
    survivors = []

    for comp in ctx.components:
        if comp.area < cfg.min_component_pixels:
            ctx.discarded_noise += 1
            continue
        if comp.area > max_area:
            ctx.discarded_oversize += 1
            continue

        comp.grid, comp.bbox = component_grid(comp.pixels)
        comp.centroid = centroid(comp.pixels)
        comp.perimeter = int(boundary_mask(comp.grid, connectivity=4).sum())
        survivors.append(comp)

    ctx.components = survivors
    logger.debug(
        "Components: %d labeled, %d kept (%d noise, %d oversize)",
        ctx.labeled_count,
        len(survivors),
        ctx.discarded_noise,
        ctx.discarded_oversize,
    )
