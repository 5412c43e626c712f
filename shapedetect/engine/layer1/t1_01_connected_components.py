"""T1.01 — Connected Component Labeling.

4-connected BFS flood fill, seeds taken in raster order.
"""

from __future__ import annotations

from shapedetect.engine.context import ComponentData, DetectionContext
from shapedetect.engine.registry import Layer, transform
from shapedetect.utils.morphology import connected_components


@transform(
    id="T1.01",
    layer=Layer.SEGMENTATION,
    dependencies=["T0.01"],
    description="Group foreground pixels into 4-connected components",
)
def connected_component_labeling(ctx: DetectionContext) -> None:
    if ctx.mask is None:
        raise RuntimeError("binary mask missing")
    components = connected_components(ctx.mask)
    ctx.components = [ComponentData(id=i, pixels=px) for i, px in enumerate(components)]
    ctx.labeled_count = len(components)
