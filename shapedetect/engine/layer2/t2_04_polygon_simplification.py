"""T2.04 — Polygon Simplification (Douglas-Peucker).

Feeds only the bbox/convexity statistics of T3.01; vertex count comes
from T2.03.
"""

from __future__ import annotations

from shapedetect.engine.context import DetectionContext
from shapedetect.engine.registry import Layer, transform
from shapedetect.utils.contour import rdp_simplify


@transform(
    id="T2.04",
    layer=Layer.CONTOUR,
    dependencies=["T2.02"],
    description="Simplify the ordered contour with Douglas-Peucker",
)
def polygon_simplification(ctx: DetectionContext) -> None:
    for comp in ctx.components:
        comp.simplified = rdp_simplify(comp.ordered_contour, ctx.config.simplify_epsilon)
