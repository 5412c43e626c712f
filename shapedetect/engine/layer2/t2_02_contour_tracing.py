"""T2.02 — Contour Tracing (Moore neighbor)."""

from __future__ import annotations

from shapedetect.engine.context import DetectionContext
from shapedetect.engine.registry import Layer, transform
from shapedetect.utils.contour import moore_trace


@transform(
    id="T2.02",
    layer=Layer.CONTOUR,
    dependencies=["T2.01"],
    description="Order boundary pixels into a closed 8-adjacent traversal",
)
def contour_tracing(ctx: DetectionContext) -> None:
    for comp in ctx.components:
        comp.ordered_contour = moore_trace(comp.contour)
