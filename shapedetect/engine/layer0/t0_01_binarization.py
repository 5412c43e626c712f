"""T0.01 — Binarization.

Foreground iff mean(R, G, B) < threshold. Alpha ignored.
"""

from __future__ import annotations

from shapedetect.engine.context import DetectionContext
from shapedetect.engine.registry import Layer, transform
from shapedetect.utils.morphology import binarize


@transform(
    id="T0.01",
    layer=Layer.BINARIZATION,
    description="Threshold RGBA luminance into a binary mask",
)
def binarization(ctx: DetectionContext) -> None:
    ctx.mask = binarize(ctx.rgba, ctx.config.luminance_threshold)
