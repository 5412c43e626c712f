"""T2.01 — Contour Extraction.

A member pixel is on the contour if any of its 8 neighbors is not a member.
This is a thicker boundary than the 4-neighbor perimeter of T1.02, which
only feeds circularity.
"""

from __future__ import annotations

import numpy as np

from shapedetect.engine.context import DetectionContext
from shapedetect.engine.registry import Layer, transform
from shapedetect.utils.morphology import boundary_mask


@transform(
    id="T2.01",
    layer=Layer.CONTOUR,
    dependencies=["T1.02"],
    description="Extract 8-neighbor boundary pixels per component",
)
def contour_extraction(ctx: DetectionContext) -> None:
    for comp in ctx.components:
        rows, cols = np.nonzero(boundary_mask(comp.grid, connectivity=8))
        ox, oy = comp.grid_origin
        comp.contour = np.column_stack([cols + ox, rows + oy]).astype(np.int64)
