"""T3.01 — Geometric Features. ★★★

circularity  = 4π·area / perimeter²  (4-neighbor perimeter; 0 if none)
aspect_ratio = width / height         (simplified polygon bbox, inclusive)
solidity     = area / (width·height)  (same bbox; 0 if empty)
is_convex    = consistent cross-product sign along the simplified polygon
vertices     = merged corner count
"""

from __future__ import annotations

import math

from shapedetect.engine.classifier import ShapeFeatures
from shapedetect.engine.context import DetectionContext
from shapedetect.engine.registry import Layer, transform
from shapedetect.utils.geometry import is_convex, pixel_extent


@transform(
    id="T3.01",
    layer=Layer.GEOMETRY,
    dependencies=["T2.03", "T2.04"],
    description="Compute circularity, aspect ratio, solidity and convexity",
)
def geometric_features(ctx: DetectionContext) -> None:
    for comp in ctx.components:
        area = comp.area
        perimeter = comp.perimeter
        circularity = 4 * math.pi * area / (perimeter**2) if perimeter > 0 else 0.0

        width, height = pixel_extent(comp.simplified)
        aspect_ratio = width / height if height > 0 else 1.0
        box_area = width * height
        solidity = area / box_area if box_area > 0 else 0.0

        comp.features.update(
            vertices=int(len(comp.corners)),
            circularity=circularity,
            aspect_ratio=aspect_ratio,
            solidity=solidity,
            is_convex=is_convex(comp.simplified),
            polygon_width=width,
            polygon_height=height,
        )


def features_of(features: dict) -> ShapeFeatures:
    """Pick the classifier inputs out of a component's feature dict."""
    return ShapeFeatures(
        vertices=features["vertices"],
        circularity=features["circularity"],
        aspect_ratio=features["aspect_ratio"],
        is_convex=features["is_convex"],
        solidity=features["solidity"],
    )
