"""T4.01 — Shape Classification.

Runs the ordered rule list over each component's features. Components
no rule accepts keep shape_type None and are left out of the result.
"""

from __future__ import annotations

import logging

from shapedetect.engine.classifier import classify
from shapedetect.engine.context import DetectionContext
from shapedetect.engine.layer3.t3_01_geometric_features import features_of
from shapedetect.engine.registry import Layer, transform

logger = logging.getLogger(__name__)


@transform(
    id="T4.01",
    layer=Layer.CLASSIFICATION,
    dependencies=["T3.01"],
    description="Classify components with ordered threshold rules",
)
def shape_classification(ctx: DetectionContext) -> None:
    for comp in ctx.components:
        result = classify(features_of(comp.features))
        comp.shape_type = result.type
        comp.confidence = result.confidence
        comp.features["rule"] = result.rule

        f = comp.features
        logger.debug(
            "Shape debug: center=(%.1f, %.1f) area=%d raw_contour=%d ordered_contour=%d "
            "corners=%d simplified=%d circularity=%.3f aspect=%.3f solidity=%.3f "
            "convex=%s -> %s (%.2f, rule=%s)",
            comp.centroid[0],
            comp.centroid[1],
            comp.area,
            len(comp.contour),
            len(comp.ordered_contour),
            f["vertices"],
            len(comp.simplified),
            f["circularity"],
            f["aspect_ratio"],
            f["solidity"],
            f["is_convex"],
            result.type,
            result.confidence,
            result.rule,
        )
