"""Ordered-rule shape classifier.

Rules are evaluated top to bottom and the first match wins, so a rule's
position is part of its meaning. Vertex count comes from the merged
curvature corners; aspect ratio and solidity from the simplified polygon's
bounding box; circularity uses the 4-neighbor perimeter.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable


@dataclass(frozen=True)
class ShapeFeatures:
    vertices: int
    circularity: float
    aspect_ratio: float
    is_convex: bool
    solidity: float


@dataclass(frozen=True)
class Rule:
    name: str
    shape: str
    confidence: float
    predicate: Callable[[ShapeFeatures], bool]


@dataclass(frozen=True)
class Classification:
    type: str | None
    confidence: float
    rule: str | None = None


UNCLASSIFIED = Classification(type=None, confidence=0.0)


def _near_square(f: ShapeFeatures, lo: float, hi: float) -> bool:
    return lo < f.aspect_ratio < hi


def _convex_solid(f: ShapeFeatures) -> bool:
    return f.is_convex and f.solidity > 0.7


RULES: tuple[Rule, ...] = (
    # Extreme aspect with a mostly empty box: a stroke, not a filled shape
    Rule("line", "line", 0.95,
         lambda f: (f.aspect_ratio > 8 or f.aspect_ratio < 0.125) and f.solidity < 0.6),
    Rule("star", "star", 0.85,
         lambda f: not f.is_convex and f.vertices >= 5 and f.circularity < 0.7),
    # Vertex count is trusted in the 3..6 range
    Rule("triangle", "triangle", 0.92,
         lambda f: f.vertices == 3),
    Rule("quad", "rectangle", 0.95,
         lambda f: f.vertices == 4 and f.solidity > 0.6),
    Rule("pentagon", "pentagon", 0.88,
         lambda f: f.vertices == 5 and f.circularity > 0.7
         and _near_square(f, 0.92, 1.08) and f.solidity > 0.65),
    # Five corners on a rotated rectangle: box is mostly empty
    Rule("pentad_low_solidity", "rectangle", 0.85,
         lambda f: f.vertices == 5 and f.solidity < 0.60),
    Rule("pentad_elongated", "rectangle", 0.85,
         lambda f: f.vertices == 5 and (f.aspect_ratio > 1.12 or f.aspect_ratio < 0.88)),
    Rule("pentad_default", "rectangle", 0.75,
         lambda f: f.vertices == 5),
    # Over-detected pentagon
    Rule("hexad_round", "pentagon", 0.80,
         lambda f: f.vertices == 6 and f.circularity > 0.65 and _near_square(f, 0.9, 1.1)),
    Rule("circle_cornerless", "circle", 0.90,
         lambda f: f.vertices <= 2 and _near_square(f, 0.8, 1.25)),
    Rule("circle_round", "circle", 0.88,
         lambda f: f.circularity > 0.85 and f.vertices <= 3 and _near_square(f, 0.75, 1.3)),
    # Fallbacks for convex, well-filled blobs with an unreliable corner count
    Rule("convex_elongated", "rectangle", 0.75,
         lambda f: _convex_solid(f) and (f.aspect_ratio > 1.4 or f.aspect_ratio < 0.7)),
    Rule("convex_square_round", "pentagon", 0.72,
         lambda f: _convex_solid(f) and _near_square(f, 0.9, 1.1) and f.circularity > 0.7),
    Rule("convex_square", "rectangle", 0.70,
         lambda f: _convex_solid(f) and _near_square(f, 0.9, 1.1)),
    Rule("convex_default", "rectangle", 0.65,
         _convex_solid),
)


def classify(features: ShapeFeatures, rules: tuple[Rule, ...] = RULES) -> Classification:
    """Return the first matching rule's outcome, or UNCLASSIFIED."""
    for rule in rules:
        if rule.predicate(features):
            return Classification(type=rule.shape, confidence=rule.confidence, rule=rule.name)
    return UNCLASSIFIED


def rule_names(rules: tuple[Rule, ...] = RULES) -> list[str]:
    return [r.name for r in rules]
