"""Transform registry — every pipeline stage is a standalone function registered via decorator.

Usage:
    @transform(id="T2.04", layer=Layer.CONTOUR, dependencies=["T2.02"])
    def polygon_simplification(ctx: DetectionContext) -> None:
        for comp in ctx.components:
            comp.simplified = rdp_simplify(comp.ordered_contour, ctx.config.simplify_epsilon)

Adding a new stage = creating one file with the decorator. Nothing else changes.
"""

from __future__ import annotations

import enum
import heapq
import importlib
import logging
import pkgutil
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from shapedetect.engine.context import DetectionContext

logger = logging.getLogger(__name__)

_LAYER_PACKAGES = ["layer0", "layer1", "layer2", "layer3", "layer4"]


class Layer(enum.IntEnum):
    BINARIZATION = 0
    SEGMENTATION = 1
    CONTOUR = 2
    GEOMETRY = 3
    CLASSIFICATION = 4


@dataclass
class TransformSpec:
    id: str
    layer: Layer
    fn: Callable[["DetectionContext"], None]
    dependencies: list[str] = field(default_factory=list)
    description: str = ""


class TransformRegistry:
    """Registry of pipeline stages, keyed by transform ID."""

    def __init__(self) -> None:
        self._transforms: dict[str, TransformSpec] = {}

    def register(self, spec: TransformSpec) -> None:
        if spec.id in self._transforms:
            raise ValueError(f"Duplicate transform ID: {spec.id}")
        self._transforms[spec.id] = spec
        logger.debug("Registered transform %s (%s)", spec.id, spec.layer.name)

    def get(self, transform_id: str) -> TransformSpec:
        return self._transforms[transform_id]

    def get_layer(self, layer: Layer) -> list[TransformSpec]:
        specs = [s for s in self._transforms.values() if s.layer == layer]
        return sorted(specs, key=lambda s: s.id)

    def resolve_order(self) -> list[TransformSpec]:
        """Stages in dependency order; among ready stages the lowest ID runs first."""
        waiting = {tid: {d for d in s.dependencies if d in self._transforms} for tid, s in self._transforms.items()}
        dependents: dict[str, list[str]] = {tid: [] for tid in waiting}
        for tid, deps in waiting.items():
            for dep in deps:
                dependents[dep].append(tid)

        ready = [tid for tid, deps in waiting.items() if not deps]
        heapq.heapify(ready)
        ordered: list[TransformSpec] = []
        while ready:
            tid = heapq.heappop(ready)
            ordered.append(self._transforms[tid])
            for child in dependents[tid]:
                waiting[child].discard(tid)
                if not waiting[child]:
                    heapq.heappush(ready, child)

        if len(ordered) != len(waiting):
            stuck = sorted(set(waiting) - {s.id for s in ordered})
            raise ValueError(f"Circular dependency detected among: {stuck}")
        return ordered

    @property
    def count(self) -> int:
        return len(self._transforms)


# Module-level singleton, filled once at import time and read-only afterwards
_registry = TransformRegistry()


def get_registry() -> TransformRegistry:
    return _registry


def load_transforms() -> TransformRegistry:
    """Import all stage modules so @transform decorators fire."""
    for layer_name in _LAYER_PACKAGES:
        package = importlib.import_module(f"shapedetect.engine.{layer_name}")
        for _, module_name, _ in pkgutil.iter_modules(package.__path__):
            importlib.import_module(f"{package.__name__}.{module_name}")
    return _registry


def transform(
    *,
    id: str,
    layer: Layer,
    dependencies: list[str] | None = None,
    description: str = "",
):
    """Decorator to register a stage function."""

    def decorator(fn: Callable[["DetectionContext"], None]):
        spec = TransformSpec(
            id=id,
            layer=layer,
            fn=fn,
            dependencies=dependencies or [],
            description=description,
        )
        _registry.register(spec)
        return fn

    return decorator
