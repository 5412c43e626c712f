"""Pipeline orchestrator — runs stages in dependency order."""

from __future__ import annotations

import logging
import time
from collections.abc import Generator
from typing import Any

import numpy as np
from numpy.typing import NDArray

from shapedetect.engine.config import DetectionConfig
from shapedetect.engine.context import DetectionContext
from shapedetect.engine.registry import Layer, TransformRegistry, get_registry, load_transforms

logger = logging.getLogger(__name__)


class Pipeline:
    """Orchestrates the stage pipeline."""

    def __init__(
        self,
        registry: TransformRegistry | None = None,
        config: DetectionConfig | None = None,
    ) -> None:
        self.registry = registry or get_registry()
        self.config = config or DetectionConfig()

    def new_context(self, rgba: NDArray[np.uint8]) -> DetectionContext:
        """Fresh per-call context for an (height, width, 4) RGBA array."""
        height, width = rgba.shape[:2]
        return DetectionContext(rgba=rgba, width=int(width), height=int(height), config=self.config)

    def run(self, ctx: DetectionContext) -> DetectionContext:
        """Run the full pipeline on the given context."""
        start = time.perf_counter()
        ordered = self.registry.resolve_order()

        logger.debug("Pipeline: %d transforms queued", len(ordered))

        for spec in ordered:
            t0 = time.perf_counter()
            try:
                spec.fn(ctx)
                ctx.completed_transforms.add(spec.id)
                elapsed = (time.perf_counter() - t0) * 1000
                logger.debug("  %s completed in %.1fms", spec.id, elapsed)
            except Exception as e:
                ctx.errors[spec.id] = str(e)
                logger.warning("  %s FAILED: %s", spec.id, e)

        total = (time.perf_counter() - start) * 1000
        logger.info(
            "Pipeline complete: %d/%d transforms, %d components in %.0fms",
            len(ctx.completed_transforms),
            len(ordered),
            ctx.num_components,
            total,
        )
        return ctx

    def run_streaming(self, ctx: DetectionContext) -> Generator[dict[str, Any], None, None]:
        """Run the pipeline, yielding a progress dict after each transform.

        The caller's ``ctx`` is mutated in-place, so after the generator is
        exhausted the context contains all results (same as ``run()``).
        """
        ordered = self.registry.resolve_order()
        total = len(ordered)

        for i, spec in enumerate(ordered):
            t0 = time.perf_counter()
            status = "ok"
            error = ""
            try:
                spec.fn(ctx)
                ctx.completed_transforms.add(spec.id)
            except Exception as e:
                ctx.errors[spec.id] = str(e)
                status = "error"
                error = str(e)

            yield {
                "transform_id": spec.id,
                "description": spec.description,
                "layer": spec.layer.name,
                "index": i,
                "total": total,
                "elapsed_ms": round((time.perf_counter() - t0) * 1000, 1),
                "status": status,
                "error": error,
            }

    def run_layer(self, ctx: DetectionContext, layer: Layer) -> DetectionContext:
        """Run only transforms in a specific layer."""
        specs = self.registry.get_layer(layer)
        for spec in specs:
            try:
                spec.fn(ctx)
                ctx.completed_transforms.add(spec.id)
            except Exception as e:
                ctx.errors[spec.id] = str(e)
                logger.warning("  %s FAILED: %s", spec.id, e)
        return ctx


def create_pipeline(config: DetectionConfig | None = None) -> Pipeline:
    """Factory function for a pipeline over all registered stages."""
    return Pipeline(registry=load_transforms(), config=config)
