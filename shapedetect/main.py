"""FastAPI app factory."""

from __future__ import annotations

import logging

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from shapedetect import __version__
from shapedetect.config import settings
from shapedetect.engine.registry import load_transforms

load_dotenv()

logging.basicConfig(
    level=getattr(logging, settings.shapedetect_log_level.upper(), logging.INFO),
    format="%(asctime)s %(name)s %(levelname)s %(message)s",
)


def create_app() -> FastAPI:
    app = FastAPI(
        title="ShapeDetect",
        description="Raster shape detection — binarize, trace, measure and classify shapes",
        version=__version__,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Import all stage modules to trigger registration
    load_transforms()

    from shapedetect.api.router import api_router

    app.include_router(api_router)

    return app


app = create_app()
