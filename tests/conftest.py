"""Shared test fixtures: synthetic RGBA canvases with dark shapes on white."""

from __future__ import annotations

import math

import numpy as np
import pytest
from PIL import Image, ImageDraw

from shapedetect.engine.context import DetectionContext
from shapedetect.engine.pipeline import create_pipeline
from shapedetect.engine.registry import Layer

BLACK = (0, 0, 0, 255)


def blank(width: int, height: int) -> np.ndarray:
    """White opaque (height, width, 4) canvas."""
    return np.full((height, width, 4), 255, dtype=np.uint8)


def fill_rect(img: np.ndarray, x: int, y: int, w: int, h: int, color=BLACK) -> np.ndarray:
    img[y : y + h, x : x + w] = color
    return img


def fill_disk(img: np.ndarray, cx: int, cy: int, r: int, color=BLACK) -> np.ndarray:
    yy, xx = np.mgrid[0 : img.shape[0], 0 : img.shape[1]]
    img[(xx - cx) ** 2 + (yy - cy) ** 2 <= r * r] = color
    return img


def draw_line(img: np.ndarray, x0: int, y0: int, x1: int, y1: int, thickness: int = 3, color=BLACK) -> np.ndarray:
    """Shallow line (|slope| < 1), `thickness` pixels tall in every column."""
    half = thickness // 2
    for x in range(x0, x1 + 1):
        yc = int(round(y0 + (y1 - y0) * (x - x0) / (x1 - x0)))
        img[yc - half : yc - half + thickness, x] = color
    return img


def fill_polygon(img: np.ndarray, points, color=BLACK) -> np.ndarray:
    """Rasterize a filled polygon with Pillow, in place."""
    canvas = Image.fromarray(img)
    ImageDraw.Draw(canvas).polygon([(float(x), float(y)) for x, y in points], fill=tuple(color))
    img[...] = np.asarray(canvas)
    return img


def regular_polygon(cx: float, cy: float, radius: float, sides: int, rotation: float = 0.0) -> list[tuple[float, float]]:
    """Vertices of a regular polygon, first vertex straight up, then clockwise."""
    start = -math.pi / 2 + rotation
    return [
        (cx + radius * math.cos(start + 2 * math.pi * i / sides), cy + radius * math.sin(start + 2 * math.pi * i / sides))
        for i in range(sides)
    ]


def star_points(cx: float, cy: float, r_outer: float, r_inner: float, tips: int = 5) -> list[tuple[float, float]]:
    points = []
    for i in range(2 * tips):
        r = r_outer if i % 2 == 0 else r_inner
        a = -math.pi / 2 + math.pi * i / tips
        points.append((cx + r * math.cos(a), cy + r * math.sin(a)))
    return points


def rgba_bytes(img: np.ndarray) -> bytes:
    return img.tobytes()


def square_image() -> np.ndarray:
    """100x100, one solid 40x40 square at (30, 30)."""
    return fill_rect(blank(100, 100), 30, 30, 40, 40)


def disk_image() -> np.ndarray:
    """120x120, one solid disk of radius 30 centred at (60, 60)."""
    return fill_disk(blank(120, 120), 60, 60, 30)


def line_image() -> np.ndarray:
    """240x100, one 3px shallow diagonal line from (10, 40) to (229, 52)."""
    return draw_line(blank(240, 100), 10, 40, 229, 52)


def triangle_image() -> np.ndarray:
    """120x120, near-equilateral triangle with its apex at (60, 15)."""
    return fill_polygon(blank(120, 120), [(60, 15), (110, 100), (10, 100)])


def pentagon_image() -> np.ndarray:
    """120x120, regular pentagon of circumradius 50, one vertex up."""
    return fill_polygon(blank(120, 120), regular_polygon(60, 62, 50, 5))


def star_image() -> np.ndarray:
    """120x120, five-pointed star, outer radius 50, inner radius 20."""
    return fill_polygon(blank(120, 120), star_points(60, 62, 50, 20))


def rotated_square_image() -> np.ndarray:
    """120x120, 60x60 square turned 10 degrees about (60, 60)."""
    return fill_polygon(blank(120, 120), regular_polygon(60, 60, 30 * math.sqrt(2), 4, math.pi / 4 + math.radians(10)))


def run_through(img: np.ndarray, last_layer: Layer) -> DetectionContext:
    """Run every layer up to and including last_layer on a fresh context."""
    pipeline = create_pipeline()
    ctx = pipeline.new_context(img)
    for layer in Layer:
        if layer > last_layer:
            break
        pipeline.run_layer(ctx, layer)
    assert ctx.errors == {}
    return ctx


@pytest.fixture
def square_rgba() -> np.ndarray:
    return square_image()


@pytest.fixture
def disk_rgba() -> np.ndarray:
    return disk_image()


@pytest.fixture
def line_rgba() -> np.ndarray:
    return line_image()
