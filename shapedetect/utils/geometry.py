"""Leaf-node geometry helpers. No engine imports."""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray


def bbox(points: NDArray) -> tuple[int, int, int, int]:
    """Compute (xmin, ymin, xmax, ymax) of integer pixel coordinates."""
    if len(points) == 0:
        return (0, 0, 0, 0)
    return (
        int(np.min(points[:, 0])),
        int(np.min(points[:, 1])),
        int(np.max(points[:, 0])),
        int(np.max(points[:, 1])),
    )


def pixel_extent(points: NDArray) -> tuple[float, float]:
    """Inclusive (width, height) of a point set: max - min + 1. Empty = (0, 0)."""
    if len(points) == 0:
        return (0.0, 0.0)
    width = float(np.max(points[:, 0]) - np.min(points[:, 0]) + 1)
    height = float(np.max(points[:, 1]) - np.min(points[:, 1]) + 1)
    return (width, height)


def centroid(points: NDArray) -> tuple[float, float]:
    """Compute centroid of a point set."""
    if len(points) == 0:
        return (0.0, 0.0)
    return (float(np.mean(points[:, 0])), float(np.mean(points[:, 1])))


def turn_angles(points: NDArray, window: int) -> NDArray[np.float64]:
    """Unsigned angle at each point between the vectors to its ±window neighbors.

    Indices wrap cyclically. π = straight run, small values = sharp bends.
    """
    n = len(points)
    if n == 0:
        return np.empty(0)
    pts = points.astype(np.float64)
    idx = np.arange(n)
    before = pts[(idx - window) % n] - pts
    after = pts[(idx + window) % n] - pts
    dot = before[:, 0] * after[:, 0] + before[:, 1] * after[:, 1]
    cross = before[:, 0] * after[:, 1] - before[:, 1] * after[:, 0]
    return np.abs(np.arctan2(cross, dot))


def merge_nearby_points(points: NDArray, min_distance: float) -> NDArray[np.float64]:
    """Greedy single-pass clustering; each cluster collapses to its mean.

    A point absorbs every later, not yet absorbed point closer than
    min_distance. Output follows the order of each cluster's first member.
    """
    if len(points) < 2:
        return points.astype(np.float64)

    pts = points.astype(np.float64)
    min_distance_sq = min_distance * min_distance
    absorbed = np.zeros(len(pts), dtype=bool)
    merged: list[NDArray[np.float64]] = []

    for i in range(len(pts)):
        if absorbed[i]:
            continue
        dist_sq = np.sum((pts[i + 1 :] - pts[i]) ** 2, axis=1)
        later = np.flatnonzero((dist_sq < min_distance_sq) & ~absorbed[i + 1 :]) + i + 1
        absorbed[later] = True
        cluster = np.vstack([pts[i : i + 1], pts[later]])
        merged.append(cluster.mean(axis=0))

    return np.array(merged, dtype=np.float64)


def perpendicular_distances(
    points: NDArray,
    line_start: NDArray,
    line_end: NDArray,
) -> NDArray[np.float64]:
    """Distance from each point to the infinite line through start and end.

    Zero for every point when start and end coincide.
    """
    pts = points.astype(np.float64)
    x1, y1 = float(line_start[0]), float(line_start[1])
    x2, y2 = float(line_end[0]), float(line_end[1])
    dx = x2 - x1
    dy = y2 - y1
    denominator = np.hypot(dx, dy)
    if denominator == 0:
        return np.zeros(len(pts))
    numerator = np.abs(dy * pts[:, 0] - dx * pts[:, 1] + x2 * y1 - y2 * x1)
    return numerator / denominator


def is_convex(points: NDArray) -> bool:
    """Convex iff all nonzero turn cross products share one sign.

    Vertex triples wrap cyclically. Fewer than 3 points is trivially convex.
    """
    if len(points) < 3:
        return True
    p1 = points.astype(np.float64)
    p2 = np.roll(p1, -1, axis=0)
    p3 = np.roll(p1, -2, axis=0)
    e1 = p2 - p1
    e2 = p3 - p2
    cross = e1[:, 0] * e2[:, 1] - e1[:, 1] * e2[:, 0]
    signs = np.sign(cross[cross != 0])
    return bool(np.all(signs == signs[0])) if len(signs) else True
