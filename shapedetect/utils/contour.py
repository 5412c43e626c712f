"""Contour ordering (Moore-neighbor tracing) and RDP simplification."""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

from shapedetect.utils.geometry import perpendicular_distances

# (dx, dy) clockwise in image coordinates (y grows downward), starting north
MOORE_DIRECTIONS = [(0, -1), (1, -1), (1, 0), (1, 1), (0, 1), (-1, 1), (-1, 0), (-1, -1)]
_WEST = 6


def moore_trace(points: NDArray[np.int64]) -> NDArray[np.int64]:
    """Order an unordered boundary point set by Moore-neighbor following.

    Starts at the topmost, then leftmost, point with the backtrack one step to
    its left. Stops on returning to the start, on a dead end (open path), or
    once as many points as the set holds have been emitted.
    """
    n = len(points)
    if n < 2:
        return points

    members = {(int(x), int(y)) for x, y in points}
    first = int(np.lexsort((points[:, 0], points[:, 1]))[0])
    start = (int(points[first, 0]), int(points[first, 1]))

    ordered: list[tuple[int, int]] = []
    current = start
    backtrack = (start[0] - 1, start[1])

    while True:
        ordered.append(current)
        if len(ordered) >= n:
            break

        offset = (backtrack[0] - current[0], backtrack[1] - current[1])
        bt_index = MOORE_DIRECTIONS.index(offset) if offset in MOORE_DIRECTIONS else _WEST

        nxt = None
        for i in range(1, 9):
            dx, dy = MOORE_DIRECTIONS[(bt_index + i) % 8]
            candidate = (current[0] + dx, current[1] + dy)
            if candidate in members:
                nxt = candidate
                break

        if nxt is None:
            # Isolated pixel or end of an open run
            break
        backtrack = current
        current = nxt
        if current == start:
            break

    return np.array(ordered, dtype=np.int64)


def rdp_simplify(points: NDArray, epsilon: float) -> NDArray:
    """Ramer-Douglas-Peucker line simplification.

    Iterative with an explicit stack; keeps exactly the points the recursive
    formulation keeps, first and last included.
    """
    n = len(points)
    if n < 3:
        return points

    keep = np.zeros(n, dtype=bool)
    keep[0] = keep[-1] = True
    stack = [(0, n - 1)]

    while stack:
        first, last = stack.pop()
        if last - first < 2:
            continue
        distances = perpendicular_distances(points[first + 1 : last], points[first], points[last])
        max_idx = int(np.argmax(distances))
        if distances[max_idx] > epsilon:
            split = first + 1 + max_idx
            keep[split] = True
            stack.append((first, split))
            stack.append((split, last))

    return points[keep]
