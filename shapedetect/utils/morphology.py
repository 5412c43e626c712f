"""Binary-mask operations: thresholding, component labeling, boundary masks."""

from __future__ import annotations

from collections import deque

import numpy as np
from numpy.typing import NDArray

# (dy, dx) offsets. Flood fill visits right, left, down, up.
NEIGHBORS_4 = [(0, 1), (0, -1), (1, 0), (-1, 0)]
NEIGHBORS_8 = [(dy, dx) for dy in (-1, 0, 1) for dx in (-1, 0, 1) if (dy, dx) != (0, 0)]


def binarize(rgba: NDArray[np.uint8], threshold: float = 128.0) -> NDArray[np.uint8]:
    """Luminance threshold: 1 where mean(R, G, B) < threshold. Alpha is ignored.

    The returned mask is read-only.
    """
    gray = rgba[..., :3].astype(np.float64).sum(axis=-1) / 3.0
    mask = (gray < threshold).astype(np.uint8)
    mask.setflags(write=False)
    return mask


def connected_components(mask: NDArray[np.uint8]) -> list[NDArray[np.int64]]:
    """Label 4-connected foreground regions.

    Returns one Nx2 array of (x, y) per component, in the order the seed
    pixel is met by a raster scan (top-to-bottom, left-to-right).
    """
    rows, cols = mask.shape
    visited = np.zeros((rows, cols), dtype=bool)
    components: list[NDArray[np.int64]] = []

    for idx in np.flatnonzero(mask):
        r, c = divmod(int(idx), cols)
        if visited[r, c]:
            continue
        components.append(_flood_fill(mask, visited, r, c))

    return components


def _flood_fill(
    mask: NDArray[np.uint8],
    visited: NDArray[np.bool_],
    start_r: int,
    start_c: int,
) -> NDArray[np.int64]:
    """BFS flood fill; marks visited on enqueue so each pixel is taken once."""
    rows, cols = mask.shape
    queue = deque([(start_r, start_c)])
    visited[start_r, start_c] = True
    pixels: list[tuple[int, int]] = []

    while queue:
        r, c = queue.popleft()
        pixels.append((c, r))
        for dr, dc in NEIGHBORS_4:
            nr, nc = r + dr, c + dc
            if 0 <= nr < rows and 0 <= nc < cols and mask[nr, nc] and not visited[nr, nc]:
                visited[nr, nc] = True
                queue.append((nr, nc))

    return np.array(pixels, dtype=np.int64)


def component_grid(pixels: NDArray[np.int64]) -> tuple[NDArray[np.bool_], tuple[int, int, int, int]]:
    """Membership grid over the component's bbox, padded by one empty pixel.

    The padding makes every off-component (or off-image) neighbor read as
    non-member. Returns (grid, (xmin, ymin, xmax, ymax)).
    """
    xmin, ymin = (int(v) for v in pixels.min(axis=0))
    xmax, ymax = (int(v) for v in pixels.max(axis=0))
    grid = np.zeros((ymax - ymin + 3, xmax - xmin + 3), dtype=bool)
    grid[pixels[:, 1] - ymin + 1, pixels[:, 0] - xmin + 1] = True
    return grid, (xmin, ymin, xmax, ymax)


def boundary_mask(grid: NDArray[np.bool_], connectivity: int = 4) -> NDArray[np.bool_]:
    """Members of a padded grid with at least one non-member neighbor."""
    if connectivity == 4:
        offsets = NEIGHBORS_4
    elif connectivity == 8:
        offsets = NEIGHBORS_8
    else:
        raise ValueError(f"connectivity must be 4 or 8, got {connectivity}")

    rows, cols = grid.shape
    inner = grid[1:-1, 1:-1]
    exposed = np.zeros_like(inner)
    for dy, dx in offsets:
        exposed |= ~grid[1 + dy : rows - 1 + dy, 1 + dx : cols - 1 + dx]

    result = np.zeros_like(grid)
    result[1:-1, 1:-1] = inner & exposed
    return result
