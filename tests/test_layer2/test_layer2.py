"""Tests for Layer 2 — contour extraction, Moore tracing, corners, simplification."""

import math

import numpy as np

from shapedetect.engine.registry import Layer
from shapedetect.utils.contour import moore_trace, rdp_simplify
from shapedetect.utils.geometry import merge_nearby_points, perpendicular_distances, turn_angles
from shapedetect.utils.morphology import boundary_mask, component_grid
from tests.conftest import disk_image, run_through, square_image

RING_3X3 = [(0, 0), (1, 0), (2, 0), (2, 1), (2, 2), (1, 2), (0, 2), (0, 1)]


def _chebyshev(a, b) -> int:
    return int(max(abs(a[0] - b[0]), abs(a[1] - b[1])))


# --- Contour extraction -----------------------------------------------------


def test_contour_is_subset_of_component():
    ctx = run_through(disk_image(), Layer.CONTOUR)
    (comp,) = ctx.components
    members = {(int(x), int(y)) for x, y in comp.pixels}
    assert len(comp.contour) > 0
    assert all((int(x), int(y)) in members for x, y in comp.contour)


def test_square_contour_is_outer_ring():
    ctx = run_through(square_image(), Layer.CONTOUR)
    (comp,) = ctx.components
    assert len(comp.contour) == 156
    for x, y in comp.contour:
        assert x in (30, 69) or y in (30, 69)


def test_eight_neighbor_contour_is_wider_than_perimeter():
    # 5x5 block missing its top-left pixel: (1, 1) only touches the gap diagonally
    pixels = np.array([(x, y) for y in range(5) for x in range(5) if (x, y) != (0, 0)])
    grid, _ = component_grid(pixels)
    four = boundary_mask(grid, connectivity=4)
    eight = boundary_mask(grid, connectivity=8)
    assert not four[2, 2]
    assert eight[2, 2]
    assert eight.sum() == four.sum() + 1


# --- Moore tracing ----------------------------------------------------------


def test_trace_small_ring_clockwise():
    shuffled = np.array(RING_3X3[::-1], dtype=np.int64)
    ordered = moore_trace(shuffled)
    assert [tuple(p) for p in ordered.tolist()] == RING_3X3


def test_trace_single_point_unchanged():
    pts = np.array([[4, 4]], dtype=np.int64)
    assert moore_trace(pts).tolist() == [[4, 4]]


def test_trace_dead_end_returns_partial_path():
    pts = np.array([[5, 5], [0, 0]], dtype=np.int64)
    assert moore_trace(pts).tolist() == [[0, 0]]


def test_trace_open_run_bounded_by_set_size():
    pts = np.array([[2, 0], [0, 0], [1, 0]], dtype=np.int64)
    ordered = moore_trace(pts)
    assert ordered.tolist() == [[0, 0], [1, 0], [2, 0]]


def test_square_trace_closes_at_start():
    ctx = run_through(square_image(), Layer.CONTOUR)
    (comp,) = ctx.components
    ordered = comp.ordered_contour
    assert len(ordered) == 156
    assert tuple(ordered[0]) == (30, 30)
    assert tuple(ordered[1]) == (31, 30)
    assert _chebyshev(ordered[-1], ordered[0]) == 1


def test_disk_trace_is_8_adjacent():
    ctx = run_through(disk_image(), Layer.CONTOUR)
    (comp,) = ctx.components
    ordered = comp.ordered_contour
    assert 0 < len(ordered) <= len(comp.contour)
    for a, b in zip(ordered[:-1], ordered[1:]):
        assert _chebyshev(a, b) == 1
    # topmost, then leftmost, contour point
    assert tuple(ordered[0]) == (60, 30)


# --- Corner detection -------------------------------------------------------


def test_turn_angle_straight_and_right():
    line = np.array([(x, 0) for x in range(7)])
    assert np.allclose(turn_angles(line, 2)[2:5], math.pi)

    elbow = np.array([(0, 0), (1, 0), (2, 0), (2, 1), (2, 2)])
    assert math.isclose(turn_angles(elbow, 2)[2], math.pi / 2)


def test_merge_collapses_to_cluster_mean():
    pts = np.array([(0, 0), (1, 0), (10, 0), (11, 0)])
    merged = merge_nearby_points(pts, 5.0)
    assert merged.tolist() == [[0.5, 0.0], [10.5, 0.0]]


def test_merge_keeps_first_member_order():
    pts = np.array([(20, 0), (0, 0), (21, 0), (1, 0)])
    merged = merge_nearby_points(pts, 5.0)
    assert merged.tolist() == [[20.5, 0.0], [0.5, 0.0]]


def test_merge_is_single_pass():
    # (6, 2) is 6.3 from the seed but only 3.8 from the merged mean
    pts = np.array([(0, 0), (4, 0), (3, 3), (6, 2)])
    merged = merge_nearby_points(pts, 5.0)
    assert len(merged) == 2
    assert np.allclose(merged[0], [7 / 3, 1.0])
    assert merged[1].tolist() == [6.0, 2.0]


def test_merge_short_input_unchanged():
    pts = np.array([(3, 4)])
    assert merge_nearby_points(pts, 5.0).tolist() == [[3.0, 4.0]]


def test_square_has_four_corners():
    ctx = run_through(square_image(), Layer.CONTOUR)
    (comp,) = ctx.components
    assert comp.features["corner_window"] == 4
    assert len(comp.corners) == 4
    expected = [(30, 30), (69, 30), (69, 69), (30, 69)]
    for ex, ey in expected:
        assert min(math.hypot(cx - ex, cy - ey) for cx, cy in comp.corners) < 2


def test_merged_corners_respect_merge_distance():
    ctx = run_through(square_image(), Layer.CONTOUR)
    (comp,) = ctx.components
    limit = ctx.config.merge_distance(comp.area)
    corners = comp.corners
    for i in range(len(corners)):
        for j in range(i + 1, len(corners)):
            assert math.dist(corners[i], corners[j]) >= limit


def test_short_contour_every_point_is_corner():
    ctx = run_through(square_image(), Layer.SEGMENTATION)
    (comp,) = ctx.components
    comp.ordered_contour = np.array(RING_3X3, dtype=np.int64)
    from shapedetect.engine.layer2.t2_03_corner_detection import corner_detection

    corner_detection(ctx)
    assert comp.corners.tolist() == [list(map(float, p)) for p in RING_3X3]


def test_corner_window_clamped():
    from shapedetect.engine.config import DetectionConfig

    cfg = DetectionConfig()
    assert cfg.corner_window(100) == 2  # sqrt = 10 → 1, raised to 2
    assert cfg.corner_window(1600) == 4
    assert cfg.corner_window(2827) == 5
    assert cfg.corner_window(3025) == 5  # sqrt = 55 -> 5.5 truncates, does not round up
    assert cfg.corner_window(1_000_000) == 10
    assert cfg.merge_distance(100) == 5.0
    assert math.isclose(cfg.merge_distance(250_000), 30.0)


# --- Douglas-Peucker --------------------------------------------------------


def _rdp_reference(points, epsilon):
    if len(points) < 3:
        return points
    d = perpendicular_distances(points[1:-1], points[0], points[-1])
    idx = int(np.argmax(d))
    if d[idx] > epsilon:
        left = _rdp_reference(points[: idx + 2], epsilon)
        right = _rdp_reference(points[idx + 1 :], epsilon)
        return np.vstack([left[:-1], right])
    return points[[0, -1]]


def test_rdp_collinear_collapses():
    pts = np.array([(x, 2 * x) for x in range(10)])
    assert rdp_simplify(pts, 2.0).tolist() == [[0, 0], [9, 18]]


def test_rdp_keeps_elbow():
    pts = np.array([(x, 0) for x in range(11)] + [(10, y) for y in range(1, 11)])
    assert rdp_simplify(pts, 2.0).tolist() == [[0, 0], [10, 0], [10, 10]]


def test_rdp_short_input_unchanged():
    pts = np.array([(0, 0), (5, 5)])
    assert rdp_simplify(pts, 2.0).tolist() == [[0, 0], [5, 5]]


def test_rdp_matches_recursive_formulation():
    ctx = run_through(disk_image(), Layer.CONTOUR)
    (comp,) = ctx.components
    ordered = comp.ordered_contour
    expected = _rdp_reference(ordered, 2.0)
    assert np.array_equal(comp.simplified, expected)
    assert tuple(comp.simplified[0]) == tuple(ordered[0])
    assert tuple(comp.simplified[-1]) == tuple(ordered[-1])
