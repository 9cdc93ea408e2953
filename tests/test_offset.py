"""Tests for wallmesh/processing/offset.py."""
from wallmesh.models.geometry import Point2D
from wallmesh.models.wall import WallSpec
from wallmesh.processing.offset import build_offset_ring, build_offset_rings


def assert_ring(ring, expected, tol=1e-9):
    assert len(ring) == len(expected), ring
    for p, (x, y) in zip(ring, expected):
        assert abs(p.x - x) < tol and abs(p.y - y) < tol, (p, (x, y))


# --- open walls ---

def test_straight_wall_rectangle(straight_wall):
    ring = build_offset_ring(straight_wall, 20.0)
    assert_ring(ring, [(0, 10), (100, 10), (100, -10), (0, -10)])


def test_corner_is_mitered(corner_wall):
    ring = build_offset_ring(corner_wall, 20.0)
    assert_ring(ring, [
        (0, 10), (90, 10), (90, 100),
        (110, 100), (110, -10), (0, -10),
    ])


def test_collinear_vertex_falls_back_to_plain_offset():
    wall = WallSpec.from_coords([(0, 0), (50, 0), (100, 0)])
    ring = build_offset_ring(wall, 20.0)
    assert_ring(ring, [
        (0, 10), (50, 10), (100, 10),
        (100, -10), (50, -10), (0, -10),
    ])


def test_duplicate_points_ignored():
    wall = WallSpec.from_coords([(0, 0), (0, 0), (100, 0), (100, 0)])
    ring = build_offset_ring(wall, 20.0)
    assert_ring(ring, [(0, 10), (100, 10), (100, -10), (0, -10)])


def test_input_not_mutated(corner_wall):
    before = corner_wall.points
    build_offset_ring(corner_wall, 20.0)
    assert corner_wall.points == before


# --- degenerate walls ---

def test_single_point_has_no_ring():
    assert build_offset_ring(WallSpec.from_coords([(5, 5)]), 20.0) is None


def test_coincident_points_have_no_ring():
    assert build_offset_ring(WallSpec.from_coords([(5, 5), (5, 5)]), 20.0) is None


def test_empty_wall_has_no_ring():
    assert build_offset_ring(WallSpec.from_coords([]), 20.0) is None


def test_closed_two_point_wall_is_a_strip():
    wall = WallSpec.from_coords([(0, 0), (100, 0)], closed=True)
    ring = build_offset_ring(wall, 20.0)
    assert_ring(ring, [(0, 10), (100, 10), (100, -10), (0, -10)])


# --- closed walls ---

def test_closed_square_is_mitered_at_every_corner(square_room):
    ring = build_offset_ring(square_room, 20.0)
    # 4 miters per side plus the return to the first miter on each side
    assert len(ring) == 10
    assert ring[0] == ring[4]
    assert ring[5] == ring[9]
    assert_ring(ring[:4], [(10, 10), (90, 10), (90, 90), (10, 90)])
    assert_ring(ring[5:], [(-10, -10), (-10, 110), (110, 110), (110, -10), (-10, -10)])


def test_closed_inferred_from_repeated_endpoint():
    wall = WallSpec.from_coords([(0, 0), (100, 0), (100, 100), (0, 100), (0, 0)])
    ring = build_offset_ring(wall, 20.0)
    assert len(ring) == 10
    assert abs(ring[0].x - 10) < 1e-9 and abs(ring[0].y - 10) < 1e-9


def test_inference_disabled_keeps_wall_open():
    wall = WallSpec.from_coords([(0, 0), (100, 0), (100, 100), (0, 100), (0, 0)])
    ring = build_offset_ring(wall, 20.0, infer_closed=False)
    # Flat end at the first point instead of a miter
    assert abs(ring[0].x - 0) < 1e-9 and abs(ring[0].y - 10) < 1e-9


def test_explicit_open_flag_beats_coincident_endpoints():
    wall = WallSpec.from_coords(
        [(0, 0), (100, 0), (100, 100), (0, 100), (0, 0)], closed=False
    )
    ring = build_offset_ring(wall, 20.0)
    assert ring[0] == Point2D(0, 10)


# --- batches ---

def test_build_offset_rings_skips_degenerate(straight_wall, corner_wall):
    walls = [straight_wall, WallSpec.from_coords([(1, 1)]), corner_wall]
    rings = build_offset_rings(walls, 20.0)
    assert len(rings) == 2
    assert len(rings[0]) == 4
    assert len(rings[1]) == 6
