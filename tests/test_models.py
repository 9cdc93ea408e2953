"""Tests for wallmesh/models: Point2D, BBox, Footprint, WallSpec, MeshData."""
import pytest

from wallmesh.models.geometry import Point2D, BBox, Footprint, signed_area
from wallmesh.models.wall import WallSpec, batch_bbox
from wallmesh.models.mesh import MeshData


# --- Point2D ---

def test_point_arithmetic():
    a = Point2D(1.0, 2.0)
    b = Point2D(3.0, 5.0)
    assert a + b == Point2D(4.0, 7.0)
    assert b - a == Point2D(2.0, 3.0)
    assert a.scale(2) == Point2D(2.0, 4.0)


# --- BBox ---

def test_bbox_from_points():
    bbox = BBox.from_points([Point2D(0, 0), Point2D(100, 0), Point2D(100, 50)])
    assert (bbox.min_x, bbox.min_y, bbox.max_x, bbox.max_y) == (0, 0, 100, 50)
    assert bbox.center == Point2D(50, 25)


def test_bbox_empty_raises():
    with pytest.raises(ValueError, match="empty"):
        BBox.from_points([])


# --- Footprint ---

def test_signed_area_orientation():
    ccw = [Point2D(0, 0), Point2D(10, 0), Point2D(10, 10), Point2D(0, 10)]
    assert signed_area(ccw) == 100
    assert signed_area(list(reversed(ccw))) == -100


def test_footprint_area_subtracts_holes():
    fp = Footprint(
        exterior=[Point2D(0, 0), Point2D(10, 0), Point2D(10, 10), Point2D(0, 10)],
        holes=[[Point2D(2, 2), Point2D(8, 2), Point2D(8, 8), Point2D(2, 8)]],
    )
    assert fp.vertex_count == 8
    assert abs(fp.area() - 64) < 1e-12


# --- WallSpec ---

def test_wall_points_are_frozen_tuple():
    wall = WallSpec(points=[Point2D(0, 0), Point2D(1, 0)])
    assert isinstance(wall.points, tuple)
    assert wall.point_count == 2


def test_explicit_closed_flag_wins():
    coincident = [(0, 0), (10, 0), (10, 10), (0, 0)]
    assert not WallSpec.from_coords(coincident, closed=False).is_closed()
    assert WallSpec.from_coords(coincident[:3], closed=True).is_closed()


def test_closed_inferred_from_endpoints():
    wall = WallSpec.from_coords([(0, 0), (10, 0), (10, 10), (0, 0)])
    assert wall.endpoints_coincide
    assert wall.is_closed()
    assert not wall.is_closed(infer=False)


def test_open_wall_not_closed():
    wall = WallSpec.from_coords([(0, 0), (10, 0)])
    assert not wall.endpoints_coincide
    assert not wall.is_closed()


def test_display_name_prefers_name():
    wall = WallSpec.from_coords([(0, 0), (1, 0)], wall_id="w1", name="Hall")
    assert wall.display_name(3) == "Hall"


def test_display_name_open_wall_is_line():
    wall = WallSpec.from_coords([(0, 0), (1, 0)], wall_id="w1")
    assert wall.display_name(0) == "Line 1"
    assert wall.display_name(3) == "Line 4"


def test_display_name_closed_wall_is_room():
    flagged = WallSpec.from_coords([(0, 0), (1, 0), (1, 1)], closed=True)
    assert flagged.display_name(1) == "Room 2"

    inferred = WallSpec.from_coords([(0, 0), (1, 0), (1, 1), (0, 0)])
    assert inferred.display_name(1) == "Room 2"
    assert inferred.display_name(1, infer_closed=False) == "Line 2"


def test_batch_bbox(straight_wall, corner_wall):
    bbox = batch_bbox([straight_wall, corner_wall])
    assert (bbox.min_x, bbox.min_y, bbox.max_x, bbox.max_y) == (0, 0, 100, 100)


def test_batch_bbox_no_points():
    assert batch_bbox([]) is None
    assert batch_bbox([WallSpec.from_coords([])]) is None


# --- MeshData ---

def test_add_vertex_returns_one_based_index():
    mesh = MeshData()
    assert mesh.add_vertex(0, 0, 0) == 1
    assert mesh.add_vertex(1, 0, 0) == 2
    assert mesh.vertex_count() == 2


def test_add_vertex_recenters_plan_only():
    mesh = MeshData(origin_x=50.0, origin_z=20.0)
    mesh.add_vertex(100.0, 7.0, 30.0)
    assert mesh.vertices[0] == (50.0, 7.0, 10.0)


def test_add_quad_splits_into_two_triangles():
    mesh = MeshData()
    for _ in range(4):
        mesh.add_vertex(0, 0, 0)
    mesh.add_quad(1, 2, 3, 4)
    assert mesh.faces == [[1, 2, 3], [1, 3, 4]]


def test_validate_reports_bad_indices():
    mesh = MeshData()
    mesh.add_vertex(0, 0, 0)
    mesh.add_triangle(1, 2, 0)
    errors = mesh.validate()
    assert any("invalid vertex index 2" in e for e in errors)
    assert any("invalid vertex index 0" in e for e in errors)


def test_validate_empty_mesh():
    assert MeshData().validate() == ["Mesh has no vertices"]
    assert MeshData().compute_bounds() is None
