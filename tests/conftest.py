"""Shared test fixtures for wall mesh export tests."""
import pytest

from wallmesh.config import ExportConfig
from wallmesh.models.wall import WallSpec


@pytest.fixture
def config():
    """20 plan units thick, 10 high, one wall per grid cell of size 1."""
    return ExportConfig(wall_thickness=20.0, wall_height=10.0, grid_size=1.0)


@pytest.fixture
def straight_wall():
    """Open 100-unit wall along +X."""
    return WallSpec.from_coords([(0, 0), (100, 0)], wall_id="a", name="North")


@pytest.fixture
def corner_wall():
    """Open L-shaped wall, right turn at (100, 0)."""
    return WallSpec.from_coords([(0, 0), (100, 0), (100, 100)], wall_id="b")


@pytest.fixture
def square_room():
    """Closed 100x100 room drawn counter-clockwise."""
    return WallSpec.from_coords(
        [(0, 0), (100, 0), (100, 100), (0, 100)], closed=True, wall_id="room"
    )
