"""
Wall batch loader for the Wall Mesh Exporter.

Reads the batch of walls handed over by the editor from a JSON file:

    {
        "wallThickness": 0.5,
        "wallHeight": 25,
        "walls": [
            {"id": "a1", "name": "North", "closed": false,
             "points": [{"x": 0, "y": 0}, {"x": 100, "y": 0}]}
        ]
    }

"polygons" is accepted as an alias of "walls", points may also be
[x, y] pairs, and the document may be a bare list of walls. Batch
level thickness and height are optional.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, Optional
import json
import logging

from ..models.geometry import Point2D
from ..models.wall import WallSpec

logger = logging.getLogger(__name__)


class WallLoadError(Exception):
    """Raised when a wall batch file cannot be parsed."""
    pass


@dataclass
class WallBatch:
    """
    Walls plus the batch-wide dimensions stored with them.

    Attributes:
        walls: Wall centerlines in file order
        wall_thickness: Thickness in grid cells, if the file has one
        wall_height: Wall height, if the file has one
    """
    walls: List[WallSpec] = field(default_factory=list)
    wall_thickness: Optional[float] = None
    wall_height: Optional[float] = None


def load_walls(filepath: str) -> WallBatch:
    """
    Load a wall batch from a JSON file.

    Args:
        filepath: Path to the JSON document

    Returns:
        WallBatch

    Raises:
        FileNotFoundError: If file doesn't exist
        WallLoadError: If the document is not a valid wall batch
    """
    path = Path(filepath)
    if not path.exists():
        raise FileNotFoundError(f"Wall file not found: {filepath}")

    logger.info(f"Loading walls from {filepath}")

    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise WallLoadError(f"{filepath}: invalid JSON: {e}") from e

    batch = parse_wall_batch(data)

    logger.info(f"Loaded {len(batch.walls)} walls")
    return batch


def parse_wall_batch(data: Any) -> WallBatch:
    """
    Build a WallBatch from decoded JSON.

    Args:
        data: Decoded JSON document (dict or list)

    Returns:
        WallBatch

    Raises:
        WallLoadError: If the structure is not recognised
    """
    if isinstance(data, list):
        return WallBatch(walls=[_parse_wall(w, i) for i, w in enumerate(data)])

    if not isinstance(data, dict):
        raise WallLoadError("Wall batch must be a JSON object or list")

    raw_walls = data.get('walls', data.get('polygons'))
    if raw_walls is None:
        raise WallLoadError("Wall batch has no 'walls' list")
    if not isinstance(raw_walls, list):
        raise WallLoadError("'walls' must be a list")

    return WallBatch(
        walls=[_parse_wall(w, i) for i, w in enumerate(raw_walls)],
        wall_thickness=_optional_float(data, 'wallThickness'),
        wall_height=_optional_float(data, 'wallHeight'),
    )


def _parse_wall(raw: Any, index: int) -> WallSpec:
    if not isinstance(raw, dict):
        raise WallLoadError(f"Wall {index}: expected an object")

    raw_points = raw.get('points')
    if not isinstance(raw_points, list):
        raise WallLoadError(f"Wall {index}: 'points' must be a list")

    points = [_parse_point(p, index, j) for j, p in enumerate(raw_points)]

    closed = raw.get('closed', raw.get('isClosed'))
    if closed is not None and not isinstance(closed, bool):
        raise WallLoadError(f"Wall {index}: 'closed' must be true or false")

    wall_id = raw.get('id')
    name = raw.get('name')

    return WallSpec(
        points=tuple(points),
        closed=closed,
        wall_id=str(wall_id) if wall_id is not None else None,
        name=str(name) if name else None,
    )


def _parse_point(raw: Any, wall_index: int, point_index: int) -> Point2D:
    try:
        if isinstance(raw, dict):
            return Point2D(float(raw['x']), float(raw['y']))
        if isinstance(raw, (list, tuple)) and len(raw) == 2:
            return Point2D(float(raw[0]), float(raw[1]))
    except (KeyError, TypeError, ValueError) as e:
        raise WallLoadError(
            f"Wall {wall_index}, point {point_index}: invalid coordinates ({e})"
        ) from e

    raise WallLoadError(
        f"Wall {wall_index}, point {point_index}: expected {{x, y}} or [x, y]"
    )


def _optional_float(data: dict, key: str) -> Optional[float]:
    value = data.get(key)
    if value is None:
        return None
    try:
        return float(value)
    except (TypeError, ValueError) as e:
        raise WallLoadError(f"'{key}' must be a number") from e
