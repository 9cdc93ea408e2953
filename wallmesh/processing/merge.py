"""
Footprint merger for the Wall Mesh Exporter.

Unions the per-wall outline rings into non-overlapping footprints
(exterior ring plus holes) using shapely. Overlapping and abutting
walls fuse; a closed room becomes one footprint with the room
interior as a hole.
"""

from typing import List
import logging

from shapely.errors import ShapelyError
from shapely.geometry import Polygon as ShapelyPolygon
from shapely.ops import unary_union
from shapely.geometry.base import BaseGeometry
from shapely.validation import make_valid

from ..models.geometry import Point2D, Footprint, Ring
from ..utils.polygon_utils import open_ring

logger = logging.getLogger(__name__)


class FootprintMergeError(Exception):
    """Raised when the boolean union of wall outlines fails."""
    pass


def merge_rings(rings: List[Ring]) -> List[Footprint]:
    """
    Union all outline rings into footprints.

    The union is an incremental left fold: start from the first ring,
    then union in each following ring.

    Args:
        rings: Wall outline rings (at least one)

    Returns:
        List of footprints with mutually non-overlapping rings

    Raises:
        FootprintMergeError: If rings is empty or the union fails
    """
    if not rings:
        raise FootprintMergeError("No rings to merge")

    try:
        merged = _ring_to_geometry(rings[0])
        for ring in rings[1:]:
            merged = merged.union(_ring_to_geometry(ring))
    except (ShapelyError, ValueError) as e:
        raise FootprintMergeError(f"Union failed: {e}") from e

    footprints = geometry_to_footprints(merged)

    logger.info(
        f"Merged {len(rings)} wall outlines into {len(footprints)} footprints"
    )

    return footprints


def _ring_to_geometry(ring: Ring) -> BaseGeometry:
    """
    Convert one outline ring into a valid shapely geometry.

    Outline rings may touch themselves (closed-wall slit) or cross
    themselves (acute miters); make_valid turns them into proper
    polygons with holes. Collapsed slit edges come back as lines and
    are dropped so the fold only ever unions areas.
    """
    polygon = ShapelyPolygon([p.as_tuple() for p in ring])
    if polygon.is_valid:
        return polygon

    repaired = make_valid(polygon)
    if repaired.geom_type in ('Polygon', 'MultiPolygon'):
        return repaired

    parts = [
        part for part in getattr(repaired, 'geoms', [])
        if part.geom_type in ('Polygon', 'MultiPolygon')
    ]
    return unary_union(parts)


def geometry_to_footprints(geometry: BaseGeometry) -> List[Footprint]:
    """
    Extract footprints from any shapely geometry.

    Non-polygonal parts (collapsed slivers, cut lines) are dropped.

    Args:
        geometry: Polygon, MultiPolygon or GeometryCollection

    Returns:
        One footprint per polygon, in shapely order
    """
    if geometry.is_empty:
        return []

    if geometry.geom_type == 'Polygon':
        return [_polygon_to_footprint(geometry)]

    if geometry.geom_type in ('MultiPolygon', 'GeometryCollection'):
        footprints: List[Footprint] = []
        for part in geometry.geoms:
            footprints.extend(geometry_to_footprints(part))
        return footprints

    return []


def _polygon_to_footprint(polygon: ShapelyPolygon) -> Footprint:
    """Convert a shapely polygon, dropping the repeated closing point."""
    exterior = _coords_to_ring(polygon.exterior.coords)
    holes = [_coords_to_ring(interior.coords) for interior in polygon.interiors]
    return Footprint(exterior=exterior, holes=holes)


def _coords_to_ring(coords) -> Ring:
    return open_ring([Point2D(float(x), float(y)) for x, y in coords])
