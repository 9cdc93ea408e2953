"""
Triangulation utilities for the Wall Mesh Exporter.

Flattens a footprint (exterior ring followed by its holes) into a
single point list and triangulates it with mapbox_earcut. Floor and
ceiling caps reuse the same flattened point order, so the returned
indices address cap vertices without remapping.
"""

from typing import List, Tuple
import logging

import mapbox_earcut
import numpy as np

from ..models.geometry import Point2D, Footprint

logger = logging.getLogger(__name__)


class TriangulationError(Exception):
    """Raised when triangulation fails or returns unusable data."""
    pass


def flatten_footprint(footprint: Footprint) -> Tuple[List[Point2D], List[int]]:
    """
    Flatten a footprint into one point list plus hole start indices.

    Args:
        footprint: Footprint with exterior ring and holes

    Returns:
        (points, hole_indices) where hole_indices[k] is the index in
        points at which hole k starts
    """
    points: List[Point2D] = list(footprint.exterior)
    hole_indices: List[int] = []

    for hole in footprint.holes:
        hole_indices.append(len(points))
        points.extend(hole)

    return points, hole_indices


def triangulate_flat(
    points: List[Point2D],
    hole_indices: List[int]
) -> List[Tuple[int, int, int]]:
    """
    Triangulate a flattened polygon with holes using ear clipping.

    Args:
        points: Exterior ring points followed by hole ring points
        hole_indices: Start index of each hole within points

    Returns:
        List of triangle tuples (i, j, k) as indices into points

    Raises:
        TriangulationError: If the library fails or returns invalid indices
    """
    n = len(points)
    if n < 3:
        raise TriangulationError("Polygon must have at least 3 vertices")

    coords = np.asarray([(p.x, p.y) for p in points], dtype=np.float64)

    # earcut wants the end index of every ring, the last one being n
    ring_ends = np.asarray(list(hole_indices) + [n], dtype=np.uint32)

    try:
        flat = mapbox_earcut.triangulate_float64(coords, ring_ends)
    except (ValueError, TypeError, RuntimeError) as e:
        raise TriangulationError(f"earcut failed: {e}") from e

    indices = [int(i) for i in np.asarray(flat).ravel()]

    if len(indices) % 3 != 0:
        raise TriangulationError(
            f"earcut returned {len(indices)} indices, not a multiple of 3"
        )

    for idx in indices:
        if idx < 0 or idx >= n:
            raise TriangulationError(
                f"earcut returned index {idx} outside 0-{n - 1}"
            )

    triangles = [
        (indices[i], indices[i + 1], indices[i + 2])
        for i in range(0, len(indices), 3)
    ]

    logger.debug(
        f"Triangulated {n} points ({len(hole_indices)} holes) "
        f"into {len(triangles)} triangles"
    )

    return triangles


def triangulate_footprint(
    footprint: Footprint
) -> Tuple[List[Point2D], List[Tuple[int, int, int]]]:
    """
    Flatten and triangulate a footprint.

    Args:
        footprint: Footprint with exterior ring and holes

    Returns:
        (points, triangles) where triangles index into points

    Raises:
        TriangulationError: If triangulation fails
    """
    points, hole_indices = flatten_footprint(footprint)
    return points, triangulate_flat(points, hole_indices)
