"""
Polygon utilities for the Wall Mesh Exporter.

Provides the point-in-polygon test and ring cleanup helpers.
"""

from typing import List

from ..models.geometry import Point2D, Ring


def point_in_polygon(point: Point2D, ring: Ring) -> bool:
    """
    Test if point is inside a polygon ring using even-odd ray casting.

    Points exactly on an edge get no special treatment; callers probe
    at a small distance from edges instead.

    Args:
        point: Point to test
        ring: List of polygon vertices (implicitly closed)

    Returns:
        True if point is inside
    """
    n = len(ring)
    if n < 3:
        return False

    inside = False
    j = n - 1

    for i in range(n):
        xi, yi = ring[i].x, ring[i].y
        xj, yj = ring[j].x, ring[j].y

        if ((yi > point.y) != (yj > point.y)) and \
           (point.x < (xj - xi) * (point.y - yi) / (yj - yi) + xi):
            inside = not inside

        j = i

    return inside


def remove_consecutive_duplicates(points: List[Point2D]) -> List[Point2D]:
    """
    Drop points that coincide with their predecessor.

    Only neighbours in sequence order are compared; the last point is
    not compared with the first.

    Args:
        points: Point sequence

    Returns:
        New list without zero-length steps
    """
    result: List[Point2D] = []
    for p in points:
        if result and result[-1].x == p.x and result[-1].y == p.y:
            continue
        result.append(p)
    return result


def open_ring(points: List[Point2D]) -> Ring:
    """
    Normalize a ring to the implicitly-closed form.

    Removes zero-length steps and a trailing point that repeats the
    first one.

    Args:
        points: Ring vertices, closed or open

    Returns:
        Ring without duplicate closing point
    """
    ring = remove_consecutive_duplicates(points)
    if len(ring) > 1 and ring[0].x == ring[-1].x and ring[0].y == ring[-1].y:
        ring.pop()
    return ring


def distinct_point_count(ring: Ring) -> int:
    """Number of distinct coordinates in a ring."""
    return len({(p.x, p.y) for p in ring})
