"""
Mathematical utilities for the Wall Mesh Exporter.

Provides functions for line intersection and segment normals used
by the offset contour builder and the side wall generator.
"""

from typing import Optional, Tuple
import math

from ..models.geometry import Point2D


def line_intersection_2d(
    p1: Point2D, p2: Point2D,
    p3: Point2D, p4: Point2D,
    epsilon: float = 1e-10
) -> Optional[Point2D]:
    """
    Find intersection point of two infinite lines.

    Args:
        p1, p2: Two points on first line
        p3, p4: Two points on second line
        epsilon: Lines whose direction cross product magnitude is
            below this are considered parallel

    Returns:
        Intersection point, or None if lines are parallel
    """
    x1, y1 = p1.x, p1.y
    x2, y2 = p2.x, p2.y
    x3, y3 = p3.x, p3.y
    x4, y4 = p4.x, p4.y

    denom = (x1 - x2) * (y3 - y4) - (y1 - y2) * (x3 - x4)

    if abs(denom) < epsilon:
        return None  # Lines are parallel

    t = ((x1 - x3) * (y3 - y4) - (y1 - y3) * (x3 - x4)) / denom

    x = x1 + t * (x2 - x1)
    y = y1 + t * (y2 - y1)
    return Point2D(x, y)


def segment_normal(p0: Point2D, p1: Point2D) -> Optional[Point2D]:
    """
    Unit perpendicular of a segment, rotated 90 degrees from its direction.

    For direction (dx, dy) this is (-dy, dx) / length.

    Args:
        p0, p1: Segment endpoints

    Returns:
        Unit normal, or None for a zero-length segment
    """
    dx = p1.x - p0.x
    dy = p1.y - p0.y
    length = math.sqrt(dx * dx + dy * dy)

    if length == 0:
        return None

    return Point2D(-dy / length, dx / length)


def midpoint(p0: Point2D, p1: Point2D) -> Point2D:
    """Midpoint of a segment."""
    return Point2D((p0.x + p1.x) / 2, (p0.y + p1.y) / 2)


def triangle_normal(
    a: Tuple[float, float, float],
    b: Tuple[float, float, float],
    c: Tuple[float, float, float]
) -> Tuple[float, float, float]:
    """
    Unnormalized normal of a 3D triangle from its vertex order.

    Args:
        a, b, c: Triangle vertices

    Returns:
        (b - a) x (c - a)
    """
    ux, uy, uz = b[0] - a[0], b[1] - a[1], b[2] - a[2]
    vx, vy, vz = c[0] - a[0], c[1] - a[1], c[2] - a[2]
    return (
        uy * vz - uz * vy,
        uz * vx - ux * vz,
        ux * vy - uy * vx,
    )
