"""
Offset contour builder for the Wall Mesh Exporter.

Turns a wall centerline into the closed 2D outline of the wall's solid
material: the centerline is offset by half the wall thickness to both
sides, corners are mitered by intersecting adjacent offset lines, and
both sides are stitched into one ring.

Side naming follows the segment normal (-dy, dx): "outer" is
centerline + normal * thickness/2, "inner" is centerline - normal *
thickness/2. Which of the two ends up on the outside of a room depends
on the drawing direction; the merge step does not care.
"""

from typing import List, Optional
import logging

from ..models.geometry import Point2D, Ring
from ..models.wall import WallSpec
from ..utils.math_utils import line_intersection_2d, segment_normal
from ..utils.polygon_utils import remove_consecutive_duplicates
from ..config import MITER_PARALLEL_EPSILON

logger = logging.getLogger(__name__)


def build_offset_ring(
    wall: WallSpec,
    thickness: float,
    infer_closed: bool = True
) -> Optional[Ring]:
    """
    Build the solid outline ring of one wall.

    Open walls get flat ends (plain perpendicular offsets at the first
    and last vertex). Closed walls are mitered at every vertex and the
    traversal returns to the first vertex on both sides, so the ring
    has a zero-width slit there that the union step dissolves into an
    exterior ring plus a hole.

    Args:
        wall: Wall centerline
        thickness: Full wall thickness in plan units
        infer_closed: Allow endpoint-equality closedness fallback

    Returns:
        Ring (implicitly closed), or None if the wall has fewer than
        two distinct points
    """
    closed = wall.is_closed(infer_closed)
    points = remove_consecutive_duplicates(list(wall.points))

    if closed and len(points) > 1 and \
       points[0].x == points[-1].x and points[0].y == points[-1].y:
        points.pop()

    if closed and len(points) < 3:
        # A closed loop needs an area; fall back to a straight strip
        closed = False

    if len(points) < 2:
        logger.debug(
            f"Wall {wall.wall_id or '?'}: {len(points)} distinct point(s), no geometry"
        )
        return None

    n = len(points)
    half = thickness / 2
    segment_count = n if closed else n - 1

    perps: List[Point2D] = []
    for i in range(segment_count):
        normal = segment_normal(points[i], points[(i + 1) % n])
        # Consecutive duplicates are gone, so every segment has length
        perps.append(normal.scale(half))

    outer_points: List[Point2D] = []
    inner_points: List[Point2D] = []

    for i in range(segment_count):
        curr = points[i]
        nxt = points[(i + 1) % n]
        perp = perps[i]

        if not closed and i == 0:
            # First vertex of an open wall: flat end
            outer_points.append(curr + perp)
            inner_points.append(curr - perp)
        else:
            prev = points[i - 1]
            prev_perp = perps[i - 1]
            outer_points.append(_miter_point(prev, curr, nxt, prev_perp, perp))
            inner_points.append(
                _miter_point(prev, curr, nxt, prev_perp.scale(-1), perp.scale(-1))
            )

        if not closed and i == segment_count - 1:
            # Last vertex of an open wall: flat end
            outer_points.append(nxt + perp)
            inner_points.append(nxt - perp)

    if closed:
        outer_points.append(outer_points[0])
        inner_points.append(inner_points[0])

    ring = outer_points + list(reversed(inner_points))
    return ring


def _miter_point(
    prev: Point2D,
    curr: Point2D,
    nxt: Point2D,
    prev_offset: Point2D,
    offset: Point2D
) -> Point2D:
    """
    Corner point where the two offset edges meeting at curr intersect.

    Args:
        prev, curr, nxt: Consecutive centerline vertices
        prev_offset: Offset vector of segment prev -> curr
        offset: Offset vector of segment curr -> nxt

    Returns:
        Intersection of the offset lines, or the unmitered offset of
        curr along the current segment when the lines are parallel
    """
    corner = line_intersection_2d(
        prev + prev_offset, curr + prev_offset,
        curr + offset, nxt + offset,
        epsilon=MITER_PARALLEL_EPSILON
    )
    if corner is None:
        return curr + offset
    return corner


def build_offset_rings(
    walls: List[WallSpec],
    thickness: float,
    infer_closed: bool = True
) -> List[Ring]:
    """
    Build outline rings for a batch, dropping walls with no geometry.

    Args:
        walls: Wall centerlines
        thickness: Full wall thickness in plan units
        infer_closed: Allow endpoint-equality closedness fallback

    Returns:
        Rings in wall order, degenerate walls omitted
    """
    rings: List[Ring] = []
    for wall in walls:
        ring = build_offset_ring(wall, thickness, infer_closed)
        if ring is not None:
            rings.append(ring)

    logger.debug(f"Built {len(rings)} offset rings from {len(walls)} walls")
    return rings
