"""
Side wall generator for the Wall Mesh Exporter.

Generates vertical faces along every boundary ring of a footprint,
from the floor (y = 0) up to the wall height, oriented so that normals
point away from solid wall material.

Ring orientation coming out of the union is not trusted. Instead each
edge is probed: a point just off the edge midpoint, along the edge
normal, is tested against the ring. That tells which side of the edge
holds material and therefore which winding faces outward.
"""

from typing import Tuple
import logging

from ..models.geometry import Point2D, Footprint, Ring
from ..models.mesh import MeshData
from ..utils.math_utils import segment_normal, midpoint
from ..utils.polygon_utils import point_in_polygon
from ..config import SIDE_TEST_DISTANCE

logger = logging.getLogger(__name__)


def generate_side_walls(
    mesh: MeshData,
    footprint: Footprint,
    height: float
) -> int:
    """
    Generate side wall quads for a footprint's exterior and holes.

    Args:
        mesh: MeshData to add vertices and faces to
        footprint: Merged footprint
        height: Wall height

    Returns:
        Number of quads generated
    """
    quads = generate_ring_walls(mesh, footprint.exterior, height, is_outer=True)

    for hole in footprint.holes:
        quads += generate_ring_walls(mesh, hole, height, is_outer=False)

    return quads


def generate_ring_walls(
    mesh: MeshData,
    ring: Ring,
    height: float,
    is_outer: bool
) -> int:
    """
    Generate wall quads for a single ring.

    Every edge, including the closing edge from the last point back to
    the first, gets 4 fresh vertices: bottom-left, bottom-right,
    top-right, top-left. Zero-length edges are skipped.

    Args:
        mesh: MeshData to add vertices and faces to
        ring: Ring vertices (2D, implicitly closed)
        height: Wall height
        is_outer: True for the exterior ring, False for holes

    Returns:
        Number of quads generated
    """
    n = len(ring)
    if n < 2:
        return 0

    quads = 0

    for i in range(n):
        p0 = ring[i]
        p1 = ring[(i + 1) % n]

        normal = segment_normal(p0, p1)
        if normal is None:
            continue

        reverse = normal_side_is_solid(p0, p1, normal, ring, is_outer)

        bl = mesh.add_vertex(p0.x, 0.0, p0.y)
        br = mesh.add_vertex(p1.x, 0.0, p1.y)
        tr = mesh.add_vertex(p1.x, height, p1.y)
        tl = mesh.add_vertex(p0.x, height, p0.y)

        mesh.add_quad(*quad_winding(bl, br, tr, tl, reverse))
        quads += 1

    return quads


def normal_side_is_solid(
    p0: Point2D,
    p1: Point2D,
    normal: Point2D,
    ring: Ring,
    is_outer: bool
) -> bool:
    """
    Decide whether the edge normal points into wall material.

    The exterior ring encloses material, so a probe inside it means
    material. A hole encloses void, so a probe inside it means void.

    Args:
        p0, p1: Edge endpoints
        normal: Unit normal of the edge, (-dy, dx) / length
        ring: Ring the edge belongs to
        is_outer: True for the exterior ring, False for holes

    Returns:
        True if material lies on the normal side of the edge
    """
    mid = midpoint(p0, p1)
    probe = mid + normal.scale(SIDE_TEST_DISTANCE)
    inside = point_in_polygon(probe, ring)
    return inside if is_outer else not inside


def quad_winding(
    bl: int,
    br: int,
    tr: int,
    tl: int,
    reverse: bool
) -> Tuple[int, int, int, int]:
    """
    Order quad vertices so the face normal points away from material.

    With the natural order (bl, br, tr, tl) the face normal is the edge
    normal. When material lies on that side, the quad is mirrored to
    (br, bl, tl, tr).

    Args:
        bl, br, tr, tl: Vertex indices (1-based)
        reverse: True if material lies on the edge normal side

    Returns:
        Quad vertex indices in emission order
    """
    if reverse:
        return (br, bl, tl, tr)
    return (bl, br, tr, tl)
