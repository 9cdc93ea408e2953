"""
Floor and ceiling generator for the Wall Mesh Exporter.

Generates the flat horizontal caps of a footprint from its
triangulation: the floor at y = 0 and the ceiling at the wall height.
Both caps reuse the flattened point order of the triangulation, so
triangle indices address cap vertices directly.
"""

from typing import List, Sequence, Tuple

from ..models.geometry import Point2D
from ..models.mesh import MeshData


def generate_cap(
    mesh: MeshData,
    points: Sequence[Point2D],
    triangles: Sequence[Tuple[int, int, int]],
    y: float
) -> List[int]:
    """
    Generate one horizontal cap.

    Adds one vertex per flattened point at the given height, then one
    face per triangle with the second and third indices swapped
    relative to triangulation order. With plan Y mapped to mesh Z this
    turns the normal upward (+y).

    Args:
        mesh: MeshData to add to
        points: Flattened footprint points (exterior, then holes)
        triangles: Index triples into points
        y: Cap height

    Returns:
        1-based vertex indices of the cap, parallel to points
    """
    vertex_indices = [mesh.add_vertex(p.x, y, p.y) for p in points]

    for a, b, c in triangles:
        mesh.add_triangle(
            vertex_indices[a], vertex_indices[c], vertex_indices[b]
        )

    return vertex_indices


def generate_floor_and_ceiling(
    mesh: MeshData,
    points: Sequence[Point2D],
    triangles: Sequence[Tuple[int, int, int]],
    height: float
) -> None:
    """
    Generate floor (y = 0) and ceiling (y = height) caps.

    The ceiling uses the same swapped order as the floor, so both caps
    face up.

    Args:
        mesh: MeshData to add to
        points: Flattened footprint points
        triangles: Index triples into points
        height: Wall height
    """
    generate_cap(mesh, points, triangles, 0.0)
    generate_cap(mesh, points, triangles, height)
