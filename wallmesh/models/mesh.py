"""
Mesh data model for the Wall Mesh Exporter.

Provides MeshData class for accumulating extruded wall geometry
that is later serialized to OBJ format.
"""

from dataclasses import dataclass, field
from typing import List, Tuple, Optional


@dataclass
class MeshData:
    """
    Generated mesh data for an export batch.

    Stores vertices and triangular faces. Faces use 1-based indexing
    for OBJ compatibility.

    Attributes:
        vertices: List of (x, y, z) vertex positions, y is up
        faces: List of face vertex indices (1-indexed for OBJ)
        origin_x: Plan X subtracted from every vertex on insertion
        origin_z: Plan Y subtracted from every vertex Z on insertion

    Note on coordinates:
        - Plan coordinates (x, y) map to mesh (x, z); mesh y is height
        - Height is never re-centered
        - Vertices are append-only; coincident vertices are not merged
    """
    vertices: List[Tuple[float, float, float]] = field(default_factory=list)
    faces: List[List[int]] = field(default_factory=list)
    origin_x: float = 0.0
    origin_z: float = 0.0

    def vertex_count(self) -> int:
        """Get number of vertices."""
        return len(self.vertices)

    def face_count(self) -> int:
        """Get number of faces."""
        return len(self.faces)

    def add_vertex(self, x: float, y: float, z: float) -> int:
        """
        Add a re-centered vertex and return its 1-based index.

        Args:
            x: Plan X coordinate
            y: Height
            z: Plan Y coordinate

        Returns:
            1-based index of the new vertex
        """
        self.vertices.append((x - self.origin_x, y, z - self.origin_z))
        return len(self.vertices)  # 1-based

    def add_triangle(self, v1: int, v2: int, v3: int) -> None:
        """
        Add a triangle face.

        Args:
            v1, v2, v3: Vertex indices (1-based)
        """
        self.faces.append([v1, v2, v3])

    def add_quad(self, v1: int, v2: int, v3: int, v4: int) -> None:
        """
        Add a quad face (will be triangulated).

        Splits quad into two triangles: (v1, v2, v3) and (v1, v3, v4)

        Args:
            v1, v2, v3, v4: Vertex indices (1-based, CCW order)
        """
        self.faces.append([v1, v2, v3])
        self.faces.append([v1, v3, v4])

    def validate(self) -> List[str]:
        """
        Validate mesh integrity.

        Returns:
            List of validation error messages (empty if valid)
        """
        errors = []

        if not self.vertices:
            errors.append("Mesh has no vertices")
            return errors

        max_idx = len(self.vertices)

        for i, face in enumerate(self.faces):
            if len(face) != 3:
                errors.append(f"Face {i} is not a triangle ({len(face)} vertices)")

            for idx in face:
                if idx < 1 or idx > max_idx:
                    errors.append(
                        f"Face {i} has invalid vertex index {idx} "
                        f"(valid range: 1-{max_idx})"
                    )

        return errors

    def compute_bounds(self) -> Optional[Tuple[Tuple[float, float, float],
                                                 Tuple[float, float, float]]]:
        """
        Compute bounding box of the mesh.

        Returns:
            ((min_x, min_y, min_z), (max_x, max_y, max_z)) or None if empty
        """
        if not self.vertices:
            return None

        xs = [v[0] for v in self.vertices]
        ys = [v[1] for v in self.vertices]
        zs = [v[2] for v in self.vertices]

        return (
            (min(xs), min(ys), min(zs)),
            (max(xs), max(ys), max(zs))
        )

    def __repr__(self) -> str:
        return f"MeshData(vertices={len(self.vertices)}, faces={len(self.faces)})"
