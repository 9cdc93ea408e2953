"""
OBJ mesh exporter for the Wall Mesh Exporter.

Serializes MeshData to Wavefront OBJ text:
- Header comment and wall count comment
- One 'v x y z' line per vertex (y up)
- One 'f i j k' line per triangle (1-based)

Positions only: no normals, UVs, groups or materials.
"""

import os
import re
from typing import List
from dataclasses import dataclass
import logging

from ..models.mesh import MeshData
from ..config import OBJ_HEADER, OBJ_VERTEX_PRECISION

logger = logging.getLogger(__name__)

# Characters that cannot appear in a file name on common filesystems
_UNSAFE_STEM_CHARS = re.compile(r'[\\/:*?"<>|]')


@dataclass
class ExportStats:
    """Statistics from OBJ export."""
    total_vertices: int = 0
    total_faces: int = 0
    total_walls: int = 0
    file_size_bytes: int = 0


def serialize_obj(
    mesh: MeshData,
    wall_count: int,
    precision: int = OBJ_VERTEX_PRECISION
) -> str:
    """
    Render a mesh as OBJ text.

    Output is a pure function of its inputs, so repeated exports of the
    same batch are byte-identical.

    Args:
        mesh: Mesh to serialize
        wall_count: Number of walls in the exported batch
        precision: Decimal places for vertex coordinates

    Returns:
        OBJ document text
    """
    lines: List[str] = [
        OBJ_HEADER,
        f"# Walls: {wall_count}",
        "",
    ]

    for x, y, z in mesh.vertices:
        lines.append(f"v {x:.{precision}f} {y:.{precision}f} {z:.{precision}f}")

    lines.append("")

    for face in mesh.faces:
        lines.append("f " + " ".join(str(idx) for idx in face))

    return "\n".join(lines) + "\n"


def export_obj(
    mesh: MeshData,
    filepath: str,
    wall_count: int
) -> ExportStats:
    """
    Write a mesh to an OBJ file.

    Args:
        mesh: Mesh to export
        filepath: Output file path (.obj)
        wall_count: Number of walls in the exported batch

    Returns:
        ExportStats with export statistics
    """
    stats = ExportStats(
        total_vertices=mesh.vertex_count(),
        total_faces=mesh.face_count(),
        total_walls=wall_count,
    )

    os.makedirs(os.path.dirname(filepath) or '.', exist_ok=True)

    with open(filepath, 'w', encoding='utf-8', newline='\n') as f:
        f.write(serialize_obj(mesh, wall_count))

    stats.file_size_bytes = os.path.getsize(filepath)

    logger.info(
        f"Exported OBJ {filepath}: {stats.total_vertices} vertices, "
        f"{stats.total_faces} faces, {stats.total_walls} walls"
    )

    return stats


def safe_stem(stem: str) -> str:
    """Replace path separators and other unsafe characters with '_'."""
    return _UNSAFE_STEM_CHARS.sub('_', stem.strip())


def obj_filename(stem: str) -> str:
    """File name for an export stem, adding the .obj extension once."""
    stem = safe_stem(stem)
    if stem.lower().endswith('.obj'):
        return stem
    return f"{stem}.obj"


def validate_obj_file(filepath: str) -> List[str]:
    """
    Validate an OBJ file for common issues.

    Args:
        filepath: Path to OBJ file

    Returns:
        List of error messages (empty if valid)
    """
    errors = []

    if not os.path.exists(filepath):
        errors.append(f"File does not exist: {filepath}")
        return errors

    vertex_count = 0
    face_count = 0
    max_vertex_ref = 0

    with open(filepath, 'r', encoding='utf-8') as f:
        for line_num, line in enumerate(f, 1):
            line = line.strip()

            if not line or line.startswith('#'):
                continue

            parts = line.split()

            if parts[0] == 'v':
                vertex_count += 1
                if len(parts) != 4:
                    errors.append(
                        f"Line {line_num}: Vertex does not have 3 coordinates"
                    )

            elif parts[0] == 'f':
                face_count += 1
                if len(parts) != 4:
                    errors.append(
                        f"Line {line_num}: Face is not a triangle"
                    )

                for part in parts[1:]:
                    try:
                        idx = int(part)
                    except ValueError:
                        errors.append(
                            f"Line {line_num}: Invalid vertex index '{part}'"
                        )
                        continue

                    if idx < 1:
                        errors.append(
                            f"Line {line_num}: Vertex index {idx} is not 1-based"
                        )
                    max_vertex_ref = max(max_vertex_ref, idx)

            else:
                errors.append(f"Line {line_num}: Unexpected record '{parts[0]}'")

    if max_vertex_ref > vertex_count:
        errors.append(
            f"Face references vertex {max_vertex_ref} but only {vertex_count} vertices exist"
        )

    if vertex_count == 0:
        errors.append("File contains no vertices")

    if face_count == 0:
        errors.append("File contains no faces")

    return errors
