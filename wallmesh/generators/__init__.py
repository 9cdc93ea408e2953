"""
Mesh generators for the Wall Mesh Exporter.

Contains the floor/ceiling cap generator, the side wall generator,
and the wall mesh generator that orchestrates the whole pipeline.
"""

from .caps import generate_cap, generate_floor_and_ceiling
from .walls import (
    generate_side_walls,
    generate_ring_walls,
    normal_side_is_solid,
    quad_winding,
)
from .wall_mesh_generator import (
    ExportStatus,
    WallMeshResult,
    EMPTY_BATCH_REASON,
    select_walls,
    generate_wall_mesh,
    generate_wall_meshes_separately,
)

__all__ = [
    'generate_cap',
    'generate_floor_and_ceiling',
    'generate_side_walls',
    'generate_ring_walls',
    'normal_side_is_solid',
    'quad_winding',
    'ExportStatus',
    'WallMeshResult',
    'EMPTY_BATCH_REASON',
    'select_walls',
    'generate_wall_mesh',
    'generate_wall_meshes_separately',
]
