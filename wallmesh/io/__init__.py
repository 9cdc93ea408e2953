"""
Input/Output modules for the Wall Mesh Exporter.
"""

from .wall_loader import (
    WallBatch,
    WallLoadError,
    load_walls,
    parse_wall_batch,
)
from .obj_exporter import (
    ExportStats,
    serialize_obj,
    export_obj,
    obj_filename,
    safe_stem,
    validate_obj_file,
)

__all__ = [
    # Wall batch input
    'WallBatch',
    'WallLoadError',
    'load_walls',
    'parse_wall_batch',
    # OBJ export
    'ExportStats',
    'serialize_obj',
    'export_obj',
    'obj_filename',
    'safe_stem',
    'validate_obj_file',
]
