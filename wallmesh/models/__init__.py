"""
Data models for the Wall Mesh Exporter.
"""

from .geometry import Point2D, BBox, Footprint, Ring, signed_area
from .wall import WallSpec, batch_bbox
from .mesh import MeshData

__all__ = [
    'Point2D', 'BBox', 'Footprint', 'Ring', 'signed_area',
    'WallSpec', 'batch_bbox',
    'MeshData',
]
