"""
Processing modules for the Wall Mesh Exporter.

Contains the offset contour builder and the footprint merger.
"""

from .offset import build_offset_ring, build_offset_rings
from .merge import FootprintMergeError, merge_rings, geometry_to_footprints

__all__ = [
    'build_offset_ring',
    'build_offset_rings',
    'FootprintMergeError',
    'merge_rings',
    'geometry_to_footprints',
]
