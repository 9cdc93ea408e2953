"""
Utility functions for the Wall Mesh Exporter.
"""

from .math_utils import (
    line_intersection_2d,
    segment_normal,
    midpoint,
    triangle_normal,
)
from .polygon_utils import (
    point_in_polygon,
    remove_consecutive_duplicates,
    open_ring,
    distinct_point_count,
)
from .triangulation import (
    TriangulationError,
    flatten_footprint,
    triangulate_flat,
    triangulate_footprint,
)

__all__ = [
    'line_intersection_2d',
    'segment_normal',
    'midpoint',
    'triangle_normal',
    'point_in_polygon',
    'remove_consecutive_duplicates',
    'open_ring',
    'distinct_point_count',
    'TriangulationError',
    'flatten_footprint',
    'triangulate_flat',
    'triangulate_footprint',
]
