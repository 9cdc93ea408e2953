"""
Core geometry types for the Wall Mesh Exporter.

Provides Point2D, BBox and Footprint classes used throughout the
pipeline for representing wall centerlines, offset contours and
merged wall footprints.
"""

from dataclasses import dataclass, field
from typing import Iterable, List, Tuple


@dataclass(frozen=True, slots=True)
class Point2D:
    """2D point in editor grid units."""
    x: float
    y: float

    def __sub__(self, other: 'Point2D') -> 'Point2D':
        """Vector subtraction."""
        return Point2D(self.x - other.x, self.y - other.y)

    def __add__(self, other: 'Point2D') -> 'Point2D':
        """Vector addition."""
        return Point2D(self.x + other.x, self.y + other.y)

    def scale(self, factor: float) -> 'Point2D':
        """Scale as a vector."""
        return Point2D(self.x * factor, self.y * factor)

    def as_tuple(self) -> Tuple[float, float]:
        return (self.x, self.y)


# Implicitly closed: the last point connects back to the first
Ring = List[Point2D]


@dataclass(slots=True)
class BBox:
    """Axis-aligned bounding box in 2D."""
    min_x: float
    min_y: float
    max_x: float
    max_y: float

    @property
    def center(self) -> Point2D:
        """Center point of bbox."""
        return Point2D(
            (self.min_x + self.max_x) / 2,
            (self.min_y + self.max_y) / 2
        )

    @staticmethod
    def from_points(points: Iterable[Point2D]) -> 'BBox':
        """Create bbox from a collection of points."""
        points = list(points)
        if not points:
            raise ValueError("Cannot create BBox from empty point list")

        xs = [p.x for p in points]
        ys = [p.y for p in points]
        return BBox(min(xs), min(ys), max(xs), max(ys))


@dataclass
class Footprint:
    """
    Merged wall footprint: solid wall material seen from above.

    Attributes:
        exterior: Outer boundary ring
        holes: Rings bounding void regions inside the exterior (e.g. the
            interior of a closed room)

    Rings never repeat their first point at the end. Orientation is
    whatever the union produced; consumers must not rely on it.
    """
    exterior: Ring
    holes: List[Ring] = field(default_factory=list)

    @property
    def vertex_count(self) -> int:
        """Total number of vertices including holes."""
        count = len(self.exterior)
        for hole in self.holes:
            count += len(hole)
        return count

    def area(self) -> float:
        """Compute total area (exterior minus holes)."""
        total = abs(signed_area(self.exterior))
        for hole in self.holes:
            total -= abs(signed_area(hole))
        return total


def signed_area(ring: Ring) -> float:
    """
    Compute signed area of a ring using shoelace formula.
    Positive = CCW, Negative = CW.
    """
    n = len(ring)
    if n < 3:
        return 0.0

    area = 0.0
    for i in range(n):
        j = (i + 1) % n
        area += ring[i].x * ring[j].y
        area -= ring[j].x * ring[i].y

    return area / 2.0
