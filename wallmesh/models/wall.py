"""
Wall data model for the Wall Mesh Exporter.

Provides the WallSpec record that the editor hands to the export
pipeline: one user-drawn centerline, open or closed.
"""

from dataclasses import dataclass
from typing import Iterable, Optional, Sequence, Tuple

from .geometry import BBox, Point2D


@dataclass(frozen=True)
class WallSpec:
    """
    One wall centerline as drawn in the editor.

    Attributes:
        points: Centerline vertices in drawing order
        closed: Explicit closed flag. None means "not stored", in which
            case closedness may be inferred from the endpoints.
        wall_id: Editor identifier, used by the visibility filter
        name: Optional user-facing name, used for per-wall file names

    Thickness and height are shared by the whole export batch and live
    in ExportConfig, not here.
    """
    points: Tuple[Point2D, ...]
    closed: Optional[bool] = None
    wall_id: Optional[str] = None
    name: Optional[str] = None

    def __post_init__(self):
        # Freeze whatever sequence the caller passed in
        object.__setattr__(self, 'points', tuple(self.points))

    @property
    def point_count(self) -> int:
        return len(self.points)

    @property
    def endpoints_coincide(self) -> bool:
        """True if first and last points are coordinate-equal."""
        if len(self.points) < 2:
            return False
        first = self.points[0]
        last = self.points[-1]
        return first.x == last.x and first.y == last.y

    def is_closed(self, infer: bool = True) -> bool:
        """
        Resolve whether this wall is a closed loop.

        The explicit flag is the source of truth. Endpoint equality is
        only consulted when no flag was stored and inference is allowed.

        Args:
            infer: Allow the endpoint-equality fallback

        Returns:
            True if the wall should be treated as closed
        """
        if self.closed is not None:
            return self.closed
        return infer and self.endpoints_coincide

    def display_name(self, index: int, infer_closed: bool = True) -> str:
        """
        Name shown to the user and used in per-wall file names.

        Unnamed walls are labelled "Room N" when closed and "Line N"
        when open, N being the 1-based position in the batch.

        Args:
            index: 0-based position of the wall in the batch
            infer_closed: Allow the endpoint-equality closedness fallback

        Returns:
            Display name
        """
        if self.name:
            return self.name
        kind = "Room" if self.is_closed(infer_closed) else "Line"
        return f"{kind} {index + 1}"

    @staticmethod
    def from_coords(
        coords: Iterable[Sequence[float]],
        closed: Optional[bool] = None,
        wall_id: Optional[str] = None,
        name: Optional[str] = None
    ) -> 'WallSpec':
        """
        Build a WallSpec from (x, y) pairs.

        Args:
            coords: Iterable of (x, y) pairs
            closed: Optional explicit closed flag
            wall_id: Optional editor identifier
            name: Optional display name

        Returns:
            New WallSpec
        """
        points = tuple(Point2D(float(c[0]), float(c[1])) for c in coords)
        return WallSpec(points=points, closed=closed, wall_id=wall_id, name=name)


def batch_bbox(walls: Iterable[WallSpec]) -> Optional[BBox]:
    """
    Bounding box over every centerline point of every wall.

    Args:
        walls: Walls in the export batch

    Returns:
        BBox, or None if the batch has no points at all
    """
    points = [p for wall in walls for p in wall.points]
    if not points:
        return None
    return BBox.from_points(points)
