"""
Wall mesh generator orchestrator for the Wall Mesh Exporter.

Runs the export pipeline on a batch of walls:
1. Offset every centerline into an outline ring
2. Union the rings into footprints
3. Triangulate each footprint
4. Extrude: floor, ceiling and side walls

The result is a typed status instead of an exception or a UI alert,
so the host decides how to surface empty batches and failures.
"""

from typing import Iterable, List, Optional, Tuple
from dataclasses import dataclass, field, replace
from enum import Enum
import logging

from ..models.geometry import Footprint
from ..models.mesh import MeshData
from ..models.wall import WallSpec, batch_bbox
from ..processing.offset import build_offset_rings
from ..processing.merge import merge_rings, FootprintMergeError
from ..utils.polygon_utils import distinct_point_count
from ..utils.triangulation import triangulate_footprint, TriangulationError
from ..config import ExportConfig
from .caps import generate_floor_and_ceiling
from .walls import generate_side_walls

logger = logging.getLogger(__name__)


class ExportStatus(Enum):
    """Outcome of a wall mesh export."""
    OK = "ok"
    EMPTY = "empty"      # No wall produced usable geometry
    FAILED = "failed"    # Union or triangulation library failure


EMPTY_BATCH_REASON = "No walls to export"


@dataclass
class WallMeshResult:
    """
    Result of wall mesh generation.

    Attributes:
        status: OK, EMPTY or FAILED
        mesh: Generated mesh (OK only)
        wall_count: Walls in the batch after the visibility filter
        ring_count: Walls that produced an outline ring
        footprint_count: Footprints after the union
        footprints_skipped: Footprints dropped as malformed
        quad_count: Side wall quads generated
        reason: Human-readable reason for EMPTY or FAILED
        warnings: Non-fatal issues (skipped footprints)
    """
    status: ExportStatus
    mesh: Optional[MeshData] = None
    wall_count: int = 0
    ring_count: int = 0
    footprint_count: int = 0
    footprints_skipped: int = 0
    quad_count: int = 0
    reason: Optional[str] = None
    warnings: List[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return self.status == ExportStatus.OK


def select_walls(
    walls: Iterable[WallSpec],
    visible_ids: Optional[Iterable[str]] = None
) -> List[WallSpec]:
    """
    Apply the visibility filter.

    Args:
        walls: All walls known to the editor
        visible_ids: Ids to export, or None for every wall

    Returns:
        Walls to export, in input order
    """
    walls = list(walls)
    if visible_ids is None:
        return walls

    visible = set(visible_ids)
    return [w for w in walls if w.wall_id is not None and w.wall_id in visible]


def generate_wall_mesh(
    walls: Iterable[WallSpec],
    config: Optional[ExportConfig] = None
) -> WallMeshResult:
    """
    Generate the extruded wall mesh for a batch.

    Vertices are re-centered on the bounding-box center of every
    centerline point of the selected walls (computed before
    offsetting); height is not re-centered.

    Args:
        walls: Wall centerlines (never mutated)
        config: Export configuration (defaults if None)

    Returns:
        WallMeshResult with status and, on success, the mesh
    """
    if config is None:
        config = ExportConfig()

    walls = select_walls(walls, config.visible_ids)
    result = WallMeshResult(status=ExportStatus.OK, wall_count=len(walls))

    # Step 1: Offset contours
    rings = build_offset_rings(walls, config.thickness, config.infer_closed)
    result.ring_count = len(rings)

    if not rings:
        logger.warning(f"{EMPTY_BATCH_REASON} ({len(walls)} walls, none usable)")
        result.status = ExportStatus.EMPTY
        result.reason = EMPTY_BATCH_REASON
        return result

    center = batch_bbox(walls).center

    # Step 2: Union
    try:
        footprints = merge_rings(rings)
    except FootprintMergeError as e:
        logger.error(f"Footprint merge failed: {e}")
        result.status = ExportStatus.FAILED
        result.reason = str(e)
        return result

    result.footprint_count = len(footprints)

    # Step 3: Triangulate everything first so a failure leaves no partial mesh
    prepared: List[Tuple[Footprint, list, list]] = []
    for i, footprint in enumerate(footprints):
        if distinct_point_count(footprint.exterior) < 3:
            message = (
                f"Footprint {i}: exterior has fewer than 3 distinct points, skipped"
            )
            logger.warning(message)
            result.warnings.append(message)
            result.footprints_skipped += 1
            continue

        try:
            points, triangles = triangulate_footprint(footprint)
        except TriangulationError as e:
            logger.error(f"Footprint {i}: triangulation failed: {e}")
            result.status = ExportStatus.FAILED
            result.reason = f"Triangulation failed: {e}"
            return result

        logger.debug(
            f"Footprint {i}: {footprint.vertex_count} vertices, "
            f"{len(footprint.holes)} holes, area {footprint.area():.2f}"
        )
        prepared.append((footprint, points, triangles))

    # Step 4: Extrude
    mesh = MeshData(origin_x=center.x, origin_z=center.y)
    height = config.wall_height

    for footprint, points, triangles in prepared:
        generate_floor_and_ceiling(mesh, points, triangles, height)
        result.quad_count += generate_side_walls(mesh, footprint, height)

    result.mesh = mesh

    logger.info(
        f"Generated wall mesh: {mesh.vertex_count()} vertices, "
        f"{mesh.face_count()} faces from {len(walls)} walls "
        f"({result.footprint_count} footprints)"
    )

    bounds = mesh.compute_bounds()
    if bounds is not None:
        (min_x, min_y, min_z), (max_x, max_y, max_z) = bounds
        logger.debug(
            f"Mesh bounds: x [{min_x:.2f}, {max_x:.2f}], "
            f"y [{min_y:.2f}, {max_y:.2f}], z [{min_z:.2f}, {max_z:.2f}]"
        )

    return result


def generate_wall_meshes_separately(
    walls: Iterable[WallSpec],
    config: Optional[ExportConfig] = None
) -> List[Tuple[WallSpec, WallMeshResult]]:
    """
    Run the pipeline once per wall.

    Each wall is its own batch: it is centered on its own points and
    never unioned with its neighbours.

    Args:
        walls: Wall centerlines
        config: Export configuration (visibility filter applies)

    Returns:
        (wall, result) pairs in input order
    """
    if config is None:
        config = ExportConfig()

    selected = select_walls(walls, config.visible_ids)
    single_config = replace(config, visible_ids=None)
    results = []

    for wall in selected:
        results.append((wall, generate_wall_mesh([wall], single_config)))

    return results

