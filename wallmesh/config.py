"""
Configuration constants for the Wall Mesh Exporter.

Contains all tunable parameters for wall mesh export, including
editor defaults, geometric tolerances, and export settings.
"""

from dataclasses import dataclass
from typing import FrozenSet, Optional


# =============================================================================
# EDITOR DEFAULTS
# =============================================================================

# Default wall height (mesh units, not scaled by grid size)
DEFAULT_WALL_HEIGHT = 25.0

# Default wall thickness (grid cells)
DEFAULT_WALL_THICKNESS = 0.5

# Thickness slider range in the editor (grid cells). Advisory only:
# the pipeline accepts any positive thickness.
WALL_THICKNESS_MIN = 0.1
WALL_THICKNESS_MAX = 2.0

# Size of one grid cell in plan units. Wall thickness is given in
# cells and multiplied by this before offsetting.
DEFAULT_GRID_SIZE = 1.0

# =============================================================================
# GEOMETRY TOLERANCES
# =============================================================================

# Offset lines whose direction cross product is below this are treated
# as parallel; the corner then falls back to the plain perpendicular offset
MITER_PARALLEL_EPSILON = 1e-4

# Distance from a boundary edge midpoint to the point used to decide
# which side of the edge holds solid material
SIDE_TEST_DISTANCE = 0.1

# =============================================================================
# EXPORT SETTINGS
# =============================================================================

# OBJ export precision (decimal places)
OBJ_VERTEX_PRECISION = 6

# First line of every exported OBJ file
OBJ_HEADER = "# Wall Mesh Exporter OBJ Export"

# File stem used when the caller gives none
DEFAULT_SCENARIO_NAME = "walls-scene"


# =============================================================================
# RUNTIME CONFIGURATION
# =============================================================================

@dataclass
class ExportConfig:
    """
    Runtime configuration for one wall mesh export.

    This class holds all configurable parameters that can be
    adjusted per-run via CLI arguments or programmatically.
    """

    # Wall dimensions
    wall_thickness: float = DEFAULT_WALL_THICKNESS
    wall_height: float = DEFAULT_WALL_HEIGHT
    grid_size: float = DEFAULT_GRID_SIZE

    # Infer closedness from coincident endpoints when a wall has no flag
    infer_closed: bool = True

    # Only walls whose id is in this set are exported (None = all walls)
    visible_ids: Optional[FrozenSet[str]] = None

    # One OBJ for the whole batch, or one OBJ per wall
    export_together: bool = True

    # Output
    scenario_name: str = DEFAULT_SCENARIO_NAME
    output_dir: str = "./output"

    # Debug
    verbose: bool = False

    def __post_init__(self):
        """Validate configuration values."""
        if self.wall_thickness <= 0:
            raise ValueError("wall_thickness must be positive")

        if self.wall_height <= 0:
            raise ValueError("wall_height must be positive")

        if self.grid_size <= 0:
            raise ValueError("grid_size must be positive")

        if not self.scenario_name or not self.scenario_name.strip():
            raise ValueError("scenario_name must not be empty")

        self.scenario_name = self.scenario_name.strip()

        if self.visible_ids is not None:
            self.visible_ids = frozenset(self.visible_ids)

    @property
    def thickness(self) -> float:
        """Wall thickness in plan units."""
        return self.wall_thickness * self.grid_size


# Default configuration instance
DEFAULT_CONFIG = ExportConfig()
