"""
Wall Mesh Exporter - Main CLI

Extrudes a batch of 2D wall centerlines into a 3D OBJ mesh.

Usage:
    python -m wallmesh.main --input <walls.json> [--name <scenario>]

Example:
    python -m wallmesh.main --input ./walls.json --name walls-scene --height 25
"""

import argparse
import logging
import os
import sys
import time
from dataclasses import dataclass, field
from typing import List, Optional, Set

from . import __version__
from .config import (
    ExportConfig,
    DEFAULT_GRID_SIZE,
    DEFAULT_SCENARIO_NAME,
    DEFAULT_WALL_HEIGHT,
    DEFAULT_WALL_THICKNESS,
    WALL_THICKNESS_MAX,
    WALL_THICKNESS_MIN,
)
from .io.wall_loader import load_walls, WallLoadError
from .io.obj_exporter import (
    export_obj,
    obj_filename,
    safe_stem,
    validate_obj_file,
)
from .generators.wall_mesh_generator import (
    EMPTY_BATCH_REASON,
    ExportStatus,
    WallMeshResult,
    generate_wall_mesh,
    generate_wall_meshes_separately,
)
from .models.wall import WallSpec


@dataclass
class ExportRunStats:
    """Statistics from one export run."""
    walls_loaded: int = 0
    walls_exported: int = 0
    footprints: int = 0
    footprints_skipped: int = 0
    vertices: int = 0
    faces: int = 0
    processing_time_ms: int = 0


@dataclass
class ExportRunResult:
    """
    Complete result of an export run.

    Attributes:
        success: True if every requested mesh was written
        status: Pipeline status (the first non-OK one in separate mode)
        stats: Counts for the summary
        output_files: Written OBJ paths
        errors: Fatal problems
        warnings: Non-fatal problems (skipped footprints, OBJ validation)
    """
    success: bool
    status: ExportStatus
    stats: ExportRunStats
    output_files: List[str] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)


def setup_logging(verbose: bool = False, log_file: Optional[str] = None) -> None:
    """
    Configure logging to console and optionally to file.

    Args:
        verbose: If True, use DEBUG level; otherwise INFO
        log_file: Optional path to log file. If provided, logs will be written to file.
    """
    level = logging.DEBUG if verbose else logging.INFO

    formatter = logging.Formatter(
        '%(asctime)s [%(levelname)s] %(name)s: %(message)s',
        datefmt='%H:%M:%S'
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Clear any existing handlers
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
        file_handler.setLevel(logging.DEBUG)  # Always log DEBUG to file
        file_formatter = logging.Formatter(
            '%(asctime)s [%(levelname)s] %(name)s: %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        file_handler.setFormatter(file_formatter)
        root_logger.addHandler(file_handler)


def run_export(walls: List[WallSpec], config: ExportConfig) -> ExportRunResult:
    """
    Generate and write OBJ files for a wall batch.

    Steps:
    1. Generate the mesh (one for the batch, or one per wall)
    2. Write <output_dir>/<scenario>.obj (or <scenario>_<wall>.obj)
    3. Validate the written files

    Args:
        walls: Wall centerlines from the editor
        config: Export configuration

    Returns:
        ExportRunResult with stats and written paths
    """
    logger = logging.getLogger(__name__)

    start_time = time.time()
    stats = ExportRunStats(walls_loaded=len(walls))
    run = ExportRunResult(success=False, status=ExportStatus.OK, stats=stats)

    os.makedirs(config.output_dir, exist_ok=True)

    if config.export_together:
        logger.info(f"Exporting {len(walls)} walls as one mesh")
        result = generate_wall_mesh(walls, config)
        jobs = [(obj_filename(config.scenario_name), result)]
    else:
        logger.info(f"Exporting {len(walls)} walls as separate meshes")
        positions = {id(wall): i for i, wall in enumerate(walls)}
        used: Set[str] = set()
        jobs = []
        for wall, result in generate_wall_meshes_separately(walls, config):
            name = wall.display_name(positions[id(wall)], config.infer_closed)
            filename = _unique_filename(f"{config.scenario_name}_{name}", used)
            jobs.append((filename, result))

    for filename, result in jobs:
        _write_result(filename, result, config, run)

    if not run.output_files and not run.errors:
        # Separate mode where every wall was degenerate
        run.status = ExportStatus.EMPTY
        run.errors.append(EMPTY_BATCH_REASON)

    stats.processing_time_ms = int((time.time() - start_time) * 1000)
    run.success = not run.errors

    logger.info(f"Export completed in {stats.processing_time_ms}ms")
    return run


def _unique_filename(stem: str, used: Set[str]) -> str:
    """
    OBJ file name for stem that is not in used yet.

    Repeated names get a numeric suffix (_2, _3, ...). Comparison is
    case-insensitive so names differing only in case do not collide
    on case-insensitive filesystems.

    Args:
        stem: Desired file stem
        used: Lower-cased file names already taken; updated in place

    Returns:
        File name with .obj extension
    """
    filename = obj_filename(stem)
    base = filename[:-len('.obj')]
    suffix = 2
    while filename.lower() in used:
        filename = f"{base}_{suffix}.obj"
        suffix += 1
    used.add(filename.lower())
    return filename


def _write_result(
    filename: str,
    result: WallMeshResult,
    config: ExportConfig,
    run: ExportRunResult
) -> None:
    """Write one pipeline result to disk and fold it into the run."""
    logger = logging.getLogger(__name__)

    run.warnings.extend(result.warnings)

    if result.status == ExportStatus.EMPTY and not config.export_together:
        logger.info(f"{filename}: wall has no geometry, skipped")
        run.warnings.append(f"{filename}: skipped, {result.reason}")
        return

    if not result.success:
        if run.status == ExportStatus.OK:
            run.status = result.status
        run.errors.append(f"{filename}: {result.reason}")
        return

    mesh_errors = result.mesh.validate()
    if mesh_errors:
        for error in mesh_errors:
            logger.error(f"{filename}: {error}")
        run.status = ExportStatus.FAILED
        run.errors.append(f"{filename}: invalid mesh: {mesh_errors[0]}")
        return

    filepath = os.path.join(config.output_dir, filename)
    export_obj(result.mesh, filepath, result.wall_count)
    run.output_files.append(filepath)

    obj_errors = validate_obj_file(filepath)
    for error in obj_errors:
        logger.warning(f"{filename}: {error}")
    run.warnings.extend(f"{filename}: {e}" for e in obj_errors)

    run.stats.walls_exported += result.wall_count
    run.stats.footprints += result.footprint_count
    run.stats.footprints_skipped += result.footprints_skipped
    run.stats.vertices += result.mesh.vertex_count()
    run.stats.faces += result.mesh.face_count()


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description='Wall Mesh Exporter - Extrude 2D wall centerlines into an OBJ mesh'
    )

    parser.add_argument(
        '--input', '-i',
        required=True,
        help='JSON file with the wall batch'
    )

    parser.add_argument(
        '--output-dir',
        default='./output',
        help='Output directory for generated files (default: ./output)'
    )

    parser.add_argument(
        '--name',
        default=DEFAULT_SCENARIO_NAME,
        help=f'Scenario name, used as OBJ file stem (default: {DEFAULT_SCENARIO_NAME})'
    )

    parser.add_argument(
        '--thickness',
        type=float,
        default=None,
        help=f'Wall thickness in grid cells (default: from input, else {DEFAULT_WALL_THICKNESS})'
    )

    parser.add_argument(
        '--height',
        type=float,
        default=None,
        help=f'Wall height (default: from input, else {DEFAULT_WALL_HEIGHT})'
    )

    parser.add_argument(
        '--grid-size',
        type=float,
        default=DEFAULT_GRID_SIZE,
        help=f'Plan units per grid cell (default: {DEFAULT_GRID_SIZE})'
    )

    parser.add_argument(
        '--only',
        action='append',
        metavar='WALL_ID',
        default=None,
        help='Export only this wall id (repeatable)'
    )

    parser.add_argument(
        '--separate',
        action='store_true',
        help='Write one OBJ per wall instead of one merged mesh'
    )

    parser.add_argument(
        '--no-infer-closed',
        action='store_true',
        help='Do not treat walls with coincident endpoints as closed unless flagged'
    )

    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Enable verbose logging'
    )

    parser.add_argument(
        '--no-log-file',
        action='store_true',
        help='Disable log file output (only console)'
    )

    parser.add_argument(
        '--version',
        action='version',
        version=f'%(prog)s {__version__}'
    )

    args = parser.parse_args(argv)

    # Create output directory early so we can put log file there
    os.makedirs(args.output_dir, exist_ok=True)

    log_file = None
    if not args.no_log_file:
        log_file = os.path.join(args.output_dir, f"{safe_stem(args.name) or 'export'}.log")

    setup_logging(args.verbose, log_file)
    logger = logging.getLogger(__name__)

    try:
        batch = load_walls(args.input)
    except (FileNotFoundError, WallLoadError) as e:
        logger.error(f"Failed to load walls: {e}")
        print(f"\nFailed to load walls: {e}")
        return 1

    thickness = args.thickness
    if thickness is None:
        thickness = batch.wall_thickness if batch.wall_thickness is not None \
            else DEFAULT_WALL_THICKNESS

    height = args.height
    if height is None:
        height = batch.wall_height if batch.wall_height is not None \
            else DEFAULT_WALL_HEIGHT

    if not (WALL_THICKNESS_MIN <= thickness <= WALL_THICKNESS_MAX):
        logger.warning(
            f"Wall thickness {thickness} is outside the editor range "
            f"{WALL_THICKNESS_MIN}-{WALL_THICKNESS_MAX}"
        )

    try:
        config = ExportConfig(
            wall_thickness=thickness,
            wall_height=height,
            grid_size=args.grid_size,
            infer_closed=not args.no_infer_closed,
            visible_ids=frozenset(args.only) if args.only else None,
            export_together=not args.separate,
            scenario_name=args.name,
            output_dir=args.output_dir,
            verbose=args.verbose,
        )
    except ValueError as e:
        print(f"\nInvalid configuration: {e}")
        return 1

    try:
        run = run_export(batch.walls, config)
    except Exception as e:
        logging.exception(f"Export failed: {e}")
        if log_file:
            print(f"See log file for details: {log_file}")
        return 1

    stats = run.stats

    if run.success:
        print(f"\nSuccess! Exported {stats.walls_exported} of {stats.walls_loaded} walls")
        print(f"Footprints: {stats.footprints} (skipped: {stats.footprints_skipped})")
        print(f"Mesh: {stats.vertices} vertices, {stats.faces} faces")
        for warning in run.warnings:
            print(f"  warning: {warning}")
        print(f"Output files: {', '.join(run.output_files)}")
        if log_file:
            print(f"Log file: {log_file}")
        return 0

    if run.status == ExportStatus.EMPTY:
        print("\nNothing to export: no wall has at least two distinct points")
    else:
        print("\nExport failed with errors:")
    for error in run.errors:
        print(f"  - {error}")
    if log_file:
        print(f"See log file for details: {log_file}")
    return 1


if __name__ == '__main__':
    sys.exit(main())
