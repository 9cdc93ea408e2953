"""
Wall Mesh Exporter

Extrudes 2D wall centerlines drawn in a map editor into a single 3D
wall mesh and writes it as a Wavefront OBJ file.

Can be used as:
- CLI tool: python -m wallmesh.main
- Library: wallmesh.generators.generate_wall_mesh + wallmesh.io.export_obj
"""

__version__ = "0.1.0"
__author__ = "Wall Mesh Exporter Team"
