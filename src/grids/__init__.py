"""Staggered grid package.

Grid layout, index helpers, level sets and supersampled volume fractions used
by the viscosity solve.
"""

from .grid_data import GridData3D
from .structured_grid import (
    create_grid_3d,
    cell_shape,
    face_shape,
    n_faces,
    n_edges,
    face_component,
    create_face_field,
    pack_faces,
    unpack_faces,
    cell_centers,
    face_positions,
)
from .level_set import (
    interp_cell_field,
    sample_level_set,
    sphere_level_set,
    box_level_set,
    plane_level_set,
)
from .volumes import compute_center_volumes, compute_edge_volumes, compute_face_volumes

__all__ = [
    # Layout
    "GridData3D",
    "create_grid_3d",
    "cell_shape",
    "face_shape",
    "n_faces",
    "n_edges",
    # Face fields
    "face_component",
    "create_face_field",
    "pack_faces",
    "unpack_faces",
    "cell_centers",
    "face_positions",
    # Level sets
    "interp_cell_field",
    "sample_level_set",
    "sphere_level_set",
    "box_level_set",
    "plane_level_set",
    # Volume fractions
    "compute_center_volumes",
    "compute_edge_volumes",
    "compute_face_volumes",
]
