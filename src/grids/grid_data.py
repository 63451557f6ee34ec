"""
GridData3D: Core data layout for the staggered 3D grid.

This class holds the static geometry of a regular lattice and the derived layout
of every sample type that lives on it.

Indexing Conventions:
- Cell-centred quantities are plain 3D arrays of shape cell_shape.
- Face-sampled (staggered) quantities live in one flat array of length n_faces.
  The block of axis a starts at face_offsets[a] and holds a C-ordered array of
  shape face_shapes[a] = cell_shape + e_a.
- Edge-sampled quantities live in one flat array of length n_edges. Edges of axis a
  run along a; the block starts at edge_offsets[a] and has shape edge_shapes[a]
  (cell_shape + 1 everywhere except along a).

World Positions:
- cell (i, j, k)           -> origin + dx * (i + 0.5, j + 0.5, k + 0.5)
- face (i, j, k), axis a   -> same as the cell, without the half offset along a
- edge (i, j, k), axis a   -> origin + dx * (i, j, k), plus a half offset along a
"""

from numba import types
from numba.experimental import jitclass

grid_data_spec = [
    # --- Geometry ---
    ("dx", types.float64),                  # Uniform grid spacing
    ("origin", types.float64[:]),           # World position of the lower grid corner
    ("cell_shape", types.int64[:]),         # (nx, ny, nz)

    # --- Staggered face layout ---
    ("face_shapes", types.int64[:, :]),     # [3, 3] shape of the face grid per axis
    ("face_offsets", types.int64[:]),       # [4] start of each axis block, last entry is n_faces

    # --- Edge layout ---
    ("edge_shapes", types.int64[:, :]),     # [3, 3] shape of the edge grid per axis
    ("edge_offsets", types.int64[:]),       # [4] start of each axis block, last entry is n_edges
]


@jitclass(grid_data_spec)
class GridData3D:
    def __init__(
        self,
        dx,
        origin,
        cell_shape,
        face_shapes,
        face_offsets,
        edge_shapes,
        edge_offsets,
    ):
        # --- Geometry ---
        self.dx = dx
        self.origin = origin
        self.cell_shape = cell_shape

        # --- Faces ---
        self.face_shapes = face_shapes
        self.face_offsets = face_offsets

        # --- Edges ---
        self.edge_shapes = edge_shapes
        self.edge_offsets = edge_offsets
