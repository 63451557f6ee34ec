"""Structured staggered grid builder and face-field helpers.

Staggered vector fields cross the public boundary as three component arrays
(u, v, w) with shapes face_shapes[0..2]. Internally they are packed into a single
flat float64 face array so that numba kernels can address every face with one
integer.
"""

import numpy as np

from .grid_data import GridData3D


def create_grid_3d(nx: int, ny: int, nz: int, dx: float = 1.0,
                   origin=(0.0, 0.0, 0.0)) -> GridData3D:
    """Create a regular staggered grid.

    Parameters
    ----------
    nx, ny, nz : int
        Number of cells along each axis.
    dx : float
        Uniform cell size.
    origin : sequence of float
        World position of the lower corner of cell (0, 0, 0).

    Returns
    -------
    GridData3D
        Grid layout ready for the numba kernels.
    """
    cell_shape = np.array([nx, ny, nz], dtype=np.int64)
    if np.any(cell_shape < 1):
        raise ValueError(f"Grid needs at least one cell per axis, got {tuple(cell_shape)}")
    if not dx > 0:
        raise ValueError(f"Grid spacing must be positive, got dx={dx}")

    face_shapes = np.zeros((3, 3), dtype=np.int64)
    edge_shapes = np.zeros((3, 3), dtype=np.int64)
    for axis in range(3):
        face_shapes[axis] = cell_shape
        face_shapes[axis, axis] += 1

        edge_shapes[axis] = cell_shape + 1
        edge_shapes[axis, axis] -= 1

    face_offsets = np.zeros(4, dtype=np.int64)
    face_offsets[1:] = np.cumsum(np.prod(face_shapes, axis=1))
    edge_offsets = np.zeros(4, dtype=np.int64)
    edge_offsets[1:] = np.cumsum(np.prod(edge_shapes, axis=1))

    return GridData3D(
        float(dx),
        np.ascontiguousarray(np.asarray(origin, dtype=np.float64)),
        np.ascontiguousarray(cell_shape),
        np.ascontiguousarray(face_shapes),
        np.ascontiguousarray(face_offsets),
        np.ascontiguousarray(edge_shapes),
        np.ascontiguousarray(edge_offsets),
    )


def cell_shape(grid):
    return tuple(int(n) for n in grid.cell_shape)


def face_shape(grid, axis):
    return tuple(int(n) for n in grid.face_shapes[axis])


def n_faces(grid):
    return int(grid.face_offsets[3])


def n_edges(grid):
    return int(grid.edge_offsets[3])


def face_component(grid, flat, axis):
    """View of one axis block of a flat face array, shaped as its face grid."""
    start = grid.face_offsets[axis]
    stop = grid.face_offsets[axis + 1]
    return flat[start:stop].reshape(face_shape(grid, axis))


def create_face_field(grid, value=0.0, dtype=np.float64):
    """Allocate a staggered field as three component arrays filled with value."""
    return [np.full(face_shape(grid, axis), value, dtype=dtype) for axis in range(3)]


def pack_faces(grid, components, dtype=np.float64):
    """Pack (u, v, w) component arrays into one contiguous flat face array."""
    flat = np.empty(n_faces(grid), dtype=dtype)
    for axis in range(3):
        face_component(grid, flat, axis)[...] = components[axis]
    return flat


def unpack_faces(grid, flat, components):
    """Write a flat face array back into (u, v, w) in place."""
    for axis in range(3):
        np.copyto(components[axis], face_component(grid, flat, axis), casting="unsafe")


def cell_centers(grid):
    """World positions of all cell centres, shape (nx, ny, nz, 3)."""
    axes = [
        grid.origin[a] + grid.dx * (np.arange(grid.cell_shape[a]) + 0.5)
        for a in range(3)
    ]
    X, Y, Z = np.meshgrid(*axes, indexing="ij")
    return np.stack([X, Y, Z], axis=-1)


def face_positions(grid, axis):
    """World positions of the faces of one axis, shape face_shape + (3,)."""
    axes = []
    for a in range(3):
        offset = 0.0 if a == axis else 0.5
        axes.append(grid.origin[a] + grid.dx * (np.arange(grid.face_shapes[axis, a]) + offset))
    X, Y, Z = np.meshgrid(*axes, indexing="ij")
    return np.stack([X, Y, Z], axis=-1)
