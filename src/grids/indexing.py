"""Index-only lookups between cells, faces and edges of the staggered grid.

All helpers are pure and deterministic. Index triples are returned as tuples
(i, j, k); flat indices refer to the layouts described in grid_data.py.
"""

from numba import njit


# ──────────────────────────────────────────────────────────────────────────────
# Neighbourhood lookups
# ──────────────────────────────────────────────────────────────────────────────
@njit(inline="always", cache=True)
def shift(i, j, k, axis, offset):
    """Move (i, j, k) by offset along axis."""
    if axis == 0:
        return i + offset, j, k
    if axis == 1:
        return i, j + offset, k
    return i, j, k + offset


@njit(inline="always", cache=True)
def face_to_cell(axis, direction, i, j, k):
    """Cell adjacent to a face. Direction 0 is the cell below the face along axis."""
    if direction == 0:
        return shift(i, j, k, axis, -1)
    return i, j, k


@njit(inline="always", cache=True)
def cell_to_face(axis, direction, i, j, k):
    """Face of a cell along axis. Direction 1 is the face above the cell."""
    if direction == 1:
        return shift(i, j, k, axis, 1)
    return i, j, k


@njit(inline="always", cache=True)
def face_to_edge(face_axis, edge_axis, direction, i, j, k):
    """Edge running along edge_axis that bounds a face of face_axis.

    The two candidate edges differ along the third axis.
    """
    if direction == 1:
        return shift(i, j, k, 3 - face_axis - edge_axis, 1)
    return i, j, k


@njit(inline="always", cache=True)
def edge_to_face(edge_axis, face_axis, direction, i, j, k):
    """Face of face_axis that contains an edge running along edge_axis.

    The two candidate faces differ along the third axis.
    """
    if direction == 0:
        return shift(i, j, k, 3 - edge_axis - face_axis, -1)
    return i, j, k


# ──────────────────────────────────────────────────────────────────────────────
# Flat indexing
# ──────────────────────────────────────────────────────────────────────────────
@njit(inline="always", cache=True)
def _flatten(shapes, offsets, axis, i, j, k):
    ny = shapes[axis, 1]
    nz = shapes[axis, 2]
    return offsets[axis] + (i * ny + j) * nz + k


@njit(inline="always", cache=True)
def _unflatten(shapes, offsets, flat):
    axis = 0
    if flat >= offsets[2]:
        axis = 2
    elif flat >= offsets[1]:
        axis = 1
    local = flat - offsets[axis]
    ny = shapes[axis, 1]
    nz = shapes[axis, 2]
    i = local // (ny * nz)
    rem = local - i * ny * nz
    j = rem // nz
    k = rem - j * nz
    return axis, i, j, k


@njit(inline="always")
def face_index(grid, axis, i, j, k):
    """Flat index of an in-range face."""
    return _flatten(grid.face_shapes, grid.face_offsets, axis, i, j, k)


@njit(inline="always")
def face_index_checked(grid, axis, i, j, k):
    """Flat index of a face, or -1 when it lies outside the face grid."""
    shape = grid.face_shapes[axis]
    if i < 0 or j < 0 or k < 0:
        return -1
    if i >= shape[0] or j >= shape[1] or k >= shape[2]:
        return -1
    return _flatten(grid.face_shapes, grid.face_offsets, axis, i, j, k)


@njit(inline="always")
def unflatten_face(grid, flat):
    """(axis, i, j, k) of a flat face index."""
    return _unflatten(grid.face_shapes, grid.face_offsets, flat)


@njit(inline="always")
def edge_index(grid, axis, i, j, k):
    """Flat index of an in-range edge."""
    return _flatten(grid.edge_shapes, grid.edge_offsets, axis, i, j, k)


@njit(inline="always")
def unflatten_edge(grid, flat):
    """(axis, i, j, k) of a flat edge index."""
    return _unflatten(grid.edge_shapes, grid.edge_offsets, flat)


@njit(inline="always")
def is_boundary_face(grid, axis, i, j, k):
    """Faces at either end of their own axis lie on the domain boundary."""
    if axis == 0:
        index = i
    elif axis == 1:
        index = j
    else:
        index = k
    return index == 0 or index == grid.face_shapes[axis, axis] - 1


# ──────────────────────────────────────────────────────────────────────────────
# World positions
# ──────────────────────────────────────────────────────────────────────────────
@njit(inline="always")
def cell_position(grid, i, j, k):
    dx = grid.dx
    return (
        grid.origin[0] + dx * (i + 0.5),
        grid.origin[1] + dx * (j + 0.5),
        grid.origin[2] + dx * (k + 0.5),
    )


@njit(inline="always")
def face_position(grid, axis, i, j, k):
    dx = grid.dx
    x = grid.origin[0] + dx * (i + (0.0 if axis == 0 else 0.5))
    y = grid.origin[1] + dx * (j + (0.0 if axis == 1 else 0.5))
    z = grid.origin[2] + dx * (k + (0.0 if axis == 2 else 0.5))
    return x, y, z


@njit(inline="always")
def edge_position(grid, axis, i, j, k):
    dx = grid.dx
    x = grid.origin[0] + dx * (i + (0.5 if axis == 0 else 0.0))
    y = grid.origin[1] + dx * (j + (0.5 if axis == 1 else 0.0))
    z = grid.origin[2] + dx * (k + (0.5 if axis == 2 else 0.0))
    return x, y, z
