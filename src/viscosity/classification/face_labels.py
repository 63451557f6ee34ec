"""Material labels for staggered faces and liquid DOF numbering."""

from enum import IntEnum

import numpy as np
from numba import njit, prange

from grids.indexing import face_to_cell, face_to_edge, edge_index, face_position, \
    is_boundary_face, unflatten_face
from grids.level_set import interp_cell_field

SOLID_FACE = 0
LIQUID_FACE = 1
AIR_FACE = 2

UNLABELLED_FACE = -1


class FaceLabel(IntEnum):
    SOLID = SOLID_FACE
    LIQUID = LIQUID_FACE
    AIR = AIR_FACE


@njit(inline="always")
def is_face_in_solve(grid, axis, i, j, k, center_volumes, edge_volumes):
    """A face joins the solve if an adjacent cell or, failing that, an incident edge holds liquid."""
    for direction in range(2):
        ci, cj, ck = face_to_cell(axis, direction, i, j, k)
        if center_volumes[ci, cj, ck] > 0.0:
            return True

    for edge_axis in range(3):
        if edge_axis == axis:
            continue
        for direction in range(2):
            ei, ej, ek = face_to_edge(axis, edge_axis, direction, i, j, k)
            if edge_volumes[edge_index(grid, edge_axis, ei, ej, ek)] > 0.0:
                return True

    return False


@njit(parallel=True)
def classify_faces(grid, center_volumes, edge_volumes, solid_surface, solid_tolerance=0.0):
    """Label every staggered face as SOLID, LIQUID or AIR.

    Faces on the domain boundary are never part of the solve and keep the AIR
    default. Faces in the solve are SOLID when the solid level set at the face
    is at most solid_tolerance.

    Parameters
    ----------
    grid : GridData3D
    center_volumes : ndarray (nx, ny, nz)
        Liquid volume fractions at cell centres.
    edge_volumes : ndarray (n_edges,)
        Liquid volume fractions at edges.
    solid_surface : ndarray (nx, ny, nz)
        Cell-centred solid level set.
    solid_tolerance : float
        Threshold of the solid sign test.

    Returns
    -------
    labels : ndarray (n_faces,) of int8
    """
    n_faces = grid.face_offsets[3]
    labels = np.full(n_faces, AIR_FACE, dtype=np.int8)

    for f in prange(n_faces):
        axis, i, j, k = unflatten_face(grid, f)

        if is_boundary_face(grid, axis, i, j, k):
            continue

        if not is_face_in_solve(grid, axis, i, j, k, center_volumes, edge_volumes):
            continue

        x, y, z = face_position(grid, axis, i, j, k)
        if interp_cell_field(grid, solid_surface, x, y, z) <= solid_tolerance:
            labels[f] = SOLID_FACE
        else:
            labels[f] = LIQUID_FACE

    return labels


@njit(cache=True)
def number_liquid_faces(labels):
    """Assign dense DOF indices to LIQUID faces in flat-face order.

    Runs serially so numbering is reproducible.

    Returns
    -------
    dof_index : ndarray (n_faces,) of int64
        DOF of each face, UNLABELLED_FACE for non-LIQUID faces.
    liquid_faces : ndarray (n_dofs,) of int64
        Flat face index of each DOF.
    """
    n_faces = labels.shape[0]
    dof_index = np.full(n_faces, UNLABELLED_FACE, dtype=np.int64)
    liquid_faces = np.empty(n_faces, dtype=np.int64)

    n_dofs = 0
    for f in range(n_faces):
        if labels[f] == LIQUID_FACE:
            dof_index[f] = n_dofs
            liquid_faces[n_dofs] = f
            n_dofs += 1

    return dof_index, liquid_faces[:n_dofs].copy()


def count_labels(labels):
    """Number of faces per label, as a {FaceLabel: count} dict."""
    counts = np.bincount(labels.astype(np.int64), minlength=len(FaceLabel))
    return {label: int(counts[label]) for label in FaceLabel}
