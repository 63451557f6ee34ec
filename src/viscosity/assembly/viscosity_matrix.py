import numpy as np
from numba import njit, prange

from grids.indexing import cell_to_face, edge_index, edge_to_face, face_index, \
    face_index_checked, face_to_cell, face_to_edge, unflatten_face
from viscosity.discretization.stress.stress_stencil import add_stencil_term, stress_coefficient

# 4 normal-stress terms, 16 shear-stress terms, 1 diagonal
MAX_ENTRIES_PER_ROW = 21


@njit(parallel=True)
def _fill_row_slots(
    grid,
    labels,
    dof_index,
    liquid_faces,
    center_volumes,
    edge_volumes,
    face_volumes,
    velocity,
    solid_velocity,
):
    n_dofs = liquid_faces.shape[0]

    slot_cols = np.zeros((n_dofs, MAX_ENTRIES_PER_ROW), dtype=np.int64)
    slot_data = np.zeros((n_dofs, MAX_ENTRIES_PER_ROW), dtype=np.float64)
    slot_count = np.zeros(n_dofs, dtype=np.int64)
    b = np.zeros(n_dofs, dtype=np.float64)
    x0 = np.zeros(n_dofs, dtype=np.float64)

    for row in prange(n_dofs):
        f = liquid_faces[row]
        axis, i, j, k = unflatten_face(grid, f)
        cols = slot_cols[row]
        data = slot_data[row]
        cursor = 0

        # Old velocity is the initial guess
        x0[row] = velocity[f]

        # —— inertia (face control volume) ——
        face_volume = face_volumes[f]
        rhs = face_volume * velocity[f]
        diagonal = face_volume

        # —— normal stress on the two cells either side of the face ——
        for divergence_direction in range(2):
            ci, cj, ck = face_to_cell(axis, divergence_direction, i, j, k)
            cell_volume = center_volumes[ci, cj, ck]
            if cell_volume > 0.0:
                for gradient_direction in range(2):
                    ai, aj, ak = cell_to_face(axis, gradient_direction, ci, cj, ck)
                    adjacent = face_index(grid, axis, ai, aj, ak)
                    coefficient = stress_coefficient(
                        divergence_direction, gradient_direction, cell_volume
                    )
                    cursor, d_diag, d_rhs = add_stencil_term(
                        row, adjacent, coefficient, labels, dof_index, solid_velocity,
                        cols, data, cursor,
                    )
                    diagonal += d_diag
                    rhs += d_rhs

        # —— shear stress on the four edges bounding the face ——
        for edge_axis in range(3):
            if edge_axis == axis:
                continue
            for divergence_direction in range(2):
                ei, ej, ek = face_to_edge(axis, edge_axis, divergence_direction, i, j, k)
                edge_volume = edge_volumes[edge_index(grid, edge_axis, ei, ej, ek)]
                if not edge_volume > 0.0:
                    continue
                for gradient_axis in range(3):
                    if gradient_axis == edge_axis:
                        continue
                    gradient_face_axis = 3 - gradient_axis - edge_axis
                    for gradient_direction in range(2):
                        gi, gj, gk = edge_to_face(
                            edge_axis, gradient_face_axis, gradient_direction, ei, ej, ek
                        )
                        gradient_face = face_index_checked(grid, gradient_face_axis, gi, gj, gk)
                        coefficient = stress_coefficient(
                            divergence_direction, gradient_direction, edge_volume
                        )
                        cursor, d_diag, d_rhs = add_stencil_term(
                            row, gradient_face, coefficient, labels, dof_index, solid_velocity,
                            cols, data, cursor,
                        )
                        diagonal += d_diag
                        rhs += d_rhs

        cols[cursor] = row
        data[cursor] = diagonal
        slot_count[row] = cursor + 1
        b[row] = rhs

    return slot_cols, slot_data, slot_count, b, x0


@njit(cache=True)
def _merge_row_slots(slot_cols, slot_data, slot_count):
    """Concatenate the per-row triplet slots in row order."""
    n_dofs = slot_count.shape[0]
    nnz = 0
    for r in range(n_dofs):
        nnz += slot_count[r]

    row = np.empty(nnz, dtype=np.int64)
    col = np.empty(nnz, dtype=np.int64)
    data = np.empty(nnz, dtype=np.float64)

    idx = 0
    for r in range(n_dofs):
        for s in range(slot_count[r]):
            row[idx] = r
            col[idx] = slot_cols[r, s]
            data[idx] = slot_data[r, s]
            idx += 1

    return row, col, data


def assemble_viscosity_matrix(
    grid,
    labels,
    dof_index,
    liquid_faces,
    center_volumes,
    edge_volumes,
    face_volumes,
    velocity,
    solid_velocity,
):
    """Assemble COO triplets, RHS and initial guess of the implicit viscosity system.

    Parameters
    ----------
    grid : GridData3D
    labels : ndarray (n_faces,) of int8
        Face labels from classify_faces.
    dof_index, liquid_faces : ndarray of int64
        DOF numbering from number_liquid_faces.
    center_volumes : ndarray (nx, ny, nz)
        Pre-scaled cell-centred control volumes.
    edge_volumes : ndarray (n_edges,)
        Pre-scaled edge control volumes.
    face_volumes : ndarray (n_faces,)
        Face volume fractions.
    velocity, solid_velocity : ndarray (n_faces,)
        Packed staggered fluid and solid velocities.

    Returns
    -------
    row, col, data : ndarray
        COO triplets. Duplicate (row, col) pairs are to be summed.
    b : ndarray (n_dofs,)
        Right-hand side.
    x0 : ndarray (n_dofs,)
        Initial guess (current velocity at each DOF).
    """
    slot_cols, slot_data, slot_count, b, x0 = _fill_row_slots(
        grid,
        labels,
        dof_index,
        liquid_faces,
        center_volumes,
        edge_volumes,
        face_volumes,
        velocity,
        solid_velocity,
    )
    row, col, data = _merge_row_slots(slot_cols, slot_data, slot_count)
    return row, col, data, b, x0
