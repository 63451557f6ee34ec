from numba import njit

from viscosity.classification.face_labels import SOLID_FACE


# ──────────────────────────────────────────────────────────────────────────────
# Coefficients
# ──────────────────────────────────────────────────────────────────────────────
@njit(inline="always", cache=True)
def direction_sign(direction):
    """-1 for the lower neighbour (direction 0), +1 for the upper one."""
    return -1.0 if direction == 0 else 1.0


@njit(inline="always", cache=True)
def stress_coefficient(divergence_direction, gradient_direction, volume):
    """
    Weight of one gradient face in the divergence of one stress sample.

    volume is the pre-scaled control volume of the cell (normal stress) or
    edge (shear stress) the stress lives on.
    """
    return direction_sign(divergence_direction) * direction_sign(gradient_direction) * volume


# ──────────────────────────────────────────────────────────────────────────────
# Dispatch
# ──────────────────────────────────────────────────────────────────────────────
@njit(inline="always")
def add_stencil_term(row, face, coefficient, labels, dof_index, solid_velocity,
                     cols, data, cursor):
    """
    Route one stencil coefficient of DOF row to the matrix, diagonal or RHS.

    face is a flat face index, or -1 outside the face grid.

    LIQUID : off-diagonal entry (row, dof, -coefficient), or folded into the
             diagonal when the face is the row's own face.
    SOLID  : known solid velocity moved to the right-hand side.
    AIR    : no contribution (free surface).

    Returns
    -------
    cursor : int
        Next free position in the row's triplet slot.
    diagonal_increment, rhs_increment : float
    """
    if face < 0:
        return cursor, 0.0, 0.0

    column = dof_index[face]
    if column >= 0:
        if column == row:
            return cursor, -coefficient, 0.0
        cols[cursor] = column
        data[cursor] = -coefficient
        return cursor + 1, 0.0, 0.0

    if labels[face] == SOLID_FACE:
        return cursor, 0.0, coefficient * solid_velocity[face]

    return cursor, 0.0, 0.0
