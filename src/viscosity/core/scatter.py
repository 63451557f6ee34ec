from numba import njit, prange


@njit(parallel=True, cache=True)
def scatter_solution(liquid_faces, solution, velocity):
    """
    Write the solved DOF values back into the packed face velocity.
    Faces without a DOF keep their value.
    """
    for dof in prange(liquid_faces.shape[0]):
        velocity[liquid_faces[dof]] = solution[dof]
    return velocity
