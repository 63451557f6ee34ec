from numba import njit, prange

from grids.indexing import edge_position, unflatten_edge
from grids.level_set import interp_cell_field


@njit(parallel=True)
def prescale_control_volumes(grid, center_volumes, edge_volumes, viscosity, dt):
    """
    In-place scaling of the liquid control volumes by the viscous coefficients.

    centre volumes *= 2 * dt / dx^2 * viscosity(cell)
    edge volumes   *= dt / dx^2 * viscosity interpolated at the edge

    Only positive volumes are touched. After this call the arrays hold stencil
    weights, not geometric fractions.
    """
    discrete_scalar = dt / (grid.dx * grid.dx)

    nx, ny, nz = center_volumes.shape
    n_cells = nx * ny * nz
    for c in prange(n_cells):
        i = c // (ny * nz)
        j = (c // nz) % ny
        k = c % nz
        if center_volumes[i, j, k] > 0.0:
            center_volumes[i, j, k] *= 2.0 * discrete_scalar * viscosity[i, j, k]

    for e in prange(edge_volumes.shape[0]):
        if edge_volumes[e] > 0.0:
            axis, i, j, k = unflatten_edge(grid, e)
            x, y, z = edge_position(grid, axis, i, j, k)
            edge_volumes[e] *= discrete_scalar * interp_cell_field(grid, viscosity, x, y, z)

    return center_volumes, edge_volumes
