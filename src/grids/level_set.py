"""Cell-centred signed-distance fields.

A level set is a plain (nx, ny, nz) array sampled at cell centres, negative
inside the region it bounds. Interpolation is trilinear and clamps to the
sampled range, so queries outside the grid return the nearest boundary value.
"""

import numpy as np
from numba import njit, prange

from .structured_grid import cell_centers


@njit(inline="always", cache=True)
def _bracket(u, n):
    """Lower index, upper index and weight of u in [0, n - 1]."""
    if u <= 0.0:
        return 0, 0, 0.0
    if u >= n - 1:
        return n - 1, n - 1, 0.0
    i0 = int(np.floor(u))
    return i0, i0 + 1, u - i0


@njit(inline="always")
def interp_cell_field(grid, phi, x, y, z):
    """Trilinear interpolation of a cell-centred field at a world position."""
    inv_dx = 1.0 / grid.dx
    i0, i1, tx = _bracket((x - grid.origin[0]) * inv_dx - 0.5, phi.shape[0])
    j0, j1, ty = _bracket((y - grid.origin[1]) * inv_dx - 0.5, phi.shape[1])
    k0, k1, tz = _bracket((z - grid.origin[2]) * inv_dx - 0.5, phi.shape[2])

    c00 = phi[i0, j0, k0] * (1.0 - tx) + phi[i1, j0, k0] * tx
    c10 = phi[i0, j1, k0] * (1.0 - tx) + phi[i1, j1, k0] * tx
    c01 = phi[i0, j0, k1] * (1.0 - tx) + phi[i1, j0, k1] * tx
    c11 = phi[i0, j1, k1] * (1.0 - tx) + phi[i1, j1, k1] * tx

    c0 = c00 * (1.0 - ty) + c10 * ty
    c1 = c01 * (1.0 - ty) + c11 * ty
    return c0 * (1.0 - tz) + c1 * tz


@njit(parallel=True)
def _sample_points(grid, phi, points, out):
    for p in prange(points.shape[0]):
        out[p] = interp_cell_field(grid, phi, points[p, 0], points[p, 1], points[p, 2])
    return out


def sample_level_set(grid, phi, points):
    """Interpolate phi at an (..., 3) array of world positions."""
    points = np.asarray(points, dtype=np.float64)
    flat_points = np.ascontiguousarray(points.reshape(-1, 3))
    out = np.empty(flat_points.shape[0], dtype=np.float64)
    _sample_points(grid, np.ascontiguousarray(phi, dtype=np.float64), flat_points, out)
    return out.reshape(points.shape[:-1])


# ──────────────────────────────────────────────────────────────────────────────
# Analytic builders
# ──────────────────────────────────────────────────────────────────────────────
def sphere_level_set(grid, center, radius):
    """Signed distance to a sphere, negative inside."""
    X = cell_centers(grid)
    return np.linalg.norm(X - np.asarray(center, dtype=np.float64), axis=-1) - radius


def box_level_set(grid, lower, upper):
    """Signed distance to an axis-aligned box, negative inside."""
    X = cell_centers(grid)
    lower = np.asarray(lower, dtype=np.float64)
    upper = np.asarray(upper, dtype=np.float64)
    center = 0.5 * (lower + upper)
    half = 0.5 * (upper - lower)

    q = np.abs(X - center) - half
    outside = np.linalg.norm(np.maximum(q, 0.0), axis=-1)
    inside = np.minimum(np.max(q, axis=-1), 0.0)
    return outside + inside


def plane_level_set(grid, point, normal):
    """Signed distance to a plane, negative on the side the normal points away from."""
    X = cell_centers(grid)
    normal = np.asarray(normal, dtype=np.float64)
    normal = normal / np.linalg.norm(normal)
    return (X - np.asarray(point, dtype=np.float64)) @ normal
