"""Supersampled volume fractions of a level set.

Each sample location (cell centre, edge, face) owns a dx-sized cube centred on
it. The volume fraction is the share of samples^3 regularly spaced points inside
that cube where the interpolated level set is non-positive.
"""

import numpy as np
from numba import njit, prange

from .indexing import cell_position, edge_position, face_position, unflatten_edge, unflatten_face
from .level_set import interp_cell_field
from .structured_grid import n_edges, n_faces


@njit(inline="always")
def supersample_fraction(grid, phi, x, y, z, samples):
    """Fraction of the dx cube centred on (x, y, z) inside the level set."""
    dx = grid.dx
    inv = 1.0 / samples
    inside = 0
    for a in range(samples):
        sx = x + dx * ((a + 0.5) * inv - 0.5)
        for b in range(samples):
            sy = y + dx * ((b + 0.5) * inv - 0.5)
            for c in range(samples):
                sz = z + dx * ((c + 0.5) * inv - 0.5)
                if interp_cell_field(grid, phi, sx, sy, sz) <= 0.0:
                    inside += 1
    return inside / (samples * samples * samples)


@njit(parallel=True)
def _center_volumes(grid, phi, samples, out):
    nx, ny, nz = out.shape
    n_cells = nx * ny * nz
    for c in prange(n_cells):
        i = c // (ny * nz)
        j = (c // nz) % ny
        k = c % nz
        x, y, z = cell_position(grid, i, j, k)
        out[i, j, k] = supersample_fraction(grid, phi, x, y, z, samples)
    return out


@njit(parallel=True)
def _edge_volumes(grid, phi, samples, out):
    for e in prange(out.shape[0]):
        axis, i, j, k = unflatten_edge(grid, e)
        x, y, z = edge_position(grid, axis, i, j, k)
        out[e] = supersample_fraction(grid, phi, x, y, z, samples)
    return out


@njit(parallel=True)
def _face_volumes(grid, phi, samples, out):
    for f in prange(out.shape[0]):
        axis, i, j, k = unflatten_face(grid, f)
        x, y, z = face_position(grid, axis, i, j, k)
        out[f] = supersample_fraction(grid, phi, x, y, z, samples)
    return out


def _check_samples(samples):
    if samples < 1:
        raise ValueError(f"Supersampling factor must be at least 1, got {samples}")


def compute_center_volumes(grid, phi, samples=3):
    """Cell-centred volume fractions, shape (nx, ny, nz)."""
    _check_samples(samples)
    phi = np.ascontiguousarray(phi, dtype=np.float64)
    out = np.zeros(phi.shape, dtype=np.float64)
    return _center_volumes(grid, phi, int(samples), out)


def compute_edge_volumes(grid, phi, samples=3):
    """Edge volume fractions as a flat edge array."""
    _check_samples(samples)
    phi = np.ascontiguousarray(phi, dtype=np.float64)
    out = np.zeros(n_edges(grid), dtype=np.float64)
    return _edge_volumes(grid, phi, int(samples), out)


def compute_face_volumes(grid, phi, samples=3):
    """Staggered face volume fractions as a flat face array."""
    _check_samples(samples)
    phi = np.ascontiguousarray(phi, dtype=np.float64)
    out = np.zeros(n_faces(grid), dtype=np.float64)
    return _face_volumes(grid, phi, int(samples), out)
