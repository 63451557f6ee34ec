"""Implicit viscosity step on a staggered grid.

This module provides viscosity_step(), which performs one implicit viscous
update of a staggered velocity field in place:

1. supersampled volume fractions of the liquid surface,
2. face classification and DOF numbering,
3. assembly of the symmetric viscous stress system,
4. preconditioned CG solve and scatter of the solution.
"""

import numpy as np
from scipy.sparse import coo_matrix

from datastructures.config import ViscosityInfo
from datastructures.time_series import (
    STATUS_BUILD_FAILED,
    STATUS_CONVERGED,
    STATUS_EMPTY,
    STATUS_NOT_CONVERGED,
    ViscosityReport,
)
from grids.structured_grid import cell_shape, face_shape, pack_faces, unpack_faces
from grids.volumes import compute_center_volumes, compute_edge_volumes, compute_face_volumes
from viscosity.assembly.viscosity_matrix import assemble_viscosity_matrix
from viscosity.classification.face_labels import FaceLabel, classify_faces, count_labels, \
    number_liquid_faces
from viscosity.core.prescale import prescale_control_volumes
from viscosity.core.scatter import scatter_solution
from viscosity.linear_solvers.scipy_solver import SOLVER_BUILD_FAILED, SOLVER_SUCCESS, scipy_solver


def check_inputs(grid, dt, surface, velocity, solid_surface, solid_velocity, viscosity):
    """Raise ValueError unless all inputs share the grid layout."""
    expected = cell_shape(grid)

    if not dt >= 0:
        raise ValueError(f"dt must be non-negative, got {dt}")
    if surface.shape != expected:
        raise ValueError(f"surface has shape {surface.shape}, grid cells are {expected}")
    if solid_surface.shape != surface.shape:
        raise ValueError(
            f"solid surface shape {solid_surface.shape} does not match surface {surface.shape}"
        )
    if viscosity.shape != surface.shape:
        raise ValueError(
            f"viscosity shape {viscosity.shape} does not match surface {surface.shape}"
        )
    if len(velocity) != 3 or len(solid_velocity) != 3:
        raise ValueError("velocity and solid velocity need three staggered components")

    for axis in range(3):
        staggered = face_shape(grid, axis)
        if velocity[axis].shape != staggered:
            raise ValueError(
                f"velocity component {axis} has shape {velocity[axis].shape}, expected {staggered}"
            )
        if solid_velocity[axis].shape != velocity[axis].shape:
            raise ValueError(
                f"solid velocity component {axis} has shape {solid_velocity[axis].shape}, "
                f"expected {velocity[axis].shape}"
            )


def viscosity_step(grid, dt, surface, velocity, solid_surface, solid_velocity, viscosity,
                   config=None):
    """Apply one implicit viscosity update to velocity, in place.

    Parameters
    ----------
    grid : GridData3D
        Grid shared by all inputs.
    dt : float
        Timestep.
    surface : ndarray (nx, ny, nz)
        Liquid level set, negative inside the liquid.
    velocity : sequence of 3 ndarrays
        Staggered velocity components (u, v, w). Updated in place at LIQUID faces.
    solid_surface : ndarray (nx, ny, nz)
        Solid level set, negative inside solids.
    solid_velocity : sequence of 3 ndarrays
        Staggered solid velocity components.
    viscosity : ndarray (nx, ny, nz)
        Cell-centred viscosity coefficient.
    config : ViscosityInfo, optional
        Solver parameters. Defaults to ViscosityInfo().

    Returns
    -------
    report : ViscosityReport
        Label counts, solver status, iterations and residual.
    """
    if config is None:
        config = ViscosityInfo()

    surface = np.asarray(surface)
    solid_surface = np.asarray(solid_surface)
    viscosity = np.asarray(viscosity)
    check_inputs(grid, dt, surface, velocity, solid_surface, solid_velocity, viscosity)

    surface = np.ascontiguousarray(surface, dtype=np.float64)
    solid_surface = np.ascontiguousarray(solid_surface, dtype=np.float64)
    viscosity = np.ascontiguousarray(viscosity, dtype=np.float64)

    #=============================================================================
    # VOLUME WEIGHTS
    #=============================================================================
    samples = config.volume_samples
    center_volumes = compute_center_volumes(grid, surface, samples)
    edge_volumes = compute_edge_volumes(grid, surface, samples)
    face_volumes = compute_face_volumes(grid, surface, samples)

    #=============================================================================
    # FACE LABELS and DOF NUMBERING
    #=============================================================================
    labels = classify_faces(grid, center_volumes, edge_volumes, solid_surface,
                            config.solid_tolerance)
    dof_index, liquid_faces = number_liquid_faces(labels)
    n_dofs = liquid_faces.shape[0]

    counts = count_labels(labels)
    report = ViscosityReport(
        n_dofs=n_dofs,
        n_solid_faces=counts[FaceLabel.SOLID],
        n_liquid_faces=counts[FaceLabel.LIQUID],
        n_air_faces=counts[FaceLabel.AIR],
    )

    if n_dofs == 0:
        report.status = STATUS_EMPTY
        return report

    #=============================================================================
    # ASSEMBLE
    #=============================================================================
    prescale_control_volumes(grid, center_volumes, edge_volumes, viscosity, float(dt))

    packed_velocity = pack_faces(grid, velocity)
    packed_solid_velocity = pack_faces(grid, solid_velocity)

    row, col, data, b, x0 = assemble_viscosity_matrix(
        grid, labels, dof_index, liquid_faces,
        center_volumes, edge_volumes, face_volumes,
        packed_velocity, packed_solid_velocity,
    )
    A = coo_matrix((data, (row, col)), shape=(n_dofs, n_dofs)).tocsr()

    #=============================================================================
    # SOLVE and SCATTER
    #=============================================================================
    x, info, iterations, residual = scipy_solver(
        A, b, x0=x0, tolerance=config.tolerance, max_iterations=config.max_iterations
    )
    report.iterations = iterations
    report.residual = residual

    if info == SOLVER_BUILD_FAILED:
        print("   Solver failed to build")
        report.status = STATUS_BUILD_FAILED
        return report

    if info != SOLVER_SUCCESS:
        print("   Solver failed to converge")
        print(f"    Solver iterations:     {iterations}")
        print(f"    Solver error: {residual:.6e}")
        report.status = STATUS_NOT_CONVERGED
        return report

    print(f"    Solver iterations:     {iterations}")
    print(f"    Solver error: {residual:.6e}")

    scatter_solution(liquid_faces, x, packed_velocity)
    unpack_faces(grid, packed_velocity, velocity)

    report.status = STATUS_CONVERGED
    return report
