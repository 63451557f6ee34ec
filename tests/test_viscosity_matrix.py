import numpy as np
import pytest

from conftest import build_system
from grids import create_face_field, create_grid_3d, pack_faces, plane_level_set, sphere_level_set
from viscosity.assembly.viscosity_matrix import MAX_ENTRIES_PER_ROW


@pytest.fixture
def sphere_over_floor():
    grid = create_grid_3d(8, 8, 8)
    rng = np.random.default_rng(1)

    velocity = create_face_field(grid)
    solid_velocity = create_face_field(grid)
    for axis in range(3):
        velocity[axis][...] = rng.standard_normal(velocity[axis].shape)
        solid_velocity[axis][...] = rng.standard_normal(solid_velocity[axis].shape)

    i = np.arange(8)[:, None, None]
    viscosity = np.broadcast_to(1.0 + 0.25 * i, (8, 8, 8)).copy()

    return {
        "grid": grid,
        "dt": 0.05,
        "surface": sphere_level_set(grid, center=(4.0, 4.0, 4.0), radius=2.5),
        "velocity": velocity,
        "solid_surface": plane_level_set(grid, point=(0.0, 2.5, 0.0), normal=(0.0, 1.0, 0.0)),
        "solid_velocity": solid_velocity,
        "viscosity": viscosity,
    }


def test_matrix_is_symmetric_with_positive_diagonal(sphere_over_floor):
    system = build_system(sphere_over_floor)
    A = system["A"]

    assert A.shape[0] > 0
    asymmetry = abs(A - A.T).max()
    assert asymmetry <= 1e-12 * abs(A).max()
    assert np.all(A.diagonal() > 0.0)


def test_row_slots_never_overflow(sphere_over_floor):
    system = build_system(sphere_over_floor)
    rows_per_dof = np.bincount(system["row"], minlength=system["A"].shape[0])
    assert rows_per_dof.max() <= MAX_ENTRIES_PER_ROW
    # Every row carries its diagonal entry
    assert np.all(rows_per_dof >= 1)


def test_initial_guess_is_current_velocity(sphere_over_floor):
    system = build_system(sphere_over_floor)
    packed = pack_faces(sphere_over_floor["grid"], sphere_over_floor["velocity"])
    np.testing.assert_array_equal(system["x0"], packed[system["liquid_faces"]])


def test_zero_viscosity_leaves_only_inertia(sphere_over_floor):
    sphere_over_floor["viscosity"] = np.zeros((8, 8, 8))
    system = build_system(sphere_over_floor)

    np.testing.assert_array_equal(system["row"], system["col"])
    face_volumes = system["face_volumes"][system["liquid_faces"]]
    np.testing.assert_allclose(system["A"].diagonal(), face_volumes)
    np.testing.assert_allclose(system["b"], face_volumes * system["x0"])


def test_uniform_velocity_is_in_equilibrium(resting_box):
    system = build_system(resting_box)
    residual = system["A"] @ system["x0"] - system["b"]
    assert np.abs(residual).max() <= 1e-12 * np.abs(system["b"]).max()


def test_solid_velocity_enters_rhs(wall_drag):
    still = build_system(wall_drag)

    wall_drag["solid_velocity"][0][...] = 1.0
    moving = build_system(wall_drag)

    np.testing.assert_array_equal(still["data"], moving["data"])
    assert np.all(moving["b"] >= still["b"])
    assert np.any(moving["b"] > still["b"])
