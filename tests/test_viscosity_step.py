import numpy as np
import pytest

from datastructures import (
    STATUS_BUILD_FAILED,
    STATUS_CONVERGED,
    STATUS_EMPTY,
    STATUS_NOT_CONVERGED,
    ViscosityInfo,
)
from grids import create_face_field, create_grid_3d
from simulation.scenes import create_wall_drag_scene
from viscosity import viscosity_step


def run_step(scene, config=None):
    return viscosity_step(
        scene["grid"], scene["dt"], scene["surface"], scene["velocity"],
        scene["solid_surface"], scene["solid_velocity"], scene["viscosity"],
        config=config,
    )


def snapshot(velocity):
    return [component.copy() for component in velocity]


def assert_velocity_equal(velocity, reference):
    for component, expected in zip(velocity, reference):
        np.testing.assert_array_equal(component, expected)


# ──────────────────────────────────────────────────────────────────────────────
# Scenarios
# ──────────────────────────────────────────────────────────────────────────────
def test_free_surface_block_keeps_uniform_velocity(resting_box):
    report = run_step(resting_box)

    assert report.status == STATUS_CONVERGED
    assert report.n_dofs > 0
    assert report.iterations == 0
    for component in resting_box["velocity"]:
        np.testing.assert_allclose(component, 2.0)


def test_domain_walls_hold_liquid_at_rest(resting_box):
    # Liquid fills the whole domain, so stencils reach the boundary faces
    resting_box["surface"] = np.full((4, 4, 4), -1.0)

    report = run_step(resting_box)

    assert report.status == STATUS_CONVERGED
    u = resting_box["velocity"][0]
    # Boundary faces are never solved for
    np.testing.assert_array_equal(u[0], 2.0)
    np.testing.assert_array_equal(u[-1], 2.0)
    # Faces next to the walls are slowed down
    assert u[1].min() < 2.0
    assert min(component.min() for component in resting_box["velocity"]) < 1.9


@pytest.mark.parametrize("field, value", [("viscosity", 0.0), ("dt", 0.0)])
def test_no_viscous_coupling_is_identity(wall_drag, field, value):
    if field == "viscosity":
        wall_drag["viscosity"] = np.full((8, 8, 8), value)
    else:
        wall_drag["dt"] = value
    reference = snapshot(wall_drag["velocity"])

    for _ in range(2):
        report = run_step(wall_drag)
        assert report.status == STATUS_CONVERGED
        for component, expected in zip(wall_drag["velocity"], reference):
            np.testing.assert_allclose(component, expected, atol=1e-12)


def test_isolated_face_takes_solid_velocity():
    grid = create_grid_3d(5, 5, 5)
    centers = np.stack(
        np.meshgrid(*[np.arange(5) + 0.5] * 3, indexing="ij"), axis=-1
    )
    # Positive only in a small ball around the x face (2, 2, 2)
    distance = np.linalg.norm(centers - np.array([2.0, 2.5, 2.5]), axis=-1)
    scene = {
        "grid": grid,
        "dt": 1.0,
        "surface": np.full((5, 5, 5), -10.0),
        "velocity": create_face_field(grid, 0.0),
        "solid_surface": 0.7 - distance,
        "solid_velocity": create_face_field(grid, 3.0),
        "viscosity": np.full((5, 5, 5), 1.0e6),
    }

    report = run_step(scene)

    assert report.n_dofs == 1
    assert report.status == STATUS_CONVERGED
    assert scene["velocity"][0][2, 2, 2] == pytest.approx(3.0, abs=1e-4)
    # Every other face is solid or boundary and keeps its value
    scene["velocity"][0][2, 2, 2] = 0.0
    for component in scene["velocity"]:
        assert not np.any(component)


def test_floor_drags_the_slab():
    scene = create_wall_drag_scene(n=8, dt=0.1, viscosity=1.0)
    report = run_step(scene, ViscosityInfo(tolerance=1e-10))
    assert report.status == STATUS_CONVERGED
    assert report.residual <= 1e-9

    # x velocity on the vertical line through the middle of the slab
    profile = scene["velocity"][0][4, 1:6, 3]
    assert np.all(np.diff(profile) >= -1e-9)
    assert profile[0] < 0.99
    assert profile[-1] > 0.99

    # The floor itself is untouched
    np.testing.assert_array_equal(scene["velocity"][0][:, 0, :], 1.0)


def test_co_moving_floor_exerts_no_drag():
    scene = create_wall_drag_scene(n=8, dt=0.1, viscosity=1.0, wall_velocity=1.0)
    report = run_step(scene)

    assert report.status == STATUS_CONVERGED
    np.testing.assert_allclose(scene["velocity"][0], 1.0, atol=1e-9)
    np.testing.assert_allclose(scene["velocity"][1], 0.0, atol=1e-9)


def test_empty_domain_is_a_no_op(resting_box):
    resting_box["surface"] = np.full((4, 4, 4), 1.0)
    reference = snapshot(resting_box["velocity"])

    report = run_step(resting_box)

    assert report.status == STATUS_EMPTY
    assert report.n_dofs == 0
    assert not report.velocity_updated
    assert_velocity_equal(resting_box["velocity"], reference)


# ──────────────────────────────────────────────────────────────────────────────
# Failure paths
# ──────────────────────────────────────────────────────────────────────────────
def test_non_convergence_leaves_velocity_untouched(wall_drag, capsys):
    reference = snapshot(wall_drag["velocity"])

    report = run_step(wall_drag, ViscosityInfo(tolerance=1e-12, max_iterations=1))

    assert report.status == STATUS_NOT_CONVERGED
    assert report.iterations == 1
    assert not report.velocity_updated
    assert_velocity_equal(wall_drag["velocity"], reference)
    assert "Solver failed to converge" in capsys.readouterr().out


def test_non_finite_velocity_fails_to_build(wall_drag, capsys):
    wall_drag["velocity"][0][4, 3, 4] = np.nan
    reference = snapshot(wall_drag["velocity"])

    report = run_step(wall_drag)

    assert report.status == STATUS_BUILD_FAILED
    assert_velocity_equal(wall_drag["velocity"], reference)
    assert "Solver failed to build" in capsys.readouterr().out


# ──────────────────────────────────────────────────────────────────────────────
# Preconditions
# ──────────────────────────────────────────────────────────────────────────────
def test_rejects_mismatched_cell_fields(wall_drag):
    wall_drag["viscosity"] = np.ones((8, 8, 7))
    with pytest.raises(ValueError, match="viscosity"):
        run_step(wall_drag)


def test_rejects_mismatched_velocity(wall_drag):
    wall_drag["velocity"][1] = np.zeros((8, 8, 8))
    with pytest.raises(ValueError, match="velocity component 1"):
        run_step(wall_drag)


def test_rejects_negative_dt(wall_drag):
    wall_drag["dt"] = -0.1
    with pytest.raises(ValueError, match="dt"):
        run_step(wall_drag)
