import numpy as np
import pandas as pd
import pytest

from datastructures import STATUS_CONVERGED, STATUS_NOT_CONVERGED, ViscosityInfo, ViscosityReport
from grids import n_faces
from simulation import ViscositySolver
from simulation.scenes import create_resting_box_scene, create_wall_drag_scene
from utils import extract_profile


def test_solver_builds_grid_and_config_from_kwargs():
    solver = ViscositySolver(nx=4, ny=5, nz=6, dx=0.5, tolerance=1e-6, volume_samples=2)

    assert tuple(solver.grid.cell_shape) == (4, 5, 6)
    assert solver.grid.dx == 0.5
    assert isinstance(solver.config, ViscosityInfo)
    assert solver.config.tolerance == 1e-6
    assert solver.config.volume_samples == 2


def test_step_records_history_and_metadata():
    scene = create_resting_box_scene(n=4)
    grid = scene.pop("grid")
    solver = ViscositySolver(grid=grid)

    for _ in range(2):
        report = solver.step(**scene)
        assert report.status == STATUS_CONVERGED

    history = solver.time_series.to_dataframe()
    assert len(history) == 2
    assert list(history["status"]) == [STATUS_CONVERGED] * 2
    assert solver.metadata.converged
    assert solver.metadata.iterations == 0
    # Configuration is not mutated by a step
    assert solver.config.iterations is None


def test_failed_step_is_recorded():
    scene = create_wall_drag_scene(n=8)
    grid = scene.pop("grid")
    solver = ViscositySolver(grid=grid, tolerance=1e-12, max_iterations=1)

    report = solver.step(**scene)

    assert report.status == STATUS_NOT_CONVERGED
    assert not solver.metadata.converged
    assert solver.time_series.status == [STATUS_NOT_CONVERGED]


def test_velocity_fields_and_profile():
    scene = create_wall_drag_scene(n=8)
    grid = scene.pop("grid")
    solver = ViscositySolver(grid=grid, tolerance=1e-8)
    solver.step(**scene)

    fields = solver.velocity_fields(scene["velocity"]).to_dataframe()
    assert len(fields) == n_faces(grid)
    assert list(fields.columns) == ["x", "y", "z", "axis", "velocity"]

    profile = extract_profile(fields, axis=0, along="y", through=(4.0, 0.0, 3.4))
    assert len(profile) == 8
    assert np.all(np.diff(profile["y"]) > 0)
    np.testing.assert_allclose(profile["x"], 4.0)
    np.testing.assert_allclose(profile["z"], 3.5)
    np.testing.assert_allclose(profile["velocity"], scene["velocity"][0][4, :, 3])


def test_extract_profile_rejects_unknown_coordinate():
    fields = pd.DataFrame({"x": [0.0], "y": [0.0], "z": [0.0], "axis": [0], "velocity": [1.0]})
    with pytest.raises(ValueError):
        extract_profile(fields, axis=0, along="t", through=(0.0, 0.0, 0.0))


# ──────────────────────────────────────────────────────────────────────────────
# Data structures
# ──────────────────────────────────────────────────────────────────────────────
@pytest.mark.parametrize(
    "kwargs", [{"tolerance": 0.0}, {"max_iterations": 0}, {"volume_samples": 0}]
)
def test_config_validation(kwargs):
    with pytest.raises(ValueError):
        ViscosityInfo(**kwargs)


def test_config_defaults_and_dataframe():
    config = ViscosityInfo()
    assert config.tolerance == 1e-3
    assert config.max_iterations is None
    assert config.volume_samples == 3
    assert config.solid_tolerance == 0.0

    df = config.to_dataframe()
    assert len(df) == 1
    assert df.loc[0, "method"] == "cg"


def test_report_dataframe():
    report = ViscosityReport(n_dofs=3, n_solid_faces=1, n_liquid_faces=3, n_air_faces=5)
    assert not report.velocity_updated

    report.status = STATUS_CONVERGED
    assert report.velocity_updated
    assert report.to_dataframe().loc[0, "n_dofs"] == 3
