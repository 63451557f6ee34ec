import numpy as np
import pytest
from scipy.sparse import coo_matrix

from grids import compute_center_volumes, compute_edge_volumes, compute_face_volumes, pack_faces
from simulation.scenes import create_resting_box_scene, create_wall_drag_scene
from viscosity import (
    assemble_viscosity_matrix,
    classify_faces,
    number_liquid_faces,
    prescale_control_volumes,
)


def build_system(scene, samples=3):
    """Run the pipeline up to the assembled matrix and return every stage."""
    grid = scene["grid"]
    surface = np.asarray(scene["surface"], dtype=np.float64)
    solid_surface = np.asarray(scene["solid_surface"], dtype=np.float64)
    viscosity = np.asarray(scene["viscosity"], dtype=np.float64)

    center_volumes = compute_center_volumes(grid, surface, samples)
    edge_volumes = compute_edge_volumes(grid, surface, samples)
    face_volumes = compute_face_volumes(grid, surface, samples)

    labels = classify_faces(grid, center_volumes, edge_volumes, solid_surface, 0.0)
    dof_index, liquid_faces = number_liquid_faces(labels)

    prescale_control_volumes(grid, center_volumes, edge_volumes, viscosity, float(scene["dt"]))

    row, col, data, b, x0 = assemble_viscosity_matrix(
        grid, labels, dof_index, liquid_faces,
        center_volumes, edge_volumes, face_volumes,
        pack_faces(grid, scene["velocity"]), pack_faces(grid, scene["solid_velocity"]),
    )
    n_dofs = liquid_faces.shape[0]
    A = coo_matrix((data, (row, col)), shape=(n_dofs, n_dofs)).tocsr()

    return {
        "labels": labels,
        "dof_index": dof_index,
        "liquid_faces": liquid_faces,
        "face_volumes": face_volumes,
        "row": row,
        "col": col,
        "data": data,
        "A": A,
        "b": b,
        "x0": x0,
    }


@pytest.fixture
def resting_box():
    return create_resting_box_scene(n=4, dt=0.1, viscosity=1.0, initial_velocity=2.0)


@pytest.fixture
def wall_drag():
    return create_wall_drag_scene(n=8, dt=0.1, viscosity=1.0)
