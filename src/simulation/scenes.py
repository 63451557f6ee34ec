"""Ready-made viscosity scenes.

Each builder returns a dict with the keyword arguments of
ViscositySolver.step() plus the grid:
grid, dt, surface, velocity, solid_surface, solid_velocity, viscosity.
"""

import numpy as np

from grids import box_level_set, cell_shape, create_face_field, create_grid_3d, plane_level_set

# Level set value used for "no solid anywhere"
FAR_AWAY = 1.0e3


def create_resting_box_scene(n: int = 4, dx: float = 1.0, dt: float = 0.1,
                             viscosity: float = 1.0, initial_velocity: float = 2.0):
    """Liquid block one cell away from every domain wall, no solids.

    The liquid is surrounded by air, so every boundary is a free surface.

    Parameters
    ----------
    n : int
        Cells per axis.
    dx : float
        Cell size.
    dt : float
        Timestep.
    viscosity : float
        Uniform viscosity.
    initial_velocity : float
        Value of every velocity component on every face.
    """
    grid = create_grid_3d(n, n, n, dx=dx)
    shape = cell_shape(grid)

    surface = box_level_set(grid, lower=(dx, dx, dx), upper=((n - 1) * dx,) * 3)

    return {
        "grid": grid,
        "dt": dt,
        "surface": surface,
        "velocity": create_face_field(grid, initial_velocity),
        "solid_surface": np.full(shape, FAR_AWAY),
        "solid_velocity": create_face_field(grid, 0.0),
        "viscosity": np.full(shape, viscosity),
    }


def create_wall_drag_scene(n: int = 8, dx: float = 1.0, dt: float = 0.1,
                           viscosity: float = 1.0, wall_height: float = 1.0,
                           initial_velocity: float = 1.0, wall_velocity: float = 0.0):
    """Liquid slab resting on a planar solid floor.

    The floor is the half-space y < wall_height and moves with wall_velocity
    along x. The slab extends into the floor and is kept two cells away from
    the other domain walls, so its sides and top are free surfaces. Only the x
    component of the liquid starts non-zero.

    Parameters
    ----------
    n : int
        Cells per axis.
    dx : float
        Cell size.
    dt : float
        Timestep.
    viscosity : float
        Uniform viscosity.
    wall_height : float
        Height of the floor surface.
    initial_velocity : float
        Initial x velocity of the liquid.
    wall_velocity : float
        x velocity of the floor.
    """
    grid = create_grid_3d(n, n, n, dx=dx)
    shape = cell_shape(grid)

    surface = box_level_set(
        grid,
        lower=(2 * dx, -dx, 2 * dx),
        upper=((n - 2) * dx, (n - 2) * dx, (n - 2) * dx),
    )
    solid_surface = plane_level_set(grid, point=(0.0, wall_height, 0.0), normal=(0.0, 1.0, 0.0))

    velocity = create_face_field(grid, 0.0)
    velocity[0][...] = initial_velocity
    solid_velocity = create_face_field(grid, 0.0)
    solid_velocity[0][...] = wall_velocity

    return {
        "grid": grid,
        "dt": dt,
        "surface": surface,
        "velocity": velocity,
        "solid_surface": solid_surface,
        "solid_velocity": solid_velocity,
        "viscosity": np.full(shape, viscosity),
    }
