"""Implicit viscosity solver.

This module wraps viscosity_step() with configuration management and a
per-call diagnostics history for use inside a surrounding simulation loop.
"""

from dataclasses import replace

from datastructures import TimeSeries, VelocityFields, ViscosityInfo
from grids import create_grid_3d
from viscosity import viscosity_step


class ViscositySolver:
    """Implicit viscosity solver on a staggered grid.

    Handles:
    - Configuration management
    - One implicit viscosity update per step() call
    - Diagnostics history across calls

    No field state is kept between calls.

    Parameters
    ----------
    grid : GridData3D, optional
        Grid shared by every input. If not provided, nx, ny, nz and dx are
        taken from kwargs to build one.
    config : ViscosityInfo, optional
        Configuration object. If not provided, kwargs are used to create config.
    **kwargs
        Configuration parameters passed to ViscosityInfo if config is None.
    """

    Config = ViscosityInfo

    def __init__(self, grid=None, config=None, **kwargs):
        if grid is None:
            grid = create_grid_3d(
                nx=kwargs.pop("nx"),
                ny=kwargs.pop("ny"),
                nz=kwargs.pop("nz"),
                dx=kwargs.pop("dx", 1.0),
                origin=kwargs.pop("origin", (0.0, 0.0, 0.0)),
            )
        if config is None:
            config = self.Config(**kwargs)

        self.grid = grid
        self.config = config
        self.metadata = config
        self.time_series = TimeSeries()

    def step(self, dt, surface, velocity, solid_surface, solid_velocity, viscosity):
        """Apply one implicit viscosity update to velocity in place.

        Parameters
        ----------
        dt : float
            Timestep.
        surface : np.ndarray
            Liquid level set at cell centres.
        velocity : sequence of 3 np.ndarray
            Staggered velocity components, updated in place.
        solid_surface : np.ndarray
            Solid level set at cell centres.
        solid_velocity : sequence of 3 np.ndarray
            Staggered solid velocity components.
        viscosity : np.ndarray
            Cell-centred viscosity.

        Returns
        -------
        report : ViscosityReport
        """
        report = viscosity_step(
            self.grid, dt, surface, velocity, solid_surface, solid_velocity, viscosity,
            config=self.config,
        )
        self._store_results(dt, report)
        return report

    def _store_results(self, dt, report):
        """Record the call in self.time_series and self.metadata."""
        self.time_series.append(dt, report)
        self.metadata = replace(
            self.config,
            iterations=report.iterations,
            converged=report.velocity_updated,
            final_residual=report.residual,
        )

    def velocity_fields(self, velocity, labels=None):
        """Flatten a staggered velocity for analysis."""
        return VelocityFields.from_components(self.grid, velocity, labels=labels)
