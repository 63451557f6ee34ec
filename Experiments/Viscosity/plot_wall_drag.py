"""
Viscous Drag Profile Plots
==========================

This script plots the x velocity above the floor and the solver history from
the results of compute_wall_drag.py.
"""

# %%
# Load Results
# ------------

import pandas as pd

from utils import ProfilePlotter, get_project_root

project_root = get_project_root()
data_dir = project_root / "data" / "Viscosity"
fig_dir = project_root / "figures" / "Viscosity"
fig_dir.mkdir(parents=True, exist_ok=True)

plotter = ProfilePlotter({
    "fields": pd.read_csv(data_dir / "wall_drag_fields.csv"),
    "time_series": pd.read_csv(data_dir / "wall_drag_time_series.csv"),
    "label": "12x12x12",
})

# %%
# Velocity Profile
# ----------------
# x velocity along the vertical line through the centre of the slab.

plotter.plot_profile(axis=0, along="y", through=(6.0, 0.0, 6.5),
                     output_path=fig_dir / "wall_drag_profile.pdf")

# %%
# Solver History
# --------------

plotter.plot_solver_history(output_path=fig_dir / "wall_drag_solver_history.pdf")
