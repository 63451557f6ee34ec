"""Velocity profile plotter for viscosity runs."""

import matplotlib.pyplot as plt
import seaborn as sns
import pandas as pd
import numpy as np

COORDINATES = ("x", "y", "z")


def extract_profile(fields, axis, along, through):
    """Extract one velocity component along a grid line.

    Parameters
    ----------
    fields : pd.DataFrame
        Output of VelocityFields.to_dataframe().
    axis : int
        Velocity component to extract.
    along : str
        Coordinate the line runs along ('x', 'y' or 'z').
    through : sequence of 3 float
        A point the line should pass through. The nearest face line of the
        requested component is used.

    Returns
    -------
    pd.DataFrame
        Rows of the selected faces sorted by the `along` coordinate.
    """
    if along not in COORDINATES:
        raise ValueError(f"along must be one of {COORDINATES}, got {along!r}")

    profile = fields[fields["axis"] == axis]
    for name, value in zip(COORDINATES, through):
        if name == along:
            continue
        available = np.unique(profile[name].values)
        nearest = available[np.argmin(np.abs(available - value))]
        profile = profile[np.isclose(profile[name], nearest)]

    return profile.sort_values(along).reset_index(drop=True)


class ProfilePlotter:
    """Plotter for viscosity solve results.

    Parameters
    ----------
    runs : dict or list of dict
        Each run is a dict with 'fields' (DataFrame from
        VelocityFields.to_dataframe()), optionally 'time_series' (DataFrame from
        TimeSeries.to_dataframe()) and 'label'.

    Attributes
    ----------
    fields : pd.DataFrame
        Face fields of all runs, with a 'run' column.
    time_series : pd.DataFrame
        Per-call solver diagnostics of all runs, with a 'run' column.
    """

    def __init__(self, runs):
        # Normalize to list
        if not isinstance(runs, list):
            runs = [runs]

        fields_list = []
        time_series_list = []
        for n, run in enumerate(runs):
            label = run.get("label", f"run {n}")
            fields_list.append(run["fields"].assign(run=label))
            if run.get("time_series") is not None:
                time_series_list.append(
                    run["time_series"].assign(run=label, call=lambda df: range(len(df)))
                )

        self.fields = pd.concat(fields_list, ignore_index=True)
        self.time_series = (
            pd.concat(time_series_list, ignore_index=True) if time_series_list else None
        )

    def plot_profile(self, axis, along, through, output_path=None):
        """Plot one velocity component along a grid line for every run.

        Parameters
        ----------
        axis : int
            Velocity component.
        along : str
            Coordinate the line runs along.
        through : sequence of 3 float
            Point the line passes through.
        output_path : str or Path, optional
            Path to save figure. If None, figure is not saved.
        """
        fig, ax = plt.subplots(figsize=(7, 5))

        for label, run_fields in self.fields.groupby("run", sort=False):
            profile = extract_profile(run_fields, axis, along, through)
            ax.plot(profile[along], profile["velocity"], marker="o", linewidth=2, label=label)

        ax.set_xlabel(along)
        ax.set_ylabel(f"velocity component {axis}")
        ax.set_title("Velocity Profile", fontweight="bold")
        ax.grid(True, alpha=0.3)
        ax.legend()
        plt.tight_layout()

        if output_path:
            plt.savefig(output_path, bbox_inches="tight", dpi=300)
            print(f"Profile plot saved to: {output_path}")

    def plot_solver_history(self, output_path=None):
        """Plot CG iterations per call using seaborn.

        Parameters
        ----------
        output_path : str or Path, optional
            Path to save figure. If None, figure is not saved.
        """
        if self.time_series is None:
            raise ValueError("No solver history loaded.")

        n_runs = self.time_series["run"].nunique()
        g = sns.relplot(
            data=self.time_series,
            x="call",
            y="iterations",
            hue="run" if n_runs > 1 else None,
            kind="line",
            marker="o",
            height=5,
            aspect=1.6,
            legend="auto" if n_runs > 1 else False,
        )
        g.ax.grid(True, alpha=0.3)
        g.ax.set_xlabel("Call")
        g.ax.set_ylabel("CG iterations")
        g.ax.set_title("Solver History", fontweight="bold")

        if output_path:
            g.savefig(output_path, bbox_inches="tight", dpi=300)
            print(f"Solver history plot saved to: {output_path}")
