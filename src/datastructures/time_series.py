"""Per-call diagnostics and their history."""
from dataclasses import dataclass, asdict, field
from typing import List
import pandas as pd

STATUS_CONVERGED = "converged"
STATUS_EMPTY = "empty"
STATUS_BUILD_FAILED = "failed_to_build"
STATUS_NOT_CONVERGED = "failed_to_converge"


@dataclass
class ViscosityReport:
    """Diagnostics of one viscosity solve.

    Parameters
    ----------
    n_dofs : int
        Number of LIQUID faces (unknowns).
    n_solid_faces, n_liquid_faces, n_air_faces : int
        Face label counts.
    status : str
        One of "converged", "empty", "failed_to_build", "failed_to_converge".
    iterations : int
        CG iterations performed.
    residual : float
        Relative residual ||b - A x|| / ||b|| of the solution.
    """
    n_dofs: int
    n_solid_faces: int
    n_liquid_faces: int
    n_air_faces: int
    status: str = STATUS_EMPTY
    iterations: int = 0
    residual: float = 0.0

    @property
    def velocity_updated(self) -> bool:
        """Whether the velocity field was written."""
        return self.status == STATUS_CONVERGED

    def to_dataframe(self) -> pd.DataFrame:
        return pd.DataFrame([asdict(self)])


@dataclass
class TimeSeries:
    """History of viscosity solves, one entry per call.

    Parameters
    ----------
    dt : List[float]
        Timestep of each call.
    n_dofs : List[int]
        Number of unknowns of each call.
    iterations : List[int]
        CG iterations of each call.
    residual : List[float]
        Relative residual of each call.
    status : List[str]
        Outcome of each call.
    """
    dt: List[float] = field(default_factory=list)
    n_dofs: List[int] = field(default_factory=list)
    iterations: List[int] = field(default_factory=list)
    residual: List[float] = field(default_factory=list)
    status: List[str] = field(default_factory=list)

    def append(self, dt: float, report: ViscosityReport):
        self.dt.append(dt)
        self.n_dofs.append(report.n_dofs)
        self.iterations.append(report.iterations)
        self.residual.append(report.residual)
        self.status.append(report.status)

    def to_dataframe(self) -> pd.DataFrame:
        """Convert time series to DataFrame for analysis and plotting.

        Returns
        -------
        pd.DataFrame
            One row per call. Index is the call number.
        """
        return pd.DataFrame(asdict(self))
