"""Configuration and metadata data structures."""
from dataclasses import dataclass, asdict
import pandas as pd


@dataclass
class Info:
    """Base solver metadata, config and convergence info.

    Parameters
    ----------
    tolerance : float, optional
        Relative residual tolerance of the linear solve. Default is 1e-3.
    max_iterations : int, optional
        Linear solver iteration cap. Default is None (twice the number of DOFs).
    method : str, optional
        Solver method name. Default is "cg".
    iterations : int, optional
        Iterations performed by the last solve. Default is None.
    converged : bool, optional
        Whether the last solve converged. Default is False.
    final_residual : float, optional
        Relative residual of the last solve. Default is None.
    """
    # Solver config
    tolerance: float = 1e-3
    max_iterations: int = None
    method: str = "cg"

    # Convergence info
    iterations: int = None
    converged: bool = False
    final_residual: float = None

    def __post_init__(self):
        if not self.tolerance > 0:
            raise ValueError(f"tolerance must be positive, got {self.tolerance}")
        if self.max_iterations is not None and self.max_iterations < 1:
            raise ValueError(f"max_iterations must be at least 1, got {self.max_iterations}")

    def to_dataframe(self) -> pd.DataFrame:
        """Convert config/metadata to single-row DataFrame.

        Returns
        -------
        pd.DataFrame
            Single-row DataFrame with all configuration and metadata fields.
        """
        return pd.DataFrame([asdict(self)])


@dataclass
class ViscosityInfo(Info):
    """Viscosity-solve specific parameters.

    Inherits all parameters from Info and adds discretisation parameters.

    Parameters
    ----------
    volume_samples : int, optional
        Supersampling factor per axis of the volume-fraction estimator. Default is 3.
    solid_tolerance : float, optional
        Faces whose interpolated solid level set is at most this value are
        SOLID. Default is 0.0 (plain sign test).
    """
    volume_samples: int = 3
    solid_tolerance: float = 0.0

    def __post_init__(self):
        super().__post_init__()
        if self.volume_samples < 1:
            raise ValueError(f"volume_samples must be at least 1, got {self.volume_samples}")
