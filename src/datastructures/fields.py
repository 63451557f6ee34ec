"""Field data structures for solver results."""
from dataclasses import dataclass
import numpy as np
import pandas as pd

from grids import face_positions, face_shape


@dataclass
class VelocityFields:
    """Staggered velocity with face positions, flattened over all faces.

    Parameters
    ----------
    x, y, z : np.ndarray
        World coordinates of every face.
    axis : np.ndarray
        Axis of the velocity component stored on each face.
    velocity : np.ndarray
        Velocity component on each face.
    label : np.ndarray, optional
        Face label (see FaceLabel) of each face. Default is None.
    """
    x: np.ndarray
    y: np.ndarray
    z: np.ndarray
    axis: np.ndarray
    velocity: np.ndarray
    label: np.ndarray = None

    @classmethod
    def from_components(cls, grid, components, labels=None):
        """Flatten (u, v, w) component arrays in flat-face order."""
        positions = np.concatenate(
            [face_positions(grid, a).reshape(-1, 3) for a in range(3)]
        )
        axis = np.concatenate(
            [np.full(int(np.prod(face_shape(grid, a))), a, dtype=np.int64) for a in range(3)]
        )
        velocity = np.concatenate([np.asarray(c, dtype=np.float64).ravel() for c in components])
        return cls(
            x=positions[:, 0],
            y=positions[:, 1],
            z=positions[:, 2],
            axis=axis,
            velocity=velocity,
            label=None if labels is None else np.asarray(labels),
        )

    def to_dataframe(self) -> pd.DataFrame:
        """Convert fields to DataFrame for analysis and plotting.

        Returns
        -------
        pd.DataFrame
            One row per face with columns x, y, z, axis, velocity and,
            when available, label.
        """
        data = {
            "x": self.x,
            "y": self.y,
            "z": self.z,
            "axis": self.axis,
            "velocity": self.velocity,
        }
        if self.label is not None:
            data["label"] = self.label
        return pd.DataFrame(data)
