"""Implicit viscosity package.

This package contains the staggered-grid implicit viscosity solve: face
classification, viscous stress assembly, CG solve and scatter.
"""

# Core step function
from .core.viscosity_step import viscosity_step, check_inputs

# Building blocks
from .classification.face_labels import (
    FaceLabel,
    SOLID_FACE,
    LIQUID_FACE,
    AIR_FACE,
    UNLABELLED_FACE,
    classify_faces,
    number_liquid_faces,
    count_labels,
)
from .assembly.viscosity_matrix import assemble_viscosity_matrix
from .core.prescale import prescale_control_volumes
from .core.scatter import scatter_solution
from .discretization.stress.stress_stencil import stress_coefficient
from .linear_solvers.scipy_solver import scipy_solver

__all__ = [
    "viscosity_step",
    "check_inputs",
    "FaceLabel",
    "SOLID_FACE",
    "LIQUID_FACE",
    "AIR_FACE",
    "UNLABELLED_FACE",
    "classify_faces",
    "number_liquid_faces",
    "count_labels",
    "assemble_viscosity_matrix",
    "prescale_control_volumes",
    "scatter_solution",
    "stress_coefficient",
    "scipy_solver",
]
