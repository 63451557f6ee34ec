"""Viscosity solver framework.

Solver Hierarchy:
-----------------
ViscositySolver (configuration + diagnostics around viscosity_step)
"""

from .viscosity_solver import ViscositySolver
from datastructures import (
    Info,
    ViscosityInfo,
    ViscosityReport,
    TimeSeries,
    VelocityFields,
)

__all__ = [
    # Solver
    "ViscositySolver",
    # Configurations
    "Info",
    "ViscosityInfo",
    # Data structures
    "ViscosityReport",
    "TimeSeries",
    "VelocityFields",
]
