"""Data structures for solver configuration and results.

This module defines the configuration, diagnostics and field data structures
of the viscosity solver.
"""

from .config import Info, ViscosityInfo
from .fields import VelocityFields
from .time_series import (
    ViscosityReport,
    TimeSeries,
    STATUS_CONVERGED,
    STATUS_EMPTY,
    STATUS_BUILD_FAILED,
    STATUS_NOT_CONVERGED,
)

__all__ = [
    # Configuration and metadata
    "Info",
    "ViscosityInfo",
    # Fields
    "VelocityFields",
    # Diagnostics
    "ViscosityReport",
    "TimeSeries",
    "STATUS_CONVERGED",
    "STATUS_EMPTY",
    "STATUS_BUILD_FAILED",
    "STATUS_NOT_CONVERGED",
]
