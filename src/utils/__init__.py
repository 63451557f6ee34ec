"""Plotting and path helpers for experiments."""

from pathlib import Path

from .profile_plotter import ProfilePlotter, extract_profile


def get_project_root():
    """Repository root (the directory holding src/)."""
    return Path(__file__).resolve().parents[2]


__all__ = [
    "ProfilePlotter",
    "extract_profile",
    "get_project_root",
]
