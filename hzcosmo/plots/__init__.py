"""Diagnostic figures for hzcosmo."""

from .hz_comparison import compute_hz_residual, plot_hz_comparison

__all__ = [
    "compute_hz_residual",
    "plot_hz_comparison",
]
