"""Analytic versus tabulated H(z) diagnostics."""

from typing import Optional, Tuple
import numpy as np
from numpy.typing import NDArray

from ..hubble import CosmologyModel


def compute_hz_residual(
    analytic: CosmologyModel,
    tabulated: CosmologyModel,
    z: Optional[NDArray[np.floating]] = None,
    n_points: int = 400,
) -> Tuple[NDArray[np.floating], NDArray[np.floating], NDArray[np.floating], NDArray[np.floating]]:
    """Evaluate both models and their fractional difference.

    Args:
        analytic: Reference model
        tabulated: Model to compare (usually built from a table)
        z: Redshifts; defaults to a uniform grid over the table
        n_points: Grid size when ``z`` is not given

    Returns:
        Tuple of (z, H_analytic, H_tabulated, H_tabulated/H_analytic - 1)
    """
    if z is None:
        z_top = tabulated.z_max if np.isfinite(tabulated.z_max) else analytic.z_max
        if not np.isfinite(z_top):
            raise ValueError("Need explicit redshifts when neither model is tabulated")
        z = np.linspace(0.0, z_top, n_points)

    z = np.asarray(z, dtype=float)
    H_ref = np.asarray(analytic.H(z))
    H_tab = np.asarray(tabulated.H(z))
    return z, H_ref, H_tab, H_tab / H_ref - 1.0


def plot_hz_comparison(
    analytic: CosmologyModel,
    tabulated: CosmologyModel,
    axes=None,
    z: Optional[NDArray[np.floating]] = None,
    figsize: Tuple[float, float] = (8, 7),
):
    """Plot H(z) of two models and their fractional residual.

    Args:
        analytic: Reference model
        tabulated: Model to compare
        axes: Pair of matplotlib axes (H(z), residual); created if None
        z: Redshifts to evaluate at
        figsize: Figure size

    Returns:
        Tuple of matplotlib axes
    """
    import matplotlib.pyplot as plt

    if axes is None:
        fig, axes = plt.subplots(
            2, 1, figsize=figsize, sharex=True, gridspec_kw={"height_ratios": [3, 1]}
        )
    ax_H, ax_res = axes

    z, H_ref, H_tab, residual = compute_hz_residual(analytic, tabulated, z)

    ax_H.plot(z, H_ref, 'k-', lw=2, label=f'{analytic.mode} $H(z)$')
    ax_H.plot(z, H_tab, 'r--', lw=1.5, label=f'{tabulated.mode} $H(z)$')
    ax_H.set_ylabel(r'$H(z)$ [km/s/Mpc]', fontsize=12)
    ax_H.legend(loc='best', fontsize=10)
    ax_H.grid(True, alpha=0.3)

    ax_res.plot(z, 100.0 * residual, 'b-', lw=1.5)
    ax_res.axhline(y=0.0, color='k', ls=':', lw=1)
    ax_res.set_xlabel('Redshift $z$', fontsize=12)
    ax_res.set_ylabel(r'$\Delta H/H$ [%]', fontsize=12)
    ax_res.grid(True, alpha=0.3)

    return ax_H, ax_res
