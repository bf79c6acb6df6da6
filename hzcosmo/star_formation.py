"""Cosmic star-formation-rate density models.

Both models are closed-form functions of redshift and accept scalars or
numpy arrays. Rates are in Msun / yr / Mpc^3.
"""

from typing import Sequence, Union
import numpy as np
from numpy.typing import NDArray


ArrayLike = Union[float, NDArray[np.floating]]

# Baldry & Glazebrook (2003), ApJ 593, 258
BG03_A = 0.0118
BG03_B = 0.08
BG03_C = 3.3
BG03_D = 5.2


def sfr_bg03(z: ArrayLike, H0: float) -> ArrayLike:
    """Baldry & Glazebrook (2003) star-formation history.

        SFR(z) = h (a + b z) / (1 + (z/c)^d),   h = H0 / 100

    Args:
        z: Redshift
        H0: Hubble constant [km/s/Mpc]

    Returns:
        Star-formation-rate density
    """
    h = H0 / 100.0
    return h * (BG03_A + BG03_B * z) / (1.0 + np.power(z / BG03_C, BG03_D))


def sfr_md14(z: ArrayLike, params: Sequence[float]) -> ArrayLike:
    """Madau & Dickinson (2014) form, as used by Strolger et al. (2015).

        SFR(z) = A (1+z)^C / (1 + ((1+z)/B)^D)

    Intended for core-collapse rates; there is no H0 scaling.

    Args:
        z: Redshift
        params: (A, B, C, D)
    """
    A, B, C, D = params[:4]
    z1 = 1.0 + z
    return A * np.power(z1, C) / (1.0 + np.power(z1 / B, D))
