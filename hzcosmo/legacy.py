"""Positional-argument adapters for callers outside Python.

These mirror the fixed-order entry points of the SNANA C library
(``dlmag_fortc``, ``dvdz_integral``, ``zhelio_zcmb_translator``). Each
one only packs its arguments into the typed structures and calls the core.
"""

from typing import Sequence

from .distances import DistanceCalculator
from .hubble import CosmologyModel
from .restframe.frames import zhelio_zcmb_translate
from .utils.config import CosmologyParameters


def dlmag_fortc(
    zcmb: float,
    zhel: float,
    H0: float,
    OM: float,
    OL: float,
    w0: float,
    wa: float,
) -> float:
    """Isotropic distance modulus for an analytic wCDM cosmology."""
    params = CosmologyParameters(H0=H0, Omega_m=OM, Omega_L=OL, w0=w0, wa=wa)
    calculator = DistanceCalculator(CosmologyModel.analytic(params))
    return calculator.distance_modulus(zcmb, zhel)


def dvdz_integral(opt: int, zmax: float, cospar: Sequence[float]) -> float:
    """Volume integral (opt=0) or its z-moment (opt=1) for COSPAR (H0, OM, OL, w0, wa)."""
    params = CosmologyParameters.from_sequence(cospar)
    calculator = DistanceCalculator(CosmologyModel.analytic(params))
    return calculator.volume_integral(zmax, opt)


def zhelio_zcmb_translator(
    z_input: float,
    ra: float,
    dec: float,
    coord_sys: str,
    opt: int,
) -> float:
    """Heliocentric <-> CMB translation with the default CMB dipole."""
    return zhelio_zcmb_translate(z_input, ra, dec, coord_sys, opt)
