"""Cosmological distances from a ``CosmologyModel``.

Implements:
- Comoving distance with curvature closure, over z or over scale factor
- Luminosity distance and distance modulus (isotropic or dipole)
- Volume element dV/dz and its integrals

The line-of-sight integral S = H0 int dz/H(z) is dimensionless. With
K = 1 - Om - OL and k = sqrt(|K|):

    r = sin(k S)/k    closed  (K < 0)
    r = sinh(k S)/k   open    (K > 0)
    r = S             flat

and the distance is r c/H0 in Mpc.
"""

from typing import Optional
import numpy as np

from .anisotropy import AnisotropyModel, make_anisotropy
from .hubble import CosmologyModel
from .quadrature import QuadratureEngine, VOLUME_UNWEIGHTED, VOLUME_Z_WEIGHTED
from .utils.config import AnisotropyParameters
from .utils.constants import KM_UNITS


class DistanceCalculator:
    """Calculate distances, moduli and volumes for one cosmology.

    Args:
        model: Cosmology providing H(z)
        anisotropy: Optional dipole model; used for the distance modulus
            when its ``enabled`` flag is set
    """

    def __init__(
        self,
        model: CosmologyModel,
        anisotropy: Optional[AnisotropyParameters] = None,
    ):
        self.model = model
        self.quadrature = QuadratureEngine(model)
        self.anisotropy: Optional[AnisotropyModel] = make_anisotropy(anisotropy)
        self._c_km_s = KM_UNITS.c_km_s

    def with_anisotropy(self, anisotropy: Optional[AnisotropyParameters]) -> "DistanceCalculator":
        """Calculator for the same cosmology with other anisotropy settings."""
        return DistanceCalculator(self.model, anisotropy)

    def _curvature_closure(self, S: float) -> float:
        """Apply the curvature correction to a dimensionless integral."""
        K = self.model.Omega_k
        sqrt_k = np.sqrt(abs(K))
        tol = self.model.numerics.curvature_tol

        if K < -tol:
            return float(np.sin(sqrt_k * S) / sqrt_k)
        elif K > tol:
            return float(np.sinh(sqrt_k * S) / sqrt_k)
        return S

    def comoving_distance(self, zmin: float, zmax: float) -> float:
        """Curvature-corrected comoving distance between zmin and zmax [Mpc]."""
        S = self.quadrature.hubble_integral(zmin, zmax)
        return self._curvature_closure(S) * self._c_km_s / self.model.H0

    def comoving_distance_a(self, amin: float, amax: float) -> float:
        """Comoving distance integrated over scale factor [Mpc].

        Equal to ``comoving_distance(1/amax - 1, 1/amin - 1)`` up to
        quadrature error.
        """
        S = self.quadrature.hubble_integral_a(amin, amax)
        return self._curvature_closure(S) * self._c_km_s / self.model.H0

    def luminosity_distance(self, z_cmb: float, z_helio: Optional[float] = None) -> float:
        """Isotropic luminosity distance (1 + z_helio) r(0, z_cmb) [Mpc]."""
        if z_helio is None:
            z_helio = z_cmb
        return (1.0 + z_helio) * self.comoving_distance(0.0, z_cmb)

    def distance_modulus(self, z_cmb: float, z_helio: Optional[float] = None) -> float:
        """Distance modulus mu = 5 log10(D_L / 10 pc).

        With an enabled anisotropy model the tilted-universe expansion in
        z_helio replaces the isotropic distance.
        """
        if z_helio is None:
            z_helio = z_cmb

        if self.anisotropy is not None:
            d_L = self.anisotropy.luminosity_distance(z_helio, self.model.H0, self._c_km_s)
        else:
            d_L = self.luminosity_distance(z_cmb, z_helio)

        arg = d_L * KM_UNITS.Mpc_km / (10.0 * KM_UNITS.pc_km)
        return float(5.0 * np.log10(arg))

    def dV_dz(self, z: float) -> float:
        """Volume element c r(z)^2 / H(z) [Mpc^3 per unit z per sr]."""
        r = self.comoving_distance(0.0, z)
        return self._c_km_s * r * r / self.model.H(z)

    def volume_integral(self, zmax: float, opt: int = VOLUME_UNWEIGHTED) -> float:
        """Integral of dV/dz (opt=0) or z dV/dz (opt=1) from 0 to zmax."""
        return self.quadrature.volume_integral(zmax, self.dV_dz, opt)

    def mean_redshift(self, zmax: float) -> float:
        """Volume-weighted mean redshift below zmax."""
        return (
            self.volume_integral(zmax, VOLUME_Z_WEIGHTED)
            / self.volume_integral(zmax, VOLUME_UNWEIGHTED)
        )

    def sfr_integral(self, z: float) -> float:
        """Integrated BG03 star formation up to redshift z (see ``QuadratureEngine``)."""
        return self.quadrature.sfr_integral(z)
