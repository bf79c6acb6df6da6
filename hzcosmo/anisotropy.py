"""Dipole anisotropy in the deceleration parameter.

Tilted-universe model (Tsagas 2011; Colin et al. 2019):

    q(z) = qm + qd * F(z) * cos(theta),   F(z) = exp(-z/S)

where theta is the angle between the source and the CMB dipole apex. The
angle is recomputed on every call from the parameters passed in.
"""

from dataclasses import dataclass
from typing import Optional
import numpy as np

from .utils.config import AnisotropyParameters
from .utils.constants import ANISOTROPY_APEX, DipoleApex


def angular_separation(
    glon: float,
    glat: float,
    apex: DipoleApex = ANISOTROPY_APEX,
) -> float:
    """Great-circle separation between (glon, glat) and the apex [degrees].

    Haversine form:
        a = sin^2(db/2) + cos(b1) cos(b2) sin^2(dl/2)
        theta = 2 atan2(sqrt(a), sqrt(1 - a))
    """
    lon1, lat1 = np.radians(glon), np.radians(glat)
    lon2, lat2 = np.radians(apex.l_apex), np.radians(apex.b_apex)

    dlon = lon2 - lon1
    dlat = lat2 - lat1
    a = np.sin(dlat / 2) ** 2 + np.cos(lat1) * np.cos(lat2) * np.sin(dlon / 2) ** 2
    a = min(max(a, 0.0), 1.0)

    return float(np.degrees(2.0 * np.arctan2(np.sqrt(a), np.sqrt(1.0 - a))))


@dataclass(frozen=True)
class AnisotropyModel:
    """Evaluates the dipolar deceleration parameter for one configuration."""

    params: AnisotropyParameters
    apex: DipoleApex = ANISOTROPY_APEX

    @property
    def enabled(self) -> bool:
        return self.params.enabled

    def separation(self) -> float:
        """Angle between source and apex [degrees]."""
        return angular_separation(self.params.GLON, self.params.GLAT, self.apex)

    def decay(self, z_helio: float) -> float:
        """Redshift decay F(z) = exp(-z/S) of the dipole."""
        return float(np.exp(-z_helio / self.params.S))

    def q(self, z_helio: float) -> float:
        """Deceleration parameter toward the source at ``z_helio``."""
        p = self.params
        cos_theta = np.cos(np.radians(self.separation()))
        return float(p.qm + p.qd * self.decay(z_helio) * cos_theta)

    def luminosity_distance(self, z_helio: float, H0: float, c_km_s: float) -> float:
        """Second-order Taylor expansion of D_L [Mpc] in the tilted universe.

            D_L = (c z/H0) [1 + (1-q) z/2 - (1 - q - 3q^2 + J0) z^2/6]

        The result is in Mpc and is converted to km by the caller before
        forming the distance modulus. The SNANA dLmag code divides this value
        by 10 pc in km without that conversion; the unit handling and the J0
        term still need confirmation from the anisotropy model owners.
        The expansion peaks and turns negative at high z, where mu is undefined.
        """
        q = self.q(z_helio)
        J0 = self.params.J0
        z = z_helio
        return (c_km_s * z / H0) * (
            1.0 + 0.5 * (1.0 - q) * z - (1.0 - q - 3.0 * q**2 + J0) * z**2 / 6.0
        )


def make_anisotropy(params: Optional[AnisotropyParameters]) -> Optional[AnisotropyModel]:
    """Model for ``params``, or None when anisotropy is absent or disabled."""
    if params is None or not params.enabled:
        return None
    return AnisotropyModel(params)
