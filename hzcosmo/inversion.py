"""Invert a distance modulus to CMB-frame redshift."""

import logging
from dataclasses import dataclass
from typing import Optional
import numpy as np

from .distances import DistanceCalculator
from .utils.config import AnisotropyParameters
from .utils.constants import H0_SEED, KM_UNITS
from .utils.errors import ConvergenceError


logger = logging.getLogger(__name__)


@dataclass
class InversionResult:
    """Result of a distance-modulus inversion."""

    z_cmb: float
    n_iter: int
    delta_mu: float  # Residual at the last evaluation [mag]
    z_seed: float
    mu_target: float


def hubble_law_seed(mu: float) -> float:
    """Starting redshift from the naive Hubble law.

    D_L = 10^(mu/5) 1e-5 Mpc, z0 = H0 D_L / c, damped by exp(-z0/6) to
    account for the low-z approximation overestimating z.
    """
    d_L = 10.0 ** (mu / 5.0) * 1.0e-5
    z0 = H0_SEED * d_L / KM_UNITS.c_km_s
    return z0 * np.exp(-z0 / 6.0)


class ModulusInverter:
    """Solve mu(z, z) = mu_target for z with a damped multiplicative update.

    Each step evaluates dmu = mu(z) - mu_target and sets z <- z exp(-dmu/2).
    Since mu is monotone in z this converges without derivatives. The
    loop stops once |dmu| < dmu_converge and fails after max_iter steps.

    Args:
        calculator: Forward model; its anisotropy settings are used as is
    """

    def __init__(self, calculator: DistanceCalculator):
        self.calculator = calculator
        numerics = calculator.model.numerics
        self.dmu_converge = numerics.dmu_converge
        self.max_iter = numerics.max_iter

    @classmethod
    def for_anisotropy(
        cls,
        calculator: DistanceCalculator,
        anisotropy: Optional[AnisotropyParameters],
    ) -> "ModulusInverter":
        """Inverter using ``calculator``'s cosmology with other anisotropy settings."""
        return cls(calculator.with_anisotropy(anisotropy))

    def solve(self, mu_target: float) -> InversionResult:
        """Find z_cmb (with z_helio = z_cmb) reproducing ``mu_target``.

        Raises:
            ConvergenceError: if |dmu| stays above tolerance after max_iter
                steps, or if mu(z) becomes undefined (non-positive D_L)
        """
        z_seed = hubble_law_seed(mu_target)
        z = z_seed
        n_iter = 0
        dmu = np.inf

        while abs(dmu) > self.dmu_converge:
            with np.errstate(invalid="ignore", divide="ignore"):
                mu_trial = self.calculator.distance_modulus(z, z)
            dmu = mu_trial - mu_target
            n_iter += 1

            if not np.isfinite(dmu):
                raise ConvergenceError(
                    mu_target, dmu, z, n_iter,
                    message=f"Distance modulus undefined at ztmp={z:.5f}; cannot solve for zCMB",
                )

            z *= np.exp(-dmu / 2.0)
            if n_iter > self.max_iter:
                raise ConvergenceError(mu_target, dmu, z, n_iter)

        logger.debug(
            f"MU={mu_target:.4f}: zCMB(start)={z_seed:.5f} -> {z:.5f}, "
            f"DMU={abs(dmu):.2e} after {n_iter} iterations"
        )
        return InversionResult(
            z_cmb=float(z),
            n_iter=n_iter,
            delta_mu=float(dmu),
            z_seed=float(z_seed),
            mu_target=mu_target,
        )

    def invert(self, mu_target: float) -> float:
        """Redshift reproducing ``mu_target``."""
        return self.solve(mu_target).z_cmb
