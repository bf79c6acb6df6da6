"""Configuration and parameter classes for hzcosmo."""

from dataclasses import dataclass
from typing import Sequence


@dataclass(frozen=True)
class CosmologyParameters:
    """wCDM cosmological parameters.

    Attributes:
        H0: Hubble constant [km/s/Mpc]
        Omega_m: Matter density today
        Omega_L: Dark energy density today
        w0: Dark energy equation of state today
        wa: CPL evolution, w(a) = w0 + wa(1 - a)

    Curvature is not free: Omega_k = 1 - Omega_m - Omega_L.
    """

    H0: float = 70.0
    Omega_m: float = 0.3
    Omega_L: float = 0.7
    w0: float = -1.0
    wa: float = 0.0

    @property
    def Omega_k(self) -> float:
        """Curvature density parameter."""
        return 1.0 - self.Omega_m - self.Omega_L

    @property
    def h(self) -> float:
        """Dimensionless Hubble parameter."""
        return self.H0 / 100.0

    @classmethod
    def from_sequence(cls, cospar: Sequence[float]) -> "CosmologyParameters":
        """Build from the ordered list (H0, OM, OL, w0, wa)."""
        if len(cospar) != 5:
            raise ValueError(
                f"Expected 5 cosmology parameters (H0, OM, OL, w0, wa), got {len(cospar)}"
            )
        H0, OM, OL, w0, wa = (float(x) for x in cospar)
        return cls(H0=H0, Omega_m=OM, Omega_L=OL, w0=w0, wa=wa)

    def as_tuple(self) -> tuple[float, float, float, float, float]:
        """Ordered (H0, OM, OL, w0, wa)."""
        return (self.H0, self.Omega_m, self.Omega_L, self.w0, self.wa)

    def validate(self) -> tuple[bool, list[str]]:
        """Check parameter ranges.

        Violations are diagnostics only; they never block evaluation.

        Returns:
            Tuple of (is_valid, list of messages)
        """
        errors = []

        if not 30.0 <= self.H0 <= 100.0:
            errors.append(f"H0 = {self.H0} outside [30, 100] km/s/Mpc")

        if not 0.0 <= self.Omega_m <= 1.0:
            errors.append(f"Omega_m = {self.Omega_m} outside [0, 1]")

        if not 0.0 <= self.Omega_L <= 1.0:
            errors.append(f"Omega_L = {self.Omega_L} outside [0, 1]")

        if not -3.0 <= self.wa <= 1.0:
            errors.append(f"wa = {self.wa} outside [-3, 1]")

        return len(errors) == 0, errors


@dataclass(frozen=True)
class AnisotropyParameters:
    """Tilted-universe (dipole) deceleration model.

    q(z) = qm + qd * exp(-z/S) * cos(theta), where theta is the angle
    between the source (GLON, GLAT) and the dipole apex.

    Attributes:
        enabled: Use the dipole distance modulus instead of the isotropic one
        qm: Monopole deceleration parameter
        qd: Dipole amplitude
        S: Redshift decay scale of the dipole
        GLON: Source Galactic longitude [degrees]
        GLAT: Source Galactic latitude [degrees]
        J0: Jerk parameter in the third-order term
    """

    enabled: bool = False
    qm: float = -0.55
    qd: float = 0.0
    S: float = 0.1
    GLON: float = 0.0
    GLAT: float = 0.0
    J0: float = 1.0

    def with_position(self, glon: float, glat: float) -> "AnisotropyParameters":
        """Copy of these parameters for another sky position."""
        return AnisotropyParameters(
            enabled=self.enabled,
            qm=self.qm,
            qd=self.qd,
            S=self.S,
            GLON=glon,
            GLAT=glat,
            J0=self.J0,
        )

    def validate(self) -> tuple[bool, list[str]]:
        """Validate parameter values."""
        errors = []
        if self.S <= 0:
            errors.append(f"Dipole decay scale S = {self.S} must be > 0")
        if not -90.0 <= self.GLAT <= 90.0:
            errors.append(f"GLAT = {self.GLAT} outside [-90, 90] degrees")
        return len(errors) == 0, errors


@dataclass(frozen=True)
class NumericalConfig:
    """Fixed-resolution quadrature and inversion settings."""

    # Midpoint rule: n = max(min_bins, int(bins_per_unit * width))
    bins_per_unit: float = 1000.0
    min_bins: int = 10

    # |Omega_k| below this is treated as flat
    curvature_tol: float = 1.0e-5

    # Distance-modulus inversion
    dmu_converge: float = 1.0e-4
    max_iter: int = 500

    # Tabulated H(z) interpolation ('linear' or 'quadratic')
    interp_kind: str = "linear"

    # Small negative redshift tolerated by the tabulated model
    z_tolerance: float = 1.0e-8

    def validate(self) -> tuple[bool, list[str]]:
        """Validate numerical settings."""
        errors = []

        if self.bins_per_unit <= 0:
            errors.append(f"bins_per_unit = {self.bins_per_unit} must be > 0")

        if self.min_bins < 1:
            errors.append(f"min_bins = {self.min_bins} must be >= 1")

        if self.dmu_converge <= 0:
            errors.append(f"dmu_converge = {self.dmu_converge} must be > 0")

        if self.max_iter < 1:
            errors.append(f"max_iter = {self.max_iter} must be >= 1")

        if self.interp_kind not in ("linear", "quadratic"):
            errors.append(f"Unknown interpolation kind: {self.interp_kind}")

        return len(errors) == 0, errors


DEFAULT_NUMERICS = NumericalConfig()
