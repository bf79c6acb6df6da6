"""Hubble-parameter models.

A ``CosmologyModel`` evaluates H(z) from exactly one representation:

    AnalyticHubble:   closed-form wCDM with CPL dark energy,
        H(z) = H0 sqrt(Om (1+z)^3 + Ok (1+z)^2 + OL (1+z)^{3(1+w0+wa)} exp(-3 wa z/(1+z)))
    TabulatedHubble:  interpolation of a (z, H) map read from file.

The model always keeps its ``CosmologyParameters``: H0 and the curvature
Omega_k = 1 - Om - OL are needed by the distance closure even when H(z)
itself comes from a table.

Models are immutable once built and can be shared by concurrent readers.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping, Optional, Union
import numpy as np
from numpy.typing import NDArray
from scipy.interpolate import interp1d

from .utils.config import CosmologyParameters, NumericalConfig, DEFAULT_NUMERICS
from .utils.constants import MXMAP_HZ, ZMAX_SNANA
from .utils.errors import MapDomainError, MapFormatError


logger = logging.getLogger(__name__)

ArrayLike = Union[float, NDArray[np.floating]]


def _as_output(z: ArrayLike, values: NDArray[np.floating]) -> ArrayLike:
    """Return a float for scalar input, an array otherwise."""
    if np.ndim(z) == 0:
        return float(values)
    return values


@dataclass(frozen=True, eq=False)
class RedshiftMap:
    """Tabulated H(z), strictly increasing in z, starting at z = 0.

    Attributes:
        z: Redshift grid (CMB frame)
        H: Hubble parameter on the grid [km/s/Mpc]
        metadata: Provenance of the table (e.g. generating COSPAR)
    """

    z: NDArray[np.floating]
    H: NDArray[np.floating]
    metadata: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        z = np.array(self.z, dtype=float)
        H = np.array(self.H, dtype=float)

        if z.ndim != 1 or H.ndim != 1 or z.size != H.size:
            raise MapFormatError(
                "H(z) map needs two 1-D columns of equal length",
                {"len_z": int(z.size), "len_H": int(H.size)},
            )
        if z.size < 2:
            raise MapFormatError("H(z) map needs at least two rows", {"Nzbin": int(z.size)})
        if z.size > MXMAP_HZ:
            raise MapFormatError(
                f"H(z) map has too many rows (max {MXMAP_HZ})", {"Nzbin": int(z.size)}
            )
        if z[0] != 0.0:
            raise MapFormatError(
                f"zCMB_min={z[0]:f}, but must be zero. Check H(z) map.",
                {"zmin": float(z[0])},
            )
        if np.any(np.diff(z) <= 0):
            raise MapFormatError("H(z) map redshifts must be strictly increasing")
        if np.any(H <= 0) or not np.all(np.isfinite(H)):
            raise MapFormatError("H(z) map values must be finite and positive")

        z.setflags(write=False)
        H.setflags(write=False)
        object.__setattr__(self, "z", z)
        object.__setattr__(self, "H", H)
        object.__setattr__(self, "metadata", dict(self.metadata))

    @property
    def n_bins(self) -> int:
        """Number of rows."""
        return int(self.z.size)

    @property
    def z_min(self) -> float:
        return float(self.z[0])

    @property
    def z_max(self) -> float:
        return float(self.z[-1])


@dataclass(frozen=True)
class AnalyticHubble:
    """Closed-form wCDM H(z) with CPL dark energy."""

    params: CosmologyParameters

    def H(self, z: ArrayLike) -> ArrayLike:
        """Hubble parameter H(z) [km/s/Mpc].

        The CPL dark-energy density has the exact solution
        rho_DE(z)/rho_DE(0) = (1+z)^{3(1+w0+wa)} exp(-3 wa z/(1+z)).
        """
        p = self.params
        zz = np.asarray(z, dtype=float)
        zp1 = 1.0 + zz

        argpow = 3.0 * (1.0 + p.w0 + p.wa)
        argexp = -3.0 * p.wa * zz / zp1
        de_evolution = np.power(zp1, argpow) * np.exp(argexp)

        E2 = p.Omega_m * zp1**3 + p.Omega_k * zp1**2 + p.Omega_L * de_evolution
        return _as_output(z, p.H0 * np.sqrt(E2))


@dataclass(frozen=True, eq=False)
class TabulatedHubble:
    """H(z) interpolated from a ``RedshiftMap``."""

    zmap: RedshiftMap
    kind: str = "linear"
    z_tolerance: float = 1.0e-8
    _interp: Any = field(default=None, init=False, repr=False)

    def __post_init__(self):
        if self.kind not in ("linear", "quadratic"):
            raise ValueError(f"Unknown interpolation kind: {self.kind}")
        interp = interp1d(
            self.zmap.z,
            self.zmap.H,
            kind=self.kind,
            bounds_error=False,
            fill_value="extrapolate",
            assume_sorted=True,
        )
        object.__setattr__(self, "_interp", interp)

    def H(self, z: ArrayLike) -> ArrayLike:
        """Interpolated H(z) [km/s/Mpc].

        Raises:
            MapDomainError: if any z lies outside the map
        """
        zz = np.asarray(z, dtype=float)
        lo = self.zmap.z_min - self.z_tolerance
        hi = self.zmap.z_max + self.z_tolerance
        if np.any(zz < lo) or np.any(zz > hi):
            raise MapDomainError(
                "Redshift outside tabulated H(z) map",
                {
                    "z_min_req": float(np.min(zz)),
                    "z_max_req": float(np.max(zz)),
                    "z_map_max": self.zmap.z_max,
                },
            )
        return _as_output(z, self._interp(zz))


HubbleRepresentation = Union[AnalyticHubble, TabulatedHubble]


@dataclass(frozen=True)
class CosmologyModel:
    """Cosmology with a single H(z) representation.

    Use the constructors rather than building directly:

        >>> params = CosmologyParameters(H0=70, Omega_m=0.3, Omega_L=0.7)
        >>> model = CosmologyModel.analytic(params)
        >>> print(f"{model.H(1.0):.2f}")
        123.25
    """

    params: CosmologyParameters
    hubble: HubbleRepresentation
    numerics: NumericalConfig = DEFAULT_NUMERICS

    def __post_init__(self):
        if not isinstance(self.hubble, (AnalyticHubble, TabulatedHubble)):
            raise TypeError(f"Invalid H(z) representation: {type(self.hubble)}")

    # ------------------------------------------------------------------
    # Constructors
    # ------------------------------------------------------------------

    @classmethod
    def analytic(
        cls,
        params: CosmologyParameters,
        numerics: Optional[NumericalConfig] = None,
        verbose: bool = False,
    ) -> "CosmologyModel":
        """Model with closed-form wCDM H(z)."""
        model = cls(params, AnalyticHubble(params), numerics or DEFAULT_NUMERICS)
        if verbose:
            model.log_summary()
        return model

    @classmethod
    def tabulated(
        cls,
        params: CosmologyParameters,
        zmap: RedshiftMap,
        z_ceiling: float = ZMAX_SNANA,
        numerics: Optional[NumericalConfig] = None,
        verbose: bool = False,
    ) -> "CosmologyModel":
        """Model interpolating a tabulated H(z).

        Args:
            params: Reference cosmology (H0 and curvature for the distance closure)
            zmap: Tabulated H(z)
            z_ceiling: Largest redshift any integral will request
            numerics: Numerical settings (interpolation kind)
            verbose: Log a summary of the model

        Raises:
            MapDomainError: if the map does not reach z_ceiling
        """
        numerics = numerics or DEFAULT_NUMERICS
        if zmap.z_max + numerics.z_tolerance < z_ceiling:
            raise MapDomainError(
                "H(z) map does not cover the integration range",
                {"z_map_max": zmap.z_max, "z_ceiling": z_ceiling},
            )
        hubble = TabulatedHubble(zmap, kind=numerics.interp_kind, z_tolerance=numerics.z_tolerance)
        model = cls(params, hubble, numerics)
        if verbose:
            model.log_summary()
        return model

    @classmethod
    def from_file(
        cls,
        params: CosmologyParameters,
        path: Union[str, Path],
        z_ceiling: float = ZMAX_SNANA,
        numerics: Optional[NumericalConfig] = None,
        verbose: bool = False,
    ) -> "CosmologyModel":
        """Model interpolating the two-column H(z) file at ``path``."""
        from .hzfile import read_hz_file

        zmap = read_hz_file(path)
        return cls.tabulated(params, zmap, z_ceiling=z_ceiling, numerics=numerics, verbose=verbose)

    @classmethod
    def debug_selftest(
        cls,
        params: CosmologyParameters,
        path: Union[str, Path],
        z_ceiling: float = ZMAX_SNANA,
        numerics: Optional[NumericalConfig] = None,
        verbose: bool = False,
    ) -> "CosmologyModel":
        """DEBUG ONLY: write H(z) from ``params`` to ``path`` and read it back.

        The returned model is tabulated, so comparing it with
        ``CosmologyModel.analytic(params)`` tests the file reader and the
        interpolation.
        """
        from .hzfile import write_hz_file

        logger.info(f"Debug self-test: writing analytic H(z) to {path}")
        write_hz_file(path, params, zmax=z_ceiling)
        return cls.from_file(params, path, z_ceiling=z_ceiling, numerics=numerics, verbose=verbose)

    # ------------------------------------------------------------------
    # Evaluation
    # ------------------------------------------------------------------

    @property
    def H0(self) -> float:
        """Hubble constant [km/s/Mpc]."""
        return self.params.H0

    @property
    def Omega_k(self) -> float:
        """Curvature density parameter."""
        return self.params.Omega_k

    @property
    def is_tabulated(self) -> bool:
        return isinstance(self.hubble, TabulatedHubble)

    @property
    def mode(self) -> str:
        """'tabulated' or 'analytic'."""
        return "tabulated" if self.is_tabulated else "analytic"

    @property
    def z_max(self) -> float:
        """Largest redshift H(z) can be evaluated at."""
        if isinstance(self.hubble, TabulatedHubble):
            return self.hubble.zmap.z_max
        return np.inf

    def H(self, z: ArrayLike) -> ArrayLike:
        """Hubble parameter H(z) [km/s/Mpc]."""
        return self.hubble.H(z)

    def E(self, z: ArrayLike) -> ArrayLike:
        """Dimensionless Hubble parameter E(z) = H(z)/H0."""
        return self.hubble.H(z) / self.params.H0

    def log_summary(self) -> None:
        """Log the model and warn about out-of-range parameters."""
        p = self.params
        logger.info(f"Cosmology model ({self.mode} H(z))")
        logger.info(f"  H0         = {p.H0:.2f}      # km/s/Mpc")
        logger.info(f"  OM, OL, Ok = {p.Omega_m:7.5f}, {p.Omega_L:7.5f}, {p.Omega_k:7.5f}")
        logger.info(f"  w0, wa     = {p.w0:6.3f}, {p.wa:6.3f}")
        if isinstance(self.hubble, TabulatedHubble):
            zmap = self.hubble.zmap
            logger.info(
                f"  {zmap.n_bins} redshift bins from {zmap.z_min:f} to {zmap.z_max:f}"
            )

        valid, errors = p.validate()
        if not valid:
            for message in errors:
                logger.warning(f"Cosmology parameter check: {message}")
