"""hzcosmo - Cosmological distances for supernova simulations.

This package evaluates and inverts the distance-redshift relation used by
a supernova light-curve simulation:

- H(z) from analytic wCDM (CPL w0-wa) or from a tabulated map
- Curvature-corrected comoving and luminosity distances
- Distance modulus, optionally with a dipole (tilted-universe) anisotropy
- Inversion of a distance modulus back to redshift
- Volume elements and integrated star formation
- Exact heliocentric <-> CMB redshift translation

Key modules:
    hubble: CosmologyModel with analytic or tabulated H(z)
    hzfile: Two-column H(z) file reader/writer
    quadrature: Fixed-resolution midpoint integrals
    distances: DistanceCalculator
    anisotropy: Dipole deceleration model
    inversion: ModulusInverter
    restframe: FrameTranslator
    star_formation: BG03 and MD14 rate densities
    legacy: Positional-argument adapters
    plots: Diagnostic figures

Example usage:
    >>> from hzcosmo import CosmologyParameters, CosmologyModel, DistanceCalculator
    >>> params = CosmologyParameters(H0=70.0, Omega_m=0.3, Omega_L=0.7)
    >>> calc = DistanceCalculator(CosmologyModel.analytic(params))
    >>> print(f"mu(z=0.5) = {calc.distance_modulus(0.5):.3f}")
"""

__version__ = "1.0.0"

# Configuration
from .utils.config import (
    CosmologyParameters,
    AnisotropyParameters,
    NumericalConfig,
)
from .utils.constants import (
    KM_UNITS,
    CMB_DIPOLE,
    ANISOTROPY_APEX,
    ZMAX_SNANA,
)
from .utils.errors import (
    ErrorKind,
    HzCosmoError,
    MapFormatError,
    MapDomainError,
    InvalidOptionError,
    CoordinateSystemError,
    HzFileError,
    ConvergenceError,
)

# H(z) models
from .hubble import (
    CosmologyModel,
    AnalyticHubble,
    TabulatedHubble,
    RedshiftMap,
)
from .hzfile import read_hz_file, write_hz_file

# Integrals and distances
from .quadrature import QuadratureEngine
from .anisotropy import AnisotropyModel, angular_separation
from .distances import DistanceCalculator
from .inversion import ModulusInverter, InversionResult

# Frames and rates
from .restframe import FrameTranslator, RestFrameDefinition
from .star_formation import sfr_bg03, sfr_md14

__all__ = [
    # Configuration
    "CosmologyParameters",
    "AnisotropyParameters",
    "NumericalConfig",
    "KM_UNITS",
    "CMB_DIPOLE",
    "ANISOTROPY_APEX",
    "ZMAX_SNANA",
    # Errors
    "ErrorKind",
    "HzCosmoError",
    "MapFormatError",
    "MapDomainError",
    "InvalidOptionError",
    "CoordinateSystemError",
    "HzFileError",
    "ConvergenceError",
    # H(z)
    "CosmologyModel",
    "AnalyticHubble",
    "TabulatedHubble",
    "RedshiftMap",
    "read_hz_file",
    "write_hz_file",
    # Distances
    "QuadratureEngine",
    "AnisotropyModel",
    "angular_separation",
    "DistanceCalculator",
    "ModulusInverter",
    "InversionResult",
    # Frames and rates
    "FrameTranslator",
    "RestFrameDefinition",
    "sfr_bg03",
    "sfr_md14",
]
