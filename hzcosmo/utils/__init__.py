"""hzcosmo utility modules."""

from .constants import (
    PhysicalConstants,
    DipoleApex,
    KM_UNITS,
    LIGHT_KM_S,
    PC_KM,
    MPC_KM,
    CMB_DIPOLE,
    ANISOTROPY_APEX,
    ZMAX_SNANA,
)
from .config import (
    CosmologyParameters,
    AnisotropyParameters,
    NumericalConfig,
    DEFAULT_NUMERICS,
)
from .errors import (
    ErrorKind,
    HzCosmoError,
    MapFormatError,
    MapDomainError,
    InvalidOptionError,
    CoordinateSystemError,
    HzFileError,
    ConvergenceError,
)

__all__ = [
    "PhysicalConstants",
    "DipoleApex",
    "KM_UNITS",
    "LIGHT_KM_S",
    "PC_KM",
    "MPC_KM",
    "CMB_DIPOLE",
    "ANISOTROPY_APEX",
    "ZMAX_SNANA",
    "CosmologyParameters",
    "AnisotropyParameters",
    "NumericalConfig",
    "DEFAULT_NUMERICS",
    "ErrorKind",
    "HzCosmoError",
    "MapFormatError",
    "MapDomainError",
    "InvalidOptionError",
    "CoordinateSystemError",
    "HzFileError",
    "ConvergenceError",
]
