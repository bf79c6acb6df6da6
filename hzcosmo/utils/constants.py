"""Physical constants shared by the distance engine and frame translator.

Distances are carried in Mpc, velocities in km/s and H(z) in km/s/Mpc.
"""

from dataclasses import dataclass
from typing import Final


@dataclass(frozen=True)
class PhysicalConstants:
    """Physical constants in the units used throughout hzcosmo."""

    c_km_s: float  # Speed of light [km/s]
    pc_km: float  # Parsec [km]
    seconds_per_year: float  # Calendar year of 365 days [s]

    @property
    def Mpc_km(self) -> float:
        """Megaparsec in km."""
        return 1.0e6 * self.pc_km


KM_UNITS: Final[PhysicalConstants] = PhysicalConstants(
    c_km_s=2.99792458e5,
    pc_km=3.085677581e13,
    seconds_per_year=3600.0 * 24.0 * 365.0,
)

LIGHT_KM_S: Final[float] = KM_UNITS.c_km_s
PC_KM: Final[float] = KM_UNITS.pc_km
MPC_KM: Final[float] = KM_UNITS.Mpc_km


@dataclass(frozen=True)
class DipoleApex:
    """Direction (Galactic) and speed of a dipole velocity."""

    v_mag: float  # km/s
    l_apex: float  # degrees (Galactic longitude)
    b_apex: float  # degrees (Galactic latitude)


# CMB dipole used for heliocentric <-> CMB redshift translation
# (Fixsen et al. 1996 values used by the SNANA simulation).
CMB_DIPOLE: Final[DipoleApex] = DipoleApex(v_mag=371.0, l_apex=264.14, b_apex=48.26)

# Apex used by the tilted-universe anisotropy model (Planck 2018).
ANISOTROPY_APEX: Final[DipoleApex] = DipoleApex(v_mag=369.82, l_apex=264.021, b_apex=48.253)

# Maximum redshift supported by the simulation; default integration ceiling.
ZMAX_SNANA: Final[float] = 4.0

# Redshift below which the frame translator leaves its input untouched.
Z_SENTINEL_THRESHOLD: Final[float] = 1.0e-10

# Maximum number of rows in a tabulated H(z) map.
MXMAP_HZ: Final[int] = 1000

# Reference H0 used by the naive Hubble-law seed of the modulus inverter.
H0_SEED: Final[float] = 70.0
