"""
hzcosmo.restframe.frames - Heliocentric <-> CMB redshift translation

This module provides:
1. RestFrameDefinition dataclass for the dipole velocity vector
2. Line-of-sight projection of the dipole toward a source
3. Exact redshift translation between heliocentric and CMB frames

The translation uses the exact relation

    1 + z_cmb = (1 + z_helio) / (1 - v.n/c)

rather than the low-z approximation z_cmb = z_helio + v.n/c.
"""

from dataclasses import dataclass
from typing import Optional, Tuple
import numpy as np

from ..utils.constants import CMB_DIPOLE, LIGHT_KM_S, Z_SENTINEL_THRESHOLD
from ..utils.errors import CoordinateSystemError, InvalidOptionError


HELIO_TO_CMB = 1
CMB_TO_HELIO = -1

EQUATORIAL_SYSTEMS = ("eq", "J2000")
GALACTIC_SYSTEMS = ("gal",)


# =============================================================================
# Rest-Frame Definition
# =============================================================================

@dataclass(frozen=True)
class RestFrameDefinition:
    """
    Our velocity relative to a rest frame.

    Parameters
    ----------
    name : str
        Identifier for this rest frame (e.g., "CMB")
    v_mag : float
        Velocity magnitude [km/s]
    l_apex : float
        Galactic longitude of apex [degrees]
    b_apex : float
        Galactic latitude of apex [degrees]
    """
    name: str
    v_mag: float  # km/s
    l_apex: float  # degrees (Galactic longitude)
    b_apex: float  # degrees (Galactic latitude)

    def get_cartesian_velocity(self) -> np.ndarray:
        """
        Velocity vector in Galactic Cartesian coordinates [km/s].

        x toward GC, y toward rotation, z toward NGP.
        """
        return self.v_mag * unit_vector(self.l_apex, self.b_apex)


def get_cmb_frame() -> RestFrameDefinition:
    """
    Return the Sun's velocity relative to the CMB.

    v = 371 km/s toward (l, b) = (264.14, 48.26) (Fixsen et al. 1996).
    """
    return RestFrameDefinition(
        name="CMB",
        v_mag=CMB_DIPOLE.v_mag,
        l_apex=CMB_DIPOLE.l_apex,
        b_apex=CMB_DIPOLE.b_apex,
    )


# =============================================================================
# Geometry
# =============================================================================

def unit_vector(l_deg: float, b_deg: float) -> np.ndarray:
    """Unit vector toward Galactic (l, b) in degrees."""
    l_rad = np.radians(l_deg)
    b_rad = np.radians(b_deg)
    return np.array([
        np.cos(b_rad) * np.cos(l_rad),
        np.cos(b_rad) * np.sin(l_rad),
        np.sin(b_rad),
    ])


def to_galactic(ra: float, dec: float, coord_sys: str) -> Tuple[float, float]:
    """
    Convert sky coordinates to Galactic (l, b) in degrees.

    Parameters
    ----------
    ra, dec : float
        Longitude / latitude in ``coord_sys`` [degrees]
    coord_sys : str
        'eq' or 'J2000' (FK5 equatorial, equinox J2000) or 'gal'

    Raises
    ------
    CoordinateSystemError
        If ``coord_sys`` is not recognised
    """
    if coord_sys in GALACTIC_SYSTEMS:
        return float(ra), float(dec)

    if coord_sys in EQUATORIAL_SYSTEMS:
        from astropy.coordinates import SkyCoord
        import astropy.units as u

        gal = SkyCoord(ra=ra * u.deg, dec=dec * u.deg, frame="fk5", equinox="J2000").galactic
        return float(gal.l.deg), float(gal.b.deg)

    raise CoordinateSystemError(
        f"Invalid coordSys = '{coord_sys}'",
        {"RA": ra, "DEC": dec},
    )


def compute_vdotn(
    l_sn: float,
    b_sn: float,
    frame: RestFrameDefinition,
) -> float:
    """
    Dipole velocity projected toward the source, in units of c.

    Parameters
    ----------
    l_sn, b_sn : float
        Galactic coordinates of the source [degrees]
    frame : RestFrameDefinition
        Dipole velocity

    Returns
    -------
    float
        v.n/c, positive when the source lies toward the apex
    """
    if frame.v_mag == 0.0:
        return 0.0

    b_rad = np.radians(b_sn)
    b_apex = np.radians(frame.b_apex)
    ss = np.sin(b_rad) * np.sin(b_apex)
    ccc = np.cos(b_rad) * np.cos(b_apex) * np.cos(np.radians(l_sn - frame.l_apex))

    return float(frame.v_mag * (ss + ccc) / LIGHT_KM_S)


# =============================================================================
# Redshift Translation
# =============================================================================

class FrameTranslator:
    """
    Translate redshifts between the heliocentric and CMB frames.

    Parameters
    ----------
    frame : RestFrameDefinition
        Sun's velocity relative to the CMB (default: SNANA CMB dipole)
    """

    def __init__(self, frame: Optional[RestFrameDefinition] = None):
        self.frame = frame or get_cmb_frame()

    def translate(
        self,
        z_input: float,
        ra: float,
        dec: float,
        coord_sys: str = "eq",
        opt: int = HELIO_TO_CMB,
    ) -> float:
        """
        Translate a redshift between frames.

        Parameters
        ----------
        z_input : float
            z_helio if opt > 0, z_cmb if opt < 0
        ra, dec : float
            Source position in ``coord_sys`` [degrees]
        coord_sys : str
            'eq', 'J2000' or 'gal'
        opt : int
            > 0: helio -> CMB;  < 0: CMB -> helio

        Returns
        -------
        float
            Translated redshift. Inputs below 1e-10 (e.g. the -9 "unset"
            flag) are returned unchanged.

        Raises
        ------
        InvalidOptionError
            If opt == 0
        CoordinateSystemError
            If coord_sys is not recognised
        """
        if z_input < Z_SENTINEL_THRESHOLD:
            return z_input

        if opt == 0:
            raise InvalidOptionError(
                "Invalid OPT=0",
                {"z_input": z_input, "RA": ra, "DEC": dec},
            )

        l_gal, b_gal = to_galactic(ra, dec, coord_sys)
        vdotn = compute_vdotn(l_gal, b_gal, self.frame)

        if opt > 0:
            return (1.0 + z_input) / (1.0 - vdotn) - 1.0
        return (1.0 + z_input) * (1.0 - vdotn) - 1.0

    def helio_to_cmb(self, z_helio: float, ra: float, dec: float, coord_sys: str = "eq") -> float:
        """Heliocentric -> CMB-frame redshift."""
        return self.translate(z_helio, ra, dec, coord_sys, HELIO_TO_CMB)

    def cmb_to_helio(self, z_cmb: float, ra: float, dec: float, coord_sys: str = "eq") -> float:
        """CMB-frame -> heliocentric redshift."""
        return self.translate(z_cmb, ra, dec, coord_sys, CMB_TO_HELIO)


_DEFAULT_TRANSLATOR = FrameTranslator()


def zhelio_zcmb_translate(
    z_input: float,
    ra: float,
    dec: float,
    coord_sys: str = "eq",
    opt: int = HELIO_TO_CMB,
) -> float:
    """Translate with the default CMB dipole (see ``FrameTranslator.translate``)."""
    return _DEFAULT_TRANSLATOR.translate(z_input, ra, dec, coord_sys, opt)
