"""
hzcosmo.restframe - Heliocentric <-> CMB frame redshift translation

Key concepts:
- The CMB defines the cosmic rest frame; the Sun moves at ~371 km/s
  relative to it
- Redshifts measured in the heliocentric frame are converted with the
  exact relation 1 + z_cmb = (1 + z_helio) / (1 - v.n/c)
- Negative redshifts are "unset" flags and pass through untouched
"""

from .frames import (
    RestFrameDefinition,
    FrameTranslator,
    get_cmb_frame,
    unit_vector,
    to_galactic,
    compute_vdotn,
    zhelio_zcmb_translate,
    HELIO_TO_CMB,
    CMB_TO_HELIO,
)

__all__ = [
    'RestFrameDefinition',
    'FrameTranslator',
    'get_cmb_frame',
    'unit_vector',
    'to_galactic',
    'compute_vdotn',
    'zhelio_zcmb_translate',
    'HELIO_TO_CMB',
    'CMB_TO_HELIO',
]
