"""Two-column tabulated H(z) files.

File layout:

    DOCUMENTATION:
      NOTES:
      - Auto generated by hzcosmo
      COSPAR:
        H0: 70.00
        OM: 0.3000
        OL: 0.7000
        w0: -1.00
        wa: 0.00
    DOCUMENTATION_END:

     0.000000    70.00000
     0.005000    70.10503
     ...

The documentation block is YAML and records the cosmology that produced the
table. The first data row must have z = 0.
"""

import logging
from pathlib import Path
from typing import Any, Union
import numpy as np
import yaml

from .hubble import AnalyticHubble, RedshiftMap
from .utils.config import CosmologyParameters
from .utils.constants import ZMAX_SNANA
from .utils.errors import HzFileError, MapFormatError


logger = logging.getLogger(__name__)

DOC_START = "DOCUMENTATION:"
DOC_END = "DOCUMENTATION_END:"


def hz_file_grid(zmin: float = 0.005, zmax: float = ZMAX_SNANA, nbins: int = 200) -> np.ndarray:
    """Redshift grid for a generated table.

    The first row is z = 0; the remaining ``nbins - 1`` rows are log-spaced
    from ``zmin`` to ``zmax`` inclusive, so the reader sees non-uniform bins.
    """
    if nbins < 3:
        raise ValueError(f"nbins = {nbins} too small; need at least 3")
    if not 0.0 < zmin < zmax:
        raise ValueError(f"Need 0 < zmin < zmax, got zmin={zmin}, zmax={zmax}")
    z_log = np.logspace(np.log10(zmin), np.log10(zmax), nbins - 1)
    return np.concatenate([[0.0], z_log])


def write_hz_file(
    path: Union[str, Path],
    params: CosmologyParameters,
    zmin: float = 0.005,
    zmax: float = ZMAX_SNANA,
    nbins: int = 200,
) -> Path:
    """Write analytic H(z) for ``params`` as a two-column table.

    Intended for debugging the tabulated-H(z) path.

    Returns:
        Path that was written

    Raises:
        HzFileError: if the file cannot be opened for writing
    """
    path = Path(path)
    z = hz_file_grid(zmin, zmax, nbins)
    Hz = AnalyticHubble(params).H(z)

    logger.info(f"Write H(z) to {path}")
    logger.info(f"  {nbins} bins for zCMB = {zmin:.4f} to {zmax:.4f}")

    header = {
        "NOTES": ["Auto generated by hzcosmo"],
        "COSPAR": {
            "H0": round(params.H0, 2),
            "OM": round(params.Omega_m, 4),
            "OL": round(params.Omega_L, 4),
            "w0": round(params.w0, 2),
            "wa": round(params.wa, 2),
        },
    }

    try:
        with open(path, "wt") as fp:
            fp.write(f"{DOC_START}\n")
            body = yaml.safe_dump(header, default_flow_style=False, sort_keys=False)
            for line in body.splitlines():
                fp.write(f"  {line}\n")
            fp.write(f"{DOC_END}\n\n")
            for zi, Hi in zip(z, Hz):
                fp.write(f" {zi:9.6f}  {Hi:11.5f}\n")
    except OSError as e:
        raise HzFileError(
            f"Unable to open '{path}' in write-text mode. "
            "Check permissions and if file already exists.",
            {"path": str(path), "reason": str(e)},
        ) from e

    return path


def _split_documentation(lines: list[str]) -> tuple[dict[str, Any], list[str]]:
    """Separate the YAML documentation block from the data rows."""
    stripped = [line.strip() for line in lines]
    if DOC_START not in stripped:
        return {}, lines

    start = stripped.index(DOC_START)
    if DOC_END not in stripped[start:]:
        raise MapFormatError(f"Missing {DOC_END} in H(z) file")
    end = start + stripped[start:].index(DOC_END)

    try:
        doc = yaml.safe_load("\n".join(lines[start:end])) or {}
    except yaml.YAMLError as e:
        raise MapFormatError(f"Unreadable documentation block: {e}") from e

    documentation = doc.get("DOCUMENTATION") or {}
    return documentation, lines[:start] + lines[end + 1:]


def read_hz_file(path: Union[str, Path]) -> RedshiftMap:
    """Read a two-column (z, H) file into a ``RedshiftMap``.

    Raises:
        HzFileError: if the file cannot be read
        MapFormatError: if the table is malformed or does not start at z = 0
    """
    path = Path(path)
    try:
        lines = path.read_text().splitlines()
    except OSError as e:
        raise HzFileError(
            f"Unable to read H(z) map '{path}'", {"path": str(path), "reason": str(e)}
        ) from e

    documentation, data_lines = _split_documentation(lines)
    data_lines = [line for line in data_lines if line.strip() and not line.lstrip().startswith("#")]
    if not data_lines:
        raise MapFormatError(f"No H(z) rows found in '{path}'", {"path": str(path)})

    try:
        table = np.loadtxt(data_lines, ndmin=2)
    except ValueError as e:
        raise MapFormatError(f"Unreadable H(z) rows in '{path}': {e}", {"path": str(path)}) from e

    if table.shape[1] < 2:
        raise MapFormatError(f"Expected 2 columns in '{path}'", {"ncol": int(table.shape[1])})

    logger.info(f"Read H(z) map from: {path}")
    zmap = RedshiftMap(z=table[:, 0], H=table[:, 1], metadata=documentation)
    logger.info(f"  Found {zmap.n_bins} redshift bins from {zmap.z_min:f} to {zmap.z_max:f}")
    return zmap
