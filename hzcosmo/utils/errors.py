"""Structured errors for hzcosmo.

Every fatal condition raises an ``HzCosmoError`` carrying an ``ErrorKind``,
a human-readable message and a ``context`` dict with the values needed to
diagnose it (target modulus, parameters, iteration count, ...).
"""

from enum import Enum
from typing import Any, Optional


class ErrorKind(Enum):
    """Category of a fatal hzcosmo error."""

    MAP_FORMAT = "map_format"
    MAP_DOMAIN = "map_domain"
    INVALID_OPTION = "invalid_option"
    COORDINATE_SYSTEM = "coordinate_system"
    FILE_IO = "file_io"
    CONVERGENCE = "convergence"


class HzCosmoError(ValueError):
    """Base class for fatal errors raised by hzcosmo operations."""

    kind: ErrorKind = ErrorKind.INVALID_OPTION

    def __init__(self, message: str, context: Optional[dict[str, Any]] = None):
        self.message = message
        self.context = dict(context or {})
        super().__init__(self._format())

    def _format(self) -> str:
        if not self.context:
            return self.message
        details = ", ".join(f"{key}={value!r}" for key, value in self.context.items())
        return f"{self.message} ({details})"


class MapFormatError(HzCosmoError):
    """Tabulated H(z) map is malformed (first z-bin not zero, unsorted, ...)."""

    kind = ErrorKind.MAP_FORMAT


class MapDomainError(HzCosmoError):
    """Redshift requested outside the domain covered by a tabulated map."""

    kind = ErrorKind.MAP_DOMAIN


class InvalidOptionError(HzCosmoError):
    """Invalid option flag (frame direction, volume weighting, ...)."""

    kind = ErrorKind.INVALID_OPTION


class CoordinateSystemError(HzCosmoError):
    """Unknown coordinate-system label for frame translation."""

    kind = ErrorKind.COORDINATE_SYSTEM


class HzFileError(HzCosmoError):
    """Tabulated H(z) file could not be opened, read or written."""

    kind = ErrorKind.FILE_IO


class ConvergenceError(HzCosmoError):
    """Distance-modulus inversion did not converge within the iteration cap.

    Attributes:
        mu_target: Distance modulus that was being inverted
        delta_mu: Last residual mu(z) - mu_target
        z_last: Last trial redshift
        n_iter: Number of iterations performed
    """

    kind = ErrorKind.CONVERGENCE

    def __init__(
        self,
        mu_target: float,
        delta_mu: float,
        z_last: float,
        n_iter: int,
        message: Optional[str] = None,
    ):
        self.mu_target = mu_target
        self.delta_mu = delta_mu
        self.z_last = z_last
        self.n_iter = n_iter

        if message is None:
            message = f"Could not solve for zCMB after NITER={n_iter}"

        super().__init__(
            message,
            {"MU": mu_target, "dmu": delta_mu, "ztmp": z_last, "NITER": n_iter},
        )
