"""Error taxonomy for path building."""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from trackpath.track.models import BuildDiagnostic, OrderedPath


class GuardPolicy(str, Enum):
    """What the orderer does when an edge had to break the distance guard."""

    WARN = "warn"    # keep the path, attach diagnostics, log a warning
    ABORT = "abort"  # raise GuardViolation


class TrackPathError(Exception):
    """Base class for recoverable path-building failures."""

    def __init__(self, message: str, diagnostics: tuple[BuildDiagnostic, ...] = ()) -> None:
        super().__init__(message)
        self.diagnostics = diagnostics


class InvalidInput(TrackPathError, ValueError):
    """Raised when a build call cannot produce any result (e.g. < 2 waypoints)."""


class GuardViolation(TrackPathError):
    """Raised under :attr:`GuardPolicy.ABORT` when an edge exceeds ``max_link_distance``.

    The rejected path is kept on :attr:`path` so the caller may still accept it.
    """

    def __init__(
        self,
        message: str,
        path: OrderedPath,
        diagnostics: tuple[BuildDiagnostic, ...] = (),
    ) -> None:
        super().__init__(message, diagnostics)
        self.path = path
