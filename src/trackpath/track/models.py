"""Path-building data structures."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum

from trackpath.track.errors import InvalidInput
from trackpath.track.vector import ZERO, Vec3


class DiagnosticCode(str, Enum):
    GUARD_VIOLATION = "guard_violation"
    LONG_EDGE = "long_edge"
    INSUFFICIENT_POINTS = "insufficient_points"


@dataclass(frozen=True)
class BuildDiagnostic:
    """A structured warning produced while building a path."""

    code: DiagnosticCode

    message: str

    edge: tuple[Vec3, Vec3] | None = None
    """The two linked waypoints, for edge-related diagnostics."""

    distance: float | None = None
    """Length of :attr:`edge` in world units."""


@dataclass(frozen=True)
class OrderedPath:
    """An ordered waypoint sequence.

    When :attr:`closed` is set, the last point implicitly links back to the
    first. Instances are replaced wholesale on rebuild, never mutated.
    """

    points: tuple[Vec3, ...]

    closed: bool

    diagnostics: tuple[BuildDiagnostic, ...] = ()
    """Warnings collected while ordering (guard violations, long edges)."""

    def __post_init__(self) -> None:
        if len(self.points) < 2:
            raise InvalidInput(
                f"An ordered path needs at least 2 points, got {len(self.points)}"
            )

    def __len__(self) -> int:
        return len(self.points)

    @property
    def guard_violated(self) -> bool:
        """True if any edge had to exceed the configured distance guard."""
        return any(d.code is DiagnosticCode.GUARD_VIOLATION for d in self.diagnostics)

    def edges(self) -> Iterator[tuple[Vec3, Vec3]]:
        """Yield consecutive point pairs, including the closing edge if closed."""
        n = len(self.points)
        last = n if self.closed else n - 1
        for i in range(last):
            yield self.points[i], self.points[(i + 1) % n]

    def edge_lengths(self) -> list[float]:
        return [a.distance_to(b) for a, b in self.edges()]

    def total_length(self) -> float:
        """Sum of straight-line edge lengths."""
        return sum(self.edge_lengths())


@dataclass(frozen=True)
class CurveKnot:
    """A curve control point with tangent handles stored as offsets from :attr:`position`."""

    position: Vec3

    tangent_in: Vec3 = ZERO

    tangent_out: Vec3 = ZERO

    @property
    def mirrored(self) -> bool:
        """True if the handles have equal length and opposite direction."""
        return self.tangent_in.is_close(-self.tangent_out)

    def moved_to(self, position: Vec3) -> CurveKnot:
        """Return a copy at *position* keeping the same handle offsets."""
        return CurveKnot(position, self.tangent_in, self.tangent_out)
