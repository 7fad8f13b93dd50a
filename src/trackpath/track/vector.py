"""3D vector primitive and scalar helpers shared by path building and traversal.

World frame is y-up: :data:`UP` is ``(0, 1, 0)``, :data:`RIGHT` is
``(1, 0, 0)`` and :data:`FORWARD` is ``(0, 0, 1)``.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass

# Below this length a vector has no usable direction.
_NORMALIZE_EPS = 1e-5


@dataclass(frozen=True)
class Vec3:
    """Immutable 3D point / direction in the shared world frame."""

    x: float
    y: float
    z: float = 0.0

    @classmethod
    def from_sequence(cls, values: Sequence[float]) -> Vec3:
        """Build from ``(x, y)`` or ``(x, y, z)``."""
        if len(values) == 2:
            return cls(float(values[0]), float(values[1]), 0.0)
        if len(values) == 3:
            return cls(float(values[0]), float(values[1]), float(values[2]))
        raise ValueError(f"Expected 2 or 3 coordinates, got {len(values)}")

    def as_tuple(self) -> tuple[float, float, float]:
        return (self.x, self.y, self.z)

    # ------------------------------------------------------------------
    # Arithmetic
    # ------------------------------------------------------------------

    def __add__(self, other: Vec3) -> Vec3:
        return Vec3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vec3) -> Vec3:
        return Vec3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, k: float) -> Vec3:
        return Vec3(self.x * k, self.y * k, self.z * k)

    __rmul__ = __mul__

    def __neg__(self) -> Vec3:
        return Vec3(-self.x, -self.y, -self.z)

    def dot(self, other: Vec3) -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: Vec3) -> Vec3:
        return Vec3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    # ------------------------------------------------------------------
    # Metrics
    # ------------------------------------------------------------------

    def length(self) -> float:
        return math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z)

    def length_squared(self) -> float:
        return self.x * self.x + self.y * self.y + self.z * self.z

    def distance_to(self, other: Vec3) -> float:
        return (self - other).length()

    def normalized(self) -> Vec3:
        """Unit vector in the same direction, or :data:`ZERO` if too short."""
        n = self.length()
        if n < _NORMALIZE_EPS:
            return ZERO
        return Vec3(self.x / n, self.y / n, self.z / n)

    def is_close(self, other: Vec3, tol: float = 1e-9) -> bool:
        return (
            abs(self.x - other.x) <= tol
            and abs(self.y - other.y) <= tol
            and abs(self.z - other.z) <= tol
        )


ZERO = Vec3(0.0, 0.0, 0.0)
UP = Vec3(0.0, 1.0, 0.0)
RIGHT = Vec3(1.0, 0.0, 0.0)
FORWARD = Vec3(0.0, 0.0, 1.0)


# ---------------------------------------------------------------------------
# Scalar helpers
# ---------------------------------------------------------------------------

def clamp01(value: float) -> float:
    return 0.0 if value < 0.0 else 1.0 if value > 1.0 else value


def lerp(a: float, b: float, u: float) -> float:
    """Linear blend; exact at ``u == 0`` and ``u == 1``."""
    return a * (1.0 - u) + b * u


def smoothstep(u: float) -> float:
    """Cubic ease ``u² (3 - 2u)`` on a clamped ``u``."""
    u = clamp01(u)
    return u * u * (3.0 - 2.0 * u)
