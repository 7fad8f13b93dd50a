"""Lane boundary polylines sampled either side of a curve centerline."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from trackpath.track.vector import RIGHT, UP, Vec3

if TYPE_CHECKING:
    from trackpath.curve.adapter import CurveAdapter

_DEGENERATE_SQ = 1e-6


@dataclass
class LaneBoundaries:
    """Left and right boundary points, one pair per sample."""

    left: list[Vec3]
    right: list[Vec3]


class LaneBoundaryBuilder:
    """Offset a curve's centerline sideways to produce lane boundary lines.

    Args:
        lane_offset: Lateral distance from the centerline to each boundary.
        samples: Number of evenly spaced parameters (clamped to >= 2).
        y_offset: Lift along the up vector.
    """

    def __init__(self, lane_offset: float = 1.25, samples: int = 100, y_offset: float = 0.01) -> None:
        self.lane_offset = lane_offset
        self.samples = max(2, samples)
        self.y_offset = y_offset

    def build(self, curve: CurveAdapter) -> LaneBoundaries:
        """Sample *curve* and return the left/right boundary polylines."""
        left: list[Vec3] = []
        right: list[Vec3] = []
        last_right = RIGHT
        lift = UP * self.y_offset

        for i in range(self.samples):
            t = i / (self.samples - 1)
            sample = curve.evaluate(t)
            side = UP.cross(sample.tangent.normalized())
            if side.length_squared() < _DEGENERATE_SQ:
                side = last_right
            else:
                side = side.normalized()
            last_right = side

            left.append(sample.position - side * self.lane_offset + lift)
            right.append(sample.position + side * self.lane_offset + lift)

        return LaneBoundaries(left=left, right=right)
