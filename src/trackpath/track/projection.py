"""Optional relocation of fitted knots onto a supporting ground surface."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from trackpath.track.models import CurveKnot
from trackpath.track.vector import UP, Vec3


class GroundProbe(Protocol):
    """Host-supplied ray cast straight down."""

    def cast_down(self, origin: Vec3, max_distance: float, mask: int) -> Vec3 | None:
        """Return the hit point below *origin*, or None if nothing was hit."""
        ...


def project_knots(
    knots: Sequence[CurveKnot],
    probe: GroundProbe,
    ray_height: float = 50.0,
    y_offset: float = 0.0,
    mask: int = ~0,
) -> list[CurveKnot]:
    """Drop each knot onto the ground found by *probe*.

    The ray starts *ray_height* above the knot and reaches ``2 * ray_height``
    down. Hit knots move to ``hit + UP * y_offset`` with their handle offsets
    unchanged; missed knots stay where they are.
    """
    projected: list[CurveKnot] = []
    for knot in knots:
        origin = knot.position + UP * ray_height
        hit = probe.cast_down(origin, ray_height * 2.0, mask)
        if hit is None:
            projected.append(knot)
        else:
            projected.append(knot.moved_to(hit + UP * y_offset))
    return projected
