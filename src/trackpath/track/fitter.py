"""Curve fitting: derive mirrored tangent handles for an ordered waypoint path."""

from __future__ import annotations

from trackpath.track.models import CurveKnot, OrderedPath
from trackpath.track.vector import ZERO, lerp


class CurveFitter:
    """Turn an :class:`OrderedPath` into interpolating curve knots.

    Every knot sits exactly on its waypoint; only the handles are derived.
    The handle direction at point *i* is the chord from its previous to its
    next neighbour, and its length is::

        min(dist_prev, dist_next) * 0.5 * lerp(0.25, 0.75, 1 - handle_tightness)

    so closely spaced points get short handles and do not overshoot. Both
    endpoints of an open path keep zero handles.

    Args:
        handle_tightness: ``0`` gives round curves, ``1`` tight, angular ones.
    """

    def __init__(self, handle_tightness: float = 0.5) -> None:
        if not 0.0 <= handle_tightness <= 1.0:
            raise ValueError("handle_tightness must be in [0, 1]")
        self.handle_tightness = handle_tightness

    def fit(self, path: OrderedPath) -> list[CurveKnot]:
        """Return one :class:`CurveKnot` per waypoint of *path*, in path order."""
        pts = path.points
        n = len(pts)
        scale = 0.5 * lerp(0.25, 0.75, 1.0 - self.handle_tightness)

        knots: list[CurveKnot] = []
        for i, p in enumerate(pts):
            if not path.closed and (i == 0 or i == n - 1):
                knots.append(CurveKnot(p, ZERO, ZERO))
                continue

            prev = pts[(i - 1) % n]
            nxt = pts[(i + 1) % n]
            direction = (nxt - prev).normalized()
            handle = direction * (min(p.distance_to(prev), p.distance_to(nxt)) * scale)
            knots.append(CurveKnot(p, -handle, handle))
        return knots
