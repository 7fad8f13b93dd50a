"""Waypoint ordering: guarded nearest-chain construction plus 2-opt refinement.

Turns an unordered set of waypoint markers (e.g. a racetrack centerline laid
out by hand) into an open or closed :class:`OrderedPath`.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from trackpath.track.errors import GuardPolicy, GuardViolation, InvalidInput
from trackpath.track.models import BuildDiagnostic, DiagnosticCode, OrderedPath
from trackpath.track.vector import FORWARD, Vec3, clamp01, lerp

_logger = logging.getLogger(__name__)

_AXES = ("x", "y", "z")


class WaypointOrderer:
    """Order waypoints into a plausible loop or open chain.

    Algorithm:
    1. Start at *start* (if it is one of the points) or at the point with the
       smallest coordinate along *fallback_axis*.
    2. Greedily link to the remaining candidate with the best blend of
       proximity and forward alignment. Candidates further than
       *max_link_distance* are never considered (the hard guard); if none is
       left in range, link the globally nearest point instead.
    3. For closed loops, run up to *refinement_passes* 2-opt passes to undo
       self-crossings.
    4. Audit the final edges and attach diagnostics.

    Args:
        max_link_distance: Hard cap on the length of a greedy link. Set it to
            roughly 2-3x the typical waypoint spacing.
        direction_bias: Blend weight in ``[0, 1]``; 0 is pure nearest-neighbour,
            1 is pure forward alignment.
        refinement_passes: Maximum number of 2-opt passes (0 disables).
        guard_policy: Whether a guard-breaking edge warns or aborts.
        fallback_axis: Axis used to pick a start point when none is given.
        long_edge_tolerance: Edges longer than ``max_link_distance *
            long_edge_tolerance`` after refinement are reported as long edges.
        epsilon: Minimum gain for a 2-opt swap, to avoid oscillation.
    """

    def __init__(
        self,
        max_link_distance: float = 35.0,
        direction_bias: float = 0.7,
        refinement_passes: int = 2,
        guard_policy: GuardPolicy = GuardPolicy.WARN,
        fallback_axis: str = "z",
        long_edge_tolerance: float = 1.01,
        epsilon: float = 1e-3,
    ) -> None:
        if max_link_distance <= 0:
            raise ValueError("max_link_distance must be > 0")
        if not 0.0 <= direction_bias <= 1.0:
            raise ValueError("direction_bias must be in [0, 1]")
        if refinement_passes < 0:
            raise ValueError("refinement_passes must be >= 0")
        if fallback_axis not in _AXES:
            raise ValueError(f"fallback_axis must be one of {_AXES}")
        self.max_link_distance = max_link_distance
        self.direction_bias = direction_bias
        self.refinement_passes = refinement_passes
        self.guard_policy = GuardPolicy(guard_policy)
        self.fallback_axis = fallback_axis
        self.long_edge_tolerance = long_edge_tolerance
        self.epsilon = epsilon

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def order(
        self,
        points: Iterable[Vec3],
        closed: bool = True,
        start: Vec3 | None = None,
    ) -> OrderedPath:
        """Order *points* into an :class:`OrderedPath`.

        Raises:
            InvalidInput: If fewer than 2 points are given.
            GuardViolation: If an edge exceeds ``max_link_distance`` and the
                guard policy is :attr:`GuardPolicy.ABORT`.
        """
        pts = list(points)
        if len(pts) < 2:
            diag = BuildDiagnostic(
                code=DiagnosticCode.INSUFFICIENT_POINTS,
                message=f"Need at least 2 waypoints, got {len(pts)}",
            )
            raise InvalidInput(diag.message, (diag,))

        ordered, fallbacks = self._guarded_chain(pts, start)
        if fallbacks:
            _logger.debug("Greedy chain broke the distance guard %d time(s)", fallbacks)

        if closed and self.refinement_passes > 0:
            self.two_opt(ordered, self.refinement_passes, closed=True)

        diagnostics = self._audit(ordered, closed)
        path = OrderedPath(points=tuple(ordered), closed=closed, diagnostics=diagnostics)

        if path.guard_violated:
            for d in diagnostics:
                if d.code is DiagnosticCode.GUARD_VIOLATION:
                    _logger.warning("%s", d.message)
            if self.guard_policy is GuardPolicy.ABORT:
                raise GuardViolation(
                    "Path contains edges longer than max_link_distance", path, diagnostics
                )
        for d in diagnostics:
            if d.code is DiagnosticCode.LONG_EDGE:
                _logger.warning("%s", d.message)
        return path

    def two_opt(self, order: list[Vec3], passes: int, closed: bool = True) -> int:
        """Refine *order* in place with 2-opt edge swaps.

        Each swap strictly shortens the tour by more than ``epsilon``, so total
        length never increases. Stops early after a pass with no swap.

        Returns:
            Number of swaps applied.
        """
        n = len(order)
        if n < 4:
            return 0
        swaps = 0
        for pass_no in range(passes):
            improved = False
            for i in range(n - 1):
                i2 = i + 1
                for j in range(i + 2, n if closed else n - 1):
                    j2 = (j + 1) % n
                    d_old = order[i].distance_to(order[i2]) + order[j].distance_to(order[j2])
                    d_new = order[i].distance_to(order[j]) + order[i2].distance_to(order[j2])
                    if d_new + self.epsilon < d_old:
                        order[i2:j + 1] = reversed(order[i2:j + 1])
                        improved = True
                        swaps += 1
            _logger.debug("2-opt pass %d: %s", pass_no + 1, "improved" if improved else "stable")
            if not improved:
                break
        return swaps

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _guarded_chain(self, pts: list[Vec3], start: Vec3 | None) -> tuple[list[Vec3], int]:
        """Greedy chain; returns the ordering and the number of guard-breaking links."""
        remaining = list(range(len(pts)))

        if start is not None and start in pts:
            cur = pts.index(start)
        else:
            if start is not None:
                _logger.debug("Start point %s is not a waypoint; using fallback", start)
            cur = min(remaining, key=lambda i: getattr(pts[i], self.fallback_axis))

        remaining.remove(cur)
        ordered = [pts[cur]]

        forward = FORWARD
        if remaining:
            forward = (pts[self._nearest(pts, cur, remaining)] - pts[cur]).normalized()

        fallbacks = 0
        while remaining:
            best: int | None = None
            best_score = float("-inf")
            for c in remaining:
                offset = pts[c] - pts[cur]
                dist = offset.length()
                if dist > self.max_link_distance:
                    continue
                dir_score = forward.dot(offset.normalized())
                near_score = 1.0 - clamp01(dist / self.max_link_distance)
                score = lerp(near_score, dir_score, self.direction_bias)
                if score > best_score:
                    best_score = score
                    best = c

            if best is None:
                best = self._nearest(pts, cur, remaining)
                fallbacks += 1
                _logger.debug(
                    "No waypoint within %.3f of %s; linking nearest %s",
                    self.max_link_distance, pts[cur], pts[best],
                )

            ordered.append(pts[best])
            remaining.remove(best)
            forward = (pts[best] - pts[cur]).normalized()
            cur = best

        return ordered, fallbacks

    @staticmethod
    def _nearest(pts: list[Vec3], cur: int, candidates: list[int]) -> int:
        origin = pts[cur]
        return min(candidates, key=lambda i: (pts[i] - origin).length_squared())

    def _audit(self, ordered: list[Vec3], closed: bool) -> tuple[BuildDiagnostic, ...]:
        """Report every final edge that breaks the guard or remains egregiously long."""
        diagnostics: list[BuildDiagnostic] = []
        n = len(ordered)
        long_limit = self.max_link_distance * self.long_edge_tolerance
        for i in range(n if closed else n - 1):
            a, b = ordered[i], ordered[(i + 1) % n]
            d = a.distance_to(b)
            if d > self.max_link_distance:
                diagnostics.append(BuildDiagnostic(
                    code=DiagnosticCode.GUARD_VIOLATION,
                    message=(
                        f"Edge {i}->{(i + 1) % n} is {d:.3f} long, "
                        f"exceeding max_link_distance {self.max_link_distance:.3f}"
                    ),
                    edge=(a, b),
                    distance=d,
                ))
            if d > long_limit:
                diagnostics.append(BuildDiagnostic(
                    code=DiagnosticCode.LONG_EDGE,
                    message=(
                        f"Long edge remains between {a} and {b} ({d:.3f}). "
                        "Add a waypoint in that area or raise max_link_distance slightly."
                    ),
                    edge=(a, b),
                    distance=d,
                ))
        return tuple(diagnostics)
