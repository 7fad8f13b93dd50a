"""TrackPathBuilder — waypoints → ordered path → fitted knots → curve.

Mirrors the editor "Build" action: the whole pipeline runs on each call and
the result replaces the previous one only if every step succeeds.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from trackpath.track.errors import TrackPathError
from trackpath.track.fitter import CurveFitter
from trackpath.track.models import BuildDiagnostic, CurveKnot, OrderedPath
from trackpath.track.orderer import WaypointOrderer
from trackpath.track.projection import GroundProbe, project_knots
from trackpath.track.vector import Vec3

if TYPE_CHECKING:
    from trackpath.curve.adapter import CurveAdapter

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BuildResult:
    path: OrderedPath
    knots: tuple[CurveKnot, ...]

    @property
    def diagnostics(self) -> tuple[BuildDiagnostic, ...]:
        return self.path.diagnostics


class TrackPathBuilder:
    """Runs the ordering and fitting pipeline and writes knots to a curve.

    Parameters
    ----------
    orderer:
        Configured :class:`WaypointOrderer`; a default one if None.
    fitter:
        Configured :class:`CurveFitter`; a default one if None.
    curve:
        Optional curve adapter that receives the fitted knots.
    probe:
        Optional ground probe; when set, knots are projected onto the ground
        after fitting.
    ray_height, y_offset:
        Forwarded to :func:`~trackpath.track.projection.project_knots`.
    """

    def __init__(
        self,
        orderer: WaypointOrderer | None = None,
        fitter: CurveFitter | None = None,
        curve: CurveAdapter | None = None,
        probe: GroundProbe | None = None,
        ray_height: float = 50.0,
        y_offset: float = 0.0,
    ) -> None:
        self.orderer = orderer or WaypointOrderer()
        self.fitter = fitter or CurveFitter()
        self.curve = curve
        self.probe = probe
        self.ray_height = ray_height
        self.y_offset = y_offset
        self._last: BuildResult | None = None

    @property
    def last_result(self) -> BuildResult | None:
        """Most recent successful build, kept across failed rebuilds."""
        return self._last

    def build(
        self,
        points: Iterable[Vec3],
        closed: bool = True,
        start: Vec3 | None = None,
    ) -> BuildResult:
        """Run the full pipeline.

        Raises
        ------
        InvalidInput
            Fewer than 2 waypoints. Previous result and curve are untouched.
        GuardViolation
            Under an aborting guard policy. Previous result and curve are
            untouched.
        """
        try:
            path = self.orderer.order(points, closed=closed, start=start)
        except TrackPathError as exc:
            _logger.warning("Path build rejected: %s", exc)
            raise

        knots = self.fitter.fit(path)
        if self.probe is not None:
            knots = project_knots(knots, self.probe, self.ray_height, self.y_offset)

        result = BuildResult(path=path, knots=tuple(knots))
        if self.curve is not None:
            self.curve.set_knots(result.knots, closed)
        self._last = result
        _logger.info("Built curve with %d knots", len(result.knots))
        return result
