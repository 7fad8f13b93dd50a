"""PathService — wraps build and traversal for the Web API."""

from __future__ import annotations

import logging
from dataclasses import replace

from trackpath.config import TrackPathSettings
from trackpath.curve.bezier import BezierSplineCurve
from trackpath.track.builder import BuildResult, TrackPathBuilder
from trackpath.track.vector import Vec3
from trackpath.traversal.arc_length import ArcLengthTable
from trackpath.traversal.engine import TraversalEngine
from trackpath.traversal.follower import PathFollower
from trackpath.web.schemas import BuildRequest, PoseRecord, SimulateRequest

_logger = logging.getLogger(__name__)


class PathService:
    """Runs the build pipeline (and optionally a traversal) for one request.

    Parameters
    ----------
    settings:
        Base settings; per-request overrides are applied on top.
    """

    def __init__(self, settings: TrackPathSettings | None = None) -> None:
        self._settings = settings or TrackPathSettings()

    def build(self, req: BuildRequest) -> tuple[BuildResult, BezierSplineCurve, float]:
        """Order, fit and load the curve.

        Returns
        -------
        tuple[BuildResult, BezierSplineCurve, float]
            ``(result, curve, total_length)`` where *total_length* is the
            measured arc-length table length.

        Raises
        ------
        InvalidInput
            Fewer than 2 points.
        GuardViolation
            An edge broke the distance guard under the ``abort`` policy.
        """
        settings = self._settings_for(req)
        curve = BezierSplineCurve()
        builder = TrackPathBuilder(
            orderer=settings.make_orderer(),
            fitter=settings.make_fitter(),
            curve=curve,
        )
        points = [Vec3(p.x, p.y, p.z) for p in req.points]
        start = Vec3(req.start.x, req.start.y, req.start.z) if req.start is not None else None
        result = builder.build(points, closed=req.closed, start=start)
        table = ArcLengthTable.build(curve, settings.samples)
        return result, curve, table.total_length

    def simulate(self, req: SimulateRequest) -> tuple[float, bool, list[PoseRecord]]:
        """Build the path, then tick a follower ``req.ticks`` times.

        Returns
        -------
        tuple[float, bool, list[PoseRecord]]
            ``(total_length, finished, poses)``
        """
        settings = self._settings_for(req)
        _, curve, _ = self.build(req)

        lanes = settings.make_lanes()
        follower = PathFollower(
            curve,
            speed=req.speed if req.speed is not None else settings.forward_speed,
            loop=req.loop,
            height_offset=settings.height_offset,
            samples=settings.samples,
        )
        engine = TraversalEngine(follower, lanes)

        steps: dict[int, int] = {}
        for s in req.lane_steps:
            steps[s.tick] = s.step

        poses: list[PoseRecord] = []
        for tick in range(req.ticks):
            if tick in steps:
                lanes.step(steps[tick])
            pose = engine.tick(req.dt)
            if pose is None:
                break
            poses.append(PoseRecord(
                tick=tick,
                x=pose.position.x,
                y=pose.position.y,
                z=pose.position.z,
                distance=pose.distance,
                lane_index=lanes.current_index,
                lateral_offset=pose.lateral_offset,
            ))

        _logger.info(
            "Simulated %d ticks over %.3f units (finished=%s)",
            len(poses), follower.total_length, follower.finished,
        )
        return follower.total_length, follower.finished, poses

    def _settings_for(self, req: BuildRequest) -> TrackPathSettings:
        overrides = {
            name: getattr(req, name)
            for name in (
                "max_link_distance",
                "direction_bias",
                "refinement_passes",
                "handle_tightness",
                "guard_policy",
            )
            if getattr(req, name) is not None
        }
        return replace(self._settings, **overrides)
