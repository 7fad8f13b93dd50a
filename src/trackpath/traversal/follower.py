"""PathFollower — kinematic uniform-speed traversal of a curve with lateral offset."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Protocol

from trackpath.curve.adapter import CurveAdapter
from trackpath.track.vector import FORWARD, RIGHT, UP, Vec3
from trackpath.traversal.arc_length import ArcLengthTable

_logger = logging.getLogger(__name__)

_DEGENERATE_SQ = 1e-6


class FollowerState(str, Enum):
    ADVANCING = "advancing"
    FINISHED = "finished"


class LateralOffsetSource(Protocol):
    """Anything exposing the current lateral offset, e.g. a lane controller."""

    @property
    def current_offset(self) -> float: ...


@dataclass(frozen=True)
class Pose:
    """World placement of the follower for one tick.

    ``forward``, ``right`` and ``up`` form the orthonormal look-rotation basis.
    """

    position: Vec3
    forward: Vec3
    right: Vec3
    up: Vec3
    parameter: float
    distance: float
    lateral_offset: float


class PathFollower:
    """Moves along a curve at a constant speed in world units per second.

    The host calls :meth:`tick` once per simulation step. Distance is
    converted to a curve parameter through an :class:`ArcLengthTable`, which is
    rebuilt atomically by :meth:`rebuild`.

    Parameters
    ----------
    curve:
        The curve to follow. May be None or empty; ticking is then a no-op.
    speed:
        Units per second along the centerline.
    loop:
        Wrap around at the end instead of stopping.
    stop_at_end:
        When not looping, freeze advancement once finished until
        :meth:`reset_to_start`.
    height_offset:
        Lift along the world up vector.
    samples:
        Arc-length table resolution; higher gives a more uniform speed.
    lane_source:
        Optional provider of the lateral offset, read once per tick.
    on_finish:
        Optional zero-argument callback fired once when the end is reached.
    """

    def __init__(
        self,
        curve: CurveAdapter | None = None,
        speed: float = 1.2,
        loop: bool = False,
        stop_at_end: bool = True,
        height_offset: float = 0.2,
        samples: int = 128,
        lane_source: LateralOffsetSource | None = None,
        on_finish: Callable[[], None] | None = None,
        up: Vec3 = UP,
        default_right: Vec3 = RIGHT,
    ) -> None:
        if samples < 2:
            raise ValueError("samples must be >= 2")
        self.speed = speed
        self.loop = loop
        self.stop_at_end = stop_at_end
        self.height_offset = height_offset
        self.samples = samples
        self.lane_source = lane_source
        self._up = up
        self._default_right = default_right
        self._listeners: list[Callable[[], None]] = []
        if on_finish is not None:
            self._listeners.append(on_finish)

        self._curve = curve
        self._table: ArcLengthTable | None = None
        self._distance = 0.0
        self._state = FollowerState.ADVANCING
        self._finish_notified = False
        self._last_forward = FORWARD
        self._pose: Pose | None = None

        self.rebuild()

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def curve(self) -> CurveAdapter | None:
        return self._curve

    @property
    def table(self) -> ArcLengthTable | None:
        return self._table

    @property
    def total_length(self) -> float:
        return self._table.total_length if self._table is not None else 0.0

    @property
    def distance_along_path(self) -> float:
        return self._distance

    @property
    def state(self) -> FollowerState:
        return self._state

    @property
    def finished(self) -> bool:
        return self._state is FollowerState.FINISHED

    @property
    def pose(self) -> Pose | None:
        """Pose from the most recent tick / snap, if any."""
        return self._pose

    def add_finish_listener(self, callback: Callable[[], None]) -> None:
        self._listeners.append(callback)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def set_curve(self, curve: CurveAdapter | None) -> Pose | None:
        """Follow a different curve.

        If building its table fails, the previous curve and table stay active.
        """
        table = self._build_table(curve)
        self._curve = curve
        return self._install(table)

    def rebuild(self) -> Pose | None:
        """Regenerate the arc-length table from the current curve.

        The new table is fully built before it replaces the old one. Traversal
        distance is then clamped into the new valid range.
        """
        return self._install(self._build_table(self._curve))

    def reset_to_start(self) -> Pose | None:
        """Return to distance 0 and clear the finished state."""
        self._distance = 0.0
        self._state = FollowerState.ADVANCING
        self._finish_notified = False
        return self._snap()

    def teleport_to_fraction(self, fraction: float) -> Pose | None:
        """Jump to ``fraction * total_length`` and snap orientation.

        Raises:
            ValueError: If *fraction* is outside [0, 1].
        """
        if not 0.0 <= fraction <= 1.0:
            raise ValueError("fraction must be in [0, 1]")
        self._distance = fraction * self.total_length
        if self._distance < self.total_length:
            self._state = FollowerState.ADVANCING
        return self._snap()

    def tick(self, dt: float) -> Pose | None:
        """Advance by ``speed * dt`` and return the new pose.

        Returns None, without touching any state, while there is no valid table.

        Raises:
            ValueError: If *dt* is negative.
        """
        if dt < 0:
            raise ValueError("dt must be >= 0")
        curve, table = self._curve, self._table
        if curve is None or table is None or table.total_length <= 0.0:
            return None
        total = table.total_length

        if not (self._state is FollowerState.FINISHED and self.stop_at_end):
            self._distance += self.speed * dt

        if self.loop:
            self._distance %= total
        else:
            self._distance = min(max(self._distance, 0.0), total)
            if self._distance >= total:
                self._enter_finished()
            elif self._state is FollowerState.FINISHED:
                self._state = FollowerState.ADVANCING

        self._pose = self._pose_at(curve, table, self._distance)
        return self._pose

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _build_table(self, curve: CurveAdapter | None) -> ArcLengthTable | None:
        if curve is None or curve.is_empty:
            return None
        return ArcLengthTable.build(curve, self.samples)

    def _install(self, table: ArcLengthTable | None) -> Pose | None:
        self._table = table
        if table is None:
            self._pose = None
            _logger.debug("No curve to follow; traversal disabled")
            return None

        self._distance = min(max(self._distance, 0.0), table.total_length)
        if self._distance < table.total_length and self._state is FollowerState.FINISHED:
            self._state = FollowerState.ADVANCING
        _logger.debug(
            "Arc-length table rebuilt: %d samples, length %.3f",
            table.sample_count, table.total_length,
        )
        return self._snap()

    def _enter_finished(self) -> None:
        if self._state is FollowerState.FINISHED:
            return
        self._state = FollowerState.FINISHED
        if self._finish_notified:
            return
        self._finish_notified = True
        _logger.info("Reached end of path at %.3f", self._distance)
        for callback in list(self._listeners):
            callback()

    def _snap(self) -> Pose | None:
        if self._curve is None or self._table is None:
            self._pose = None
            return None
        self._pose = self._pose_at(self._curve, self._table, self._distance)
        return self._pose

    def _pose_at(self, curve: CurveAdapter, table: ArcLengthTable, distance: float) -> Pose:
        t = table.distance_to_parameter(distance)
        sample = curve.evaluate(t)

        forward = sample.tangent.normalized()
        if forward.length_squared() < _DEGENERATE_SQ:
            _logger.debug("Degenerate tangent at t=%.5f; keeping previous heading", t)
            forward = self._last_forward
        else:
            self._last_forward = forward

        up = self._up
        right = up.cross(forward)
        if right.length_squared() < _DEGENERATE_SQ:
            right = self._default_right
        else:
            right = right.normalized()

        lateral = self.lane_source.current_offset if self.lane_source is not None else 0.0
        position = sample.position + right * lateral + up * self.height_offset
        return Pose(
            position=position,
            forward=forward,
            right=right,
            up=forward.cross(right),
            parameter=t,
            distance=distance,
            lateral_offset=lateral,
        )
