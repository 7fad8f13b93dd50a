"""TraversalEngine — one host tick across lane input, lane animation and the follower."""

from __future__ import annotations

from trackpath.traversal.follower import PathFollower, Pose
from trackpath.traversal.lane_input import LaneInput
from trackpath.traversal.lanes import LaneOffsetController


class TraversalEngine:
    """Integrates the follower with its lane controller and optional input.

    Parameters
    ----------
    follower:
        A :class:`~trackpath.traversal.follower.PathFollower`. Its
        ``lane_source`` is pointed at *lanes* if not already set.
    lanes:
        A :class:`~trackpath.traversal.lanes.LaneOffsetController`.
    lane_input:
        Optional :class:`~trackpath.traversal.lane_input.LaneInput` polled
        at the start of every tick.
    """

    def __init__(
        self,
        follower: PathFollower,
        lanes: LaneOffsetController,
        lane_input: LaneInput | None = None,
    ) -> None:
        self._follower = follower
        self._lanes = lanes
        self._input = lane_input
        if follower.lane_source is None:
            follower.lane_source = lanes

    @property
    def follower(self) -> PathFollower:
        return self._follower

    @property
    def lanes(self) -> LaneOffsetController:
        return self._lanes

    def tick(self, dt: float) -> Pose | None:
        """Run one simulation step of *dt* seconds.

        Order: poll input, animate the lane offset, then advance the follower
        (which reads the offset once). Returns the follower pose, or None while
        it has no valid arc-length table.

        Raises:
            ValueError: If *dt* is negative; no collaborator is touched.
        """
        if dt < 0:
            raise ValueError("dt must be >= 0")
        if self._input is not None:
            self._input.poll()
        self._lanes.tick(dt)
        return self._follower.tick(dt)
