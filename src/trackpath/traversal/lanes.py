"""LaneOffsetController — discrete lanes with eased, queued lateral transitions."""

from __future__ import annotations

import logging
from enum import Enum

from trackpath.track.vector import lerp, smoothstep

_logger = logging.getLogger(__name__)


class LaneState(str, Enum):
    IDLE = "idle"
    TRANSITIONING = "transitioning"


def _sign(value: float) -> int:
    return (value > 0) - (value < 0)


class LaneOffsetController:
    """Tracks a discrete lane index and animates the matching lateral offset.

    Lane *i* sits at ``(i - center) * lane_width`` with
    ``center = (lane_count - 1) // 2``, so an odd lane count is symmetric
    around zero. A transition eases from the current offset to the target
    lane with smoothstep over *lane_swap_time* seconds. Requests that arrive
    mid-transition are reduced to a single buffered ±1 step, started from the
    lane just reached once the in-flight transition completes.

    Parameters
    ----------
    lane_count:
        Number of lanes (>= 1).
    lane_width:
        Lateral distance between adjacent lane centres.
    lane_swap_time:
        Seconds per lane change; <= 0 switches instantly.
    start_index:
        Initial lane; defaults to the centre lane.
    """

    def __init__(
        self,
        lane_count: int = 3,
        lane_width: float = 1.25,
        lane_swap_time: float = 0.3,
        start_index: int | None = None,
    ) -> None:
        if lane_count < 1:
            raise ValueError("lane_count must be >= 1")
        self.lane_count = lane_count
        self.lane_width = lane_width
        self.lane_swap_time = lane_swap_time

        self._state = LaneState.IDLE
        self._current_index = 0
        self._target_index = 0
        self._current_offset = 0.0
        self._start_offset = 0.0
        self._elapsed = 0.0
        self._progress = 0.0
        self._buffered_step = 0

        self.set_lane(self.center_index if start_index is None else start_index, instant=True)

    # ------------------------------------------------------------------
    # Read-only state
    # ------------------------------------------------------------------

    @property
    def center_index(self) -> int:
        return (self.lane_count - 1) // 2

    @property
    def state(self) -> LaneState:
        return self._state

    @property
    def current_index(self) -> int:
        """Lane last fully reached."""
        return self._current_index

    @property
    def target_index(self) -> int:
        return self._target_index

    @property
    def current_offset(self) -> float:
        return self._current_offset

    @property
    def transition_progress(self) -> float:
        """Normalized elapsed time of the in-flight transition, in [0, 1]."""
        return self._progress

    @property
    def buffered_step(self) -> int:
        return self._buffered_step

    def offset_for(self, index: int) -> float:
        return (index - self.center_index) * self.lane_width

    def clamp_index(self, index: int) -> int:
        return min(max(index, 0), self.lane_count - 1)

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def set_lane(self, index: int, instant: bool = False) -> bool:
        """Move to lane *index*; with *instant*, snap and drop any pending work."""
        index = self.clamp_index(index)
        if not instant:
            return self.request_lane(index)
        self._current_index = index
        self._target_index = index
        self._current_offset = self.offset_for(index)
        self._state = LaneState.IDLE
        self._elapsed = 0.0
        self._progress = 0.0
        self._buffered_step = 0
        return True

    def request_lane(self, index: int) -> bool:
        """Ask for lane *index* (clamped into range).

        Returns True if a transition started or a step was buffered.
        """
        index = self.clamp_index(index)
        if self._state is LaneState.TRANSITIONING:
            self._buffered_step = _sign(index - self._target_index)
            return self._buffered_step != 0
        if index == self._current_index:
            return False
        self._start_transition(index)
        return True

    def step(self, direction: int) -> bool:
        """Request one lane to the left (negative) or right (positive)."""
        direction = _sign(direction)
        if direction == 0:
            return False
        if self._state is LaneState.TRANSITIONING:
            self._buffered_step = direction
            return True
        return self.request_lane(self._current_index + direction)

    def tick(self, dt: float) -> float:
        """Advance the transition by *dt* seconds and return the current offset.

        Raises:
            ValueError: If *dt* is negative.
        """
        if dt < 0:
            raise ValueError("dt must be >= 0")
        if self._state is not LaneState.TRANSITIONING:
            return self._current_offset

        self._elapsed += dt
        u = 1.0 if self.lane_swap_time <= 0 else min(1.0, self._elapsed / self.lane_swap_time)
        self._progress = u
        self._current_offset = lerp(
            self._start_offset, self.offset_for(self._target_index), smoothstep(u)
        )
        if u >= 1.0:
            self._complete_transition()
        return self._current_offset

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _start_transition(self, index: int) -> None:
        _logger.debug("Lane change %d -> %d", self._current_index, index)
        self._target_index = index
        self._start_offset = self._current_offset
        self._elapsed = 0.0
        self._progress = 0.0
        self._state = LaneState.TRANSITIONING
        if self.lane_swap_time <= 0:
            self._current_offset = self.offset_for(index)
            self._progress = 1.0
            self._complete_transition()

    def _complete_transition(self) -> None:
        self._current_index = self._target_index
        self._current_offset = self.offset_for(self._target_index)
        self._state = LaneState.IDLE
        self._elapsed = 0.0

        step, self._buffered_step = self._buffered_step, 0
        if step:
            target = self.clamp_index(self._current_index + step)
            if target != self._current_index:
                self._start_transition(target)
