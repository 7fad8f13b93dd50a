"""Tests for the lane offset controller."""

from __future__ import annotations

import pytest

from trackpath.traversal.lanes import LaneOffsetController, LaneState


def make_lanes(**kwargs) -> LaneOffsetController:
    kwargs.setdefault("lane_count", 3)
    kwargs.setdefault("lane_width", 2.0)
    kwargs.setdefault("lane_swap_time", 0.4)
    return LaneOffsetController(**kwargs)


class TestOffsets:
    def test_three_lanes_are_symmetric(self):
        lanes = make_lanes()
        assert [lanes.offset_for(i) for i in range(3)] == [-2.0, 0.0, 2.0]
        assert lanes.current_index == 1
        assert lanes.current_offset == 0.0

    def test_five_lanes(self):
        lanes = make_lanes(lane_count=5, lane_width=1.0)
        assert lanes.center_index == 2
        assert [lanes.offset_for(i) for i in range(5)] == [-2.0, -1.0, 0.0, 1.0, 2.0]

    def test_even_lane_count_biases_right(self):
        lanes = make_lanes(lane_count=4, lane_width=1.0)
        assert [lanes.offset_for(i) for i in range(4)] == [-1.0, 0.0, 1.0, 2.0]

    def test_start_index(self):
        lanes = make_lanes(start_index=0)
        assert lanes.current_offset == -2.0

    def test_bad_lane_count(self):
        with pytest.raises(ValueError):
            make_lanes(lane_count=0)


class TestTransition:
    def test_smoothstep_easing(self):
        lanes = make_lanes()
        assert lanes.step(+1)
        assert lanes.state is LaneState.TRANSITIONING
        assert lanes.tick(0.1) == pytest.approx(0.3125)
        assert lanes.tick(0.1) == pytest.approx(1.0)
        assert lanes.transition_progress == pytest.approx(0.5)
        assert lanes.current_index == 1

        assert lanes.tick(0.2) == pytest.approx(2.0)
        assert lanes.state is LaneState.IDLE
        assert lanes.current_index == 2

    def test_idle_tick_keeps_offset(self):
        lanes = make_lanes()
        assert lanes.tick(1.0) == 0.0

    def test_negative_dt_raises_and_keeps_progress(self):
        lanes = make_lanes()
        lanes.step(+1)
        lanes.tick(0.1)
        with pytest.raises(ValueError):
            lanes.tick(-0.2)
        assert lanes.transition_progress == pytest.approx(0.25)
        assert lanes.current_offset == pytest.approx(0.3125)

    def test_requests_are_clamped(self):
        lanes = make_lanes()
        lanes.request_lane(10)
        assert lanes.target_index == 2
        lanes.tick(1.0)
        assert not lanes.step(+1)
        assert lanes.state is LaneState.IDLE

    def test_request_current_lane_is_noop(self):
        lanes = make_lanes()
        assert not lanes.request_lane(1)
        assert not lanes.step(0)

    def test_zero_swap_time_is_instant(self):
        lanes = make_lanes(lane_swap_time=0.0)
        lanes.step(-1)
        assert lanes.current_index == 0
        assert lanes.current_offset == -2.0
        assert lanes.state is LaneState.IDLE


class TestBuffering:
    def test_single_step_is_buffered(self):
        lanes = make_lanes(lane_count=5)
        lanes.step(+1)
        lanes.step(+1)
        lanes.step(+1)
        assert lanes.buffered_step == 1

        lanes.tick(0.4)
        assert lanes.current_index == 3
        assert lanes.target_index == 4
        assert lanes.state is LaneState.TRANSITIONING

        lanes.tick(0.4)
        assert lanes.current_index == 4
        assert lanes.state is LaneState.IDLE

    def test_latest_request_wins(self):
        lanes = make_lanes(lane_count=5)
        lanes.step(+1)
        lanes.step(+1)
        lanes.step(-1)
        lanes.tick(0.4)
        assert lanes.target_index == 2
        lanes.tick(0.4)
        assert lanes.current_index == 2

    def test_request_lane_during_transition_buffers_direction(self):
        lanes = make_lanes(lane_count=5)
        lanes.request_lane(3)
        lanes.request_lane(0)
        assert lanes.buffered_step == -1

    def test_buffered_step_off_the_edge_is_dropped(self):
        lanes = make_lanes()
        lanes.step(+1)
        lanes.step(+1)
        lanes.tick(0.4)
        assert lanes.current_index == 2
        assert lanes.state is LaneState.IDLE

    def test_instant_set_lane_clears_buffer(self):
        lanes = make_lanes(lane_count=5)
        lanes.step(+1)
        lanes.step(+1)
        lanes.set_lane(0, instant=True)
        assert lanes.buffered_step == 0
        assert lanes.current_offset == -4.0
        assert lanes.state is LaneState.IDLE
