"""Tests for the per-tick integration of lanes, input and follower."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from trackpath.curve.adapter import CurveSample
from trackpath.track.vector import UP, Vec3
from trackpath.traversal.engine import TraversalEngine
from trackpath.traversal.follower import PathFollower
from trackpath.traversal.lanes import LaneOffsetController


class LineCurve:
    closed = False
    is_empty = False

    def evaluate(self, t: float) -> CurveSample:
        return CurveSample(Vec3(0.0, 0.0, 10.0 * t), Vec3(0.0, 0.0, 10.0), UP)


def make_engine(**kwargs) -> TraversalEngine:
    follower = PathFollower(LineCurve(), speed=1.0, samples=11, height_offset=0.0)
    lanes = LaneOffsetController(lane_count=3, lane_width=1.25, lane_swap_time=0.3)
    return TraversalEngine(follower, lanes, **kwargs)


class TestTraversalEngine:
    def test_follower_reads_lanes(self):
        engine = make_engine()
        assert engine.follower.lane_source is engine.lanes

    def test_existing_lane_source_is_kept(self):
        source = MagicMock(current_offset=0.0)
        follower = PathFollower(LineCurve(), lane_source=source)
        engine = TraversalEngine(follower, LaneOffsetController())
        assert engine.follower.lane_source is source

    def test_lanes_advance_before_follower(self):
        engine = make_engine()
        engine.lanes.step(+1)
        pose = engine.tick(0.3)
        assert pose.lateral_offset == pytest.approx(1.25)
        assert pose.position.x == pytest.approx(1.25)
        assert pose.position.z == pytest.approx(0.3)

    def test_input_polled_every_tick(self):
        lane_input = MagicMock()
        engine = make_engine(lane_input=lane_input)
        engine.tick(0.1)
        engine.tick(0.1)
        assert lane_input.poll.call_count == 2

    def test_no_curve_returns_none(self):
        engine = TraversalEngine(PathFollower(), LaneOffsetController())
        assert engine.tick(0.1) is None

    def test_negative_dt_leaves_everything_untouched(self):
        lane_input = MagicMock()
        engine = make_engine(lane_input=lane_input)
        engine.lanes.step(+1)
        engine.tick(0.1)
        progress = engine.lanes.transition_progress
        distance = engine.follower.distance_along_path

        with pytest.raises(ValueError):
            engine.tick(-0.2)

        assert engine.lanes.transition_progress == progress
        assert 0.0 <= engine.lanes.transition_progress <= 1.0
        assert engine.follower.distance_along_path == distance
        assert lane_input.poll.call_count == 1
