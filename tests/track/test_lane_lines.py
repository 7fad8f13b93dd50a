"""Tests for lane boundary sampling."""

from __future__ import annotations

import pytest

from trackpath.curve.adapter import CurveSample
from trackpath.track.lane_lines import LaneBoundaryBuilder
from trackpath.track.vector import UP, ZERO, Vec3


class StraightCurve:
    """Ten units along +z."""

    closed = False
    is_empty = False

    def evaluate(self, t: float) -> CurveSample:
        return CurveSample(Vec3(0.0, 0.0, 10.0 * t), Vec3(0.0, 0.0, 10.0), UP)


class StallingCurve:
    """Heads along +x at t=0, then has no usable tangent."""

    closed = False
    is_empty = False

    def evaluate(self, t: float) -> CurveSample:
        tangent = Vec3(1.0, 0.0, 0.0) if t == 0.0 else ZERO
        return CurveSample(Vec3(t, 0.0, 0.0), tangent, UP)


class TestLaneBoundaryBuilder:
    def test_boundaries_straddle_centerline(self):
        lines = LaneBoundaryBuilder(lane_offset=1.25, samples=5, y_offset=0.01).build(StraightCurve())

        assert len(lines.left) == len(lines.right) == 5
        assert all(p.x == pytest.approx(-1.25) for p in lines.left)
        assert all(p.x == pytest.approx(1.25) for p in lines.right)
        assert all(p.y == pytest.approx(0.01) for p in lines.left + lines.right)
        assert lines.right[-1].z == pytest.approx(10.0)

    def test_degenerate_tangent_reuses_last_side(self):
        lines = LaneBoundaryBuilder(lane_offset=1.0, samples=3, y_offset=0.0).build(StallingCurve())
        for p, centre in zip(lines.right, (0.0, 0.5, 1.0)):
            assert p.x == pytest.approx(centre)
            assert p.z == pytest.approx(-1.0)

    def test_sample_count_is_at_least_two(self):
        lines = LaneBoundaryBuilder(samples=0).build(StraightCurve())
        assert len(lines.left) == 2
