"""Tests for the scipy-backed cubic Bézier curve."""

from __future__ import annotations

import pytest

from trackpath.curve.bezier import BezierSplineCurve
from trackpath.track.fitter import CurveFitter
from trackpath.track.models import CurveKnot, OrderedPath
from trackpath.track.vector import UP, ZERO, Vec3
from trackpath.traversal.arc_length import ArcLengthTable

SQUARE = (
    Vec3(0.0, 0.0, 0.0),
    Vec3(10.0, 0.0, 0.0),
    Vec3(10.0, 0.0, 10.0),
    Vec3(0.0, 0.0, 10.0),
)


def make_segment() -> BezierSplineCurve:
    """Straight 10-unit segment along +x with evenly spaced control points."""
    third = Vec3(10.0 / 3.0, 0.0, 0.0)
    return BezierSplineCurve(
        [
            CurveKnot(Vec3(0.0, 0.0, 0.0), -third, third),
            CurveKnot(Vec3(10.0, 0.0, 0.0), -third, third),
        ],
        closed=False,
    )


def make_fitted(points=SQUARE, closed: bool = True) -> BezierSplineCurve:
    knots = CurveFitter().fit(OrderedPath(points=tuple(points), closed=closed))
    return BezierSplineCurve(knots, closed=closed)


def assert_vec_close(a: Vec3, b: Vec3, abs_tol: float = 1e-9) -> None:
    assert a.as_tuple() == pytest.approx(b.as_tuple(), abs=abs_tol)


class TestEvaluate:
    def test_straight_segment(self):
        sample = make_segment().evaluate(0.5)
        assert_vec_close(sample.position, Vec3(5.0, 0.0, 0.0))
        assert_vec_close(sample.tangent, Vec3(10.0, 0.0, 0.0))
        assert sample.up == UP

    def test_parameter_is_clamped(self):
        curve = make_segment()
        assert_vec_close(curve.evaluate(-1.0).position, Vec3(0.0, 0.0, 0.0))
        assert_vec_close(curve.evaluate(2.0).position, Vec3(10.0, 0.0, 0.0))

    def test_passes_through_knots(self):
        curve = make_fitted()
        assert curve.span_count == 4
        for i, p in enumerate(SQUARE):
            assert_vec_close(curve.evaluate(i / 4).position, p)

    def test_closed_curve_joins_up(self):
        curve = make_fitted()
        assert_vec_close(curve.evaluate(0.0).position, curve.evaluate(1.0).position)

    def test_open_curve_spans(self):
        curve = make_fitted(closed=False)
        assert curve.span_count == 3
        assert_vec_close(curve.evaluate(1.0).position, SQUARE[-1])

    def test_zero_handle_endpoint_has_chord_tangent(self):
        curve = BezierSplineCurve(
            [CurveKnot(Vec3(0.0, 0.0, 0.0)), CurveKnot(Vec3(10.0, 0.0, 0.0))],
            closed=False,
        )
        tangent = curve.evaluate(0.0).tangent
        assert tangent.normalized().as_tuple() == pytest.approx((1.0, 0.0, 0.0))
        tangent = curve.evaluate(1.0).tangent
        assert tangent.normalized().as_tuple() == pytest.approx((1.0, 0.0, 0.0))


class TestLength:
    def test_straight_segment_length(self):
        assert make_segment().length() == pytest.approx(10.0)

    def test_matches_dense_polyline(self):
        curve = make_fitted()
        dense = ArcLengthTable.build(curve, 2000).total_length
        assert curve.length() == pytest.approx(dense, rel=1e-3)


class TestEmpty:
    def test_default_curve_is_empty(self):
        curve = BezierSplineCurve()
        assert curve.is_empty
        assert curve.span_count == 0
        assert curve.length() == 0.0
        with pytest.raises(ValueError):
            curve.evaluate(0.5)

    def test_single_knot_is_empty(self):
        assert BezierSplineCurve([CurveKnot(ZERO)]).is_empty

    def test_clear(self):
        curve = make_fitted()
        curve.clear()
        assert curve.is_empty
        assert curve.knots == ()

    def test_set_knots_replaces_curve(self):
        curve = make_segment()
        first = curve.length()
        curve.set_knots(make_fitted().knots, closed=True)
        assert curve.closed
        assert curve.length() != pytest.approx(first)
