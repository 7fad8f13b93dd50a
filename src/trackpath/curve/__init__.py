"""Curve boundary and the scipy-backed Bézier implementation."""

from trackpath.curve.adapter import CurveAdapter, CurveSample
from trackpath.curve.bezier import BezierSplineCurve

__all__ = ["BezierSplineCurve", "CurveAdapter", "CurveSample"]
