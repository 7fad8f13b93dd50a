"""Smoke tests: every subpackage imports and exposes its public API."""

from __future__ import annotations


def test_import_package():
    import trackpath

    assert trackpath.__version__ == "0.1.0"


def test_import_track():
    from trackpath.track import TrackPathBuilder, Vec3, WaypointOrderer  # noqa: F401


def test_import_curve():
    from trackpath.curve import BezierSplineCurve, CurveAdapter, CurveSample  # noqa: F401


def test_import_traversal():
    from trackpath.traversal import (  # noqa: F401
        ArcLengthTable,
        LaneOffsetController,
        PathFollower,
        TraversalEngine,
    )


def test_import_web():
    from trackpath.web.app import app

    assert app.title == "Track Path"
