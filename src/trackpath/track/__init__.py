"""Waypoint ordering, curve fitting and path-building models.

Public API
----------
Vec3               - immutable 3D point / direction
OrderedPath        - ordered waypoint sequence (open or closed)
CurveKnot          - knot with tangent handles
BuildDiagnostic    - structured build warning
WaypointOrderer    - guarded nearest-chain + 2-opt ordering
CurveFitter        - mirrored tangent-handle fitting
TrackPathBuilder   - full build pipeline
InvalidInput       - raised when a build has too few waypoints
GuardViolation     - raised when an edge breaks the distance guard (abort policy)
load_waypoints     - read waypoints from a JSON file
"""

from trackpath.track.builder import BuildResult, TrackPathBuilder
from trackpath.track.errors import GuardPolicy, GuardViolation, InvalidInput, TrackPathError
from trackpath.track.fitter import CurveFitter
from trackpath.track.lane_lines import LaneBoundaries, LaneBoundaryBuilder
from trackpath.track.models import BuildDiagnostic, CurveKnot, DiagnosticCode, OrderedPath
from trackpath.track.orderer import WaypointOrderer
from trackpath.track.projection import GroundProbe, project_knots
from trackpath.track.vector import Vec3
from trackpath.track.waypoints import load_waypoints

__all__ = [
    "BuildDiagnostic",
    "BuildResult",
    "CurveFitter",
    "CurveKnot",
    "DiagnosticCode",
    "GroundProbe",
    "GuardPolicy",
    "GuardViolation",
    "InvalidInput",
    "LaneBoundaries",
    "LaneBoundaryBuilder",
    "OrderedPath",
    "TrackPathBuilder",
    "TrackPathError",
    "Vec3",
    "WaypointOrderer",
    "load_waypoints",
    "project_knots",
]
