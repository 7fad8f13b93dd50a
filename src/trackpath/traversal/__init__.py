"""Uniform-speed traversal with lane offsets."""

from trackpath.traversal.arc_length import ArcLengthSample, ArcLengthTable
from trackpath.traversal.engine import TraversalEngine
from trackpath.traversal.follower import FollowerState, PathFollower, Pose
from trackpath.traversal.lane_input import LaneInput, LateralIntentSource
from trackpath.traversal.lanes import LaneOffsetController, LaneState

__all__ = [
    "ArcLengthSample",
    "ArcLengthTable",
    "FollowerState",
    "LaneInput",
    "LaneOffsetController",
    "LaneState",
    "LateralIntentSource",
    "PathFollower",
    "Pose",
    "TraversalEngine",
]
