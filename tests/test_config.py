"""Tests for environment-driven settings."""

from __future__ import annotations

import pytest

from trackpath.config import TrackPathSettings
from trackpath.track.errors import GuardPolicy


def test_defaults():
    s = TrackPathSettings.from_env({})
    assert s.max_link_distance == 35.0
    assert s.direction_bias == 0.7
    assert s.refinement_passes == 2
    assert s.guard_policy == "warn"
    assert s.samples == 128
    assert s.forward_speed == 1.2


def test_env_overrides_are_typed():
    s = TrackPathSettings.from_env({
        "TRACKPATH_MAX_LINK_DISTANCE": "12.5",
        "TRACKPATH_REFINEMENT_PASSES": "4",
        "TRACKPATH_GUARD_POLICY": "abort",
        "TRACKPATH_LANE_COUNT": "5",
        "TRACKPATH_SAMPLES": "",
    })
    assert s.max_link_distance == 12.5
    assert s.refinement_passes == 4
    assert isinstance(s.refinement_passes, int)
    assert s.guard_policy == "abort"
    assert s.lane_count == 5
    assert s.samples == 128


def test_reads_process_environment(monkeypatch):
    monkeypatch.setenv("TRACKPATH_HANDLE_TIGHTNESS", "0.9")
    assert TrackPathSettings.from_env().handle_tightness == 0.9


def test_unparseable_value_raises():
    with pytest.raises(ValueError, match="TRACKPATH_SAMPLES"):
        TrackPathSettings.from_env({"TRACKPATH_SAMPLES": "lots"})


def test_unknown_guard_policy_raises():
    with pytest.raises(ValueError, match="TRACKPATH_GUARD_POLICY"):
        TrackPathSettings.from_env({"TRACKPATH_GUARD_POLICY": "ignore"})


def test_factories_apply_settings():
    s = TrackPathSettings(
        max_link_distance=8.0,
        guard_policy="abort",
        handle_tightness=0.1,
        lane_count=5,
        lane_width=2.0,
    )
    orderer = s.make_orderer()
    assert orderer.max_link_distance == 8.0
    assert orderer.guard_policy is GuardPolicy.ABORT
    assert s.make_fitter().handle_tightness == 0.1
    lanes = s.make_lanes()
    assert lanes.lane_count == 5
    assert lanes.offset_for(4) == 4.0
