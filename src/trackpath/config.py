"""Runtime settings, overridable from ``TRACKPATH_*`` environment variables.

Entry points call :func:`dotenv.load_dotenv` first so a ``.env`` file in the
project root is honoured.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, fields

from trackpath.track.errors import GuardPolicy
from trackpath.track.fitter import CurveFitter
from trackpath.track.orderer import WaypointOrderer
from trackpath.traversal.lanes import LaneOffsetController

ENV_PREFIX = "TRACKPATH_"


@dataclass
class TrackPathSettings:
    """Every tunable of the build and traversal pipeline."""

    # ordering
    max_link_distance: float = 35.0
    direction_bias: float = 0.7
    refinement_passes: int = 2
    guard_policy: str = GuardPolicy.WARN.value
    fallback_axis: str = "z"

    # fitting
    handle_tightness: float = 0.5

    # traversal
    samples: int = 128
    forward_speed: float = 1.2
    height_offset: float = 0.2

    # lanes
    lane_count: int = 3
    lane_width: float = 1.25
    lane_swap_time: float = 0.3

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> TrackPathSettings:
        """Build settings from defaults overridden by ``TRACKPATH_<FIELD>`` variables.

        Raises:
            ValueError: If a variable cannot be parsed as the field's type.
        """
        env = os.environ if environ is None else environ
        values: dict[str, object] = {}
        for f in fields(cls):
            key = ENV_PREFIX + f.name.upper()
            raw = env.get(key)
            if raw is None or raw == "":
                continue
            caster = type(f.default)
            try:
                values[f.name] = caster(raw)
            except ValueError as exc:
                raise ValueError(f"Invalid value for {key}: {raw!r}") from exc
        settings = cls(**values)
        try:
            GuardPolicy(settings.guard_policy)
        except ValueError as exc:
            raise ValueError(
                f"Invalid value for {ENV_PREFIX}GUARD_POLICY: {settings.guard_policy!r}"
            ) from exc
        return settings

    # ------------------------------------------------------------------
    # Factories
    # ------------------------------------------------------------------

    def make_orderer(self) -> WaypointOrderer:
        return WaypointOrderer(
            max_link_distance=self.max_link_distance,
            direction_bias=self.direction_bias,
            refinement_passes=self.refinement_passes,
            guard_policy=GuardPolicy(self.guard_policy),
            fallback_axis=self.fallback_axis,
        )

    def make_fitter(self) -> CurveFitter:
        return CurveFitter(handle_tightness=self.handle_tightness)

    def make_lanes(self) -> LaneOffsetController:
        return LaneOffsetController(
            lane_count=self.lane_count,
            lane_width=self.lane_width,
            lane_swap_time=self.lane_swap_time,
        )
