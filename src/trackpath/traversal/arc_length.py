"""Arc-length lookup table: distance along a curve → curve parameter.

Curves are not parameterized by arc length, so moving ``t`` at a constant
rate gives a varying physical speed. The table samples the curve at evenly
spaced parameters, accumulates the polyline distance between consecutive
samples, and inverts that mapping by binary search.
"""

from __future__ import annotations

import bisect
from collections.abc import Sequence
from dataclasses import dataclass

from trackpath.curve.adapter import CurveAdapter
from trackpath.track.errors import InvalidInput
from trackpath.track.vector import clamp01, lerp

# Minimum segment span used when inverting, to avoid dividing by ~0.
_MIN_SPAN = 1e-6


@dataclass(frozen=True)
class ArcLengthSample:
    parameter: float
    """Curve parameter in [0, 1]."""

    distance: float
    """Cumulative polyline distance from the start of the curve."""


class ArcLengthTable:
    """Immutable, monotonic ``(parameter, cumulative distance)`` table.

    :attr:`total_length` is the *measured* polyline length, so displayed length
    and distance → parameter inversion always agree. Build a fresh table with
    :meth:`build` whenever the curve or sample count changes.

    Args:
        parameters: Strictly increasing, starting at 0 and ending at 1.
        distances: Non-decreasing, starting at 0.

    Raises:
        InvalidInput: If the columns violate the table invariants.
    """

    def __init__(self, parameters: Sequence[float], distances: Sequence[float]) -> None:
        if len(parameters) != len(distances):
            raise InvalidInput("parameters and distances must have equal length")
        if len(parameters) < 2:
            raise InvalidInput("An arc-length table needs at least 2 samples")
        if distances[0] != 0.0:
            raise InvalidInput("The first cumulative distance must be 0")
        for i in range(1, len(parameters)):
            if parameters[i] <= parameters[i - 1]:
                raise InvalidInput("parameters must be strictly increasing")
            if distances[i] < distances[i - 1]:
                raise InvalidInput("distances must be non-decreasing")
        self._ts: tuple[float, ...] = tuple(float(t) for t in parameters)
        self._ds: tuple[float, ...] = tuple(float(d) for d in distances)

    @classmethod
    def build(cls, curve: CurveAdapter, sample_count: int) -> ArcLengthTable:
        """Sample *curve* at *sample_count* evenly spaced parameters.

        Raises:
            InvalidInput: If *sample_count* < 2.
        """
        if sample_count < 2:
            raise InvalidInput(f"sample_count must be >= 2, got {sample_count}")

        ts: list[float] = []
        ds: list[float] = []
        prev = None
        for i in range(sample_count):
            t = i / (sample_count - 1)
            pos = curve.evaluate(t).position
            ts.append(t)
            ds.append(0.0 if prev is None else ds[-1] + prev.distance_to(pos))
            prev = pos
        return cls(ts, ds)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def total_length(self) -> float:
        return self._ds[-1]

    @property
    def sample_count(self) -> int:
        return len(self._ts)

    @property
    def samples(self) -> list[ArcLengthSample]:
        return [ArcLengthSample(t, d) for t, d in zip(self._ts, self._ds)]

    def distance_to_parameter(self, distance: float) -> float:
        """Invert the table: curve parameter at *distance* along the polyline.

        *distance* is clamped to ``[0, total_length]``. The result is
        non-decreasing in *distance* and reproduces each recorded parameter
        at its recorded distance.
        """
        ds = self._ds
        distance = min(max(distance, 0.0), ds[-1])

        lo = bisect.bisect_left(ds, distance)
        i1 = min(max(lo, 1), len(ds) - 1)
        i0 = i1 - 1

        span = max(_MIN_SPAN, ds[i1] - ds[i0])
        u = clamp01((distance - ds[i0]) / span)
        return lerp(self._ts[i0], self._ts[i1], u)

