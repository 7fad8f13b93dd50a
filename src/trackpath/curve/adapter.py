"""CurveAdapter — the boundary between path building/traversal and curve maths."""

from __future__ import annotations

from collections.abc import Sequence
from typing import NamedTuple, Protocol

from trackpath.track.models import CurveKnot
from trackpath.track.vector import Vec3


class CurveSample(NamedTuple):
    """Result of evaluating a curve at a normalized parameter."""

    position: Vec3
    tangent: Vec3  # not normalized; may be zero at a cusp
    up: Vec3


class CurveAdapter(Protocol):
    """A parametric curve over ``t ∈ [0, 1]``, C¹ through its knots.

    The parameter is *not* assumed to be proportional to arc length.
    """

    @property
    def closed(self) -> bool: ...

    @property
    def is_empty(self) -> bool: ...

    def evaluate(self, t: float) -> CurveSample: ...

    def length(self) -> float: ...

    def set_knots(self, knots: Sequence[CurveKnot], closed: bool) -> None: ...

    def clear(self) -> None: ...
