"""Piecewise cubic Bézier curve backed by :class:`scipy.interpolate.BPoly`."""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np
from scipy.integrate import quad
from scipy.interpolate import BPoly

from trackpath.curve.adapter import CurveSample
from trackpath.track.models import CurveKnot
from trackpath.track.vector import UP, Vec3, clamp01

# Parameter step for the chord fallback when the derivative vanishes.
_FD_STEP = 1e-4
_DEGENERATE_SPEED = 1e-9


class BezierSplineCurve:
    """A :class:`~trackpath.curve.adapter.CurveAdapter` over cubic Bézier spans.

    Span *i* runs from knot *i* to knot *i+1* (wrapping to knot 0 on a closed
    curve) with Bernstein control points ``p_i``, ``p_i + tangent_out_i``,
    ``p_{i+1} + tangent_in_{i+1}``, ``p_{i+1}``. The global parameter is split
    evenly across spans.

    Parameters
    ----------
    knots:
        Initial knots; fewer than two leaves the curve empty.
    closed:
        Whether the last knot links back to the first.
    up:
        Up vector reported by :meth:`evaluate`.
    """

    def __init__(
        self,
        knots: Sequence[CurveKnot] = (),
        closed: bool = False,
        up: Vec3 = UP,
    ) -> None:
        self._up = up
        self._knots: tuple[CurveKnot, ...] = ()
        self._closed = closed
        self._poly: BPoly | None = None
        self._dpoly: BPoly | None = None
        self._length: float | None = None
        self.set_knots(knots, closed)

    # ------------------------------------------------------------------
    # Mutators
    # ------------------------------------------------------------------

    def set_knots(self, knots: Sequence[CurveKnot], closed: bool) -> None:
        """Replace the knot sequence and open/closed flag."""
        self._knots = tuple(knots)
        self._closed = closed
        self._length = None
        if len(self._knots) < 2:
            self._poly = None
            self._dpoly = None
            return

        n = len(self._knots)
        spans = n if closed else n - 1
        coeffs = np.empty((4, spans, 3))
        for s in range(spans):
            k0 = self._knots[s]
            k1 = self._knots[(s + 1) % n]
            coeffs[0, s] = k0.position.as_tuple()
            coeffs[1, s] = (k0.position + k0.tangent_out).as_tuple()
            coeffs[2, s] = (k1.position + k1.tangent_in).as_tuple()
            coeffs[3, s] = k1.position.as_tuple()

        breaks = np.linspace(0.0, 1.0, spans + 1)
        self._poly = BPoly(coeffs, breaks)
        self._dpoly = self._poly.derivative()

    def clear(self) -> None:
        self.set_knots((), self._closed)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def knots(self) -> tuple[CurveKnot, ...]:
        return self._knots

    @property
    def is_empty(self) -> bool:
        return self._poly is None

    @property
    def span_count(self) -> int:
        if self._poly is None:
            return 0
        return len(self._poly.x) - 1

    def evaluate(self, t: float) -> CurveSample:
        """Position, tangent and up at normalized parameter *t* (clamped to [0, 1])."""
        if self._poly is None or self._dpoly is None:
            raise ValueError("Cannot evaluate an empty curve (needs at least 2 knots)")
        t = clamp01(t)
        position = Vec3(*(float(v) for v in self._poly(t)))
        deriv = np.asarray(self._dpoly(t), dtype=float)

        if np.linalg.norm(deriv) < _DEGENERATE_SPEED:
            # Zero-length handle: take the chord across t instead.
            t0 = max(0.0, t - _FD_STEP)
            t1 = min(1.0, t + _FD_STEP)
            deriv = np.asarray(self._poly(t1) - self._poly(t0), dtype=float) / (t1 - t0)

        tangent = Vec3(*(float(v) for v in deriv))
        return CurveSample(position=position, tangent=tangent, up=self._up)

    def length(self) -> float:
        """Arc length obtained by integrating ``|dP/dt|`` over each span."""
        if self._dpoly is None:
            return 0.0
        if self._length is None:
            dpoly = self._dpoly
            breaks = dpoly.x
            total = 0.0
            for a, b in zip(breaks[:-1], breaks[1:]):
                value, _ = quad(lambda t: float(np.linalg.norm(dpoly(t))), a, b)
                total += value
            self._length = total
        return self._length
