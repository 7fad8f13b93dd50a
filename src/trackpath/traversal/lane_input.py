"""Lane input — press/release hysteresis between a host input source and the lanes."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol

from trackpath.traversal.lanes import LaneOffsetController


class LateralIntentSource(Protocol):
    """Host input capability: signed lateral intent, negative = left."""

    def read_lateral_intent(self) -> float: ...


@dataclass
class PressLatch:
    """Accepts one press per excursion above *press_threshold*.

    Re-arms only after the magnitude falls below *release_threshold*.
    """

    press_threshold: float = 0.5
    release_threshold: float = 0.2
    _armed: bool = field(default=True, init=False, repr=False)

    def __post_init__(self) -> None:
        if self.release_threshold > self.press_threshold:
            raise ValueError("release_threshold must not exceed press_threshold")

    @property
    def armed(self) -> bool:
        return self._armed

    def update(self, value: float) -> int:
        """Feed one input sample; return ±1 on an accepted press, else 0."""
        magnitude = abs(value)
        if self._armed:
            if magnitude >= self.press_threshold:
                self._armed = False
                return 1 if value > 0 else -1
        elif magnitude < self.release_threshold:
            self._armed = True
        return 0


class LaneInput:
    """Polls a :class:`LateralIntentSource` and issues lane steps.

    Parameters
    ----------
    source:
        Object with ``read_lateral_intent() -> float``.
    controller:
        The :class:`LaneOffsetController` receiving steps.
    press_threshold:
        Magnitude at which a press registers.
    release_threshold:
        Magnitude below which the input re-arms.
    """

    def __init__(
        self,
        source: LateralIntentSource,
        controller: LaneOffsetController,
        press_threshold: float = 0.5,
        release_threshold: float = 0.2,
    ) -> None:
        self._source = source
        self._controller = controller
        self._latch = PressLatch(press_threshold, release_threshold)

    @property
    def armed(self) -> bool:
        return self._latch.armed

    def poll(self) -> int:
        """Read the source once; return the step issued (-1, 0 or +1)."""
        step = self._latch.update(self._source.read_lateral_intent())
        if step:
            self._controller.step(step)
        return step
