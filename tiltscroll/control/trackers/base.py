"""
Shared tracker plumbing.
Owns everything both strategies agree on: listener, hardware availability,
accuracy gating, sample vetting and the UNINITIALIZED/TRACKING switch.
"""
import logging
from typing import Optional

from tiltscroll.core.interfaces import IScrollListener, ITiltTracker
from tiltscroll.core.types import (
    UNKNOWN_ACCURACY, DisplayRotation, RawSample, ScrollDelta,
    SensorAccuracy, SensorKind, TrackerState,
)

logger = logging.getLogger(__name__)


class BaseTiltTracker(ITiltTracker):
    SENSOR: SensorKind = None

    def __init__(self, listener: IScrollListener, available: bool = True):
        self.listener = listener
        self.available = available
        self.last_accuracy: Optional[SensorAccuracy] = UNKNOWN_ACCURACY
        self.last_delta = ScrollDelta()
        self._state = TrackerState.UNINITIALIZED

        if not available:
            logger.warning("%s sensor not available, %s is inert",
                           self.SENSOR.name, type(self).__name__)

    # --- ITiltTracker ---
    @property
    def state(self) -> TrackerState:
        return self._state

    @property
    def required_sensor(self) -> SensorKind:
        return self.SENSOR

    def on_accuracy_changed(self, accuracy: SensorAccuracy) -> None:
        accuracy = SensorAccuracy(accuracy)
        if self.last_accuracy != accuracy:
            logger.debug("%s accuracy -> %s", self.SENSOR.name, accuracy.name)
            self.last_accuracy = accuracy

    def reset(self) -> None:
        """
        Back to UNINITIALIZED: the next sample only records a baseline.
        The last reported accuracy survives, so an UNRELIABLE sensor stays gated.
        """
        self._state = TrackerState.UNINITIALIZED
        self.last_delta = ScrollDelta()
        self._reset_baseline()

    def on_sample(self, sample: RawSample,
                  display_rotation: Optional[DisplayRotation] = None) -> None:
        if not self._accepts(sample):
            return
        self._update(sample, display_rotation)

    # --- Hooks ---
    def _reset_baseline(self) -> None:
        raise NotImplementedError

    def _update(self, sample: RawSample, display_rotation: Optional[DisplayRotation]) -> None:
        raise NotImplementedError

    # --- Helpers ---
    def _accepts(self, sample: RawSample) -> bool:
        if not self.available:
            return False
        if self.last_accuracy == SensorAccuracy.UNRELIABLE:
            return False
        if sample.kind != self.SENSOR or not sample.is_well_formed:
            logger.debug("Dropped malformed %s sample: %r", sample.kind, sample.values)
            return False
        return True

    def _begin_tracking(self) -> bool:
        """True exactly once per (re)initialization."""
        if self._state is TrackerState.UNINITIALIZED:
            self._state = TrackerState.TRACKING
            return True
        return False

    def _emit(self, dx: int, dy: int) -> None:
        self.last_delta = ScrollDelta(dx, dy)
        self.listener.on_tilt(dx, dy)
