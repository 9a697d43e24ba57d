"""
TiltScroll Accelerometer Tracker.
=================================

Fallback for hardware without a fused rotation vector.

Key Logic: "Anchor & Delta" per axis
1. The first sample is the anchor for both axes.
2. An axis only moves once its raw change exceeds the threshold; then the
   change is scaled and that axis is re-anchored. Small changes keep the old
   anchor, so slow drift still accumulates until it counts.
3. Only the dominant axis scrolls.
4. Nothing is emitted while both offsets are zero.
"""
import logging

from tiltscroll.config import CONFIG
from tiltscroll.control.trackers.base import BaseTiltTracker
from tiltscroll.core.kinematics import gate_dominant_axis
from tiltscroll.core.types import AccelBaseline, SensorKind

logger = logging.getLogger(__name__)


class AccelerometerTracker(BaseTiltTracker):
    SENSOR = SensorKind.ACCELEROMETER

    def __init__(self, listener, available=True, threshold=None, x_gain=None, y_gain=None,
                 x_axis=None, y_axis=None):
        super().__init__(listener, available)
        self.threshold = CONFIG["ACCEL_THRESHOLD"] if threshold is None else threshold
        self.x_gain = CONFIG["ACCEL_X_GAIN"] if x_gain is None else x_gain
        self.y_gain = CONFIG["ACCEL_Y_GAIN"] if y_gain is None else y_gain
        self.x_axis = CONFIG["ACCEL_X_AXIS"] if x_axis is None else x_axis
        self.y_axis = CONFIG["ACCEL_Y_AXIS"] if y_axis is None else y_axis
        self.baseline = AccelBaseline()

    def _reset_baseline(self):
        self.baseline.reset()

    def _update(self, sample, display_rotation=None):
        x = sample.values[self.x_axis]
        y = sample.values[self.y_axis]
        base = self.baseline

        if self._begin_tracking():
            base.x, base.y = x, y
            base.initialized = True
            return

        x_offset = 0.0
        y_offset = 0.0

        x_diff = x - base.x
        if abs(x_diff) > self.threshold:
            x_offset = x_diff * self.x_gain
            base.x = x

        y_diff = y - base.y
        if abs(y_diff) > self.threshold:
            y_offset = y_diff * self.y_gain
            base.y = y

        x_offset, y_offset = gate_dominant_axis(x_offset, y_offset)
        dx, dy = int(x_offset), int(y_offset)

        if dx != 0 or dy != 0:
            logger.debug("accel tilt %d/%d", dx, dy)
            self._emit(dx, dy)
