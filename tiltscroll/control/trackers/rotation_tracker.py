"""
TiltScroll Rotation-Vector Tracker.
===================================

Turns absolute head orientation into scroll deltas.

Key Logic: "Baseline & Delta"
1. Every accepted sample is converted to (azimuth, pitch) in the instrument
   panel frame of the current display rotation.
2. The delta against the previous angles is unwrapped across the +/-180 seam
   and gated for sensor jitter.
3. The very first sample after (re)start only establishes the baseline.
4. Whole degrees are multiplied by a pixel gain and sent to the listener,
   on every accepted sample (zero included).
"""
import logging
from typing import Optional

from tiltscroll.config import CONFIG
from tiltscroll.control.trackers.base import BaseTiltTracker
from tiltscroll.core.kinematics import apply_threshold, truncate_scale, unwrap_angle
from tiltscroll.core.orientation import remap_and_orient, rotation_matrix_from_vector
from tiltscroll.core.types import DisplayRotation, OrientationState, RawSample, SensorKind

logger = logging.getLogger(__name__)


class RotationVectorTracker(BaseTiltTracker):
    SENSOR = SensorKind.ROTATION_VECTOR

    def __init__(self, listener, available=True, threshold=None, pixels_per_degree=None):
        super().__init__(listener, available)
        self.threshold = CONFIG["ROTATION_THRESHOLD_DEG"] if threshold is None else threshold
        self.gain = CONFIG["ROTATION_PIXELS_PER_DEGREE"] if pixels_per_degree is None else pixels_per_degree
        self.orientation = OrientationState()

    def _reset_baseline(self):
        self.orientation.reset()

    def _update(self, sample: RawSample, display_rotation: Optional[DisplayRotation]):
        rotation = DisplayRotation.ROT_0 if display_rotation is None else display_rotation
        try:
            matrix = rotation_matrix_from_vector(sample.values)
        except ValueError:
            # Zero-norm quaternion: nothing to orient
            logger.debug("Dropped degenerate rotation vector: %r", sample.values)
            return

        azimuth, pitch = remap_and_orient(matrix, rotation)

        # How many degrees has the head turned since last time
        prev = self.orientation
        delta_pitch = apply_threshold(unwrap_angle(pitch - prev.pitch), self.threshold)
        delta_az = apply_threshold(unwrap_angle(azimuth - prev.azimuth), self.threshold)

        # Ignore the first head position, it is the baseline
        if self._begin_tracking():
            delta_pitch = 0.0
            delta_az = 0.0

        prev.azimuth = azimuth
        prev.pitch = pitch
        prev.initialized = True

        logger.debug("tilt %.4f/%.4f deg", delta_pitch, delta_az)
        self._emit(truncate_scale(delta_pitch, self.gain),
                   truncate_scale(delta_az, self.gain))
