"""
TiltScroll Sample Sources (The Sensor Feed).
============================================

This module is the boundary to the platform sensor stack. The engine never
registers sensors itself; a source pushes samples into a consumer
(usually the TiltScrollController) and answers display-rotation queries.

Backends:
- **Mock:** Samples are pushed by hand. Used by unit tests and host integration.
- **Simulated:** Synthesizes a head-mounted display from a yaw/pitch trajectory.
  Drives the demo and tuning runs without hardware.
"""

import logging
import time
from typing import Iterable, Optional

import numpy as np
from scipy.spatial.transform import Rotation as R

from tiltscroll.core.errors import UnknownSourceError
from tiltscroll.core.interfaces import ISampleSource
from tiltscroll.core.orientation import REMAP_TABLE, remap_coordinate_system
from tiltscroll.core.types import DisplayRotation, RawSample, SensorAccuracy, SensorKind

logger = logging.getLogger(__name__)

STANDARD_GRAVITY = 9.80665


# =============================================================================
# MOCK BACKEND (Testing / Host Integration)
# =============================================================================
class MockSampleSource(ISampleSource):
    """
    In-memory source. Delivers synchronously, and only while started,
    like a sensor manager that drops events for unregistered listeners.
    """
    def __init__(self, sensors: Optional[Iterable[SensorKind]] = None,
                 display_rotation: DisplayRotation = DisplayRotation.ROT_0):
        self.sensors = set(SensorKind) if sensors is None else set(sensors)
        self.display_rotation = display_rotation
        self.consumer = None
        self.sampling_period_us = None
        self.rotation_queries = 0

    @property
    def is_started(self) -> bool:
        return self.consumer is not None

    def has_sensor(self, kind: SensorKind) -> bool:
        return kind in self.sensors

    def start(self, consumer, sampling_period_us: int) -> None:
        self.consumer = consumer
        self.sampling_period_us = sampling_period_us

    def stop(self) -> None:
        self.consumer = None

    def current_display_rotation(self) -> DisplayRotation:
        self.rotation_queries += 1
        return self.display_rotation

    # --- Delivery ---
    def push(self, sample: RawSample) -> bool:
        """Returns False when nobody is listening."""
        if self.consumer is None or sample.kind not in self.sensors:
            return False
        self.consumer.on_sample(sample)
        return True

    def report_accuracy(self, kind: SensorKind, accuracy: SensorAccuracy) -> bool:
        if self.consumer is None or kind not in self.sensors:
            return False
        self.consumer.on_accuracy_changed(kind, accuracy)
        return True


# =============================================================================
# SIMULATED BACKEND (Demo / Tuning)
# =============================================================================
def head_pose_matrix(yaw_deg: float, pitch_deg: float,
                     display_rotation: DisplayRotation = DisplayRotation.ROT_0) -> np.ndarray:
    """
    Device rotation matrix for a head looking at (yaw, pitch).

    The pose is built in the instrument panel frame of `display_rotation`
    and un-remapped into raw device axes, so that remap_and_orient() reads
    back (yaw, pitch).
    """
    # atan2(M01, M11) = yaw and asin(-M21) = pitch for Rz(-yaw) . Rx(-pitch)
    panel = R.from_euler("ZX", [-yaw_deg, -pitch_deg], degrees=True).as_matrix()
    # Remapping only permutes/negates columns: remap(M) == M @ Q
    axis_x, axis_y = REMAP_TABLE[display_rotation]
    q = remap_coordinate_system(np.eye(3), axis_x, axis_y)
    return panel @ q.T


class SimulatedHeadSource(MockSampleSource):
    """
    Virtual head-mounted display.
    Each step() emits one sample per available sensor for the given head pose.
    """
    def __init__(self, sensors=None, display_rotation=DisplayRotation.ROT_0,
                 include_w: bool = True, gravity: float = STANDARD_GRAVITY):
        super().__init__(sensors, display_rotation)
        self.include_w = include_w
        self.gravity = gravity
        self.yaw = 0.0
        self.pitch = 0.0

    def step(self, yaw_deg: float, pitch_deg: float, timestamp_ns: Optional[int] = None) -> int:
        """Moves the head and delivers the resulting samples. Returns how many were delivered."""
        self.yaw, self.pitch = yaw_deg, pitch_deg
        ts = time.monotonic_ns() if timestamp_ns is None else timestamp_ns
        device = head_pose_matrix(yaw_deg, pitch_deg, self.display_rotation)

        delivered = 0
        for sample in (self._rotation_sample(device, ts), self._accel_sample(device, ts)):
            if self.push(sample):
                delivered += 1
        return delivered

    def _rotation_sample(self, device: np.ndarray, ts: int) -> RawSample:
        x, y, z, w = R.from_matrix(device).as_quat()
        if w < 0:
            # Same rotation, sensor convention keeps w >= 0 so it can be dropped
            x, y, z, w = -x, -y, -z, -w
        values = (x, y, z, w) if self.include_w else (x, y, z)
        return RawSample(SensorKind.ROTATION_VECTOR, tuple(float(v) for v in values), ts)

    def _accel_sample(self, device: np.ndarray, ts: int) -> RawSample:
        # At rest the accelerometer reads the reaction to gravity, in device axes
        reading = device.T @ np.array([0.0, 0.0, self.gravity])
        return RawSample(SensorKind.ACCELEROMETER, tuple(float(v) for v in reading), ts)


SOURCES = {
    "mock": MockSampleSource,
    "simulated": SimulatedHeadSource,
}


def SampleSource(name: str = "simulated", **kwargs) -> ISampleSource:
    """Factory method to return a sample source backend by name."""
    try:
        cls = SOURCES[name]
    except KeyError:
        raise UnknownSourceError(name) from None
    logger.info("Using %s sample source", name)
    return cls(**kwargs)
