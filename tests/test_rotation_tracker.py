import math
import unittest

from scipy.spatial.transform import Rotation as R

from tiltscroll.control.sample_source import head_pose_matrix
from tiltscroll.control.trackers import RotationVectorTracker
from tiltscroll.core.types import (
    DisplayRotation, RawSample, SensorAccuracy, SensorKind, TrackerState,
)


class RecordingListener:
    def __init__(self):
        self.calls = []

    def on_tilt(self, dx, dy):
        self.calls.append((dx, dy))


def head_sample(yaw, pitch, rotation=DisplayRotation.ROT_0):
    """Rotation-vector sample for a head looking at (yaw, pitch)."""
    x, y, z, w = R.from_matrix(head_pose_matrix(yaw, pitch, rotation)).as_quat()
    return RawSample(SensorKind.ROTATION_VECTOR, (x, y, z, w))


class TestRotationVectorTracker(unittest.TestCase):
    def setUp(self):
        self.listener = RecordingListener()
        self.tracker = RotationVectorTracker(self.listener)

    def feed(self, yaw, pitch, rotation=DisplayRotation.ROT_0):
        self.tracker.on_sample(head_sample(yaw, pitch, rotation), rotation)

    def test_first_sample_is_baseline_only(self):
        """Whatever the first pose, it never scrolls."""
        self.feed(73.5, -21.5)
        self.assertEqual(self.listener.calls, [(0, 0)])
        self.assertEqual(self.tracker.state, TrackerState.TRACKING)
        self.assertTrue(self.tracker.orientation.initialized)
        self.assertAlmostEqual(self.tracker.orientation.azimuth, 73.5, places=6)

    def test_azimuth_drives_dy_pitch_drives_dx(self):
        self.feed(0.0, 0.0)
        self.feed(10.5, 0.0)
        self.feed(10.5, 3.5)
        self.assertEqual(self.listener.calls, [(0, 0), (0, 600), (180, 0)])

    def test_negative_deltas_truncate_toward_zero(self):
        self.feed(0.0, 0.0)
        self.feed(-2.5, -1.5)
        self.assertEqual(self.listener.calls[-1], (-60, -120))

    def test_unwrap_across_seam(self):
        """179.25 -> -178.25 is +2.5 deg, not -357.5."""
        self.feed(179.25, 0.0)
        self.feed(-178.25, 0.0)
        self.assertEqual(self.listener.calls[-1], (0, 120))

    def test_emits_zero_every_sample_when_still(self):
        for _ in range(3):
            self.feed(5.0, 5.0)
        self.assertEqual(self.listener.calls, [(0, 0)] * 3)

    def test_baseline_follows_thresholded_samples(self):
        """Zeroed deltas still move the baseline, so slow turns never accumulate."""
        tracker = RotationVectorTracker(self.listener, threshold=2.0)
        for yaw in (0.0, 1.5, 3.0, 4.5):
            tracker.on_sample(head_sample(yaw, 0.0), DisplayRotation.ROT_0)
        self.assertEqual(self.listener.calls, [(0, 0)] * 4)
        self.assertAlmostEqual(tracker.orientation.azimuth, 4.5, places=6)

    def test_accuracy_gating(self):
        self.feed(0.0, 0.0)
        self.tracker.on_accuracy_changed(SensorAccuracy.UNRELIABLE)
        self.feed(30.0, 0.0)
        self.feed(45.0, 10.0)
        self.assertEqual(self.listener.calls, [(0, 0)])
        self.assertAlmostEqual(self.tracker.orientation.azimuth, 0.0, places=6)

        # Recovery measures from the last accepted baseline
        self.tracker.on_accuracy_changed(SensorAccuracy.LOW)
        self.feed(10.5, 0.0)
        self.assertEqual(self.listener.calls[-1], (0, 600))

    def test_unreliable_before_first_sample_keeps_uninitialized(self):
        self.tracker.on_accuracy_changed(SensorAccuracy.UNRELIABLE)
        self.feed(10.0, 0.0)
        self.assertEqual(self.tracker.state, TrackerState.UNINITIALIZED)
        self.tracker.on_accuracy_changed(SensorAccuracy.HIGH)
        self.feed(20.0, 0.0)
        self.assertEqual(self.listener.calls, [(0, 0)])

    def test_reset_restores_baseline_suppression(self):
        self.feed(0.0, 0.0)
        self.feed(10.5, 0.0)
        self.tracker.reset()
        self.assertEqual(self.tracker.state, TrackerState.UNINITIALIZED)
        self.feed(50.5, 20.5)
        self.assertEqual(self.listener.calls[-1], (0, 0))

    def test_display_rotation_is_honoured_per_sample(self):
        self.feed(0.0, 0.0, DisplayRotation.ROT_270)
        self.feed(0.0, 4.5, DisplayRotation.ROT_270)
        self.assertEqual(self.listener.calls[-1], (240, 0))

    def test_three_component_vector(self):
        self.feed(0.0, 0.0)
        x, y, z, w = R.from_matrix(head_pose_matrix(6.5, 0.0)).as_quat()
        if w < 0:
            x, y, z = -x, -y, -z
        self.tracker.on_sample(RawSample(SensorKind.ROTATION_VECTOR, (x, y, z)), DisplayRotation.ROT_0)
        self.assertEqual(self.listener.calls[-1], (0, 360))

    def test_malformed_samples_dropped(self):
        self.feed(0.0, 0.0)
        bad = [
            RawSample(SensorKind.ROTATION_VECTOR, (0.1, math.nan, 0.0, 0.9)),
            RawSample(SensorKind.ROTATION_VECTOR, (0.1, math.inf, 0.0)),
            RawSample(SensorKind.ROTATION_VECTOR, (0.1, 0.2)),
            RawSample(SensorKind.ROTATION_VECTOR, (0.0, 0.0, 0.0, 0.0)),
            RawSample(SensorKind.ACCELEROMETER, (0.0, 9.8, 0.0)),
        ]
        for sample in bad:
            self.tracker.on_sample(sample, DisplayRotation.ROT_0)
        self.assertEqual(self.listener.calls, [(0, 0)])
        self.assertAlmostEqual(self.tracker.orientation.azimuth, 0.0, places=6)

    def test_zero_gain_override_is_honoured(self):
        tracker = RotationVectorTracker(self.listener, pixels_per_degree=0)
        self.assertEqual(tracker.gain, 0)
        tracker.on_sample(head_sample(0.0, 0.0))
        tracker.on_sample(head_sample(10.5, 3.5))
        self.assertEqual(self.listener.calls, [(0, 0), (0, 0)])

    def test_unavailable_sensor_is_inert(self):
        with self.assertLogs("tiltscroll.control.trackers.base", level="WARNING"):
            tracker = RotationVectorTracker(self.listener, available=False)
        tracker.on_sample(head_sample(0.0, 0.0), DisplayRotation.ROT_0)
        tracker.on_sample(head_sample(20.0, 0.0), DisplayRotation.ROT_0)
        self.assertEqual(self.listener.calls, [])
        self.assertEqual(tracker.state, TrackerState.UNINITIALIZED)

    def test_missing_rotation_defaults_to_natural(self):
        self.tracker.on_sample(head_sample(0.0, 0.0), None)
        self.tracker.on_sample(head_sample(3.5, 0.0), None)
        self.assertEqual(self.listener.calls[-1], (0, 180))


if __name__ == '__main__':
    unittest.main()
