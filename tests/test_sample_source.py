import unittest

import numpy as np

from tiltscroll.control.sample_source import (
    STANDARD_GRAVITY, MockSampleSource, SampleSource, SimulatedHeadSource, head_pose_matrix,
)
from tiltscroll.core.errors import UnknownSourceError
from tiltscroll.core.orientation import remap_and_orient, rotation_matrix_from_vector
from tiltscroll.core.types import DisplayRotation, RawSample, SensorAccuracy, SensorKind


class RecordingConsumer:
    def __init__(self):
        self.samples = []
        self.accuracies = []

    def on_sample(self, sample):
        self.samples.append(sample)

    def on_accuracy_changed(self, kind, accuracy):
        self.accuracies.append((kind, accuracy))


class TestMockSampleSource(unittest.TestCase):
    def test_delivers_only_while_started(self):
        source = MockSampleSource()
        consumer = RecordingConsumer()
        sample = RawSample(SensorKind.ACCELEROMETER, (0.0, 9.8, 0.0))

        self.assertFalse(source.push(sample))
        source.start(consumer, 32000)
        self.assertTrue(source.push(sample))
        self.assertTrue(source.report_accuracy(SensorKind.ACCELEROMETER, SensorAccuracy.HIGH))
        source.stop()
        self.assertFalse(source.push(sample))

        self.assertEqual(consumer.samples, [sample])
        self.assertEqual(consumer.accuracies, [(SensorKind.ACCELEROMETER, SensorAccuracy.HIGH)])

    def test_missing_sensor_never_delivers(self):
        source = MockSampleSource(sensors=[SensorKind.ACCELEROMETER])
        consumer = RecordingConsumer()
        source.start(consumer, 32000)
        self.assertFalse(source.has_sensor(SensorKind.ROTATION_VECTOR))
        self.assertFalse(source.push(RawSample(SensorKind.ROTATION_VECTOR, (0.0, 0.0, 0.0))))
        self.assertEqual(consumer.samples, [])

    def test_display_rotation_is_live(self):
        source = MockSampleSource()
        self.assertEqual(source.current_display_rotation(), DisplayRotation.ROT_0)
        source.display_rotation = DisplayRotation.ROT_180
        self.assertEqual(source.current_display_rotation(), DisplayRotation.ROT_180)
        self.assertEqual(source.rotation_queries, 2)


class TestSimulatedHeadSource(unittest.TestCase):
    def test_head_pose_is_a_rotation(self):
        m = head_pose_matrix(33.0, -17.0, DisplayRotation.ROT_90)
        np.testing.assert_allclose(m @ m.T, np.eye(3), atol=1e-12)
        self.assertAlmostEqual(np.linalg.det(m), 1.0)

    def test_step_emits_one_sample_per_sensor(self):
        source = SimulatedHeadSource()
        consumer = RecordingConsumer()
        source.start(consumer, 32000)
        self.assertEqual(source.step(10.0, 5.0, timestamp_ns=123), 2)
        kinds = [s.kind for s in consumer.samples]
        self.assertEqual(kinds, [SensorKind.ROTATION_VECTOR, SensorKind.ACCELEROMETER])
        self.assertTrue(all(s.timestamp_ns == 123 for s in consumer.samples))
        self.assertTrue(all(s.is_well_formed for s in consumer.samples))

    def test_rotation_sample_reads_back_the_pose(self):
        for include_w in (True, False):
            source = SimulatedHeadSource(sensors=[SensorKind.ROTATION_VECTOR], include_w=include_w)
            consumer = RecordingConsumer()
            source.start(consumer, 32000)
            source.step(-25.0, 12.0)
            sample = consumer.samples[0]
            self.assertEqual(len(sample.values), 4 if include_w else 3)
            az, pitch = remap_and_orient(rotation_matrix_from_vector(sample.values), DisplayRotation.ROT_0)
            self.assertAlmostEqual(az, -25.0, places=6)
            self.assertAlmostEqual(pitch, 12.0, places=6)

    def test_accelerometer_reads_gravity(self):
        source = SimulatedHeadSource(sensors=[SensorKind.ACCELEROMETER])
        consumer = RecordingConsumer()
        source.start(consumer, 32000)
        source.step(0.0, 0.0)
        np.testing.assert_allclose(consumer.samples[0].values, (0.0, STANDARD_GRAVITY, 0.0), atol=1e-9)


class TestSampleSourceFactory(unittest.TestCase):
    def test_backends(self):
        self.assertIsInstance(SampleSource("mock"), MockSampleSource)
        self.assertIsInstance(SampleSource("simulated"), SimulatedHeadSource)

    def test_unknown_backend(self):
        with self.assertRaises(UnknownSourceError):
            SampleSource("android")


if __name__ == '__main__':
    unittest.main()
