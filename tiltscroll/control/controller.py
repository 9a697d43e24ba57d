"""
TiltScroll Controller.
Wires a sample source to a tilt tracker and the tracker to the host listener.
Owns the start/stop lifecycle; everything else is delegated.
"""

import logging
from typing import Optional

from tiltscroll.config import CONFIG
from tiltscroll.control.trackers import TRACKERS, BaseTiltTracker, create_tracker
from tiltscroll.core.interfaces import IScrollListener, ISampleSource
from tiltscroll.core.types import RawSample, SensorAccuracy, SensorKind, TrackerState

logger = logging.getLogger(__name__)


class TiltScrollController:
    def __init__(self, source: ISampleSource, listener: IScrollListener,
                 tracker_kind: Optional[str] = None, **tracker_overrides):
        self.source = source
        self.listener = listener
        self.tracker_kind = tracker_kind or CONFIG["TRACKER_KIND"]
        self.sampling_period_us = CONFIG["SENSOR_DELAY_MICROS"]
        self._running = False

        # Strategy is fixed here; hardware probing decides if it is live or inert
        cls = TRACKERS.get(self.tracker_kind)
        available = cls is None or source.has_sensor(cls.SENSOR)
        self._tracker: BaseTiltTracker = create_tracker(
            self.tracker_kind, listener, available=available, **tracker_overrides)

    @property
    def tracker(self) -> BaseTiltTracker:
        return self._tracker

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def state(self) -> TrackerState:
        return self._tracker.state

    # --- LIFECYCLE ---
    def start(self):
        """Registers with the source. Always begins from a fresh baseline."""
        self._tracker.reset()
        if self._running:
            return
        self.source.start(self, self.sampling_period_us)
        self._running = True
        logger.info("Tilt scrolling started (%s)", self.tracker_kind)

    def stop(self):
        """Releases the source and drops the baseline."""
        if not self._running:
            return
        self.source.stop()
        self._running = False
        self._tracker.reset()
        logger.info("Tilt scrolling stopped")

    # --- SOURCE CALLBACKS ---
    def on_sample(self, sample: RawSample):
        if not self._running:
            return
        rotation = None
        # Only the rotation strategy consumes the display rotation
        if (sample.kind is SensorKind.ROTATION_VECTOR
                and self._tracker.required_sensor is SensorKind.ROTATION_VECTOR):
            rotation = self.source.current_display_rotation()
        self._tracker.on_sample(sample, rotation)

    def on_accuracy_changed(self, kind: SensorKind, accuracy: SensorAccuracy):
        if kind is self._tracker.required_sensor:
            self._tracker.on_accuracy_changed(accuracy)
