"""
TiltScroll Core Interfaces.
Defines the abstract contracts between the engine, its sensor feed and the host.
"""

from abc import ABC, abstractmethod
from typing import Optional

from tiltscroll.core.types import (
    DisplayRotation, RawSample, SensorAccuracy, SensorKind, TrackerState,
)


class IScrollListener(ABC):
    """
    Implemented by whatever owns the viewport.
    """
    @abstractmethod
    def on_tilt(self, dx: int, dy: int) -> None: pass


class ITiltTracker(ABC):
    """
    One tilt-to-scroll strategy. Hosts pick an implementation at construction.
    """

    # --- SAMPLE FEED ---
    @abstractmethod
    def on_sample(self, sample: RawSample,
                  display_rotation: Optional[DisplayRotation] = None) -> None: pass
    @abstractmethod
    def on_accuracy_changed(self, accuracy: SensorAccuracy) -> None: pass

    # --- LIFECYCLE ---
    @abstractmethod
    def reset(self) -> None: pass

    # --- INTROSPECTION ---
    @property
    @abstractmethod
    def state(self) -> TrackerState: pass
    @property
    @abstractmethod
    def required_sensor(self) -> SensorKind: pass


class ISampleSource(ABC):
    """
    The boundary to the platform sensor stack.
    Delivers samples serialized on one logical thread.
    """
    @abstractmethod
    def has_sensor(self, kind: SensorKind) -> bool: pass
    @abstractmethod
    def start(self, consumer, sampling_period_us: int) -> None: pass
    @abstractmethod
    def stop(self) -> None: pass
    @abstractmethod
    def current_display_rotation(self) -> DisplayRotation: pass
