"""
Tracker Strategy Registry.
Lets the host choose a tilt strategy by name at construction time.
"""

from tiltscroll.control.trackers.accel_tracker import AccelerometerTracker
from tiltscroll.control.trackers.base import BaseTiltTracker
from tiltscroll.control.trackers.rotation_tracker import RotationVectorTracker
from tiltscroll.core.errors import UnknownTrackerError

TRACKERS = {
    "rotation_vector": RotationVectorTracker,
    "accelerometer": AccelerometerTracker,
}
TRACKER_KINDS = list(TRACKERS)


def create_tracker(kind: str, listener, available: bool = True, **overrides) -> BaseTiltTracker:
    """Factory method. `overrides` go straight to the tracker constructor."""
    try:
        cls = TRACKERS[kind]
    except KeyError:
        raise UnknownTrackerError(kind) from None
    return cls(listener, available=available, **overrides)


__all__ = [
    "AccelerometerTracker", "BaseTiltTracker", "RotationVectorTracker",
    "TRACKERS", "TRACKER_KINDS", "create_tracker",
]
