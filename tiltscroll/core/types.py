"""
TiltScroll Types.
Central definition of Data Contracts to prevent circular imports.
"""
import math
from dataclasses import dataclass
from enum import Enum, IntEnum, auto
from typing import Optional, Tuple


# --- SENSOR TYPES ---
class SensorKind(Enum):
    ROTATION_VECTOR = auto()  # Fused quaternion (x, y, z[, w[, heading acc]])
    ACCELEROMETER = auto()    # Raw 3-axis reading


class SensorAccuracy(IntEnum):
    """Ordered so that `accuracy >= SensorAccuracy.LOW` reads naturally."""
    UNRELIABLE = 0
    LOW = 1
    MEDIUM = 2
    HIGH = 3


class DisplayRotation(IntEnum):
    ROT_0 = 0
    ROT_90 = 1
    ROT_180 = 2
    ROT_270 = 3

    @property
    def degrees(self) -> int:
        return self.value * 90

    @classmethod
    def from_degrees(cls, degrees: int) -> "DisplayRotation":
        normalized = int(degrees) % 360
        if normalized % 90 != 0:
            raise ValueError(f"Display rotation must be a multiple of 90, got {degrees}")
        return cls(normalized // 90)


# Accepted vector lengths per sensor (inclusive)
SAMPLE_LENGTHS = {
    SensorKind.ROTATION_VECTOR: (3, 5),
    SensorKind.ACCELEROMETER: (3, 3),
}


@dataclass(frozen=True)
class RawSample:
    kind: SensorKind
    values: Tuple[float, ...]
    timestamp_ns: int = 0

    def __post_init__(self):
        # Freeze whatever sequence the adapter handed us
        object.__setattr__(self, "values", tuple(self.values))

    @property
    def is_well_formed(self) -> bool:
        """Correct length for its kind and every component finite."""
        bounds = SAMPLE_LENGTHS.get(self.kind)
        if bounds is None:
            return False
        lo, hi = bounds
        if not lo <= len(self.values) <= hi:
            return False
        try:
            return all(math.isfinite(v) for v in self.values)
        except TypeError:
            return False


# --- TRACKER STATE ---
class TrackerState(Enum):
    UNINITIALIZED = auto()  # Next sample only records a baseline
    TRACKING = auto()


@dataclass
class OrientationState:
    """Baseline of the rotation-vector tracker (degrees)."""
    azimuth: float = 0.0
    pitch: float = 0.0
    initialized: bool = False

    def reset(self):
        self.azimuth = 0.0
        self.pitch = 0.0
        self.initialized = False


@dataclass
class AccelBaseline:
    """Baseline of the accelerometer tracker (raw axis units)."""
    x: float = 0.0
    y: float = 0.0
    initialized: bool = False

    def reset(self):
        self.x = 0.0
        self.y = 0.0
        self.initialized = False


@dataclass(frozen=True)
class ScrollDelta:
    dx: int = 0
    dy: int = 0

    @property
    def is_zero(self) -> bool:
        return self.dx == 0 and self.dy == 0


# Accuracy before the source has reported anything
UNKNOWN_ACCURACY: Optional[SensorAccuracy] = None
