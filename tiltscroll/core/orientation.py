"""
TiltScroll Orientation Math.
============================

Pure functions turning a fused rotation vector into head angles.

Key Concept: "Instrument Panel Frame"
A head-mounted display is worn upright, so the raw device frame (screen lying
flat, Z out of the glass) is the wrong reference. We remap the device axes as
if the screen were the instrument panel of a car:
1. **Remap:** Device X/Y are pointed at world axes picked from the current
   display rotation (REMAP_TABLE).
2. **Orient:** Azimuth / pitch / roll are read off the remapped matrix.

Matrix conventions follow the platform sensor stack: row-major 3x3,
rows are device axes expressed in world coordinates.
"""

import math
from enum import IntEnum
from typing import Sequence, Tuple

import numpy as np
from scipy.spatial.transform import Rotation as R

from tiltscroll.core.types import DisplayRotation


class Axis(IntEnum):
    """Signed axis codes. Low two bits select the axis, 0x80 flips it."""
    X = 1
    Y = 2
    Z = 3
    MINUS_X = 0x81
    MINUS_Y = 0x82
    MINUS_Z = 0x83

    @property
    def index(self) -> int:
        return (self.value & 0x3) - 1

    @property
    def negative(self) -> bool:
        return bool(self.value & 0x80)


# DisplayRotation -> (world axis for device X, world axis for device Y)
REMAP_TABLE = {
    DisplayRotation.ROT_0: (Axis.X, Axis.Z),
    DisplayRotation.ROT_90: (Axis.Z, Axis.MINUS_X),
    DisplayRotation.ROT_180: (Axis.MINUS_X, Axis.MINUS_Z),
    DisplayRotation.ROT_270: (Axis.MINUS_Z, Axis.X),
}


def rotation_matrix_from_vector(values: Sequence[float]) -> np.ndarray:
    """
    Converts a rotation vector (x, y, z[, w[, heading_accuracy]]) to a 3x3 matrix.
    Older sensors omit w; it is recovered from the unit-norm constraint.
    """
    x, y, z = (float(v) for v in values[:3])
    if len(values) >= 4:
        w = float(values[3])
    else:
        # Clamp: float error can push the squared norm slightly above 1
        w = math.sqrt(max(0.0, 1.0 - x * x - y * y - z * z))
    # scipy is scalar-last, same as the sensor layout
    return R.from_quat([x, y, z, w]).as_matrix()


def remap_coordinate_system(matrix: np.ndarray, axis_x: Axis, axis_y: Axis) -> np.ndarray:
    """
    Rotates the supplied matrix so that it is expressed in a different frame.

    Args:
        matrix: 3x3 rotation matrix.
        axis_x: World axis the device X axis is mapped on.
        axis_y: World axis the device Y axis is mapped on.

    Returns:
        The remapped 3x3 matrix. The third axis is whichever one remains,
        signed so the frame stays right-handed.
    """
    axis_x, axis_y = Axis(axis_x), Axis(axis_y)
    x, y = axis_x.index, axis_y.index
    if x == y:
        raise ValueError(f"Cannot map X and Y on the same axis ({axis_x.name}, {axis_y.name})")
    z = 3 - x - y

    # (x, y, z) in cyclic order keeps handedness; anything else flips Z
    cyclic = x == (z + 1) % 3 and y == (z + 2) % 3
    sz = axis_x.negative ^ axis_y.negative ^ (not cyclic)

    src = np.asarray(matrix, dtype=float).reshape(3, 3)
    out = np.empty((3, 3))
    out[:, x] = -src[:, 0] if axis_x.negative else src[:, 0]
    out[:, y] = -src[:, 1] if axis_y.negative else src[:, 1]
    out[:, z] = -src[:, 2] if sz else src[:, 2]
    return out


def get_orientation(matrix: np.ndarray) -> Tuple[float, float, float]:
    """(azimuth, pitch, roll) in radians."""
    m = np.asarray(matrix, dtype=float).reshape(3, 3)
    azimuth = math.atan2(m[0, 1], m[1, 1])
    # asin is undefined past +/-1; orthonormal input only drifts by float error
    pitch = math.asin(float(np.clip(-m[2, 1], -1.0, 1.0)))
    roll = math.atan2(-m[2, 0], m[2, 2])
    return azimuth, pitch, roll


def remap_and_orient(matrix: np.ndarray, display_rotation: DisplayRotation) -> Tuple[float, float]:
    """
    Main entry point: (azimuth, pitch) in degrees for the given display rotation.
    """
    axis_x, axis_y = REMAP_TABLE[DisplayRotation(display_rotation)]
    adjusted = remap_coordinate_system(matrix, axis_x, axis_y)
    azimuth, pitch, _ = get_orientation(adjusted)
    return math.degrees(azimuth), math.degrees(pitch)
