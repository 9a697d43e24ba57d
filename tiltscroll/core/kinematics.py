"""
TiltScroll Delta Kinematics.
Small scalar rules shared by the trackers: unwrap, threshold, scale, gate.
"""
from typing import Tuple


def unwrap_angle(delta: float) -> float:
    """
    Folds an angular delta (degrees) back into (-180, 180).
    Azimuth jumps from +180 to -180; a small physical turn across that seam
    must not read as a near-360 degree swing.
    """
    if delta >= 180.0:
        return delta - 360.0
    elif delta <= -180.0:
        return delta + 360.0
    return delta


def apply_threshold(value: float, threshold: float) -> float:
    """Noise gate: anything at or below the threshold is zero."""
    return value if abs(value) > threshold else 0.0


def truncate_scale(value: float, factor: int) -> int:
    """
    Whole units first, then the gain (fixed-point pixel semantics).
    int() truncates toward zero, so -1.7 deg -> -1 -> -factor.
    """
    return int(value) * factor


def gate_dominant_axis(x_offset: float, y_offset: float) -> Tuple[float, float]:
    """
    Only the stronger axis survives, so diagonal drift never scrolls both ways.
    Ties go to X.
    """
    if abs(x_offset) >= abs(y_offset):
        return x_offset, 0
    return 0, y_offset
