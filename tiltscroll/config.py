"""
TiltScroll Configuration Management.
====================================

This module defines the tuning space for the TiltScroll engine.
The parameters are organized into a "Layer Cake" model, from the raw sensor
feed up to the host viewport that consumes the scroll deltas.

! WARNING !
The axis indices and gains of the accelerometer layer encode how the sensor
is physically mounted. Changing them flips or swaps scroll directions.
Changing the Rotation Layer affects the "feel" of head scrolling immediately.
"""

import logging

# --- MASTER CONFIGURATION ---
CONFIG = {
    # =========================================================
    # LAYER 1: SENSOR FEED
    # =========================================================
    "SENSOR_DELAY_MICROS": 32 * 1000,   # 32ms between samples
    "TRACKER_KIND": "rotation_vector",  # or "accelerometer"

    # =========================================================
    # LAYER 2: ROTATION VECTOR (Head Orientation)
    # =========================================================
    "ROTATION_THRESHOLD_DEG": 0.001,    # Deltas <= this are sensor jitter
    "ROTATION_PIXELS_PER_DEGREE": 60,   # Whole degrees of tilt -> pixels

    # =========================================================
    # LAYER 3: ACCELEROMETER (Fallback)
    # =========================================================
    "ACCEL_THRESHOLD": 0.02,            # Raw axis change needed to count
    "ACCEL_X_GAIN": -500,               # Inverted: device X runs against screen X
    "ACCEL_Y_GAIN": 300,
    "ACCEL_X_AXIS": 0,                  # Raw vector index used as X
    "ACCEL_Y_AXIS": 2,                  # Index 2, not 1 (mounting correction)

    # =========================================================
    # LAYER 4: HOST VIEWPORT (Demo)
    # =========================================================
    "VIEWPORT_WIDTH": 640,
    "VIEWPORT_HEIGHT": 480,
    "CONTENT_WIDTH": 4000,
    "CONTENT_HEIGHT": 12000,
    "DEMO_FPS": 30,                     # Matches the 32ms sensor cadence

    # =========================================================
    # DIAGNOSTICS
    # =========================================================
    "LOG_LEVEL": "INFO",
}


def init_logging(level=None):
    """
    Configures the root logger for hosts and tools.
    The engine itself only ever emits through module-level loggers.
    """
    logging.basicConfig(
        level=level or CONFIG["LOG_LEVEL"],
        format="%(asctime)s %(levelname)-7s %(name)s: %(message)s",
    )
