"""TiltScroll: head-tilt driven scrolling from motion-sensor samples."""

__version__ = "1.0.0"
