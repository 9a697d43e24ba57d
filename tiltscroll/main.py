"""
TiltScroll - Demo Entry Point.
==============================

Drives the engine end to end without hardware:
1. A SimulatedHeadSource sweeps a virtual head through a slow figure-eight.
2. The TiltScrollController turns the samples into scroll deltas.
3. A ScrollViewport applies them and the HUD renders the result.

Usage:
    $ python -m tiltscroll.main

Keys:
    ESC  Exit
    S    Stop / start sensing (restart re-baselines)
    T    Switch tracker strategy
"""
import logging
import math
import time

import cv2

from tiltscroll.config import CONFIG, init_logging
from tiltscroll.control.controller import TiltScrollController
from tiltscroll.control.sample_source import SampleSource
from tiltscroll.control.trackers import TRACKER_KINDS
from tiltscroll.ui.hud import HUD
from tiltscroll.ui.viewport import ScrollViewport

logger = logging.getLogger(__name__)


def head_trajectory(t: float):
    """(yaw, pitch) in degrees. Lissajous figure-eight, ~12s per loop."""
    yaw = 40.0 * math.sin(2 * math.pi * t / 12.0)
    pitch = 20.0 * math.sin(4 * math.pi * t / 12.0)
    return yaw, pitch


def build_controller(source, viewport, kind):
    controller = TiltScrollController(source, viewport, tracker_kind=kind)
    controller.start()
    return controller


def main():
    """
    Main Event Loop.
    """
    # 1. Boot Sequence
    init_logging()
    print("🚀 TILT-SCROLL: ONLINE")
    print("   -> Press 'ESC' to Exit")
    print("   -> Press 'S' to Stop/Start sensing")
    print("   -> Press 'T' to Switch tracker")

    # 2. Initialize Subsystems
    hud = HUD()
    window_name = "TiltScroll"
    cv2.namedWindow(window_name)

    viewport = ScrollViewport()
    source = SampleSource("simulated")
    kind_index = TRACKER_KINDS.index(CONFIG["TRACKER_KIND"])
    controller = build_controller(source, viewport, TRACKER_KINDS[kind_index])

    frame_delay_ms = max(1, int(1000 / CONFIG["DEMO_FPS"]))
    start_time = time.time()
    prev_time = start_time

    try:
        while True:
            # --- 1. SENSE ---
            now = time.time()
            yaw, pitch = head_trajectory(now - start_time)
            source.step(yaw, pitch)

            # --- 2. FEEDBACK ---
            frame = hud.new_frame(viewport)
            hud.render(frame, controller, viewport)
            fps = 1 / (now - prev_time) if (now - prev_time) > 0 else 0
            prev_time = now
            hud.draw_fps(frame, fps)
            cv2.imshow(window_name, frame)

            # Input Handling
            k = cv2.waitKey(frame_delay_ms) & 0xFF
            if k == 27: break # ESC
            elif k == ord('s'):
                if controller.is_running: controller.stop()
                else: controller.start()
            elif k == ord('t'):
                controller.stop()
                kind_index = (kind_index + 1) % len(TRACKER_KINDS)
                controller = build_controller(source, viewport, TRACKER_KINDS[kind_index])
                logger.info("Switched to %s tracker", TRACKER_KINDS[kind_index])

    finally:
        # Graceful Shutdown
        controller.stop()
        cv2.destroyAllWindows()
        print("🔴 TILT-SCROLL OFFLINE")


if __name__ == "__main__":
    main()
