"""
TiltScroll HUD.
Visualizes the engine: where the viewport sits in the content, the last
scroll delta and the tracker state.
"""

import cv2
import numpy as np

from tiltscroll.core.types import TrackerState


class HUD:
    def __init__(self):
        # --- THEME COLORS (BGR) ---
        self.C_CYAN   = (255, 255, 0)    # Standard UI
        self.C_RED    = (0, 0, 255)      # Stopped / Degraded
        self.C_ORANGE = (0, 165, 255)    # Waiting for baseline
        self.C_GREEN  = (0, 255, 0)      # Tracking
        self.C_DARK   = (20, 20, 20)     # Backgrounds

    def _draw_glass_panel(self, img, x, y, w, h, color, alpha=0.6):
        """Draws a semi-transparent 'Glass' background."""
        # Safety check for image bounds
        if y+h > img.shape[0] or x+w > img.shape[1] or x < 0 or y < 0: return

        sub_img = img[y:y+h, x:x+w]
        tint = np.full(sub_img.shape, color, dtype=np.uint8)
        img[y:y+h, x:x+w] = cv2.addWeighted(sub_img, 1 - alpha, tint, alpha, 1.0)
        cv2.rectangle(img, (x, y), (x+w, y+h), color, 1)

    def new_frame(self, viewport) -> np.ndarray:
        """Blank canvas the size of the viewport, striped so scrolling is visible."""
        frame = np.zeros((viewport.height, viewport.width, 3), dtype=np.uint8)
        stripe = 80
        # Stripes are anchored to the content, so they slide as we scroll
        for y in range(-(viewport.scroll_y % stripe), viewport.height, stripe):
            cv2.line(frame, (0, y), (viewport.width, y), (60, 60, 60), 1)
        for x in range(-(viewport.scroll_x % stripe), viewport.width, stripe):
            cv2.line(frame, (x, 0), (x, viewport.height), (60, 60, 60), 1)
        return frame

    def render(self, frame, controller, viewport):
        h, w, _ = frame.shape
        tracker = controller.tracker

        # 1. DETERMINE SYSTEM STATE & COLOR
        if not tracker.available:
            ui_color, status_msg = self.C_RED, "SENSOR MISSING // INERT"
        elif not controller.is_running:
            ui_color, status_msg = self.C_RED, "TILT SCROLL // STOPPED"
        elif tracker.state is TrackerState.UNINITIALIZED:
            ui_color, status_msg = self.C_ORANGE, "WAITING FOR BASELINE"
        else:
            ui_color, status_msg = self.C_GREEN, "TRACKING"

        # 2. SCROLL BARS (Position of the window inside the content)
        max_x, max_y = viewport.max_scroll
        bar = 8
        if max_y > 0:
            thumb_h = max(20, int(h * viewport.height / viewport.content_height))
            thumb_y = int((h - thumb_h) * viewport.scroll_y / max_y)
            cv2.rectangle(frame, (w - bar, thumb_y), (w, thumb_y + thumb_h), ui_color, -1)
        if max_x > 0:
            thumb_w = max(20, int(w * viewport.width / viewport.content_width))
            thumb_x = int((w - thumb_w) * viewport.scroll_x / max_x)
            cv2.rectangle(frame, (thumb_x, h - bar), (thumb_x + thumb_w, h), ui_color, -1)

        # 3. DELTA VECTOR (Last tilt, from the center)
        cx, cy = w // 2, h // 2
        delta = tracker.last_delta
        cv2.arrowedLine(frame, (cx, cy), (cx + delta.dx, cy + delta.dy), ui_color, 2)

        # 4. STATUS BAR
        self._draw_glass_panel(frame, 20, 20, 400, 70, self.C_DARK, 0.4)
        cv2.putText(frame, status_msg, (35, 48),
                    cv2.FONT_HERSHEY_SIMPLEX, 0.6, ui_color, 2)
        cv2.putText(frame, f"{controller.tracker_kind}  offset={viewport.offset}",
                    (35, 75), cv2.FONT_HERSHEY_PLAIN, 1.0, ui_color, 1)
        return frame

    def draw_fps(self, frame, fps):
        cv2.putText(frame, f"{int(fps)} FPS", (frame.shape[1]-100, 40),
                    cv2.FONT_HERSHEY_PLAIN, 1.2, self.C_CYAN, 1)
