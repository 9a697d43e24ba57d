"""
TiltScroll Viewport.
====================

The host side of the scroll contract. Receives (dx, dy) from a tracker and
moves a window over a larger content area, like a scroll view's scrollBy():
offsets are clamped so the window never leaves the content.
"""

from typing import Optional, Tuple

import numpy as np

from tiltscroll.config import CONFIG
from tiltscroll.core.interfaces import IScrollListener


class ScrollViewport(IScrollListener):
    def __init__(self, width: Optional[int] = None, height: Optional[int] = None,
                 content_width: Optional[int] = None, content_height: Optional[int] = None):
        self.width = width or CONFIG["VIEWPORT_WIDTH"]
        self.height = height or CONFIG["VIEWPORT_HEIGHT"]
        self.content_width = content_width or CONFIG["CONTENT_WIDTH"]
        self.content_height = content_height or CONFIG["CONTENT_HEIGHT"]

        self.scroll_x = 0
        self.scroll_y = 0
        self.events = 0

    @property
    def max_scroll(self) -> Tuple[int, int]:
        return (max(0, self.content_width - self.width),
                max(0, self.content_height - self.height))

    @property
    def offset(self) -> Tuple[int, int]:
        return self.scroll_x, self.scroll_y

    def on_tilt(self, dx: int, dy: int) -> None:
        self.events += 1
        max_x, max_y = self.max_scroll
        self.scroll_x = int(np.clip(self.scroll_x + dx, 0, max_x))
        self.scroll_y = int(np.clip(self.scroll_y + dy, 0, max_y))

    def reset(self):
        self.scroll_x = 0
        self.scroll_y = 0
        self.events = 0
