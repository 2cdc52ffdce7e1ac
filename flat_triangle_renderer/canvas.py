#
# PROJECT: flat-triangle-renderer
# MODULE: flat_triangle_renderer/canvas.py
# STATUS: Level 2 - Implementation
# LOG_REF: 2026-10-19
#

import numpy as np

from .errors import ConfigurationError


class Canvas:
    """
    Framebuffer + depth buffer pair for one frame.

    framebuffer: uint8 array (height, width, 3), RGB, row 0 at the top,
    zero (black) initialized.
    depth: float64 array (height, width) of view-space depths, +inf initialized.
    """
    __slots__ = ['w', 'h', 'framebuffer', 'depth']

    def __init__(self, w: int, h: int):
        if isinstance(w, bool) or isinstance(h, bool) or int(w) != w or int(h) != h:
            raise ConfigurationError(f"frame size must be integral, got {w}x{h}")
        if w <= 0 or h <= 0:
            raise ConfigurationError(f"frame size must be positive, got {w}x{h}")
        self.w, self.h = int(w), int(h)
        self.framebuffer = np.zeros((self.h, self.w, 3), dtype=np.uint8)
        self.depth = np.full((self.h, self.w), np.inf, dtype=np.float64)

    @property
    def bounds(self):
        """Whole canvas as an inclusive (x0, y0, x1, y1) region."""
        return (0, 0, self.w - 1, self.h - 1)

    def window(self, x0: int, y0: int, x1: int, y1: int):
        """
        Views (not copies) of both buffers over the inclusive pixel rectangle.
        Writes through them land in the canvas.
        """
        return (self.framebuffer[y0:y1 + 1, x0:x1 + 1],
                self.depth[y0:y1 + 1, x0:x1 + 1])

    def tiles(self, tile_size: int):
        """Yield disjoint inclusive regions covering the canvas, row by row."""
        for y0 in range(0, self.h, tile_size):
            y1 = min(y0 + tile_size, self.h) - 1
            for x0 in range(0, self.w, tile_size):
                x1 = min(x0 + tile_size, self.w) - 1
                yield (x0, y0, x1, y1)
