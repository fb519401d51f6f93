"""
Synchronous Mandelbrot frame renderer.

The FrameRenderer class handles:
- Ownership of the iteration and RGB pixel buffers for one frame size
- Snapshotting the viewport so a pass never sees a half-updated region
- Running the parallel escape-time kernel and palette lookup

A render pass blocks until every pixel has been written. Numba spreads the
rows over its thread pool and joins before the kernel returns, so the
buffer handed back is always complete.
"""

import logging
import time

import numpy as np

from .compute import compute_escape_times, apply_palette

logger = logging.getLogger(__name__)


class FrameRenderer:
    """
    Renders viewports into a fixed-size RGB buffer.

    Usage:
        renderer = FrameRenderer(1050, 600, palette, max_iter=1000)
        rgb = renderer.render(viewport)

    Attributes:
        width, height: Buffer dimensions in pixels
        max_iter: Maximum iteration count
        palette: (N, 3) uint8 color table, N >= max_iter
        iterations: int32 (height, width) escape counts of the last frame
        rgb: uint8 (height, width, 3) colors of the last frame
    """

    def __init__(self, width, height, palette, max_iter, use_shortcuts=True):
        """
        Initialize the renderer.

        Args:
            width, height: Buffer dimensions in pixels
            palette: Palette array from palettes.create_palette
            max_iter: Maximum iteration count
            use_shortcuts: Skip iteration for cardioid/bulb points
        """
        if width < 1 or height < 1:
            raise ValueError(f"Buffer size must be positive, got {width}x{height}")
        if max_iter < 1:
            raise ValueError(f"max_iter must be at least 1, got {max_iter}")
        if palette.shape[0] < max_iter:
            raise ValueError(
                f"Palette has {palette.shape[0]} colors, need at least {max_iter}"
            )
        self.width = width
        self.height = height
        self.palette = palette
        self.max_iter = max_iter
        self.use_shortcuts = use_shortcuts

        self.iterations = np.zeros((height, width), dtype=np.int32)
        self.rgb = np.zeros((height, width, 3), dtype=np.uint8)

        self.frame_count = 0
        self.last_render_seconds = 0.0

    def render(self, viewport):
        """
        Overwrite the whole buffer with a render of the viewport.

        Args:
            viewport: Viewport to draw; read once at the start of the pass

        Returns:
            The RGB buffer (owned by the renderer, overwritten next pass)
        """
        x, y, width, height = viewport.snapshot()
        start = time.perf_counter()

        compute_escape_times(x, y, width, height, self.max_iter,
                             self.iterations, self.use_shortcuts)
        apply_palette(self.iterations, self.max_iter, self.palette, self.rgb)

        self.last_render_seconds = time.perf_counter() - start
        self.frame_count += 1
        logger.debug("Rendered frame %d of %r in %.3fs",
                     self.frame_count, viewport, self.last_render_seconds)
        return self.rgb

    def pixels(self):
        """Yield (x, y, (r, g, b)) for every pixel of the last frame."""
        for py in range(self.height):
            row = self.rgb[py]
            for px in range(self.width):
                r, g, b = row[px]
                yield px, py, (int(r), int(g), int(b))

    def flat_rgb(self):
        """Row-major sequence of 8-bit RGB channel values of the last frame."""
        return self.rgb.reshape(-1)
