"""
Animated GIF export of a zoom sequence.

The exporter clones the live viewport, then repeatedly renders a frame,
streams it to an imageio writer and zooms the clone by a fixed step until
the view height crosses a bound. Every export writes to a new
timestamped file.
"""

import logging
import os
from datetime import datetime

import imageio.v2 as imageio

from . import config
from .errors import ExportError
from .renderer import FrameRenderer

logger = logging.getLogger(__name__)


ZOOM_OUT = 'out'
ZOOM_IN = 'in'


def make_export_path(output_dir):
    """
    Build a timestamped output path that does not exist yet.

    Args:
        output_dir: Directory the file will be written to

    Returns:
        Path like output_dir/mandelbrot_20240101_120000_123456.gif
    """
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S_%f")
    filename = config.EXPORT_FILE_TEMPLATE.format(timestamp=timestamp)
    path = os.path.join(output_dir, filename)
    stem, ext = os.path.splitext(path)
    counter = 1
    while os.path.exists(path):
        path = f"{stem}_{counter}{ext}"
        counter += 1
    return path


def _discard(path):
    """Remove a partially written export."""
    try:
        os.remove(path)
    except FileNotFoundError:
        pass


class AnimationExporter:
    """
    Renders a zoom sequence into a GIF file.

    The exporter owns a scratch FrameRenderer, so exporting never touches the
    buffers of the live view.
    """

    def __init__(self, palette, width, height, max_iter,
                 zoom_step=config.EXPORT_ZOOM_STEP,
                 max_height=config.EXPORT_MAX_HEIGHT,
                 min_height=None,
                 direction=ZOOM_OUT,
                 output_dir=config.EXPORT_DIR,
                 frame_duration_ms=config.EXPORT_FRAME_DURATION_MS):
        """
        Initialize the exporter.

        Args:
            palette: Palette array shared with the live renderer
            width, height: Frame dimensions in pixels
            max_iter: Maximum iteration count
            zoom_step: Zoom factor applied between frames, in (0, 1)
            max_height: Zooming out stops once the view is at least this tall
            min_height: Zooming in stops once the view is at most this tall
            direction: ZOOM_OUT or ZOOM_IN
            output_dir: Directory for the GIF files
            frame_duration_ms: Display time of each frame
        """
        if not 0.0 < zoom_step < 1.0:
            raise ValueError(f"zoom_step must be in (0, 1), got {zoom_step}")
        if direction == ZOOM_OUT:
            if max_height is None or max_height <= 0:
                raise ValueError("Zooming out needs a positive max_height")
        elif direction == ZOOM_IN:
            if min_height is None or min_height <= 0:
                raise ValueError("Zooming in needs a positive min_height")
        else:
            raise ValueError(f"Unknown direction {direction!r}")

        self.renderer = FrameRenderer(width, height, palette, max_iter)
        self.zoom_step = zoom_step
        self.max_height = max_height
        self.min_height = min_height
        self.direction = direction
        self.output_dir = output_dir
        self.frame_duration_ms = frame_duration_ms

    def _finished(self, viewport):
        if self.direction == ZOOM_OUT:
            return viewport.height >= self.max_height
        return viewport.height <= self.min_height

    def export(self, viewport):
        """
        Write one animation starting at the given viewport.

        Args:
            viewport: Starting view; it is cloned and left untouched

        Returns:
            Path of the written GIF

        Raises:
            ExportError if the file cannot be created or written
        """
        view = viewport.copy()
        view.pixel_width = self.renderer.width
        view.pixel_height = self.renderer.height
        path = make_export_path(self.output_dir)
        logger.info("Exporting zoom-%s animation of %s to %s",
                    self.direction, view.bounds(), path)

        try:
            writer = imageio.get_writer(path, mode='I', loop=0,
                                        duration=self.frame_duration_ms)
        except (OSError, ValueError) as e:
            raise ExportError(f"Could not open {path} for writing: {e}") from e

        frames = 0
        finished = False
        try:
            with writer:
                while True:
                    # The writer may hold frames until close; the buffer is reused
                    writer.append_data(self.renderer.render(view).copy())
                    frames += 1
                    if self.direction == ZOOM_OUT:
                        view.zoom_out(self.zoom_step)
                    else:
                        view.zoom_in(self.zoom_step)
                    if self._finished(view):
                        break
            finished = True
        except OSError as e:
            raise ExportError(f"Could not write animation to {path}: {e}") from e
        finally:
            if not finished:
                _discard(path)

        logger.info("Exported %d frames to %s", frames, path)
        return path
