"""
Viewport: the rectangular window over the complex plane that is mapped
onto the pixel buffer.

The origin (x, y) is the plane coordinate of pixel (0, 0), the top-left
pixel on screen. Increasing pixel rows map to increasing imaginary values.
"""

from . import config
from .compute import pixel_to_plane


AXIS_X = 'x'
AXIS_Y = 'y'


def _check_factor(factor):
    if not 0.0 < factor < 1.0:
        raise ValueError(f"Zoom factor must be in (0, 1), got {factor}")


class Viewport:
    """
    Mutable plane region plus the pixel dimensions it is drawn at.

    Pan and zoom mutate the region in place. Extents are not validated after
    construction: zooming in keeps working until double precision runs out.
    """

    def __init__(self, x, y, width, height,
                 pixel_width=config.WINDOW_WIDTH, pixel_height=config.WINDOW_HEIGHT):
        if width <= 0 or height <= 0:
            raise ValueError(f"Viewport extent must be positive, got {width}x{height}")
        self.x = float(x)
        self.y = float(y)
        self.width = float(width)
        self.height = float(height)
        self.pixel_width = pixel_width
        self.pixel_height = pixel_height

    @classmethod
    def default(cls, pixel_width=config.WINDOW_WIDTH, pixel_height=config.WINDOW_HEIGHT):
        """The classic full-set framing."""
        return cls(*config.DEFAULT_VIEWPORT, pixel_width=pixel_width, pixel_height=pixel_height)

    def __repr__(self):
        return (f"Viewport(x={self.x!r}, y={self.y!r}, width={self.width!r}, "
                f"height={self.height!r})")

    def copy(self):
        return Viewport(self.x, self.y, self.width, self.height,
                        self.pixel_width, self.pixel_height)

    def snapshot(self):
        """Frozen (x, y, width, height) tuple for one render pass."""
        return (self.x, self.y, self.width, self.height)

    def bounds(self):
        """(x_min, x_max, y_min, y_max) of the visible region."""
        return (self.x, self.x + self.width, self.y, self.y + self.height)

    def center(self):
        return (self.x + self.width / 2, self.y + self.height / 2)

    def pan(self, axis, fraction):
        """Shift the origin by fraction of the extent along one axis."""
        if axis == AXIS_X:
            self.x += fraction * self.width
        elif axis == AXIS_Y:
            self.y += fraction * self.height
        else:
            raise ValueError(f"Unknown axis {axis!r}; expected 'x' or 'y'")

    def zoom_in(self, factor):
        """
        Shrink the extent by (1 - factor) keeping the center fixed.

        Args:
            factor: Fraction of the extent to remove, in (0, 1)
        """
        _check_factor(factor)
        self.x += factor / 2 * self.width
        self.y += factor / 2 * self.height
        self.width *= 1 - factor
        self.height *= 1 - factor

    def zoom_out(self, factor):
        """Exact inverse of zoom_in for the same factor."""
        _check_factor(factor)
        self.width /= 1 - factor
        self.height /= 1 - factor
        self.x -= factor / 2 * self.width
        self.y -= factor / 2 * self.height

    def pixel_to_plane(self, px, py, buffer_width=None, buffer_height=None):
        """
        Plane coordinate of the center of pixel (px, py).

        Buffer dimensions default to the viewport's own pixel size.
        """
        if buffer_width is None:
            buffer_width = self.pixel_width
        if buffer_height is None:
            buffer_height = self.pixel_height
        return pixel_to_plane(px, py, self.x, self.y, self.width, self.height,
                              buffer_width, buffer_height)

    def recenter(self, px, py):
        """Pan so the center of pixel (px, py) becomes the view center."""
        self.pan(AXIS_X, (px + 0.5) / self.pixel_width - 0.5)
        self.pan(AXIS_Y, (py + 0.5) / self.pixel_height - 0.5)
