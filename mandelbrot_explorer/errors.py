"""
Exceptions raised by the Mandelbrot explorer.

Argument validation uses plain ValueError; these cover the failures
that come from the outside world.
"""


class MandelbrotError(Exception):
    """Base class for explorer errors."""


class DisplayError(MandelbrotError):
    """The window or drawing surface could not be created."""


class ExportError(MandelbrotError):
    """An animation export could not open or write its output file."""
