"""
Mandelbrot Set Explorer Package

An interactive Mandelbrot set explorer using Pygame for display and
Numba for JIT-compiled, multi-threaded computation, with animated GIF
export of zoom sequences.

Quick Start:
    from mandelbrot_explorer import run
    run()

Or from command line:
    python -m mandelbrot_explorer

Package Structure:
    - compute.py: JIT-compiled escape-time and palette lookup kernels
    - palettes.py: Palette generators (pseudo-random, gradient)
    - viewport.py: Pan/zoom model of the visible plane region
    - renderer.py: Synchronous parallel frame renderer
    - navigation.py: Input commands and the navigation controller
    - export.py: Animated GIF zoom export
    - app.py: Main application and event loop

Controls:
    - WASD / arrows: Pan
    - E / Q: Zoom in / out
    - Left / right click: Recenter and zoom in / out
    - G: Export zoom-out animation
    - ESC: Quit
"""

from .app import run, MandelbrotApp
from .errors import MandelbrotError, DisplayError, ExportError
from .export import AnimationExporter
from .navigation import Command, NavigationController, command_from_event
from .palettes import PALETTES, create_palette, list_palette_names
from .renderer import FrameRenderer
from .viewport import Viewport

__version__ = "1.0.0"
__all__ = [
    "run",
    "MandelbrotApp",
    "MandelbrotError",
    "DisplayError",
    "ExportError",
    "AnimationExporter",
    "Command",
    "NavigationController",
    "command_from_event",
    "PALETTES",
    "create_palette",
    "list_palette_names",
    "FrameRenderer",
    "Viewport",
]
