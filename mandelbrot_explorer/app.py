"""
Main application module for the Mandelbrot explorer.

Contains the MandelbrotApp class which handles:
- Window setup and main loop
- Translating pygame input into navigation commands
- Presenting rendered frames
- Wiring the renderer, navigation controller and animation exporter
"""

import logging

import pygame

from . import config
from .compute import warmup_jit
from .errors import DisplayError
from .export import AnimationExporter
from .navigation import EXPORT_ANIMATION, NavigationController, command_from_event
from .palettes import create_palette
from .renderer import FrameRenderer
from .viewport import Viewport

logger = logging.getLogger(__name__)


class MandelbrotApp:
    """
    Main application class for the Mandelbrot explorer.

    Handles the pygame window and event loop. All state (viewport, palette,
    pixel buffer) is owned here and passed to the components that need it.
    """

    def __init__(self, width=None, height=None, max_iter=None, palette_kind=None):
        """
        Initialize the application.

        Args:
            width: Window width in pixels (default 1050)
            height: Window height in pixels (default 600)
            max_iter: Maximum iteration count (default 1000)
            palette_kind: Palette name from palettes.PALETTES
        """
        self.width = width or config.WINDOW_WIDTH
        self.height = height or config.WINDOW_HEIGHT
        self.max_iter = max_iter or config.MAX_ITER
        self.palette_kind = palette_kind or config.DEFAULT_PALETTE

        self.palette = create_palette(self.max_iter, self.palette_kind)
        self.viewport = Viewport.default(self.width, self.height)
        self.renderer = FrameRenderer(self.width, self.height, self.palette, self.max_iter)
        self.exporter = AnimationExporter(self.palette, self.width, self.height, self.max_iter)
        self.controller = NavigationController(self.viewport, self.renderer, self.exporter)

        # Pygame state (initialized in run())
        self.screen = None
        self.clock = None
        self.frame_dirty = False

    def run(self):
        """Run the application main loop."""
        self._init_pygame()
        try:
            self._warmup_and_initial_render()
            while self.controller.running:
                self._handle_events()
                if self.frame_dirty:
                    self._draw()
                self.clock.tick(config.FRAMES_PER_SECOND)
        finally:
            pygame.quit()

    def _init_pygame(self):
        """Initialize pygame and create window."""
        try:
            pygame.init()
            self.screen = pygame.display.set_mode((self.width, self.height))
        except pygame.error as e:
            pygame.quit()
            raise DisplayError(f"Could not create a {self.width}x{self.height} window: {e}") from e
        pygame.display.set_caption(config.WINDOW_TITLE)
        self.clock = pygame.time.Clock()

    def _warmup_and_initial_render(self):
        """Warm up JIT and do initial render."""
        pygame.display.set_caption("Compiling (first run only)...")
        warmup_jit(self.palette)
        self.renderer.render(self.viewport)
        self._draw()
        pygame.display.set_caption(config.WINDOW_TITLE)
        logger.info("Rendered initial %dx%d view in %.3fs",
                    self.width, self.height, self.renderer.last_render_seconds)

    def _handle_events(self):
        """Process all pending pygame events, one render per command."""
        for event in pygame.event.get():
            command = command_from_event(event)
            if command is None:
                continue
            if command.name == EXPORT_ANIMATION:
                pygame.display.set_caption("Exporting animation...")
            if self.controller.handle(command):
                self.frame_dirty = True
            pygame.display.set_caption(self._caption())
            if not self.controller.running:
                break

    def _caption(self):
        if self.controller.last_export_error:
            return f"{config.WINDOW_TITLE} - Export failed: {self.controller.last_export_error}"
        if self.controller.last_export:
            return f"{config.WINDOW_TITLE} - Saved {self.controller.last_export}"
        return config.WINDOW_TITLE

    def _draw(self):
        """Blit the renderer's buffer to the window and flip."""
        # surfarray indexes (x, y); the buffer is (row, column)
        pygame.surfarray.blit_array(self.screen, self.renderer.rgb.swapaxes(0, 1))
        pygame.display.flip()
        self.frame_dirty = False


def run(width=None, height=None, max_iter=None, palette_kind=None):
    """
    Run the Mandelbrot explorer.

    Args:
        width: Window width (default 1050)
        height: Window height (default 600)
        max_iter: Maximum iterations (default 1000)
        palette_kind: Palette name (default 'pseudo_random')
    """
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(levelname)s - %(name)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S',
    )
    app = MandelbrotApp(width, height, max_iter, palette_kind)
    try:
        app.run()
    except KeyboardInterrupt:
        pass
