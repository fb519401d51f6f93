"""
Navigation: turning input into viewport changes and re-renders.

Input events are first translated into Command tuples by
command_from_event, then applied by NavigationController.handle. Each
command that changes the view triggers exactly one render pass.

Controls:
    - A / Left, D / Right, W / Up, S / Down: Pan
    - E / +: Zoom in, Q / -: Zoom out
    - Left click: Recenter on the clicked point and zoom in
    - Right click: Recenter on the clicked point and zoom out
    - G: Export a zoom-out animation
    - ESC / window close: Quit
"""

import logging
from collections import namedtuple

import pygame

from . import config
from .errors import ExportError
from .viewport import AXIS_X, AXIS_Y

logger = logging.getLogger(__name__)


PAN_LEFT = 'pan_left'
PAN_RIGHT = 'pan_right'
PAN_UP = 'pan_up'
PAN_DOWN = 'pan_down'
ZOOM_IN = 'zoom_in'
ZOOM_OUT = 'zoom_out'
RECENTER_ZOOM_IN = 'recenter_zoom_in'
RECENTER_ZOOM_OUT = 'recenter_zoom_out'
EXPORT_ANIMATION = 'export_animation'
QUIT = 'quit'

COMMANDS = frozenset([
    PAN_LEFT, PAN_RIGHT, PAN_UP, PAN_DOWN, ZOOM_IN, ZOOM_OUT,
    RECENTER_ZOOM_IN, RECENTER_ZOOM_OUT, EXPORT_ANIMATION, QUIT,
])

# pos is the target pixel for the recenter commands, None otherwise
Command = namedtuple('Command', ['name', 'pos'], defaults=[None])

KEY_COMMANDS = {
    pygame.K_a: PAN_LEFT,
    pygame.K_LEFT: PAN_LEFT,
    pygame.K_d: PAN_RIGHT,
    pygame.K_RIGHT: PAN_RIGHT,
    pygame.K_w: PAN_UP,
    pygame.K_UP: PAN_UP,
    pygame.K_s: PAN_DOWN,
    pygame.K_DOWN: PAN_DOWN,
    pygame.K_e: ZOOM_IN,
    pygame.K_PLUS: ZOOM_IN,
    pygame.K_EQUALS: ZOOM_IN,
    pygame.K_KP_PLUS: ZOOM_IN,
    pygame.K_q: ZOOM_OUT,
    pygame.K_MINUS: ZOOM_OUT,
    pygame.K_KP_MINUS: ZOOM_OUT,
    pygame.K_g: EXPORT_ANIMATION,
    pygame.K_ESCAPE: QUIT,
}

MOUSE_LEFT = 1
MOUSE_RIGHT = 3


def command_from_event(event):
    """
    Translate a pygame event into a Command.

    Returns:
        Command, or None for events that do nothing (unmapped keys, other
        mouse buttons, motion, ...)
    """
    if event.type == pygame.QUIT:
        return Command(QUIT)
    if event.type == pygame.KEYDOWN:
        name = KEY_COMMANDS.get(event.key)
        return Command(name) if name else None
    if event.type == pygame.MOUSEBUTTONDOWN:
        if event.button == MOUSE_LEFT:
            return Command(RECENTER_ZOOM_IN, tuple(event.pos))
        if event.button == MOUSE_RIGHT:
            return Command(RECENTER_ZOOM_OUT, tuple(event.pos))
    return None


class NavigationController:
    """
    Applies commands to the live viewport and re-renders after each change.

    Attributes:
        viewport: The live Viewport, mutated in place
        renderer: FrameRenderer used for the live view
        exporter: AnimationExporter, or None to ignore export requests
        running: False once a quit command has been handled
        last_export: Path of the most recent export, None if it failed
        last_export_error: Message of the most recent failed export
    """

    def __init__(self, viewport, renderer, exporter=None,
                 pan_step=config.PAN_STEP, zoom_step=config.ZOOM_STEP):
        self.viewport = viewport
        self.renderer = renderer
        self.exporter = exporter
        self.pan_step = pan_step
        self.zoom_step = zoom_step
        self.running = True
        self.last_export = None
        self.last_export_error = None

    def handle(self, command):
        """
        Apply one command.

        Args:
            command: Command tuple, or None

        Returns:
            True if a new frame was rendered into the renderer's buffer
        """
        if command is None or command.name not in COMMANDS:
            return False

        name = command.name
        if name == QUIT:
            self.running = False
            return False
        if name == EXPORT_ANIMATION:
            self._export()
            return False

        if name == PAN_LEFT:
            self.viewport.pan(AXIS_X, -self.pan_step)
        elif name == PAN_RIGHT:
            self.viewport.pan(AXIS_X, self.pan_step)
        elif name == PAN_UP:
            self.viewport.pan(AXIS_Y, -self.pan_step)
        elif name == PAN_DOWN:
            self.viewport.pan(AXIS_Y, self.pan_step)
        elif name == ZOOM_IN:
            self.viewport.zoom_in(self.zoom_step)
        elif name == ZOOM_OUT:
            self.viewport.zoom_out(self.zoom_step)
        elif name == RECENTER_ZOOM_IN:
            self.viewport.recenter(*command.pos)
            self.viewport.zoom_in(self.zoom_step)
        elif name == RECENTER_ZOOM_OUT:
            self.viewport.recenter(*command.pos)
            self.viewport.zoom_out(self.zoom_step)

        self.renderer.render(self.viewport)
        return True

    def _export(self):
        if self.exporter is None:
            logger.warning("Animation export requested but no exporter is configured")
            return
        try:
            self.last_export = self.exporter.export(self.viewport)
            self.last_export_error = None
        except ExportError as e:
            logger.error("Animation export failed: %s", e)
            self.last_export = None
            self.last_export_error = str(e)
