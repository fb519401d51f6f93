import pytest

from mandelbrot_explorer.palettes import create_palette
from mandelbrot_explorer.renderer import FrameRenderer
from mandelbrot_explorer.viewport import Viewport


SMALL_WIDTH = 64
SMALL_HEIGHT = 36
SMALL_MAX_ITER = 50


@pytest.fixture
def small_palette():
    return create_palette(SMALL_MAX_ITER, 'pseudo_random')


@pytest.fixture
def small_viewport():
    return Viewport.default(SMALL_WIDTH, SMALL_HEIGHT)


@pytest.fixture
def small_renderer(small_palette):
    return FrameRenderer(SMALL_WIDTH, SMALL_HEIGHT, small_palette, SMALL_MAX_ITER)
