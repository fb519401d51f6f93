import logging

import pygame
import pytest

from mandelbrot_explorer import navigation
from mandelbrot_explorer.errors import ExportError
from mandelbrot_explorer.navigation import Command, NavigationController, command_from_event


class FakeExporter:
    def __init__(self, fail=False):
        self.fail = fail
        self.exported = []

    def export(self, viewport):
        if self.fail:
            raise ExportError("disk full")
        self.exported.append(viewport.snapshot())
        return "mandelbrot_test.gif"


@pytest.fixture
def controller(small_viewport, small_renderer):
    return NavigationController(small_viewport, small_renderer, FakeExporter())


@pytest.mark.parametrize("key, name", [
    (pygame.K_a, navigation.PAN_LEFT),
    (pygame.K_LEFT, navigation.PAN_LEFT),
    (pygame.K_d, navigation.PAN_RIGHT),
    (pygame.K_w, navigation.PAN_UP),
    (pygame.K_s, navigation.PAN_DOWN),
    (pygame.K_DOWN, navigation.PAN_DOWN),
    (pygame.K_e, navigation.ZOOM_IN),
    (pygame.K_q, navigation.ZOOM_OUT),
    (pygame.K_g, navigation.EXPORT_ANIMATION),
    (pygame.K_ESCAPE, navigation.QUIT),
])
def test_key_commands(key, name):
    event = pygame.event.Event(pygame.KEYDOWN, key=key)
    assert command_from_event(event) == Command(name)


def test_unmapped_events_are_ignored():
    assert command_from_event(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_z)) is None
    assert command_from_event(pygame.event.Event(pygame.MOUSEMOTION, pos=(3, 4))) is None
    middle = pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=2, pos=(3, 4))
    assert command_from_event(middle) is None


def test_quit_and_clicks():
    assert command_from_event(pygame.event.Event(pygame.QUIT)) == Command(navigation.QUIT)
    left = pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=1, pos=(10, 20))
    right = pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=3, pos=(5, 6))
    assert command_from_event(left) == Command(navigation.RECENTER_ZOOM_IN, (10, 20))
    assert command_from_event(right) == Command(navigation.RECENTER_ZOOM_OUT, (5, 6))


def test_pan_commands_move_and_render(controller):
    assert controller.handle(Command(navigation.PAN_LEFT))
    assert controller.viewport.x == pytest.approx(-2.5 - 0.035)
    assert controller.renderer.frame_count == 1

    assert controller.handle(Command(navigation.PAN_UP))
    assert controller.viewport.y == pytest.approx(-1.0 - 0.02)
    assert controller.handle(Command(navigation.PAN_RIGHT))
    assert controller.handle(Command(navigation.PAN_DOWN))
    assert controller.viewport.snapshot() == pytest.approx((-2.5, -1.0, 3.5, 2.0))
    assert controller.renderer.frame_count == 4


def test_zoom_commands(controller):
    assert controller.handle(Command(navigation.ZOOM_IN))
    assert controller.viewport.width == pytest.approx(3.5 * 0.8)
    assert controller.handle(Command(navigation.ZOOM_OUT))
    assert controller.viewport.width == pytest.approx(3.5)
    assert controller.renderer.frame_count == 2


def test_recenter_commands(controller):
    target = controller.viewport.pixel_to_plane(48, 9)
    assert controller.handle(Command(navigation.RECENTER_ZOOM_IN, (48, 9)))
    assert controller.viewport.center() == pytest.approx(target)
    assert controller.viewport.height == pytest.approx(2.0 * 0.8)

    target = controller.viewport.pixel_to_plane(2, 30)
    assert controller.handle(Command(navigation.RECENTER_ZOOM_OUT, (2, 30)))
    assert controller.viewport.center() == pytest.approx(target)
    assert controller.viewport.height == pytest.approx(2.0)


def test_unknown_commands_do_not_render(controller):
    assert not controller.handle(None)
    assert not controller.handle(Command('spin'))
    assert controller.renderer.frame_count == 0
    assert controller.running


def test_quit(controller):
    assert not controller.handle(Command(navigation.QUIT))
    assert not controller.running
    assert controller.renderer.frame_count == 0


def test_export_uses_live_viewport(controller):
    controller.handle(Command(navigation.ZOOM_IN))
    assert not controller.handle(Command(navigation.EXPORT_ANIMATION))
    assert controller.exporter.exported == [controller.viewport.snapshot()]
    assert controller.last_export == "mandelbrot_test.gif"
    assert controller.renderer.frame_count == 1


def test_export_failure_keeps_running(small_viewport, small_renderer, caplog):
    controller = NavigationController(small_viewport, small_renderer, FakeExporter(fail=True))
    with caplog.at_level(logging.ERROR, logger="mandelbrot_explorer.navigation"):
        controller.handle(Command(navigation.EXPORT_ANIMATION))
    assert controller.running
    assert controller.last_export is None
    assert "disk full" in caplog.text
    assert controller.handle(Command(navigation.ZOOM_IN))


def test_export_without_exporter(small_viewport, small_renderer):
    controller = NavigationController(small_viewport, small_renderer)
    assert not controller.handle(Command(navigation.EXPORT_ANIMATION))
    assert controller.running


class FlakyExporter:
    def __init__(self):
        self.calls = 0

    def export(self, viewport):
        self.calls += 1
        if self.calls > 1:
            raise ExportError("disk full")
        return "mandelbrot_first.gif"


def test_failed_export_replaces_previous_success(small_viewport, small_renderer):
    controller = NavigationController(small_viewport, small_renderer, FlakyExporter())
    controller.handle(Command(navigation.EXPORT_ANIMATION))
    assert controller.last_export == "mandelbrot_first.gif"
    assert controller.last_export_error is None

    controller.handle(Command(navigation.EXPORT_ANIMATION))
    assert controller.last_export is None
    assert controller.last_export_error == "disk full"
    assert controller.running
