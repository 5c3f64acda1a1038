# tests/test_app.py
"""
Demo app wiring, driven with synthetic pygame events (headless).
"""
from __future__ import annotations

import pygame
import pytest

from src.core.app import App
from src.events import MOUSE_MODE


def _ev(kind, pos):
    if kind == "down":
        return pygame.event.Event(pygame.MOUSEBUTTONDOWN, pos=pos, button=1)
    if kind == "up":
        return pygame.event.Event(pygame.MOUSEBUTTONUP, pos=pos, button=1)
    return pygame.event.Event(pygame.MOUSEMOTION, pos=pos, rel=(0, 0), buttons=(1, 0, 0))


@pytest.fixture
def app():
    return App(None, mode=MOUSE_MODE)


def _center(app, name):
    return app.root.find(name).rect.center


def test_stroke_on_canvas(app):
    strokes = []
    app.on("stroke", lambda name, stroke: strokes.append(stroke))
    for ev in (_ev("down", (100, 100)), _ev("move", (110, 105)), _ev("up", (120, 110))):
        app.handle_event(ev)
    assert strokes == [[(100, 100), (110, 105), (120, 110)]]
    assert app.strokes == strokes


def test_buttons_fire_and_act(app):
    pressed = []
    app.on("button", lambda name, label: pressed.append(label))
    app.strokes.append([(1, 1), (2, 2)])

    app.handle_event(_ev("down", _center(app, "button:undo")))
    assert pressed == ["undo"]
    assert app.strokes == []


def test_toolbar_background_press_is_eaten(app):
    pressed = []
    app.on("button", lambda name, label: pressed.append(label))
    toolbar = app.root.find("toolbar")
    occ = app.adapter.deliver(app.root, _ev("down", (toolbar.rect.right - 2, 2)))
    assert occ.source is toolbar
    assert occ.default_prevented
    assert pressed == []


def test_quit_needs_release_on_quit_button(app):
    quit_pos = _center(app, "button:quit")

    app.handle_event(_ev("down", quit_pos))
    assert app.running
    # release on the canvas: swallowed by the pending take-over
    app.handle_event(_ev("up", (200, 200)))
    assert app.running
    assert app.strokes == []

    app.handle_event(_ev("up", quit_pos))
    assert not app.running


def test_quit_event_stops_loop(app):
    app.handle_event(pygame.event.Event(pygame.QUIT))
    assert not app.running


def test_headless_smoke_run():
    from src.utils.pygame_bootstrap import init_pygame_display

    screen = init_pygame_display((64, 36), headless=True)
    app = App(screen, mode=MOUSE_MODE)
    assert app.run(smoke=0.05) == 0


def _wheel(kind, pos, button):
    etype = pygame.MOUSEBUTTONDOWN if kind == "down" else pygame.MOUSEBUTTONUP
    return pygame.event.Event(etype, pos=pos, button=button)


@pytest.mark.parametrize("button", [4, 5])
def test_scroll_wheel_draws_nothing_and_keeps_running(app, button):
    for pos in ((150, 150), _center(app, "button:quit")):
        app.handle_event(_wheel("down", pos, button))
        app.handle_event(_wheel("up", pos, button))

    assert app.strokes == []
    assert app.dom.interception is None
    assert app.running
