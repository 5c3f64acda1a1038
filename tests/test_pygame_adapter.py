# tests/test_pygame_adapter.py
"""
Pygame adapter end to end: pygame events -> occurrences -> DomEvents.
Events are built with pygame.event.Event, so no real window is needed.
"""
from __future__ import annotations

import pygame

from src.events import MOUSE_MODE, TOUCH_MODE, DomEvents, cancel_event
from src.ui.pygame_root import PygameAdapter
from src.ui.widget import Widget


def _tree():
    root = Widget("root", (0, 0, 200, 100))
    bar = root.add(Widget("bar", (0, 0, 200, 30)))
    ok = bar.add(Widget("ok", (10, 5, 40, 20)))
    label = ok.add(Widget("label", (15, 10, 10, 10)))
    return root, bar, ok, label


def _down(pos, button=1):
    return pygame.event.Event(pygame.MOUSEBUTTONDOWN, pos=pos, button=button)


def test_translate_mouse_event():
    root, bar, ok, label = _tree()
    adapter = PygameAdapter(MOUSE_MODE)
    occ = adapter.translate(root, _down((18, 12)))
    assert occ.type == "mousedown"
    assert occ.source is label
    assert occ.pos == (18, 12)
    assert occ.native.button == 1


def test_translate_ignores_foreign_events():
    root, *_ = _tree()
    adapter = PygameAdapter(MOUSE_MODE)
    assert adapter.translate(root, pygame.event.Event(pygame.KEYDOWN, key=pygame.K_a)) is None
    assert adapter.deliver(root, pygame.event.Event(pygame.KEYDOWN, key=pygame.K_a)) is None


def test_outside_every_widget_sources_root():
    root, *_ = _tree()
    occ = PygameAdapter(MOUSE_MODE).translate(root, _down((999, 999)))
    assert occ.source is root


def test_click_on_nested_label_reaches_button():
    root, bar, ok, label = _tree()
    adapter = PygameAdapter(MOUSE_MODE)
    dom = DomEvents(root, adapter)
    hits = []
    dom.on(ok, MOUSE_MODE.press, lambda e: hits.append(("ok", e.source.name, e.pos)))
    dom.on(bar, MOUSE_MODE.press, lambda e: hits.append(("bar", e.source.name, e.pos)))

    adapter.deliver(root, _down((18, 12)))
    adapter.deliver(root, _down((100, 10)))
    adapter.deliver(root, _down((100, 80)))

    assert hits == [("ok", "label", (18, 12)), ("bar", "bar", (100, 10))]
    assert adapter.attached_types(root) == ["mousedown"]


def test_touch_mode_end_to_end():
    root, bar, ok, label = _tree()
    adapter = PygameAdapter(TOUCH_MODE)
    dom = DomEvents(root, adapter)
    hits = []
    dom.on(ok, TOUCH_MODE.press, lambda e: hits.append(e.pos))

    # 0.1 * 200 = 20, 0.2 * 100 = 20 -> inside "ok"
    ev = pygame.event.Event(pygame.FINGERDOWN, x=0.1, y=0.2, touch_id=0, finger_id=0)
    assert adapter.deliver(root, ev) is not None
    # mouse events mean nothing in touch mode
    assert adapter.deliver(root, _down((20, 20))) is None
    assert hits == [(20, 20)]


def test_pump_counts_handled_events():
    root, bar, ok, label = _tree()
    adapter = PygameAdapter(MOUSE_MODE)
    dom = DomEvents(root, adapter)
    moves = []
    dom.on(bar, MOUSE_MODE.move, lambda e: moves.append(e.pos))
    events = [
        pygame.event.Event(pygame.MOUSEMOTION, pos=(60, 10), rel=(1, 0), buttons=(0, 0, 0)),
        pygame.event.Event(pygame.KEYUP, key=pygame.K_a),
        pygame.event.Event(pygame.MOUSEMOTION, pos=(61, 10), rel=(1, 0), buttons=(0, 0, 0)),
    ]
    assert adapter.pump(root, events) == 2
    assert moves == [(60, 10), (61, 10)]


def test_native_listeners_run_root_first_and_stop_on_cancel():
    root, bar, ok, label = _tree()
    adapter = PygameAdapter(MOUSE_MODE)
    order = []
    adapter.attach(root, "mousedown", lambda e: order.append("root"))
    adapter.attach(ok, "mousedown", lambda e: order.append("ok") or cancel_event(e))
    adapter.attach(label, "mousedown", lambda e: order.append("label"))

    occ = adapter.deliver(root, _down((18, 12)))
    assert order == ["root", "ok"]
    assert occ.default_prevented and occ.propagation_stopped


def test_attach_same_triple_twice_is_harmless():
    root, *_ = _tree()
    adapter = PygameAdapter(MOUSE_MODE)
    calls = []
    fn = lambda e: calls.append(1)  # noqa: E731
    adapter.attach(root, "mousedown", fn)
    adapter.attach(root, "mousedown", fn)
    adapter.deliver(root, _down((150, 80)))
    assert calls == [1]

    adapter.detach(root, "mousedown", fn)
    adapter.detach(root, "mousedown", fn)
    adapter.deliver(root, _down((150, 80)))
    assert calls == [1]
    assert adapter.attached_types(root) == []


def test_cancel_event_returns_false_and_stops_binding():
    root, bar, ok, label = _tree()
    adapter = PygameAdapter(MOUSE_MODE)
    dom = DomEvents(root, adapter)
    calls = []
    dom.on(ok, "mousedown", cancel_event)
    dom.on(ok, "mousedown", lambda e: calls.append(1))
    occ = adapter.deliver(root, _down((20, 10)))
    assert calls == []
    assert occ.default_prevented


def test_wheel_buttons_are_not_presses():
    root, bar, ok, label = _tree()
    adapter = PygameAdapter(MOUSE_MODE)
    dom = DomEvents(root, adapter)
    hits = []
    dom.on(ok, MOUSE_MODE.press, lambda e: hits.append(e.native.button))
    dom.on(ok, MOUSE_MODE.release, lambda e: hits.append(-e.native.button))

    for button in (4, 5):
        assert adapter.translate(root, _down((18, 12), button=button)) is None
        up = pygame.event.Event(pygame.MOUSEBUTTONUP, pos=(18, 12), button=button)
        assert adapter.translate(root, up) is None

    events = [
        _down((18, 12), button=4),
        pygame.event.Event(pygame.MOUSEBUTTONUP, pos=(18, 12), button=5),
        _down((18, 12), button=3),
    ]
    assert adapter.pump(root, events) == 1
    assert hits == [3]
