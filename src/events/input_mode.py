# src/events/input_mode.py
"""
Mouse vs touch input strategy.

A mode is picked once at start-up (detect_input_mode) and injected into the
environment adapter, so the delegation engine itself never branches on the
platform:

    mode = detect_input_mode(settings.INPUT_MODE)
    dom = DomEvents(root, PygameAdapter(mode))
    dom.on(button, mode.press, on_press)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional, Tuple

import pygame

logger = logging.getLogger(__name__)

__all__ = [
    "InputMode",
    "MOUSE_MODE",
    "TOUCH_MODE",
    "detect_input_mode",
    "get_cursor_position",
    "touch_device_count",
]

Position = Tuple[int, int]


def _mouse_position(event: Any, _size: Optional[Tuple[int, int]]) -> Position:
    x, y = event.pos
    return int(x), int(y)


def _touch_position(event: Any, size: Optional[Tuple[int, int]]) -> Position:
    # Finger coordinates are normalized to 0..1 of the window.
    if size is None:
        surf = pygame.display.get_surface() if pygame.display.get_init() else None
        size = surf.get_size() if surf is not None else (1, 1)
    w, h = size
    return int(round(event.x * w)), int(round(event.y * h))


@dataclass(frozen=True)
class InputMode:
    """Event names and position extraction for one kind of pointer input."""
    name: str
    press: str
    move: str
    release: str
    native_types: Dict[int, str] = field(default_factory=dict, hash=False)
    position: Callable[[Any, Optional[Tuple[int, int]]], Position] = _mouse_position

    @property
    def type_names(self) -> Tuple[str, str, str]:
        return self.press, self.move, self.release

    def type_name_for(self, native_type: int) -> Optional[str]:
        """Occurrence type name for a pygame event type, or None if not ours."""
        return self.native_types.get(native_type)

    def cursor_position(self, event: Any, size: Optional[Tuple[int, int]] = None) -> Position:
        return self.position(event, size)


MOUSE_MODE = InputMode(
    name="mouse",
    press="mousedown",
    move="mousemove",
    release="mouseup",
    native_types={
        pygame.MOUSEBUTTONDOWN: "mousedown",
        pygame.MOUSEMOTION: "mousemove",
        pygame.MOUSEBUTTONUP: "mouseup",
    },
    position=_mouse_position,
)

TOUCH_MODE = InputMode(
    name="touch",
    press="touchstart",
    move="touchmove",
    release="touchend",
    native_types={
        pygame.FINGERDOWN: "touchstart",
        pygame.FINGERMOTION: "touchmove",
        pygame.FINGERUP: "touchend",
    },
    position=_touch_position,
)

_MODES = {"mouse": MOUSE_MODE, "touch": TOUCH_MODE}


def touch_device_count() -> int:
    """Number of touch devices SDL knows about (0 if it cannot tell)."""
    try:
        from pygame._sdl2 import touch
        return int(touch.get_num_devices())
    except (ImportError, AttributeError, pygame.error):
        return 0


def detect_input_mode(preference: str = "auto") -> InputMode:
    """
    Resolve "mouse" | "touch" | "auto" to an InputMode.
    "auto" prefers touch when a touch device is present.
    """
    pref = (preference or "auto").strip().lower()
    if pref in _MODES:
        return _MODES[pref]
    if pref != "auto":
        logger.warning("Unknown input mode %r, falling back to auto-detection", preference)
    mode = TOUCH_MODE if touch_device_count() > 0 else MOUSE_MODE
    logger.info("Input mode: %s", mode.name)
    return mode


def get_cursor_position(
    event: Any,
    size: Optional[Tuple[int, int]] = None,
    mode: Optional[InputMode] = None,
) -> Position:
    """
    Position of a pointer event as (x, y) pixels.

    Without an explicit mode the event type decides: finger events are
    scaled by `size` (or the display size), everything else uses `event.pos`.
    """
    if mode is None:
        mode = TOUCH_MODE if getattr(event, "type", None) in TOUCH_MODE.native_types else MOUSE_MODE
    return mode.cursor_position(event, size)
