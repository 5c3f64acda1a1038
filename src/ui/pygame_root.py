# src/ui/pygame_root.py
from __future__ import annotations

from typing import Iterable, Optional, Tuple

import pygame

from src.events.adapter import ParentLinkAdapter
from src.events.input_mode import InputMode, MOUSE_MODE
from src.events.occurrence import Occurrence
from src.ui.widget import Widget

__all__ = ["PygameAdapter", "WHEEL_BUTTONS"]

# pygame reports the scroll wheel as mouse buttons 4 and 5.
WHEEL_BUTTONS = (4, 5)


class PygameAdapter(ParentLinkAdapter):
    """
    Environment adapter for a Widget tree fed by the pygame event queue.

    - translate(): pygame event -> Occurrence (type via the input mode,
      source via hit testing the root).
    - deliver(): run native listeners from the root down to the source.
    - pump(): deliver a batch, e.g. straight from pygame.event.get().
    """

    def __init__(self, mode: InputMode = MOUSE_MODE, size: Optional[Tuple[int, int]] = None) -> None:
        super().__init__()
        self.mode = mode
        self.size = size

    def translate(self, root: Widget, event: pygame.event.Event) -> Optional[Occurrence]:
        if event.type in (pygame.MOUSEBUTTONDOWN, pygame.MOUSEBUTTONUP):
            if getattr(event, "button", None) in WHEEL_BUTTONS:
                return None
        type_name = self.mode.type_name_for(event.type)
        if type_name is None:
            return None
        pos = self.mode.cursor_position(event, self.size or root.rect.size)
        source = root.hit_test(pos)
        if source is None:
            # Outside every widget: the root still receives it.
            source = root
        return Occurrence(type=type_name, source=source, pos=pos, native=event)

    def deliver(self, root: Widget, event: pygame.event.Event) -> Optional[Occurrence]:
        """Translate and deliver one event. Returns the occurrence, or None if not handled."""
        occurrence = self.translate(root, event)
        if occurrence is None:
            return None
        self.deliver_occurrence(root, occurrence)
        return occurrence

    def pump(self, root: Widget, events: Iterable[pygame.event.Event]) -> int:
        handled = 0
        for event in events:
            if self.deliver(root, event) is not None:
                handled += 1
        return handled
