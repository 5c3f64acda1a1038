# src/core/app.py
"""
Demo app: a toolbar of buttons and a drawing canvas wired through DomEvents.

- Buttons register press callbacks; the toolbar registers one too, but only
  the nearest registered widget (the button) gets the press.
- Pressing "Quit" arms a take-over for the next release: the app only quits
  when that release lands on the Quit button, and the canvas never sees it.
- App is itself a Handler: "button" and "stroke" are fired for listeners.
"""

from __future__ import annotations

import logging
import time
from typing import List, Optional, Tuple

import pygame

import src.utils.settings as settings
from src.events import DomEvents, Handler, InputMode, Occurrence, cancel_event, detect_input_mode
from src.ui.pygame_root import PygameAdapter
from src.ui.widget import Widget

logger = logging.getLogger(__name__)

BUTTON_LABELS = ("Clear", "Undo", "Quit")


def build_tree(size: Tuple[int, int] = (settings.SCREEN_WIDTH, settings.SCREEN_HEIGHT)) -> Widget:
    """root -> toolbar -> buttons, root -> canvas."""
    w, h = size
    root = Widget("root", pygame.Rect(0, 0, w, h))
    toolbar = root.add(Widget("toolbar", pygame.Rect(0, 0, w, settings.TOOLBAR_HEIGHT)))
    pad = settings.BUTTON_PADDING
    for i, label in enumerate(BUTTON_LABELS):
        x = pad + i * (settings.BUTTON_WIDTH + pad)
        toolbar.add(Widget(
            f"button:{label.lower()}",
            pygame.Rect(x, pad, settings.BUTTON_WIDTH, settings.TOOLBAR_HEIGHT - 2 * pad),
        ))
    root.add(Widget("canvas", pygame.Rect(0, settings.TOOLBAR_HEIGHT, w, h - settings.TOOLBAR_HEIGHT)))
    return root


class App(Handler):
    """Owns the widget tree, the delegation engine and the main loop."""

    def __init__(
        self,
        screen: Optional[pygame.Surface] = None,
        *,
        mode: Optional[InputMode] = None,
    ) -> None:
        super().__init__()
        self.screen = screen
        size = screen.get_size() if screen is not None else (settings.SCREEN_WIDTH, settings.SCREEN_HEIGHT)
        self.mode = mode or detect_input_mode(settings.INPUT_MODE)
        self.root = build_tree(size)
        self.adapter = PygameAdapter(self.mode, size)
        self.dom = DomEvents(self.root, self.adapter)

        self.running = True
        self.strokes: List[List[Tuple[int, int]]] = []
        self._current: Optional[List[Tuple[int, int]]] = None
        self.font: Optional[pygame.font.Font] = None

        self._wire()

    # ---- wiring -----------------------------------------------------------

    def _wire(self) -> None:
        toolbar = self.root.find("toolbar")
        canvas = self.root.find("canvas")
        press, move = self.mode.press, self.mode.move

        for button in toolbar.children:
            self.dom.on(button, press, self._on_button)
        # Presses on the toolbar background are eaten here.
        self.dom.on(toolbar, press, cancel_event)

        self.dom.on(canvas, press, self._on_canvas_press)
        self.dom.on(canvas, move, self._on_canvas_move)
        self.dom.on(canvas, self.mode.release, self._on_canvas_release)

    def _on_button(self, e: Occurrence) -> None:
        label = e.source.name.split(":", 1)[1]
        logger.info("button %s pressed at %s", label, e.pos)
        if label == "clear":
            self.strokes.clear()
        elif label == "undo" and self.strokes:
            self.strokes.pop()
        elif label == "quit":
            self.dom.take_over(e.source, self.mode.release, self._on_quit_release)
        self.fire("button", label)

    def _on_quit_release(self, e: Occurrence) -> None:
        logger.info("quit confirmed")
        self.running = False

    def _on_canvas_press(self, e: Occurrence) -> None:
        self._current = [e.pos]
        self.strokes.append(self._current)

    def _on_canvas_move(self, e: Occurrence) -> None:
        if self._current is not None:
            self._current.append(e.pos)

    def _on_canvas_release(self, e: Occurrence) -> None:
        if self._current is None:
            return
        self._current.append(e.pos)
        stroke, self._current = self._current, None
        self.fire("stroke", stroke)

    # ---- loop -------------------------------------------------------------

    def handle_event(self, event: pygame.event.Event) -> None:
        if event.type == pygame.QUIT:
            self.running = False
            return
        self.adapter.deliver(self.root, event)

    def draw(self, surface: pygame.Surface) -> None:
        if self.font is None:
            self.font = pygame.font.Font(None, settings.BUTTON_FONT_SIZE + 4)
        surface.fill(settings.BG_COLOR)
        toolbar = self.root.find("toolbar")
        pygame.draw.rect(surface, settings.TOOLBAR_BG_COLOR, toolbar.rect)
        mouse = pygame.mouse.get_pos()
        for button in toolbar.children:
            color = settings.BUTTON_HOVER_COLOR if button.contains(mouse) else settings.BUTTON_COLOR
            pygame.draw.rect(surface, color, button.rect)
            pygame.draw.rect(surface, settings.BUTTON_BORDER_COLOR, button.rect, 1)
            text = self.font.render(button.name.split(":", 1)[1].title(), True, settings.BUTTON_TEXT_COLOR)
            surface.blit(text, text.get_rect(center=button.rect.center))
        for stroke in self.strokes:
            if len(stroke) > 1:
                pygame.draw.lines(surface, settings.BUTTON_TEXT_COLOR, False, stroke, 2)

    def run(self, *, smoke: Optional[float] = None) -> int:
        """Main loop. smoke=N stops after N seconds (CI)."""
        clock = pygame.time.Clock()
        started = time.monotonic()
        while self.running:
            for ev in pygame.event.get():
                self.handle_event(ev)
            if self.screen is not None:
                self.draw(self.screen)
                pygame.display.flip()
            clock.tick(settings.FPS)
            if smoke is not None and time.monotonic() - started >= smoke:
                break
        return 0
