# src/utils/pygame_bootstrap.py
from __future__ import annotations

import os
from typing import Optional

import pygame

import src.utils.settings as settings


def configure_environment(headless: Optional[bool] = None) -> bool:
    """
    SDL/Pygame defaults for Linux/CI/headless. Returns the resolved headless flag.
    Safe to call multiple times.
    """
    os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")
    if headless is None:
        no_display = os.name == "posix" and not (
            os.environ.get("DISPLAY") or os.environ.get("WAYLAND_DISPLAY")
        )
        headless = (
            settings.HEADLESS
            or os.environ.get("CI") == "true"
            or os.environ.get("SDL_VIDEODRIVER") == "dummy"
            or no_display
        )
    if headless:
        os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
        os.environ.setdefault("SDL_AUDIODRIVER", "dummy")
    return headless


def init_pygame_display(
    size: tuple[int, int] = (1, 1),
    *,
    headless: Optional[bool] = None,
    caption: str = settings.WINDOW_CAPTION,
) -> pygame.Surface:
    """
    Robust pygame bootstrap:
      - Configures 'dummy' drivers in CI/headless runs (no window/audio device required).
      - Ensures display and fonts are initialized.
      - Creates the window surface if none exists yet.

    Returns:
        A pygame display surface (even in headless mode).
    """
    configure_environment(headless)

    # Pygame init (idempotent)
    pygame.init()
    if not pygame.display.get_init():
        pygame.display.init()

    surf = pygame.display.get_surface()
    if surf is None:
        try:
            surf = pygame.display.set_mode(size)
        except pygame.error:
            # Fallback hard to dummy in case a system driver fails
            os.environ["SDL_VIDEODRIVER"] = "dummy"
            pygame.display.quit()
            pygame.display.init()
            surf = pygame.display.set_mode(size)
    pygame.display.set_caption(caption)

    if not pygame.font.get_init():
        pygame.font.init()

    return surf
