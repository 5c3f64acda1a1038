# tests/conftest.py
from __future__ import annotations
import os
import sys
from pathlib import Path
from typing import List, Tuple

import pytest

# Ensure repo root is importable as a package root (so `import src...` works on CI)
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

# Headless Pygame setup (safe if pygame isn't used in a given test)
os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

from src.events import DomEvents  # noqa: E402
from src.utils import error_report  # noqa: E402
from tests.fakes import Node, RecordingAdapter  # noqa: E402


@pytest.fixture(scope="session", autouse=True)
def _init_pygame():
    try:
        import pygame
        pygame.init()
        # tiny hidden surface so display-dependent helpers work
        pygame.display.set_mode((1, 1))
        yield
    finally:
        try:
            import pygame
            pygame.quit()
        except Exception:
            pass


@pytest.fixture
def reported() -> List[Tuple[BaseException, str]]:
    """Collect everything sent to the process-level error channel."""
    seen: List[Tuple[BaseException, str]] = []
    previous = error_report.set_error_sink(lambda exc, ctx: seen.append((exc, ctx)))
    yield seen
    error_report.set_error_sink(previous)


@pytest.fixture
def tree():
    """body -> button -> span, body -> panel -> label."""
    body = Node("body")
    button = body.add(Node("button"))
    span = button.add(Node("span"))
    panel = body.add(Node("panel"))
    label = panel.add(Node("label"))
    return {"body": body, "button": button, "span": span, "panel": panel, "label": label}


@pytest.fixture
def adapter() -> RecordingAdapter:
    return RecordingAdapter()


@pytest.fixture
def dom(tree, adapter) -> DomEvents:
    return DomEvents(
        tree["body"],
        adapter,
        intercept_fallthrough=False,
        retain_native_subscriptions=True,
    )
