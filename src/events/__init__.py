"""
Event handling: a named-event observer registry (Handler) and a delegated
event router over a node tree (DomEvents), plus the mouse/touch input
strategy and the environment adapter contract they rely on.

Quick Start:
    from src.events import DomEvents, Handler, detect_input_mode
    from src.ui.pygame_root import PygameAdapter

    mode = detect_input_mode("auto")
    adapter = PygameAdapter(mode)
    dom = DomEvents(root, adapter)
    dom.on(button, mode.press, lambda e: print("pressed", e.pos))

    for ev in pygame.event.get():
        adapter.deliver(root, ev)
"""

from .adapter import EnvironmentAdapter, NativeListener, ParentLinkAdapter
from .dom_events import Binding, Callback, DomEvents, Interception
from .errors import ContractViolation
from .handler import Handler, Listener
from .input_mode import (
    MOUSE_MODE,
    TOUCH_MODE,
    InputMode,
    detect_input_mode,
    get_cursor_position,
)
from .occurrence import Occurrence, cancel_event

__all__ = [
    "Binding",
    "Callback",
    "ContractViolation",
    "DomEvents",
    "EnvironmentAdapter",
    "Handler",
    "InputMode",
    "Interception",
    "Listener",
    "MOUSE_MODE",
    "NativeListener",
    "Occurrence",
    "ParentLinkAdapter",
    "TOUCH_MODE",
    "cancel_event",
    "detect_input_mode",
    "get_cursor_position",
]
