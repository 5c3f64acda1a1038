# src/events/occurrence.py
"""
The object handed to delegated callbacks.

Pure state module (no pygame import) so the engine and its tests can build
synthetic occurrences without a display.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple


@dataclass
class Occurrence:
    """
    One thing that happened under the root.

    type              : occurrence type name, e.g. "mousedown" or "touchstart".
    source            : the deepest node the occurrence originated from.
    pos               : cursor position in root coordinates, if any.
    native            : the underlying platform event (pygame.event.Event).
    default_prevented : set by prevent_default().
    propagation_stopped: set by stop_propagation(); adapters stop delivering.
    data              : free-form extras for callers.
    """
    type: str
    source: Any
    pos: Optional[Tuple[int, int]] = None
    native: Any = None
    default_prevented: bool = False
    propagation_stopped: bool = False
    data: Dict[str, Any] = field(default_factory=dict)

    def prevent_default(self) -> None:
        self.default_prevented = True

    def stop_propagation(self) -> None:
        self.propagation_stopped = True


def cancel_event(occurrence: Occurrence) -> bool:
    """
    Cancel an occurrence: prevent the default action and stop propagation.

    Returns False so a callback can `return cancel_event(e)`, which also
    stops the remaining callbacks of its binding.
    """
    occurrence.prevent_default()
    occurrence.stop_propagation()
    return False
