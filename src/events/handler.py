# src/events/handler.py
from __future__ import annotations

import logging
from threading import RLock
from typing import Any, Callable, Dict, List, Optional

import src.utils.settings as settings
from src.events.errors import require_callable

logger = logging.getLogger(__name__)

__all__ = ["Handler", "Listener"]

Listener = Callable[..., Any]


class Handler:
    """
    Named-event observer registry. Use directly or as a mixin:

        class Window(Handler): ...

        win = Window()
        win.on("resize", lambda name, w, h: ...).on("close", on_close)
        win.fire("resize", 800, 600)   # listener gets ("resize", 800, 600)

    - fire() works on a snapshot: listeners added/removed while firing
      only see the next fire().
    - A failing listener does not stop the others; the first error is
      re-raised once every listener has run.
    - stop_on_false=True makes an explicit `False` return halt the fire.
    """

    def __init__(self, *, stop_on_false: Optional[bool] = None) -> None:
        if stop_on_false is None:
            stop_on_false = settings.HANDLER_STOP_ON_FALSE
        self._stop_on_false = bool(stop_on_false)
        self._handlers: Dict[str, List[Listener]] = {}
        self._handlers_lock = RLock()

    # Mixin subclasses may skip __init__; state is created on first use.
    def _table(self) -> Dict[str, List[Listener]]:
        try:
            return self._handlers
        except AttributeError:
            self._handlers = {}
            self._handlers_lock = RLock()
            self._stop_on_false = settings.HANDLER_STOP_ON_FALSE
            return self._handlers

    def on(self, event_name: str, fn: Listener) -> "Handler":
        require_callable(fn, "Handler.on")
        table = self._table()
        with self._handlers_lock:
            table.setdefault(event_name, []).append(fn)
        return self

    def off(self, event_name: str, fn: Listener) -> "Handler":
        table = self._table()
        with self._handlers_lock:
            fns = table.get(event_name)
            if fns is not None:
                table[event_name] = [f for f in fns if f is not fn]
        return self

    def fire(self, event_name: str, *args: Any) -> "Handler":
        table = self._table()
        with self._handlers_lock:
            fns = list(table.get(event_name, ()))

        first_error: Optional[BaseException] = None
        for fn in fns:
            try:
                result = fn(event_name, *args)
            except Exception as e:
                logger.exception("Listener %r for '%s' failed", fn, event_name)
                if first_error is None:
                    first_error = e
                continue
            if self._stop_on_false and result is False:
                break

        if first_error is not None:
            raise first_error
        return self

    def listeners(self, event_name: str) -> List[Listener]:
        """Copy of the listeners registered for event_name."""
        table = self._table()
        with self._handlers_lock:
            return list(table.get(event_name, ()))

    def has_listeners(self, event_name: str) -> bool:
        return bool(self.listeners(event_name))
