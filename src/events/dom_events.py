# src/events/dom_events.py
"""
Delegated event routing over a node tree.

Many logical registrations (target, type, callback) share one native
subscription per type on the root. Each occurrence is routed to the
*nearest* registered ancestor of its source:

    dom = DomEvents(root, adapter)
    dom.on(button, "mousedown", on_press)        # attaches root listener once
    dom.on(toolbar, "mousedown", on_bar_press)   # same type: no new attach
    dom.take_over(slider, "mousemove", on_drag)  # steal the next mousemove

Rules:
- Only the nearest matching ancestor gets callbacks. The root is never a
  target: on() and take_over() reject it.
- A callback returning exactly False stops the rest of that binding's callbacks.
- An armed take-over owns the next occurrence of its type. If the target is
  not in the chain the occurrence is swallowed and the slot stays armed
  (unless intercept_fallthrough is on).
- Native subscriptions are kept after the last off() unless
  retain_native_subscriptions is False.
- A failing callback is logged; the rest still run, then the first error goes
  to src.utils.error_report.report_exception.
"""

from __future__ import annotations

import logging
import weakref
from dataclasses import dataclass
from threading import RLock
from typing import Any, Callable, Dict, List, Optional, Tuple

import src.utils.settings as settings
from src.events.adapter import EnvironmentAdapter, NativeListener
from src.events.errors import (
    require_callable,
    require_not_root,
    require_target,
    require_type_name,
)
from src.events.occurrence import Occurrence
from src.utils.error_report import report_exception

logger = logging.getLogger(__name__)

__all__ = ["Binding", "Callback", "DomEvents", "Interception"]

Callback = Callable[[Occurrence], Any]


def _ref(target: Any) -> Callable[[], Any]:
    """Non-owning reference when the object allows it, plain one otherwise."""
    try:
        return weakref.ref(target)
    except TypeError:
        return lambda: target


class Binding:
    """One target and its ordered callbacks for one occurrence type."""

    __slots__ = ("_target_ref", "target_id", "callbacks")

    def __init__(self, target: Any) -> None:
        self._target_ref = _ref(target)
        self.target_id = id(target)
        self.callbacks: List[Callback] = []

    @property
    def target(self) -> Any:
        return self._target_ref()

    def matches(self, node: Any) -> bool:
        return self.target_id == id(node) and self.target is node

    def __repr__(self) -> str:
        return f"Binding(target={self.target!r}, callbacks={len(self.callbacks)})"


@dataclass(frozen=True)
class Interception:
    occurrence_type: str
    target: Any
    callback: Callback


class DomEvents:
    """Delegation engine: one root subscription per type, nearest-ancestor routing."""

    def __init__(
        self,
        root: Any,
        adapter: EnvironmentAdapter,
        *,
        intercept_fallthrough: Optional[bool] = None,
        retain_native_subscriptions: Optional[bool] = None,
    ) -> None:
        require_target(root, "DomEvents")
        self.root = root
        self.adapter = adapter
        self.intercept_fallthrough = (
            settings.INTERCEPT_FALLTHROUGH if intercept_fallthrough is None else intercept_fallthrough
        )
        self.retain_native_subscriptions = (
            settings.RETAIN_NATIVE_SUBSCRIPTIONS
            if retain_native_subscriptions is None
            else retain_native_subscriptions
        )

        self._bindings: Dict[str, List[Binding]] = {}
        self._index: Dict[str, Dict[int, Binding]] = {}
        self._native: Dict[str, NativeListener] = {}
        self._interception: Optional[Interception] = None
        self._lock = RLock()

    # --------------------------------------------------------------------- #
    # Public API
    # --------------------------------------------------------------------- #

    def on(self, target: Any, occurrence_type: str, callback: Callback) -> None:
        require_target(target, "DomEvents.on")
        require_not_root(target, self.root, "DomEvents.on")
        require_type_name(occurrence_type, "DomEvents.on")
        require_callable(callback, "DomEvents.on")
        with self._lock:
            self._prune(occurrence_type)
            binding = self._find_binding(occurrence_type, target)
            if binding is None:
                binding = Binding(target)
                self._bindings.setdefault(occurrence_type, []).append(binding)
                self._index.setdefault(occurrence_type, {})[binding.target_id] = binding
            binding.callbacks.append(callback)
            self._ensure_native(occurrence_type)

    def off(self, target: Any, occurrence_type: str, callback: Callback) -> None:
        with self._lock:
            binding = self._find_binding(occurrence_type, target)
            if binding is None:
                return
            binding.callbacks[:] = [cb for cb in binding.callbacks if cb is not callback]
            if not self.retain_native_subscriptions and not any(
                b.callbacks for b in self._bindings.get(occurrence_type, ())
            ):
                self._release_native(occurrence_type)

    def take_over(self, target: Any, occurrence_type: str, callback: Callback) -> None:
        """Arm the one-shot interception slot, replacing any earlier one."""
        require_target(target, "DomEvents.take_over")
        require_not_root(target, self.root, "DomEvents.take_over")
        require_type_name(occurrence_type, "DomEvents.take_over")
        require_callable(callback, "DomEvents.take_over")
        with self._lock:
            if self._interception is not None:
                logger.debug(
                    "take_over replaces pending %s interception on %r",
                    self._interception.occurrence_type,
                    self._interception.target,
                )
            self._interception = Interception(occurrence_type, target, callback)

    @property
    def interception(self) -> Optional[Interception]:
        return self._interception

    def clear_interception(self) -> None:
        with self._lock:
            self._interception = None

    def bindings(self, occurrence_type: str) -> List[Tuple[Any, List[Callback]]]:
        """(target, callbacks) for live bindings of a type, in binding order."""
        with self._lock:
            self._prune(occurrence_type)
            out = []
            for b in self._bindings.get(occurrence_type, ()):
                target = b.target
                if target is not None:
                    out.append((target, list(b.callbacks)))
            return out

    def subscribed_types(self) -> List[str]:
        """Types that currently hold a native subscription on the root."""
        with self._lock:
            return list(self._native)

    # --------------------------------------------------------------------- #
    # Dispatch
    # --------------------------------------------------------------------- #

    def dispatch(self, occurrence_type: str, occurrence: Occurrence) -> None:
        with self._lock:
            if not self._bindings.get(occurrence_type):
                return

            slot = self._interception
            if slot is not None and slot.occurrence_type == occurrence_type:
                if self._serve_interception(slot, occurrence):
                    return
                if not self.intercept_fallthrough:
                    logger.debug("%s swallowed by pending take-over on %r", occurrence_type, slot.target)
                    return

            index = self._index.get(occurrence_type, {})
            for node in self._chain(occurrence):
                binding = index.get(id(node))
                if binding is not None and binding.matches(node):
                    self._run_callbacks(occurrence_type, binding, occurrence)
                    return

    def _serve_interception(self, slot: Interception, occurrence: Occurrence) -> bool:
        for node in self._chain(occurrence):
            if node is slot.target:
                self._interception = None
                try:
                    slot.callback(occurrence)
                except Exception as e:
                    report_exception(e, context=f"take_over({slot.occurrence_type})")
                return True
        return False

    def _run_callbacks(self, occurrence_type: str, binding: Binding, occurrence: Occurrence) -> None:
        first_error: Optional[BaseException] = None
        for cb in list(binding.callbacks):
            try:
                result = cb(occurrence)
            except Exception as e:
                logger.exception("callback %r for '%s' failed", cb, occurrence_type)
                if first_error is None:
                    first_error = e
                continue
            if result is False:
                break
        if first_error is not None:
            report_exception(first_error, context=f"dispatch({occurrence_type})")

    def _chain(self, occurrence: Occurrence):
        for node in self.adapter.ancestor_chain(occurrence):
            if node is self.root:
                return
            yield node

    # --------------------------------------------------------------------- #
    # Internals
    # --------------------------------------------------------------------- #

    def _find_binding(self, occurrence_type: str, target: Any) -> Optional[Binding]:
        binding = self._index.get(occurrence_type, {}).get(id(target))
        if binding is None:
            return None
        if binding.matches(target):
            return binding
        # Same id, different object: the old target was collected.
        self._drop_binding(occurrence_type, binding)
        return None

    def _drop_binding(self, occurrence_type: str, binding: Binding) -> None:
        self._index.get(occurrence_type, {}).pop(binding.target_id, None)
        bindings = self._bindings.get(occurrence_type)
        if bindings is not None:
            bindings[:] = [b for b in bindings if b is not binding]

    def _prune(self, occurrence_type: str) -> None:
        """Forget bindings whose target has been collected."""
        bindings = self._bindings.get(occurrence_type)
        if not bindings:
            return
        dead = [b for b in bindings if b.target is None]
        for binding in dead:
            self._drop_binding(occurrence_type, binding)
        if dead:
            logger.debug("pruned %d dead '%s' binding(s)", len(dead), occurrence_type)

    def _ensure_native(self, occurrence_type: str) -> None:
        if occurrence_type in self._native:
            return

        def _native(occurrence: Occurrence) -> None:
            self.dispatch(occurrence_type, occurrence)

        self._native[occurrence_type] = _native
        self.adapter.attach(self.root, occurrence_type, _native)
        logger.debug("root subscription created for '%s'", occurrence_type)

    def _release_native(self, occurrence_type: str) -> None:
        fn = self._native.pop(occurrence_type, None)
        if fn is not None:
            self.adapter.detach(self.root, occurrence_type, fn)
            logger.debug("root subscription released for '%s'", occurrence_type)
