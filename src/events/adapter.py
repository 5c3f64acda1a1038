# src/events/adapter.py
"""
Environment adapter contract consumed by DomEvents.

The engine only needs three capabilities from its host:
    attach(node, type_name, fn)    subscribe fn to native occurrences
    detach(node, type_name, fn)    undo attach
    ancestor_chain(occurrence)     source, source.parent, ... (lazy)

ParentLinkAdapter implements all three over any tree whose nodes expose a
`parent` attribute, and keeps the native listener lists itself. Concrete
hosts (see src.ui.pygame_root.PygameAdapter) only add event translation.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Iterator, List, Protocol, Tuple

from src.events.occurrence import Occurrence

logger = logging.getLogger(__name__)

__all__ = ["EnvironmentAdapter", "NativeListener", "ParentLinkAdapter"]

NativeListener = Callable[[Occurrence], Any]


class EnvironmentAdapter(Protocol):
    def attach(self, node: Any, type_name: str, fn: NativeListener) -> None: ...

    def detach(self, node: Any, type_name: str, fn: NativeListener) -> None: ...

    def ancestor_chain(self, occurrence: Occurrence) -> Iterator[Any]: ...


class ParentLinkAdapter:
    """
    Native listener bookkeeping + parent-link ancestor walk.

    Listeners are keyed by node identity, so nodes do not need to be hashable.
    """

    def __init__(self) -> None:
        self._listeners: Dict[Tuple[int, str], List[NativeListener]] = {}
        self._nodes: Dict[int, Any] = {}

    # ---- subscription -----------------------------------------------------

    def attach(self, node: Any, type_name: str, fn: NativeListener) -> None:
        fns = self._listeners.setdefault((id(node), type_name), [])
        if any(f is fn for f in fns):
            return
        fns.append(fn)
        self._nodes[id(node)] = node
        logger.debug("attach %s on %r", type_name, node)

    def detach(self, node: Any, type_name: str, fn: NativeListener) -> None:
        key = (id(node), type_name)
        fns = self._listeners.get(key)
        if not fns:
            return
        fns[:] = [f for f in fns if f is not fn]
        if not fns:
            del self._listeners[key]
            if not any(k[0] == id(node) for k in self._listeners):
                self._nodes.pop(id(node), None)
        logger.debug("detach %s from %r", type_name, node)

    def listeners(self, node: Any, type_name: str) -> List[NativeListener]:
        """Copy of the native listeners attached to node for type_name."""
        return list(self._listeners.get((id(node), type_name), ()))

    def attached_types(self, node: Any) -> List[str]:
        return [t for (nid, t) in self._listeners if nid == id(node)]

    # ---- tree walk ----------------------------------------------------------

    def parent_of(self, node: Any) -> Any:
        return getattr(node, "parent", None)

    def ancestor_chain(self, occurrence: Occurrence) -> Iterator[Any]:
        """Lazy walk from the occurrence's source up through its parents."""
        node = occurrence.source
        while node is not None:
            yield node
            node = self.parent_of(node)

    # ---- delivery -----------------------------------------------------------

    def deliver_occurrence(self, root: Any, occurrence: Occurrence) -> bool:
        """
        Run native listeners for occurrence.type in capture order: from the
        root down to the source, stopping once propagation is stopped.
        Returns True if any listener ran.
        """
        path: List[Any] = []
        for node in self.ancestor_chain(occurrence):
            path.append(node)
            if node is root:
                break
        else:
            if root is not None:
                path.append(root)

        ran = False
        for node in reversed(path):
            for fn in self.listeners(node, occurrence.type):
                fn(occurrence)
                ran = True
                if occurrence.propagation_stopped:
                    return ran
        return ran
