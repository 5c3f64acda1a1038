# src/ui/widget.py
"""
Minimal node tree for pointer routing.

- Each Widget has a screen-space pygame.Rect, a parent link and ordered children.
- hit_test() finds the deepest visible widget under a point; that widget is
  the source of a pointer occurrence.
- Not a layout system: rects are whatever the caller assigns.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Tuple

import pygame


@dataclass(eq=False)
class Widget:
    """
    name    : identifier used by find() and in logs.
    rect    : screen-space bounds.
    parent  : set by add(); None for the root.
    children: drawn/hit-tested in order, last one on top.
    visible : invisible widgets (and their subtrees) are skipped by hit_test.
    """
    name: str
    rect: pygame.Rect = field(default_factory=lambda: pygame.Rect(0, 0, 0, 0))
    parent: Optional["Widget"] = field(default=None, repr=False)
    children: List["Widget"] = field(default_factory=list, repr=False)
    visible: bool = True

    def __post_init__(self) -> None:
        if not isinstance(self.rect, pygame.Rect):
            self.rect = pygame.Rect(self.rect)

    def add(self, child: "Widget") -> "Widget":
        """Append child (re-parenting it if needed) and return it."""
        if child.parent is not None:
            child.parent.remove(child)
        child.parent = self
        self.children.append(child)
        return child

    def remove(self, child: "Widget") -> None:
        self.children = [c for c in self.children if c is not child]
        if child.parent is self:
            child.parent = None

    def iter_ancestors(self, include_self: bool = True) -> Iterator["Widget"]:
        node = self if include_self else self.parent
        while node is not None:
            yield node
            node = node.parent

    def contains(self, pos: Tuple[int, int]) -> bool:
        return self.rect.collidepoint(pos)

    def hit_test(self, pos: Tuple[int, int]) -> Optional["Widget"]:
        if not self.visible or not self.contains(pos):
            return None
        for child in reversed(self.children):
            hit = child.hit_test(pos)
            if hit is not None:
                return hit
        return self

    def find(self, name: str) -> Optional["Widget"]:
        if self.name == name:
            return self
        for child in self.children:
            found = child.find(name)
            if found is not None:
                return found
        return None

    def walk(self) -> Iterator["Widget"]:
        """Depth-first, parents before children."""
        yield self
        for child in self.children:
            yield from child.walk()
