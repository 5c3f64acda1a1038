# src/events/errors.py
from __future__ import annotations

from typing import Any

__all__ = [
    "ContractViolation",
    "require_callable",
    "require_not_root",
    "require_target",
    "require_type_name",
]


class ContractViolation(ValueError, TypeError):
    """Raised at the call site when a caller breaks an API precondition."""


def require_target(target: Any, op: str) -> None:
    if target is None:
        raise ContractViolation(f"{op}: target must not be None")


def require_type_name(name: Any, op: str) -> None:
    if not isinstance(name, str) or not name:
        raise ContractViolation(f"{op}: event type must be a non-empty string, got {name!r}")


def require_callable(fn: Any, op: str) -> None:
    if not callable(fn):
        raise ContractViolation(f"{op}: callback must be callable, got {type(fn).__name__}")


def require_not_root(target: Any, root: Any, op: str) -> None:
    # The ancestor walk ends at the root, so it can never be matched.
    if target is root:
        raise ContractViolation(f"{op}: the root cannot be a target")
