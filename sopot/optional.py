"""Helpers that turn a condition into an optional value."""

from __future__ import annotations

from typing import Callable, Optional, TypeVar

T = TypeVar("T")


def then(cond: bool, func: Callable[[], T]) -> Optional[T]:
    """Call func only when cond holds and return its result; return None otherwise."""
    return func() if cond else None


def then_some(cond: bool, value: T) -> Optional[T]:
    """Return value when cond holds, otherwise None."""
    return value if cond else None