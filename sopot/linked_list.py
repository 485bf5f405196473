"""Iteration over intrusive linked lists whose nodes link to each other by attributes."""

from __future__ import annotations

from typing import Any, Iterator


def iterate_circular(first: Any, next_attr: str = "next") -> Iterator[Any]:
    """Yield the nodes of a singly linked list starting at first.

    Iteration stops when the list comes back round to first or reaches None.
    """
    current = first
    while current is not None:
        yield current
        current = getattr(current, next_attr)
        if current is first:
            return


def iterate_doubly(sentinel: Any, next_attr: str = "next") -> Iterator[Any]:
    """Yield the nodes of a list whose head and end are the sentinel node itself."""
    current = getattr(sentinel, next_attr)
    while current is not None and current is not sentinel:
        yield current
        current = getattr(current, next_attr)


def iterate_doubly_reversed(sentinel: Any, prev_attr: str = "prev") -> Iterator[Any]:
    """Yield the nodes of a sentinel-headed list from the last to the first."""
    current = getattr(sentinel, prev_attr)
    while current is not None and current is not sentinel:
        yield current
        current = getattr(current, prev_attr)