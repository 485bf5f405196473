"""Pool of reusable objects allocated page by page."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Callable, Generic, Iterator, TypeVar

T = TypeVar("T")


class MemPool(Generic[T]):
    """Hands out objects made by factory, page_size at a time, and takes them back for reuse.

    Released objects are handed out again as they are, most recently released first.
    """

    def __init__(self, factory: Callable[[], T], page_size: int = 64) -> None:
        if page_size < 1:
            raise ValueError(f"page size must be positive, got {page_size}")
        self._factory = factory
        self.page_size = page_size
        self._free: list[T] = []
        self._in_use: dict[int, T] = {}
        self._capacity = 0

    @property
    def capacity(self) -> int:
        """Number of objects the pool has made."""
        return self._capacity

    @property
    def free_count(self) -> int:
        return len(self._free)

    @property
    def in_use_count(self) -> int:
        return len(self._in_use)

    def _alloc_page(self) -> None:
        self._free.extend(self._factory() for _ in range(self.page_size))
        self._capacity += self.page_size

    def alloc(self) -> T:
        """Take an object from the pool, making a new page when none is free."""
        if not self._free:
            self._alloc_page()
        item = self._free.pop()
        self._in_use[id(item)] = item
        return item

    def release(self, item: T) -> None:
        """Give an object back; it must have come from alloc() and not been released yet."""
        if self._in_use.pop(id(item), None) is not item:
            raise ValueError("object was not allocated from this pool or was already released")
        self._free.append(item)

    @contextmanager
    def borrow(self) -> Iterator[T]:
        """Allocate an object for the duration of a with block."""
        item = self.alloc()
        try:
            yield item
        finally:
            self.release(item)