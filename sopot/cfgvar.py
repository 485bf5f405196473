"""Configuration variable that corrects assigned values and tracks changes."""

from __future__ import annotations

from typing import Callable, Generic, Optional, TypeVar

T = TypeVar("T")


class CfgVar(Generic[T]):
    """A configuration value with an optional correcting callback and a dirty flag.

    The flag starts set so that a fresh variable is written out on the first save.
    The default value is stored as given, without passing through the callback.
    """

    def __init__(self, default: T, assign_callback: Optional[Callable[[T], T]] = None) -> None:
        self._value = default
        self._assign_callback = assign_callback
        self.dirty = True

    @property
    def value(self) -> T:
        return self._value

    @value.setter
    def value(self, value: T) -> None:
        self.assign(value)

    def assign(self, value: T) -> None:
        """Store the corrected value; mark the variable dirty only if it changed."""
        corrected = value if self._assign_callback is None else self._assign_callback(value)
        if corrected != self._value:
            self._value = corrected
            self.dirty = True

    def __repr__(self) -> str:
        return f"CfgVar({self._value!r}, dirty={self.dirty})"