"""String helpers: trimming, splitting, ASCII case-insensitive matching and file name suffixes."""

from __future__ import annotations

import string
from collections.abc import Iterable

# Characters treated as whitespace by the C locale.
_WHITESPACE = " \t\n\v\f\r"
_ASCII_LOWER = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)


def _lower(text: str) -> str:
    return text.translate(_ASCII_LOWER)


def ltrim(text: str) -> str:
    """Strip leading whitespace."""
    return text.lstrip(_WHITESPACE)


def rtrim(text: str) -> str:
    """Strip trailing whitespace."""
    return text.rstrip(_WHITESPACE)


def trim(text: str) -> str:
    """Strip whitespace from both ends."""
    return text.strip(_WHITESPACE)


def split_once_whitespace(text: str) -> tuple[str, str]:
    """Split a trimmed string at its first space or tab into two trimmed halves."""
    text = trim(text)
    positions = [pos for pos in (text.find(" "), text.find("\t")) if pos >= 0]
    if not positions:
        return text, ""
    pos = min(positions)
    return trim(text[:pos]), trim(text[pos + 1:])


def string_split(text: str, delim: str = " ") -> list[str]:
    """Split on a delimiter character, dropping empty parts."""
    return [part for part in text.split(delim) if part]


def iequals(left: str, right: str) -> bool:
    """Compare two strings ignoring ASCII case."""
    return len(left) == len(right) and _lower(left) == _lower(right)


def istarts_with(text: str, prefix: str) -> bool:
    """Tell whether text starts with prefix, ignoring ASCII case."""
    return iequals(text[:len(prefix)], prefix)


def iends_with(text: str, suffix: str) -> bool:
    """Tell whether text ends with suffix, ignoring ASCII case."""
    return len(text) >= len(suffix) and iequals(text[len(text) - len(suffix):], suffix)


def icontains(text: str, infix: str) -> bool:
    """Tell whether text contains infix, ignoring ASCII case.

    An empty text contains nothing, not even the empty string.
    """
    return bool(text) and _lower(infix) in _lower(text)


def replace_all(text: str, search: str, replacement: str) -> str:
    """Replace every non-overlapping occurrence of search, scanning left to right."""
    if not search:
        raise ValueError("search string must not be empty")
    return text.replace(search, replacement)


def _split_ext(filename: str) -> tuple[str, str]:
    dot = filename.rfind(".")
    if dot < 0:
        return filename, ""
    return filename[:dot], filename[dot:]


def add_suffix_before_extension(filename: str, suffix: str) -> str:
    """Insert suffix between the stem and the last extension of a file name."""
    if not suffix:
        return filename
    stem, ext = _split_ext(filename)
    return stem + suffix + ext


def _tail_matches(stem: str, suffix: str, case_sensitive: bool) -> bool:
    if len(stem) < len(suffix):
        return False
    tail = stem[len(stem) - len(suffix):]
    return tail == suffix if case_sensitive else iequals(tail, suffix)


def remove_suffix_before_extension(filename: str, suffix: str, case_sensitive: bool = False) -> str:
    """Remove suffix from the end of the stem if present; otherwise return the name unchanged."""
    if not suffix:
        return filename
    stem, ext = _split_ext(filename)
    if not _tail_matches(stem, suffix, case_sensitive):
        return filename
    return stem[:len(stem) - len(suffix)] + ext


def remove_any_suffix_before_extension(
    filename: str, suffixes: Iterable[str], case_sensitive: bool = False
) -> str:
    """Remove the first of suffixes that ends the stem."""
    for suffix in suffixes:
        candidate = remove_suffix_before_extension(filename, suffix, case_sensitive)
        if candidate != filename:
            return candidate
    return filename


def has_suffix_before_extension(filename: str, suffix: str, case_sensitive: bool = False) -> bool:
    """Tell whether the stem of filename ends with suffix."""
    if not suffix:
        return True
    stem, _ = _split_ext(filename)
    return _tail_matches(stem, suffix, case_sensitive)


def filename_without_ext(filename: str) -> str:
    """Return the name up to its last dot."""
    return _split_ext(filename)[0]


def ext_from_filename(filename: str) -> str:
    """Return the text after the last dot, or an empty string."""
    dot = filename.rfind(".")
    return "" if dot < 0 else filename[dot + 1:]


class StringMatcher:
    """Predicate combining exact, prefix, infix and suffix conditions; empty ones are ignored."""

    def __init__(self, case_sensitive: bool = False) -> None:
        self._case_sensitive = case_sensitive
        self._exact = ""
        self._prefix = ""
        self._infix = ""
        self._suffix = ""

    def exact(self, value: str) -> StringMatcher:
        self._exact = value
        return self

    def prefix(self, value: str) -> StringMatcher:
        self._prefix = value
        return self

    def infix(self, value: str) -> StringMatcher:
        self._infix = value
        return self

    def suffix(self, value: str) -> StringMatcher:
        self._suffix = value
        return self

    def __call__(self, text: str) -> bool:
        if self._case_sensitive:
            checks = (
                (self._exact, lambda v: text == v),
                (self._prefix, text.startswith),
                (self._infix, lambda v: v in text),
                (self._suffix, text.endswith),
            )
        else:
            checks = (
                (self._exact, lambda v: iequals(text, v)),
                (self._prefix, lambda v: istarts_with(text, v)),
                (self._infix, lambda v: icontains(text, v)),
                (self._suffix, lambda v: iends_with(text, v)),
            )
        return all(test(value) for value, test in checks if value)