"""Knuth-Morris-Pratt search with an optional wildcard element."""

from __future__ import annotations

from typing import Any, Generic, Sequence, TypeVar

T = TypeVar("T")


class KMP(Generic[T]):
    """Precomputed matcher for one pattern."""

    def __init__(self, pattern: Sequence[T], wildcard: T | None = None) -> None:
        self._pattern = pattern
        self._wildcard = wildcard
        size = len(pattern)
        failure = [0] * size
        for i in range(2, size):
            w = pattern[i - 1]
            t = failure[i - 1]
            while True:
                if pattern[t] == w or self._is_wildcard(pattern[t]) or self._is_wildcard(w):
                    failure[i] = t + 1
                    break
                if t == 0:
                    break
                t = failure[t]
        self._failure = failure

    def _is_wildcard(self, element: Any) -> bool:
        return self._wildcard is not None and element == self._wildcard

    def search(self, text: Sequence[T]) -> int | None:
        """Return the start of the first match in ``text``, or None."""
        pattern = self._pattern
        if not pattern:
            return 0
        matched = 0
        i = 0
        while i < len(text):
            expected = pattern[matched]
            if expected == text[i] or self._is_wildcard(expected):
                matched += 1
                if matched == len(pattern):
                    return i + 1 - matched
            elif matched > 0:
                matched = self._failure[matched]
                continue
            i += 1
        return None