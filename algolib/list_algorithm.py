"""Algorithms on sequences."""

from __future__ import annotations

from collections import deque
from typing import Any, Iterable, TypeVar

T = TypeVar("T")


def half_cut_list(items: Iterable[T]) -> tuple[list[T], list[T]]:
    """Split ``items`` into a first half of ``len // 2`` items and the rest."""
    items = list(items)
    mid = len(items) // 2
    return items[:mid], items[mid:]


def _sort_and_count(items: list[Any]) -> tuple[list[Any], int]:
    if len(items) <= 1:
        return items, 0
    first, second = half_cut_list(items)
    sorted_first, count_first = _sort_and_count(first)
    sorted_second, count_second = _sort_and_count(second)
    left = deque(sorted_first)
    right = deque(sorted_second)
    merged: list[Any] = []
    cross = 0
    while left and right:
        if left[0] <= right[0]:
            merged.append(left.popleft())
        else:
            cross += len(left)
            merged.append(right.popleft())
    merged.extend(left)
    merged.extend(right)
    return merged, cross + count_first + count_second


def inversion_count(items: Iterable[Any]) -> int:
    """Count the pairs ``i < j`` with ``items[i] > items[j]``."""
    return _sort_and_count(list(items))[1]