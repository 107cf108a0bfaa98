"""Binary heaps with position-aware updates and a sliding-window heap."""

from __future__ import annotations

from collections import deque
from typing import Any, Callable, Generic, TypeVar

T = TypeVar("T")


class Heap(Generic[T]):
    """Array-backed binary heap; a min-heap unless ``reverse`` is true."""

    def __init__(self, reverse: bool = False) -> None:
        self._items: list[T] = []
        self._reverse = reverse

    def _before(self, a: T, b: T) -> bool:
        return a > b if self._reverse else a < b  # type: ignore[operator]

    def _moved(self, item: T, index: int) -> None:
        """Hook called whenever an item lands at a new position."""

    def _place(self, index: int, item: T) -> None:
        self._items[index] = item
        self._moved(item, index)

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self._items):
            raise IndexError(f"heap index {index} out of range")

    def top(self) -> T:
        """Return the item with the highest priority."""
        return self.get_item(0)

    def __len__(self) -> int:
        return len(self._items)

    def pop(self) -> T | None:
        """Remove and return the top item; do nothing on an empty heap."""
        if not self._items:
            return None
        top = self._items[0]
        last = self._items.pop()
        if self._items:
            self._place(0, last)
            self._sift_down(0)
        return top

    def insert(self, item: T) -> int:
        """Add an item and return the position it settled at."""
        self._items.append(item)
        index = len(self._items) - 1
        self._moved(item, index)
        return self._sift_up(index)

    def change_item(self, index: int, callback: Callable[[T], T]) -> int:
        """Replace the item at ``index`` by ``callback(item)`` and restore order."""
        self._check_index(index)
        self._place(index, callback(self._items[index]))
        return self._heapify(index)

    def remove_item(self, index: int) -> None:
        """Remove the item at ``index``."""
        self._check_index(index)
        last = self._items.pop()
        if index < len(self._items):
            self._place(index, last)
            self._heapify(index)

    def get_item(self, index: int) -> T:
        """Return the item stored at ``index``."""
        self._check_index(index)
        return self._items[index]

    def _heapify(self, index: int) -> int:
        new_index = self._sift_up(index)
        if new_index != index:
            return new_index
        return self._sift_down(index)

    def _sift_up(self, index: int) -> int:
        item = self._items[index]
        while index > 0:
            parent = (index - 1) // 2
            if not self._before(item, self._items[parent]):
                break
            self._place(index, self._items[parent])
            index = parent
        self._place(index, item)
        return index

    def _sift_down(self, index: int) -> int:
        size = len(self._items)
        item = self._items[index]
        while (child := 2 * index + 1) < size:
            right = child + 1
            if right < size and self._before(self._items[right], self._items[child]):
                child = right
            if not self._before(self._items[child], item):
                break
            self._place(index, self._items[child])
            index = child
        self._place(index, item)
        return index


class _WindowItem:
    __slots__ = ("data", "heap_index")

    def __init__(self, data: Any) -> None:
        self.data = data
        self.heap_index = 0

    def __lt__(self, other: _WindowItem) -> bool:
        return self.data < other.data

    def __gt__(self, other: _WindowItem) -> bool:
        return self.data > other.data


class _IndexedHeap(Heap[_WindowItem]):
    def _moved(self, item: _WindowItem, index: int) -> None:
        item.heap_index = index


class WindowHeap(Generic[T]):
    """Heap over a first-in first-out window: ``pop`` drops the oldest item."""

    def __init__(self, reverse: bool = False) -> None:
        self._heap = _IndexedHeap(reverse)
        self._window: deque[_WindowItem] = deque()

    def top(self) -> T:
        """Return the best item currently in the window."""
        return self._heap.top().data

    def pop(self) -> None:
        """Drop the oldest item; do nothing on an empty window."""
        if not self._window:
            return
        oldest = self._window.pop()
        self._heap.remove_item(oldest.heap_index)

    def push(self, item: T) -> None:
        """Add a new item to the window."""
        entry = _WindowItem(item)
        self._window.appendleft(entry)
        self._heap.insert(entry)

    def __len__(self) -> int:
        return len(self._heap)