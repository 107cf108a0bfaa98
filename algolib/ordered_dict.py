"""Dictionary ordered by recency of insertion or lookup."""

from __future__ import annotations

from collections import OrderedDict
from typing import Generic, Hashable, Iterator, TypeVar

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


class RecencyDict(Generic[K, V]):
    """Keeps entries oldest first; writing or finding a key makes it newest."""

    def __init__(self) -> None:
        self._data: OrderedDict[K, V] = OrderedDict()

    def __len__(self) -> int:
        return len(self._data)

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def clear(self) -> None:
        self._data.clear()

    def emplace(self, key: K, value: V) -> bool:
        """Store ``value`` as the newest entry; return True if the key was new."""
        inserted = key not in self._data
        self._data[key] = value
        self._data.move_to_end(key)
        return inserted

    def erase(self, key: K) -> bool:
        """Remove ``key``; return whether it was present."""
        return self._data.pop(key, _MISSING) is not _MISSING

    def __iter__(self) -> Iterator[tuple[K, V]]:
        return iter(list(self._data.items()))

    def __reversed__(self) -> Iterator[tuple[K, V]]:
        return iter(list(reversed(self._data.items())))

    def find(self, key: K) -> tuple[K, V] | None:
        """Return ``(key, value)`` and make it newest, or None if absent."""
        if key not in self._data:
            return None
        self._data.move_to_end(key)
        return key, self._data[key]

    def pop_oldest(self) -> tuple[K, V]:
        """Remove and return the oldest entry; raises IndexError when empty."""
        if not self._data:
            raise IndexError("data is empty")
        return self._data.popitem(last=False)


_MISSING = object()