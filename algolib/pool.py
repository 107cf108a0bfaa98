"""Pools that hand out stable identifiers for values."""

from __future__ import annotations

from typing import Generic, Hashable, Iterator, TypeVar

T = TypeVar("T", bound=Hashable)


class ObjectPool(Generic[T]):
    """Gives each distinct value a consecutive integer id, starting at 0."""

    def __init__(self) -> None:
        self._ids: dict[T, int] = {}
        self._values: list[T] = []

    def get_data_id(self, item: T) -> int:
        """Return the id of ``item``; raises KeyError if it was never added."""
        return self._ids[item]

    def add_data(self, item: T) -> int:
        """Add ``item`` if new and return its id."""
        data_id = self._ids.get(item)
        if data_id is None:
            data_id = len(self._values)
            self._ids[item] = data_id
            self._values.append(item)
        return data_id

    def __len__(self) -> int:
        return len(self._ids)

    def __contains__(self, item: object) -> bool:
        return item in self._ids

    def contains_data_id(self, data_id: int) -> bool:
        """Tell whether ``data_id`` has been handed out."""
        return 0 <= data_id < len(self._values)

    def get_data(self, data_id: int) -> T:
        """Return the value with ``data_id``; raises IndexError if unknown."""
        if not self.contains_data_id(data_id):
            raise IndexError(f"unknown data id {data_id}")
        return self._values[data_id]

    def items(self) -> Iterator[tuple[T, int]]:
        """Iterate over ``(value, id)`` pairs."""
        return iter(self._ids.items())


class IdentityPool(Generic[T]):
    """A pool in which every value is its own id.

    Values must be hashable so that they can serve as ids; an unhashable
    value raises TypeError.
    """

    @staticmethod
    def _as_id(value: T) -> T:
        hash(value)
        return value

    def get_data_id(self, item: T) -> T:
        return self._as_id(item)

    def add_data(self, item: T) -> T:
        return self._as_id(item)

    def get_data(self, data_id: T) -> T:
        return self._as_id(data_id)