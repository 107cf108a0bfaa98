"""Level-indexed trie of sequences."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Generic, Hashable, Iterable, TypeVar

from algolib.pool import IdentityPool

T = TypeVar("T", bound=Hashable)


@dataclass(unsafe_hash=True)
class TrieNode:
    """A node identified by its element and its parent's element.

    The root's children have ``parent_id`` None.
    """

    element_id: Any
    parent_id: Any = None
    is_end: bool = field(default=False, compare=False)


class Trie(Generic[T]):
    """Stores sequences level by level; a node is unique per (element, parent)."""

    def __init__(self, sequences: Iterable[Iterable[T]] = ()) -> None:
        self._pool: IdentityPool[T] = IdentityPool()
        self._levels: list[dict[TrieNode, TrieNode]] = []
        for sequence in sequences:
            self.insert(sequence)

    def insert(self, sequence: Iterable[T]) -> None:
        """Add one sequence; its last node is marked as an end."""
        elements = list(sequence)
        parent_id: Any = None
        for level_idx, element in enumerate(elements):
            if len(self._levels) <= level_idx:
                self._levels.append({})
            node_id = self._pool.add_data(element)
            level = self._levels[level_idx]
            probe = TrieNode(node_id, parent_id)
            node = level.setdefault(probe, probe)
            if level_idx + 1 == len(elements):
                node.is_end = True
            parent_id = node_id

    def get_data_id(self, elem: T) -> Any:
        """Return the id used for ``elem`` in nodes."""
        return self._pool.get_data_id(elem)

    def get_level(self, level_idx: int) -> list[TrieNode]:
        """Return the nodes at depth ``level_idx``; raises IndexError past the deepest."""
        if not 0 <= level_idx < len(self._levels):
            raise IndexError(f"trie has no level {level_idx}")
        return list(self._levels[level_idx])