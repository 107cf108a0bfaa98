"""Disjoint-set forest with union by rank and path compression."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(eq=False)
class DisjointSetNode(Generic[T]):
    """One element of a disjoint-set forest."""

    data: T
    rank: int = 0
    representative: DisjointSetNode[T] | None = field(default=None, repr=False)


def make_set(item: T) -> DisjointSetNode[T]:
    """Create a singleton set holding ``item``."""
    return DisjointSetNode(item)


def find(node: DisjointSetNode[T] | None) -> DisjointSetNode[T] | None:
    """Return the root of the set containing ``node``, compressing the path."""
    if node is None:
        return None
    root = node
    while root.representative is not None:
        root = root.representative
    while node is not root:
        parent = node.representative
        node.representative = root
        node = parent  # type: ignore[assignment]
    return root


def union(a: DisjointSetNode[T] | None, b: DisjointSetNode[T] | None) -> None:
    """Merge the sets containing ``a`` and ``b``."""
    if a is None or b is None or a is b:
        return
    a_root = find(a)
    b_root = find(b)
    if a_root is b_root:
        return
    assert a_root is not None and b_root is not None
    if a_root.rank < b_root.rank:
        a_root.representative = b_root
    elif a_root.rank > b_root.rank:
        b_root.representative = a_root
    else:
        a_root.representative = b_root
        b_root.rank += 1