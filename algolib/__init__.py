"""Classic data structures and algorithms: heaps, disjoint sets, string search,
tries, alphabets, thread-safe containers and a write-back LRU cache."""

__version__ = "0.1.0"