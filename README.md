# algolib

Classic data structures and algorithms in pure Python, with no third-party
dependencies.

## Installation

```
pip install algolib
```

## What is inside

- `algolib.heap`: `Heap`, a binary heap (a min-heap, or a max-heap with
  `reverse=True`) whose items can be read, changed and removed by index, and
  `WindowHeap`, a heap over a first-in first-out window whose `pop` drops the
  oldest item while `top` gives the best one.
- `algolib.union_find`: `DisjointSetNode` with `make_set`, `find` and `union`
  (union by rank, path compression).
- `algolib.list_algorithm`: `half_cut_list` and `inversion_count`.
- `algolib.kmp`: `KMP`, Knuth-Morris-Pratt search with an optional wildcard
  element.
- `algolib.string_algorithm`: `aho_corasick`, which finds an occurrence of one
  of several words in a text and returns it as a slice of the text.
- `algolib.pool`: `ObjectPool`, which gives each distinct value a consecutive
  integer id, and `IdentityPool`, in which each value is its own id.
- `algolib.trie`: `Trie` and `TrieNode`, a trie stored level by level.
- `algolib.ordered_dict`: `RecencyDict`, a dictionary ordered oldest first,
  where writing or finding a key makes it the newest.
- `algolib.thread_safe_container`: `ThreadSafeContainer`,
  `ThreadSafeLinearContainer` (a deque whose readers can wait with a timeout
  or a stop event) and `ThreadSafeMapContainer`.
- `algolib.alphabet.core`: the abstract `Alphabet`, the `ENDMARKER` and
  `BLANK_SYMBOL` symbols, `endmarked_symbol_string` and the alphabet errors
  (`EmptyAlphabetName`, `EmptyAlphabet`, `InvalidAlphabet`,
  `UnexistedAlphabet`, all subclasses of `AlphabetError`).
- `algolib.alphabet.range_alphabets`: `IntervalAlphabet`, `SetAlphabet`,
  `NumberSetAlphabet`, `ASCII`, `PrintableASCII` and `SubAlphabet`.
- `algolib.alphabet.wrappers`: `EndmarkedAlphabet`, `AlphabetWithBlankSymbol`
  and `UnionAlphabet`.
- `algolib.lru_cache`: `LRUCache`, an in-memory cache kept in step with a
  `StorageBackend` by background threads, and `ValueReference`, a held value
  written back to the cache when closed.

## Examples

```python
from algolib.heap import Heap

heap = Heap()
for n in (5, 1, 3):
    heap.insert(n)
assert heap.top() == 1
heap.pop()
assert heap.top() == 3
```

```python
from algolib.union_find import find, make_set, union

a, b = make_set("a"), make_set("b")
union(a, b)
assert find(a) is find(b)
```

```python
from algolib.kmp import KMP

assert KMP("aba").search("xxabab") == 2
```

```python
from algolib.string_algorithm import aho_corasick

assert aho_corasick(["he", "she", "his"], "ushers") == "she"
```

```python
from algolib.alphabet.range_alphabets import ASCII

ascii_ = ASCII()
assert ord("a") in ascii_
assert ascii_.to_string(ord("a")) == "'a'"
assert ascii_.mma_draw(ord("a")) == 'Style["a",Bold,Purple]'
```

```python
from algolib.lru_cache import LRUCache, StorageBackend


class DictBackend(StorageBackend):
    def __init__(self):
        self.store = {}

    def get_keys(self):
        return list(self.store)

    def contains(self, key):
        return key in self.store

    def load_data(self, key):
        return self.store.get(key)

    def save_data(self, key, value):
        self.store[key] = value
        return True

    def erase_data(self, key):
        self.store.pop(key, None)

    def clear(self):
        self.store.clear()


backend = DictBackend()
with LRUCache(backend) as cache:
    cache.emplace("k", 1)
    with cache.mutable_get("k") as ref:
        ref.value += 1
    assert cache.get("k") == 2
assert backend.store["k"] == 2
```

On close, a cache with permanent storage (the default) saves its modified
values and waits for them to be written; after
`disable_permanent_storage()` it clears the backend instead.

## What it does not do

- `LRUCache` comes with no storage of its own: `StorageBackend` is abstract,
  and you supply a subclass that reads and writes your storage.
- There is no registry of named alphabets; alphabets are built by
  constructing the classes above.
- There is no command-line program; everything is used as a library.

## Running the tests

```
pip install -e ".[test]"
pytest
```