import time

import pytest

from algolib.lru_cache import LRUCache, StorageBackend, ValueReference


class DictBackend(StorageBackend):
    def __init__(self, store=None, initial=False):
        self.store = dict(store or {})
        self.initial = initial

    def has_initial_keys(self):
        return self.initial

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


class FailingLoadBackend(DictBackend):
    def load_data(self, key):
        return None


def _small_cache(backend):
    cache = LRUCache(backend)
    cache.set_saving_thread_number(1)
    cache.set_fetch_thread_number(1)
    return cache


def _wait_until(predicate, timeout=5.0):
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.01)
    return predicate()


def test_emplace_then_get():
    with _small_cache(DictBackend()) as cache:
        cache.emplace("a", "va")
        assert cache.get("a") == "va"
        assert "a" in cache
        assert len(cache) == 1


def test_missing_key_is_none():
    with _small_cache(DictBackend()) as cache:
        assert cache.get("nope") is None
        assert "nope" not in cache
        assert cache.mutable_get("nope") is None


def test_close_saves_to_backend():
    backend = DictBackend()
    cache = _small_cache(backend)
    cache.emplace("a", "va")
    cache.emplace("b", "vb")
    cache.close()
    assert backend.store == {"a": "va", "b": "vb"}


def test_non_permanent_close_clears_backend():
    backend = DictBackend({"old": "x"}, initial=True)
    cache = _small_cache(backend)
    cache.disable_permanent_storage()
    cache.emplace("a", "va")
    cache.close()
    assert backend.store == {}


def test_loads_initial_keys_from_backend():
    backend = DictBackend({"a": "va", "b": "vb"}, initial=True)
    with _small_cache(backend) as cache:
        assert "a" in cache
        assert cache.get("a") == "va"
        assert len(cache) == 2
        assert sorted(cache.keys()) == ["a", "b"]


def test_prefetch_then_get():
    backend = DictBackend({"a": "va"}, initial=True)
    with _small_cache(backend) as cache:
        cache.prefetch(["a"])
        assert cache.get("a") == "va"


def test_load_failure_raises():
    backend = FailingLoadBackend({"x": "vx"}, initial=True)
    with _small_cache(backend) as cache:
        with pytest.raises(RuntimeError):
            cache.get("x")


def test_erase_removes_everywhere():
    backend = DictBackend({"a": "va"}, initial=True)
    with _small_cache(backend) as cache:
        assert cache.get("a") == "va"
        cache.erase("a")
        assert "a" not in backend.store
        assert cache.get("a") is None


def test_eviction_keeps_values_reachable():
    backend = DictBackend()
    cache = _small_cache(backend)
    cache.in_memory_number = 2
    items = {"a": "va", "b": "vb", "c": "vc"}
    for key, value in items.items():
        cache.emplace(key, value)
    for key, value in items.items():
        assert cache.get(key) == value
    assert _wait_until(lambda: backend.store == items)
    for key, value in items.items():
        assert cache.get(key) == value
    cache.close()
    assert backend.store == items


def test_flush_saves_in_background():
    backend = DictBackend()
    with _small_cache(backend) as cache:
        cache.emplace("k", "v")
        cache.flush()
        assert _wait_until(lambda: backend.store.get("k") == "v")
        assert cache.get("k") == "v"


def test_mutable_get_writes_back():
    with _small_cache(DictBackend()) as cache:
        cache.emplace("k", [1])
        with cache.mutable_get("k") as ref:
            assert isinstance(ref, ValueReference)
            assert ref.key == "k"
            ref.value = [1, 2]
        assert cache.get("k") == [1, 2]


def test_cancel_writeback_keeps_old_value():
    with _small_cache(DictBackend()) as cache:
        cache.emplace("k", "old")
        ref = cache.mutable_get("k")
        ref.value = "new"
        ref.cancel_writeback()
        ref.close()
        assert cache.get("k") == "old"


def test_keys_lists_modified_entries():
    with _small_cache(DictBackend()) as cache:
        cache.emplace("a", 1)
        cache.emplace("b", 2)
        assert sorted(cache.keys()) == ["a", "b"]


def test_clear_empties_cache_and_backend():
    backend = DictBackend({"a": "va"}, initial=True)
    with _small_cache(backend) as cache:
        cache.emplace("b", "vb")
        cache.clear()
        assert backend.store == {}
        assert cache.get("b") is None
        assert len(cache) == 0


def test_zero_threads_rejected():
    with _small_cache(DictBackend()) as cache:
        with pytest.raises(ValueError):
            cache.set_saving_thread_number(0)
        with pytest.raises(ValueError):
            cache.set_fetch_thread_number(0)


def test_resizing_threads_keeps_working():
    backend = DictBackend({"a": "va"}, initial=True)
    with LRUCache(backend) as cache:
        cache.set_fetch_thread_number(1)
        cache.set_fetch_thread_number(2)
        assert cache.get("a") == "va"


def test_backend_batch_defaults():
    backend = DictBackend({"a": 1})
    assert StorageBackend.batch_process_size(backend) == 1
    assert StorageBackend.batch_load_data(backend, ["a", "missing"]) == {"a": 1}
    assert StorageBackend.batch_save_data(backend, [("b", 2)]) == [("b", True)]
    assert backend.store == {"a": 1, "b": 2}