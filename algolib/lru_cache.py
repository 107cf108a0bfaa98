"""Write-back LRU cache kept in step with a storage backend by worker threads."""

from __future__ import annotations

import logging
import os
import threading
from abc import ABC, abstractmethod
from enum import Enum, auto
from typing import Any, Callable, Generic, Hashable, Iterable, TypeVar

from algolib.ordered_dict import RecencyDict
from algolib.thread_safe_container import ThreadSafeLinearContainer

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")

_log = logging.getLogger(__name__)


class StorageBackend(ABC, Generic[K, V]):
    """Persistent storage behind an :class:`LRUCache`."""

    def has_initial_keys(self) -> bool:
        """Tell whether the storage may already hold keys at start-up."""
        return False

    @abstractmethod
    def get_keys(self) -> list[K]:
        """Return every stored key."""

    @abstractmethod
    def contains(self, key: K) -> bool:
        """Tell whether ``key`` is stored."""

    @abstractmethod
    def load_data(self, key: K) -> V | None:
        """Return the value of ``key``, or None if it cannot be loaded."""

    @abstractmethod
    def save_data(self, key: K, value: V) -> bool:
        """Store ``value`` under ``key``; return whether it succeeded."""

    @abstractmethod
    def erase_data(self, key: K) -> None:
        """Remove ``key`` from storage."""

    @abstractmethod
    def clear(self) -> None:
        """Remove everything from storage."""

    def batch_process_size(self) -> int:
        """Return how many keys a worker handles at once."""
        return 1

    def batch_load_data(self, keys: Iterable[K]) -> dict[K, V]:
        """Load several keys; keys that fail to load are left out."""
        result: dict[K, V] = {}
        for key in keys:
            value = self.load_data(key)
            if value is not None:
                result[key] = value
        return result

    def batch_save_data(self, batch_data: Iterable[tuple[K, V]]) -> list[tuple[K, bool]]:
        """Save several pairs; return each key with whether it was saved."""
        return [(key, self.save_data(key, value)) for key, value in batch_data]


class _State(Enum):
    MEMORY_MODIFIED = auto()
    CONSISTENT = auto()
    PRE_SAVING = auto()
    SAVING = auto()
    PRE_LOAD = auto()
    LOADING = auto()
    LOAD_FAILED = auto()


_PENDING_SAVE = (_State.MEMORY_MODIFIED, _State.PRE_SAVING, _State.SAVING)


class ValueReference(Generic[K, V]):
    """A held value that is written back to the cache when closed."""

    def __init__(self, key: K, value: V, cache: LRUCache[K, V]) -> None:
        self._key = key
        self.value = value
        self._cache: LRUCache[K, V] | None = cache

    @property
    def key(self) -> K:
        return self._key

    def cancel_writeback(self) -> None:
        """Release the hold without writing the value back."""
        if self._cache is not None:
            self._cache.cancel_hold(self._key)
            self._cache = None

    def close(self) -> None:
        """Write the value back to the cache, once."""
        if self._cache is not None:
            cache, self._cache = self._cache, None
            cache.emplace(self._key, self.value)

    def __enter__(self) -> ValueReference[K, V]:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()


class _Worker:
    def __init__(self, target: Callable[[threading.Event], None], name: str) -> None:
        self._stop = threading.Event()
        self._thread = threading.Thread(target=target, args=(self._stop,), name=name, daemon=True)
        self._thread.start()

    def stop(self) -> None:
        self._stop.set()
        self._thread.join()


class LRUCache(Generic[K, V]):
    """Keeps recently used values in memory and saves or loads the rest
    through a :class:`StorageBackend` on background threads."""

    def __init__(self, backend: StorageBackend[K, V]) -> None:
        self._backend = backend
        self._lock = threading.RLock()
        self._new_data = threading.Condition(self._lock)
        self._data_info: dict[K, _State] = {}
        self._data_dict: RecencyDict[K, V] = RecencyDict()
        self._saving_data: dict[K, V] = {}
        self._hold_data: dict[K, int] = {}
        self._dirty_data: set[K] = set()
        self._in_memory_number = 128
        self._wait_flush_ratio = 1.5
        self._permanent = True
        self._load_all_keys = not backend.has_initial_keys()
        self._closed = False
        self._save_queue: ThreadSafeLinearContainer[K] = ThreadSafeLinearContainer()
        self._fetch_queue: ThreadSafeLinearContainer[K] = ThreadSafeLinearContainer()
        self._save_workers: list[_Worker] = []
        self._fetch_workers: list[_Worker] = []
        cpu_num = os.cpu_count() or 1
        self.set_saving_thread_number(cpu_num)
        self.set_fetch_thread_number(cpu_num)

    @property
    def in_memory_number(self) -> int:
        """How many values are kept in memory before eviction starts."""
        with self._lock:
            return self._in_memory_number

    @in_memory_number.setter
    def in_memory_number(self, number: int) -> None:
        with self._lock:
            self._in_memory_number = number

    @property
    def wait_flush_ratio(self) -> float:
        with self._lock:
            return self._wait_flush_ratio

    @wait_flush_ratio.setter
    def wait_flush_ratio(self, ratio: float) -> None:
        with self._lock:
            self._wait_flush_ratio = ratio

    def close(self) -> None:
        """Save pending data if permanent, stop the workers, and otherwise clear storage."""
        if self._closed:
            return
        self._closed = True
        with self._lock:
            self._hold_data.clear()
        if self._permanent:
            self.flush()
            self._save_queue.wait_for_less_size(0, None)
        with self._lock:
            workers = self._fetch_workers + self._save_workers
            self._fetch_workers = []
            self._save_workers = []
        for worker in workers:
            worker.stop()
        if not self._permanent:
            self._backend.clear()

    def __enter__(self) -> LRUCache[K, V]:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def cancel_hold(self, key: K) -> None:
        """Release one hold on ``key``."""
        with self._lock:
            self._release_hold(key)

    def _release_hold(self, key: K) -> None:
        count = self._hold_data.get(key)
        if count is None:
            return
        if count <= 1:
            del self._hold_data[key]
        else:
            self._hold_data[key] = count - 1

    def emplace(self, key: K, value: V) -> None:
        """Store ``value`` under ``key`` in memory, marking it for saving."""
        with self._lock:
            self._data_dict.emplace(key, value)
            self._data_info[key] = _State.MEMORY_MODIFIED
            self._dirty_data.add(key)
            self._release_hold(key)
            self._saving_data.pop(key, None)
            over = len(self._data_dict) > self._in_memory_number
            wait_threshold = int(self._in_memory_number * self._wait_flush_ratio)
            want_size = self._in_memory_number
        if over:
            self._flush_expired_data()
            remaining = len(self._save_queue)
            if remaining > wait_threshold:
                _log.debug("wait flush remain_size is %d threshold is %d", remaining, wait_threshold)
                self._save_queue.wait_for_less_size(want_size, 1.0)

    def get(self, key: K, hold: bool = False) -> V | None:
        """Return the value of ``key``, loading it if needed; None if absent.

        Raises RuntimeError when loading fails.
        """
        with self._lock:
            while True:
                result, value = self._prefetch(key)
                if result < 0:
                    raise RuntimeError(f"failed to get {key}")
                if result > 0:
                    if hold and value is not None:
                        self._hold_data[key] = self._hold_data.get(key, 0) + 1
                    return value
                self._new_data.wait()

    def mutable_get(self, key: K) -> ValueReference[K, V] | None:
        """Hold ``key`` and return a reference that writes back on close."""
        value = self.get(key, True)
        if value is None:
            return None
        return ValueReference(key, value, self)

    def __len__(self) -> int:
        with self._lock:
            if self._load_all_keys:
                return len(self._data_info)
            return len(self._keys())

    def erase(self, key: K) -> None:
        """Remove ``key`` from the cache and from storage."""
        with self._lock:
            if self._data_info.pop(key, None) is None:
                return
            self._dirty_data.discard(key)
            self._hold_data.pop(key, None)
            self._data_dict.erase(key)
            self._saving_data.pop(key, None)
            self._backend.erase_data(key)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return self._contains(key)  # type: ignore[arg-type]

    def _contains(self, key: K) -> bool:
        if key in self._data_info:
            return True
        return not self._load_all_keys and self._backend.contains(key)

    def keys(self) -> list[K]:
        """Return all keys; keys awaiting a save come first."""
        with self._lock:
            return self._keys()

    def _keys(self) -> list[K]:
        if not self._load_all_keys:
            stored = list(self._backend.get_keys())
            for key in stored:
                self._data_info.setdefault(key, _State.CONSISTENT)
            self._load_all_keys = True
            return stored
        modified = [k for k, s in self._data_info.items() if s in _PENDING_SAVE]
        others = [k for k, s in self._data_info.items() if s not in _PENDING_SAVE]
        return modified + others[::-1]

    def flush(self) -> None:
        """Queue every modified, unheld value for saving."""
        tasks: list[K] = []
        with self._lock:
            for key in self._dirty_data:
                state = self._data_info.get(key)
                if state is None or key in self._hold_data:
                    continue
                if state is _State.MEMORY_MODIFIED:
                    self._data_info[key] = _State.PRE_SAVING
                    tasks.append(key)
            if self._hold_data:
                _log.warning("hold %d data", len(self._hold_data))
        for key in tasks:
            self._save_queue.push_back(key)

    def clear(self) -> None:
        """Drop everything from memory, the queues and storage."""
        with self._lock:
            self._dirty_data.clear()
            self._hold_data.clear()
            self._data_info.clear()
            self._data_dict.clear()
            self._saving_data.clear()
            self._save_queue.clear()
            self._fetch_queue.clear()
            self._backend.clear()

    def prefetch(self, keys: Iterable[K]) -> None:
        """Start loading ``keys`` in the background."""
        for key in keys:
            with self._lock:
                self._prefetch(key)

    def set_saving_thread_number(self, number: int) -> None:
        if number == 0:
            raise ValueError("saving thread number is 0")
        self._resize_workers(self._save_workers, self._save_queue, number, self._save_loop, "saving_thread")

    def set_fetch_thread_number(self, number: int) -> None:
        if number == 0:
            raise ValueError("fetch thread number is 0")
        self._resize_workers(self._fetch_workers, self._fetch_queue, number, self._fetch_loop, "fetch_thread")

    def _resize_workers(
        self,
        workers: list[_Worker],
        queue: ThreadSafeLinearContainer[K],
        number: int,
        target: Callable[[threading.Event], None],
        name: str,
    ) -> None:
        stopped: list[_Worker] = []
        with self._lock:
            if number < len(workers):
                queue.clear()
                stopped = workers[:]
                workers.clear()
        for worker in stopped:
            worker.stop()
        with self._lock:
            while len(workers) < number:
                workers.append(_Worker(target, f"{name} {len(workers)}"))

    def enable_permanent_storage(self) -> None:
        self._permanent = True

    def disable_permanent_storage(self) -> None:
        self._permanent = False

    def _change_state(self, key: K, old: _State, new: _State) -> bool:
        state = self._data_info.get(key)
        if state is None:
            return False
        if state is not old:
            _log.debug("change_state failed: expected %s, found %s, wanted %s", old, state, new)
            return False
        self._data_info[key] = new
        return True

    def _prefetch(self, key: K) -> tuple[int, V | None]:
        """Return (1, value-or-None) when settled, 0 when loading, -1 on failure."""
        state = self._data_info.get(key)
        if state is None:
            if self._load_all_keys or not self._backend.contains(key):
                return 1, None
            state = self._data_info[key] = _State.CONSISTENT
        found = self._data_dict.find(key)
        if found is not None:
            return 1, found[1]
        if state in (_State.PRE_SAVING, _State.SAVING):
            return 1, self._saving_data[key]
        if state is _State.LOAD_FAILED:
            return -1, None
        if state in (_State.LOADING, _State.PRE_LOAD):
            return 0, None
        if state is not _State.CONSISTENT:
            _log.error("invalid data state %s for fetch %s", state, key)
            return -1, None
        self._data_info[key] = _State.PRE_LOAD
        self._fetch_queue.push_front(key)
        return 0, None

    def _flush_expired_data(self) -> None:
        expired: list[K] = []
        with self._lock:
            for _ in range(len(self._data_dict)):
                key, value = self._data_dict.pop_oldest()
                state = self._data_info.get(key)
                if state is None:
                    raise RuntimeError(f"can't find info: {key}")
                if state is _State.CONSISTENT:
                    continue
                if key in self._hold_data:
                    self._data_dict.emplace(key, value)
                    continue
                if state in (_State.PRE_SAVING, _State.SAVING):
                    self._saving_data[key] = value
                    continue
                if state is not _State.MEMORY_MODIFIED:
                    raise RuntimeError(f"invalid state {state} of key: {key}")
                self._data_info[key] = _State.PRE_SAVING
                self._saving_data[key] = value
                expired.append(key)
        for key in expired:
            self._save_queue.push_back(key)

    def _fetch_loop(self, stop: threading.Event) -> None:
        batch_size = self._backend.batch_process_size()
        while not stop.is_set():
            tasks = self._fetch_queue.batch_pop_front(batch_size, None, stop)
            if not tasks:
                continue
            with self._lock:
                fetched = [k for k in tasks if self._change_state(k, _State.PRE_LOAD, _State.LOADING)]
                if len(fetched) < len(tasks):
                    self._new_data.notify_all()
            if not fetched:
                continue
            loaded: dict[K, V] = {}
            try:
                loaded = self._backend.batch_load_data(fetched)
            except Exception as exc:  # noqa: BLE001
                _log.error("load raised exception: %s", exc)
            with self._lock:
                for key in fetched:
                    if key not in loaded:
                        _log.error("load %s failed", key)
                        self._change_state(key, _State.LOADING, _State.LOAD_FAILED)
                    elif self._change_state(key, _State.LOADING, _State.CONSISTENT):
                        self._data_dict.emplace(key, loaded[key])
                self._new_data.notify_all()

    def _save_loop(self, stop: threading.Event) -> None:
        batch_size = self._backend.batch_process_size()
        while not stop.is_set():
            tasks = self._save_queue.batch_pop_front(batch_size, None, stop)
            if not tasks:
                continue
            batch: list[tuple[K, V]] = []
            results: list[tuple[K, bool]] = []
            with self._lock:
                for key in tasks:
                    if not self._change_state(key, _State.PRE_SAVING, _State.SAVING):
                        continue
                    results.append((key, False))
                    if key in self._saving_data:
                        batch.append((key, self._saving_data[key]))
                        continue
                    found = self._data_dict.find(key)
                    if found is None:
                        _log.error("can't find data of %s to save", key)
                        continue
                    batch.append(found)
            if not batch:
                continue
            try:
                results = list(self._backend.batch_save_data(batch))
            except Exception as exc:  # noqa: BLE001
                _log.error("batch save failed: %s", exc)
            with self._lock:
                for key, saved in results:
                    if saved and self._change_state(key, _State.SAVING, _State.CONSISTENT):
                        self._dirty_data.discard(key)
                        self._saving_data.pop(key, None)
                    elif not self._contains(key):
                        self._backend.erase_data(key)