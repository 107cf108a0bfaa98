"""Containers guarded by a lock, with blocking consumers."""

from __future__ import annotations

import threading
import time
from collections import deque
from contextlib import contextmanager
from typing import Any, Callable, Generic, Iterable, Iterator, TypeVar

T = TypeVar("T")

_POLL_INTERVAL = 0.05


class ThreadSafeContainer(Generic[T]):
    """Wraps a container so every access holds one lock."""

    def __init__(self, container: Any) -> None:
        self._container = container
        self._lock = threading.RLock()

    @contextmanager
    def locked(self) -> Iterator[Any]:
        """Hold the lock and yield the underlying container."""
        with self._lock:
            yield self._container

    def __len__(self) -> int:
        with self._lock:
            return len(self._container)


class ThreadSafeLinearContainer(ThreadSafeContainer[T]):
    """A thread-safe double-ended queue whose consumers can wait for items."""

    def __init__(self, container: Iterable[T] | None = None) -> None:
        super().__init__(deque(container) if container is not None else deque())
        self._new_element = threading.Condition(self._lock)
        self._less_element = threading.Condition(self._lock)

    def _wait_for_items(
        self, timeout: float | None, stop_event: threading.Event | None
    ) -> bool:
        deadline = None if timeout is None else time.monotonic() + timeout
        while True:
            if self._container:
                return True
            if stop_event is not None and stop_event.is_set():
                return False
            remaining = None if deadline is None else deadline - time.monotonic()
            if remaining is not None and remaining <= 0:
                return False
            if stop_event is not None:
                remaining = _POLL_INTERVAL if remaining is None else min(remaining, _POLL_INTERVAL)
            self._new_element.wait(remaining)

    def back(
        self, timeout: float | None = 0, stop_event: threading.Event | None = None
    ) -> T | None:
        """Return the last item, waiting up to ``timeout`` seconds; None if none."""
        with self._lock:
            if self._wait_for_items(timeout, stop_event):
                return self._container[-1]
            return None

    def front(
        self, timeout: float | None = 0, stop_event: threading.Event | None = None
    ) -> T | None:
        """Return the first item, waiting up to ``timeout`` seconds; None if none."""
        with self._lock:
            if self._wait_for_items(timeout, stop_event):
                return self._container[0]
            return None

    def push_back(self, value: T) -> None:
        with self._lock:
            self._container.append(value)
            self._new_element.notify_all()

    def push_front(self, value: T) -> None:
        with self._lock:
            self._container.appendleft(value)
            self._new_element.notify_all()

    def batch_pop_front(
        self,
        batch_size: int,
        timeout: float | None = 0,
        stop_event: threading.Event | None = None,
    ) -> list[T]:
        """Remove and return up to ``batch_size`` items from the front."""
        with self._lock:
            if not self._wait_for_items(timeout, stop_event):
                return []
            count = min(batch_size, len(self._container))
            batch = [self._container.popleft() for _ in range(count)]
            self._less_element.notify_all()
            return batch

    def pop_front(
        self, timeout: float | None = 0, stop_event: threading.Event | None = None
    ) -> T | None:
        """Remove and return the first item, waiting up to ``timeout``; None if none."""
        with self._lock:
            if not self._wait_for_items(timeout, stop_event):
                return None
            value = self._container.popleft()
            self._less_element.notify_all()
            return value

    def discard_front(self) -> None:
        """Drop the first item, if any, without waiting."""
        with self._lock:
            if self._container:
                self._container.popleft()
                self._less_element.notify_all()

    def clear(self) -> None:
        with self._lock:
            self._container.clear()
            self._less_element.notify_all()

    def wait_for_less_size(self, want_size: int, timeout: float | None) -> bool:
        """Wait until at most ``want_size`` items remain; False on timeout."""
        with self._lock:
            return self._less_element.wait_for(
                lambda: len(self._container) <= want_size, timeout
            )


class ThreadSafeMapContainer(ThreadSafeContainer[T]):
    """A thread-safe mapping whose values are updated under the lock."""

    def __init__(
        self,
        container: dict[Any, T] | None = None,
        default_factory: Callable[[], T] | None = None,
    ) -> None:
        super().__init__(dict(container) if container is not None else {})
        self._default_factory = default_factory

    def modify_value(self, key: Any, callback: Callable[[T], T]) -> T:
        """Store ``callback(current)`` under ``key`` and return it.

        A missing key starts from ``default_factory()``; without a factory
        a missing key raises KeyError.
        """
        with self._lock:
            if key in self._container:
                current = self._container[key]
            elif self._default_factory is not None:
                current = self._default_factory()
            else:
                raise KeyError(key)
            updated = callback(current)
            self._container[key] = updated
            return updated