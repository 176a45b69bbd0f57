from __future__ import annotations

import copy
import functools
import threading
import time
from collections import OrderedDict
from typing import Any, Callable, Tuple

MISSING = object()


class MemoCache:
    """
    Thread-safe store for memoized engine results.

    Every entry lives ``ttl_seconds``; when ``max_items`` is reached the least
    recently read entry goes first.
    """

    def __init__(self, ttl_seconds: float = 1800, max_items: int = 2048) -> None:
        self.ttl_seconds = max(float(ttl_seconds), 1.0)
        self.max_items = max(int(max_items), 1)
        self._lock = threading.Lock()
        self._store: "OrderedDict[str, Tuple[float, Any]]" = OrderedDict()

    def _now(self) -> float:
        return time.monotonic()

    def __len__(self) -> int:
        with self._lock:
            return len(self._store)

    def get(self, key: str, default: Any = MISSING) -> Any:
        with self._lock:
            item = self._store.get(key)
            if item is None:
                return default
            expires_at, value = item
            if expires_at <= self._now():
                del self._store[key]
                return default
            self._store.move_to_end(key)
            return value

    def put(self, key: str, value: Any) -> None:
        with self._lock:
            self._store.pop(key, None)
            while len(self._store) >= self.max_items:
                self._store.popitem(last=False)
            self._store[key] = (self._now() + self.ttl_seconds, value)

    def clear(self) -> None:
        with self._lock:
            self._store.clear()


def make_key(fn: Callable[..., Any], args: tuple, kwargs: dict) -> str:
    return f"{fn.__module__}.{fn.__qualname__}:{args!r}:{sorted(kwargs.items())!r}"


def memoize(cache: MemoCache):
    """
    Caches a pure function's results keyed by its full argument tuple.

    Callers get their own deep copy on every call, so mutating a result
    never changes what the next caller sees.
    """

    def decorator(fn: Callable[..., Any]) -> Callable[..., Any]:
        @functools.wraps(fn)
        def wrapper(*args, **kwargs):
            key = make_key(fn, args, kwargs)
            value = cache.get(key)
            if value is MISSING:
                value = fn(*args, **kwargs)
                cache.put(key, copy.deepcopy(value))
                return value
            return copy.deepcopy(value)

        wrapper.cache = cache  # type: ignore[attr-defined]
        return wrapper

    return decorator
