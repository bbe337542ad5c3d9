"""Shared machinery for every memoizer variant.

A memoizer binds one source function to one cache it owns; there is no
module-level cache state. Subclasses decide how the cache is consulted and
filled, and call :meth:`Memoizer._compute` (or ``_compute_async``) to run
the source function with logging and statistics.

Errors raised by the source function propagate unchanged and are never
cached.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Hashable
import functools
import threading
import time
from typing import TYPE_CHECKING, Any

from ..config import MemoConfig
from ..domain.entities.cache_stats import CacheStats
from ..infrastructure.logging.null_logger import NullLogger

if TYPE_CHECKING:
    from collections.abc import Callable

    from ..application.ports.services import LoggerPort


class Memoizer[K: Hashable, V](ABC):
    def __init__(
        self,
        fn: Callable[..., Any],
        *,
        logger: LoggerPort | None = None,
        config: MemoConfig | None = None,
    ) -> None:
        super().__init__()
        if not callable(fn):
            raise TypeError(f"memoization requires a callable, got {type(fn).__name__}")
        self.fn = fn
        self.logger: LoggerPort = logger or NullLogger()
        self.config = config or MemoConfig()
        self.name = self.config.name or getattr(fn, "__qualname__", repr(fn))
        self._stats_lock = threading.RLock()
        self._hits = 0
        self._misses = 0
        self._computations = 0
        self._failures = 0
        self._evictions = 0

    @abstractmethod
    def __call__(self, key: K) -> V: ...

    @abstractmethod
    def remove(self, key: K) -> bool: ...

    @abstractmethod
    def clear(self) -> None: ...

    @abstractmethod
    def __len__(self) -> int: ...

    def stats(self) -> CacheStats:
        # Eviction callbacks fire during GC while the store lock is held and
        # then take _stats_lock, so the store must not be entered under it.
        size = len(self)
        with self._stats_lock:
            return CacheStats(
                hits=self._hits,
                misses=self._misses,
                computations=self._computations,
                failures=self._failures,
                evictions=self._evictions,
                size=size,
            )

    def _invoke(self, key: K) -> Any:
        return self.fn(key)

    def _compute(self, key: K) -> V:
        self.logger.log_computation_start(self.name, key)
        started = time.perf_counter()
        try:
            value = self._invoke(key)
        except Exception as exc:
            self._record_failure(key, exc)
            raise
        self._record_computation(key, started)
        return value

    async def _compute_async(self, key: K) -> V:
        self.logger.log_computation_start(self.name, key)
        started = time.perf_counter()
        try:
            value = await self._invoke(key)
        except Exception as exc:
            self._record_failure(key, exc)
            raise
        self._record_computation(key, started)
        return value

    def _record_hit(self, key: K) -> None:
        with self._stats_lock:
            self._hits += 1
        self.logger.log_cache_hit(self.name, key)

    def _record_miss(self, key: K) -> None:
        with self._stats_lock:
            self._misses += 1
        self.logger.log_cache_miss(self.name, key)

    def _record_eviction(self, key: K) -> None:
        with self._stats_lock:
            self._evictions += 1
        self.logger.log_eviction(self.name, key)

    def _record_failure(self, key: K, exc: Exception) -> None:
        with self._stats_lock:
            self._failures += 1
        self.logger.log_computation_failed(self.name, key, exc)

    def _record_computation(self, key: K, started: float) -> None:
        elapsed_ms = (time.perf_counter() - started) * 1000
        with self._stats_lock:
            self._computations += 1
        self.logger.log_computation_complete(self.name, key, elapsed_ms)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r}, size={len(self)})"


class MemoizedFunction[K: Hashable, V]:
    """Callable returned by the ``memoize_*`` constructors.

    Behaves like the wrapped function and carries its metadata; the owning
    memoizer is reachable as ``cache``.
    """

    def __init__(self, memoizer: Memoizer[K, V]) -> None:
        super().__init__()
        functools.update_wrapper(self, memoizer.fn)
        self.cache = memoizer

    def __call__(self, *args: K) -> V:
        return self.cache(*args)

    def cache_stats(self) -> CacheStats:
        return self.cache.stats()

    def cache_clear(self) -> None:
        self.cache.clear()

    def cache_remove(self, key: K) -> bool:
        return self.cache.remove(key)

    def __repr__(self) -> str:
        return f"<memoized {self.cache!r}>"


class AsyncMemoizedFunction[K: Hashable, V](MemoizedFunction[K, V]):
    async def __call__(self, *args: K) -> V:  # type: ignore[override]
        return await self.cache(*args)
