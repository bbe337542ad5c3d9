"""Single-flight memoizer over a weakly-valued store.

Lookups are lock-free on a hit. On a miss the caller takes the key's lock
token, re-checks the store (another caller may have filled it while this
one waited), and only then runs the source function. Callers on distinct
keys never share a lock.

Cached values are held weakly, so an entry disappears once nobody outside
the cache references its value, and the next call for that key computes it
again. Values that cannot be weakly referenced are pinned unless
``MemoConfig.strong_fallback`` is off.
"""

from __future__ import annotations

from collections.abc import Hashable
from typing import TYPE_CHECKING, override

from ..infrastructure.caching.key_lock_registry import KeyLockRegistry
from ..infrastructure.caching.weak_value_store import WeakValueStore
from .base import Memoizer

if TYPE_CHECKING:
    from collections.abc import Callable

    from ..application.ports.services import LoggerPort
    from ..config import MemoConfig


class SingleFlightMemoizer[K: Hashable, V](Memoizer[K, V]):
    def __init__(
        self,
        fn: Callable[[K], V],
        *,
        logger: LoggerPort | None = None,
        config: MemoConfig | None = None,
    ) -> None:
        super().__init__(fn, logger=logger, config=config)
        self.store: WeakValueStore[K, V] = WeakValueStore(
            strong_fallback=self.config.strong_fallback,
            on_evict=self._record_eviction,
        )
        self.locks: KeyLockRegistry[K] = KeyLockRegistry(
            on_contention=self._record_contention
        )

    @override
    def __call__(self, key: K) -> V:
        return self.store.try_get(key).match(
            lambda value: self._hit(key, value),
            lambda: self._compute_once(key),
        )

    @override
    def remove(self, key: K) -> bool:
        return self.store.remove(key)

    @override
    def clear(self) -> None:
        self.store.clear()

    @override
    def __len__(self) -> int:
        return len(self.store)

    def _hit(self, key: K, value: V) -> V:
        self._record_hit(key)
        return value

    def _compute_once(self, key: K) -> V:
        self._record_miss(key)
        with self.locks.locked(key):
            found = self.store.try_get(key)
            if found.is_present:
                return found.value
            return self.store.get_or_add(key, self._compute)

    def _record_contention(self, key: K, holders: int) -> None:
        self.logger.log_lock_contention(self.name, key, holders)
