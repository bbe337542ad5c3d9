from __future__ import annotations

from collections.abc import Hashable
from typing import TYPE_CHECKING, override

from ..infrastructure.caching.atomic_map import AtomicMap
from .base import Memoizer

if TYPE_CHECKING:
    from collections.abc import Callable

    from ..application.ports.services import LoggerPort
    from ..config import MemoConfig


class ThreadSafeMemoizer[K: Hashable, V](Memoizer[K, V]):
    """Atomic get-or-insert cache.

    The map itself is never corrupted, but the source function runs outside
    any per-key lock: callers racing on a cold key may each compute it, and
    the first stored result is the one every caller receives.
    """

    def __init__(
        self,
        fn: Callable[[K], V],
        *,
        logger: LoggerPort | None = None,
        config: MemoConfig | None = None,
    ) -> None:
        super().__init__(fn, logger=logger, config=config)
        self._cache: AtomicMap[K, V] = AtomicMap()

    @override
    def __call__(self, key: K) -> V:
        found = self._cache.try_get(key)
        if found.is_present:
            self._record_hit(key)
            return found.value
        self._record_miss(key)
        return self._cache.get_or_add(key, self._compute)

    @override
    def remove(self, key: K) -> bool:
        return self._cache.remove(key)

    @override
    def clear(self) -> None:
        self._cache.clear()

    @override
    def __len__(self) -> int:
        return len(self._cache)
