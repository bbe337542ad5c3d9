from __future__ import annotations

from collections.abc import Hashable
from typing import TYPE_CHECKING, override

from .base import Memoizer

if TYPE_CHECKING:
    from collections.abc import Callable

    from ..application.ports.services import LoggerPort
    from ..config import MemoConfig


class EagerMemoizer[K: Hashable, V](Memoizer[K, V]):
    """Plain dict cache with no synchronization.

    Only safe when every call comes from a single thread; concurrent callers
    may compute the same key twice or observe a torn update.
    """

    def __init__(
        self,
        fn: Callable[[K], V],
        *,
        logger: LoggerPort | None = None,
        config: MemoConfig | None = None,
    ) -> None:
        super().__init__(fn, logger=logger, config=config)
        self._cache: dict[K, V] = {}

    @override
    def __call__(self, key: K) -> V:
        if key in self._cache:
            self._record_hit(key)
            return self._cache[key]
        self._record_miss(key)
        value = self._compute(key)
        self._cache[key] = value
        return value

    @override
    def remove(self, key: K) -> bool:
        return self._cache.pop(key, _MISSING) is not _MISSING

    @override
    def clear(self) -> None:
        self._cache.clear()

    @override
    def __len__(self) -> int:
        return len(self._cache)


_MISSING = object()
