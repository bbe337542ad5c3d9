"""Thread-safe mapping with atomic get-or-insert and conditional removal.

Every primitive holds the internal lock only for the single dict operation
it performs. Caller-supplied factories always run outside the lock, so a
slow factory never stalls unrelated keys.

The lock is re-entrant: weak-reference callbacks may fire during garbage
collection while the same thread is inside a primitive, and they remove
entries through ``remove_if``.
"""

from __future__ import annotations

from collections.abc import Hashable
import threading
from typing import TYPE_CHECKING

from ...domain.entities.option import NOTHING, Option

if TYPE_CHECKING:
    from collections.abc import Callable

_MISSING = object()


class AtomicMap[K: Hashable, V]:
    def __init__(self) -> None:
        super().__init__()
        self._data: dict[K, V] = {}
        self._lock = threading.RLock()

    def try_get(self, key: K) -> Option[V]:
        with self._lock:
            value = self._data.get(key, _MISSING)
        if value is _MISSING:
            return NOTHING
        return Option.some(value)  # type: ignore[arg-type]

    def get(self, key: K, default: V | None = None) -> V | None:
        with self._lock:
            return self._data.get(key, default)

    def get_or_add(self, key: K, factory: Callable[[K], V]) -> V:
        """Return the value for ``key``, inserting ``factory(key)`` if absent.

        Two callers racing on an absent key may both run ``factory``; only the
        first insert is kept and both callers receive that value.
        """
        with self._lock:
            existing = self._data.get(key, _MISSING)
        if existing is not _MISSING:
            return existing  # type: ignore[return-value]
        created = factory(key)
        with self._lock:
            return self._data.setdefault(key, created)

    def add_or_replace(self, key: K, value: V) -> None:
        with self._lock:
            self._data[key] = value

    def remove(self, key: K) -> bool:
        with self._lock:
            return self._data.pop(key, _MISSING) is not _MISSING

    def remove_if(self, key: K, expected: V) -> bool:
        """Remove ``key`` only while it still maps to ``expected`` (by identity)."""
        with self._lock:
            if self._data.get(key, _MISSING) is not expected:
                return False
            self._data.pop(key, None)
            return True

    def keys(self) -> list[K]:
        with self._lock:
            return list(self._data)

    def values(self) -> list[V]:
        with self._lock:
            return list(self._data.values())

    def clear(self) -> None:
        with self._lock:
            self._data.clear()

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._data

    def __len__(self) -> int:
        with self._lock:
            return len(self._data)
