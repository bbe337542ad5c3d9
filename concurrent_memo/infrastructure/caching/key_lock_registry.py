"""Per-key mutual exclusion without a global lock.

Tokens are created the first time a key is contended and dropped from the
registry once their last holder releases them. Removal is best-effort: a
caller that fetched a token just before its removal keeps using its own
reference, and a newcomer may register a fresh token for the same key.
Mutual exclusion comes from token identity, so the worst outcome is a
redundant computation that the caller's store re-check usually avoids.
"""

from __future__ import annotations

from collections.abc import Hashable
from contextlib import contextmanager
import threading
from typing import TYPE_CHECKING

from .atomic_map import AtomicMap

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator


class LockToken[K: Hashable]:
    __slots__ = ("_counter_lock", "_holders", "_lock", "key")

    def __init__(self, key: K) -> None:
        self.key = key
        self._lock = threading.Lock()
        self._counter_lock = threading.Lock()
        self._holders = 0

    @property
    def holders(self) -> int:
        return self._holders

    def retain(self) -> int:
        with self._counter_lock:
            self._holders += 1
            return self._holders

    def release_hold(self) -> int:
        with self._counter_lock:
            self._holders -= 1
            return self._holders

    def locked(self) -> bool:
        return self._lock.locked()

    def __enter__(self) -> LockToken[K]:
        self._lock.acquire()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self._lock.release()

    def __repr__(self) -> str:
        return f"LockToken(key={self.key!r}, holders={self._holders})"


class KeyLockRegistry[K: Hashable]:
    def __init__(
        self, on_contention: Callable[[K, int], None] | None = None
    ) -> None:
        super().__init__()
        self._tokens: AtomicMap[K, LockToken[K]] = AtomicMap()
        self._on_contention = on_contention

    def acquire(self, key: K) -> LockToken[K]:
        """Register interest in ``key`` and return its token (not yet locked)."""
        token = self._tokens.get_or_add(key, LockToken)
        holders = token.retain()
        if holders > 1 and self._on_contention is not None:
            self._on_contention(key, holders)
        return token

    def release(self, key: K, token: LockToken[K]) -> None:
        if token.release_hold() <= 0:
            self._tokens.remove_if(key, token)

    @contextmanager
    def locked(self, key: K) -> Iterator[LockToken[K]]:
        token = self.acquire(key)
        try:
            with token:
                yield token
        finally:
            self.release(key, token)

    def active_keys(self) -> list[K]:
        return self._tokens.keys()

    def __len__(self) -> int:
        return len(self._tokens)
