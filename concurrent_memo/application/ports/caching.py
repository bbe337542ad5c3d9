from __future__ import annotations

from collections.abc import Hashable
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Callable

    from ...domain.entities.option import Option


@runtime_checkable
class ValueStorePort[K: Hashable, V](Protocol):
    """Backing store consulted by the single-flight memoizer."""

    def try_get(self, key: K) -> Option[V]: ...

    def get_or_add(self, key: K, compute: Callable[[K], V]) -> V: ...

    def remove(self, key: K) -> bool: ...

    def clear(self) -> None: ...

    def __len__(self) -> int: ...
