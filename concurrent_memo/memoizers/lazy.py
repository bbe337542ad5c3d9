from __future__ import annotations

from collections.abc import Hashable
import functools
from typing import TYPE_CHECKING, override

from ..infrastructure.caching.atomic_map import AtomicMap
from ..infrastructure.caching.lazy_cell import LazyCell
from .base import Memoizer

if TYPE_CHECKING:
    from collections.abc import Callable

    from ..application.ports.services import LoggerPort
    from ..config import MemoConfig


class LazyMemoizer[K: Hashable, V](Memoizer[K, V]):
    """Single-flight cache built on deferred cells.

    The first caller for a key installs a :class:`LazyCell`; everyone who
    finds that cell reads its single resolution. A cell that failed is
    removed so the next caller starts over with a fresh one.
    """

    def __init__(
        self,
        fn: Callable[[K], V],
        *,
        logger: LoggerPort | None = None,
        config: MemoConfig | None = None,
    ) -> None:
        super().__init__(fn, logger=logger, config=config)
        self._cells: AtomicMap[K, LazyCell[V]] = AtomicMap()

    @override
    def __call__(self, key: K) -> V:
        cell = self._cells.get(key)
        if cell is not None and cell.is_value_created:
            self._record_hit(key)
            return cell.value
        self._record_miss(key)
        cell = self._cells.get_or_add(key, self._new_cell)
        try:
            return cell.value
        except Exception:
            self._cells.remove_if(key, cell)
            raise

    @override
    def remove(self, key: K) -> bool:
        return self._cells.remove(key)

    @override
    def clear(self) -> None:
        self._cells.clear()

    @override
    def __len__(self) -> int:
        return len(self._cells)

    def _new_cell(self, key: K) -> LazyCell[V]:
        return LazyCell(functools.partial(self._compute, key))
