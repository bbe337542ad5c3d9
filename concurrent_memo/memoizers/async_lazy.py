"""Asynchronous single-flight memoizer.

Each key maps to a deferred cell that, when first read, schedules the
source coroutine as a task on the running loop. Every caller awaits that
one task; waiters are shielded so cancelling a waiter never cancels the
shared computation. A task that fails or is cancelled is dropped from the
cache by its done-callback, and all of its waiters see the same outcome.

Pending tasks belong to the loop that started them.
"""

from __future__ import annotations

import asyncio
from collections.abc import Hashable
from typing import TYPE_CHECKING, override

from ..infrastructure.caching.atomic_map import AtomicMap
from ..infrastructure.caching.lazy_cell import LazyCell
from .base import Memoizer

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from ..application.ports.services import LoggerPort
    from ..config import MemoConfig


class AsyncLazyMemoizer[K: Hashable, V](Memoizer[K, V]):
    def __init__(
        self,
        fn: Callable[[K], Awaitable[V]],
        *,
        logger: LoggerPort | None = None,
        config: MemoConfig | None = None,
    ) -> None:
        super().__init__(fn, logger=logger, config=config)
        self._cells: AtomicMap[K, LazyCell[asyncio.Task[V]]] = AtomicMap()

    @override
    async def __call__(self, key: K) -> V:  # type: ignore[override]
        cell = self._cells.get(key)
        if cell is not None and cell.is_value_created and _succeeded(cell.value):
            self._record_hit(key)
            return cell.value.result()
        self._record_miss(key)
        cell = self._cells.get_or_add(key, self._new_cell)
        try:
            task = cell.value
        except Exception:
            self._cells.remove_if(key, cell)
            raise
        if task.done():
            return task.result()
        return await asyncio.shield(task)

    @override
    def remove(self, key: K) -> bool:
        return self._cells.remove(key)

    @override
    def clear(self) -> None:
        self._cells.clear()

    @override
    def __len__(self) -> int:
        return len(self._cells)

    def _new_cell(self, key: K) -> LazyCell[asyncio.Task[V]]:
        def start() -> asyncio.Task[V]:
            task = asyncio.get_running_loop().create_task(self._compute_async(key))
            task.add_done_callback(lambda done: self._settled(key, cell, done))
            return task

        cell: LazyCell[asyncio.Task[V]] = LazyCell(start)
        return cell

    def _settled(
        self, key: K, cell: LazyCell[asyncio.Task[V]], task: asyncio.Task[V]
    ) -> None:
        if task.cancelled() or task.exception() is not None:
            self._cells.remove_if(key, cell)


def _succeeded(task: asyncio.Task[object]) -> bool:
    return task.done() and not task.cancelled() and task.exception() is None
