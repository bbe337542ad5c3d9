"""Deferred computation that resolves at most once.

The first reader runs the thunk under the cell's lock; readers that arrive
meanwhile block and then read the same outcome. A failure is kept on the
cell so every reader of that cell sees the same exception; owners that want
a retry replace the cell.
"""

from __future__ import annotations

from enum import Enum
import threading
from typing import TYPE_CHECKING, cast

if TYPE_CHECKING:
    from collections.abc import Callable


class CellState(Enum):
    PENDING = "pending"
    CREATED = "created"
    FAILED = "failed"


class LazyCell[V]:
    __slots__ = ("_error", "_lock", "_state", "_thunk", "_value")

    def __init__(self, thunk: Callable[[], V]) -> None:
        self._thunk: Callable[[], V] | None = thunk
        self._lock = threading.Lock()
        self._state = CellState.PENDING
        self._value: V | None = None
        self._error: Exception | None = None

    @property
    def state(self) -> CellState:
        return self._state

    @property
    def is_value_created(self) -> bool:
        return self._state is CellState.CREATED

    @property
    def value(self) -> V:
        if self._state is CellState.PENDING:
            with self._lock:
                if self._state is CellState.PENDING:
                    self._resolve()
        if self._state is CellState.FAILED:
            raise self._error  # type: ignore[misc]
        return self._value  # type: ignore[return-value]

    def _resolve(self) -> None:
        thunk = cast("Callable[[], V]", self._thunk)
        try:
            value = thunk()
        except Exception as exc:
            self._error = exc
            self._state = CellState.FAILED
            self._thunk = None
            raise
        self._value = value
        self._state = CellState.CREATED
        self._thunk = None

    def __repr__(self) -> str:
        return f"LazyCell(state={self._state.value})"
