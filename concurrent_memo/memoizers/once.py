from __future__ import annotations

from typing import TYPE_CHECKING, Any, override

from .lazy import LazyMemoizer

if TYPE_CHECKING:
    from collections.abc import Callable

    from ..application.ports.services import LoggerPort
    from ..config import MemoConfig

_ONLY_KEY = ()


class OnceMemoizer[V](LazyMemoizer[tuple[()], V]):
    """Zero-argument thunk evaluated at most once per success.

    Concurrent first callers share one evaluation; a failed evaluation is
    discarded so a later call tries again.
    """

    def __init__(
        self,
        fn: Callable[[], V],
        *,
        logger: LoggerPort | None = None,
        config: MemoConfig | None = None,
    ) -> None:
        super().__init__(fn, logger=logger, config=config)  # type: ignore[arg-type]

    @override
    def __call__(self) -> V:  # type: ignore[override]
        return super().__call__(_ONLY_KEY)

    @property
    def is_value_created(self) -> bool:
        cell = self._cells.get(_ONLY_KEY)
        return cell is not None and cell.is_value_created

    @override
    def _invoke(self, key: tuple[()]) -> Any:
        return self.fn()
