from __future__ import annotations

from typing import TYPE_CHECKING, Any

from rich.console import Console

from ..api import (
    memoize,
    memoize_lazy_async,
    memoize_lazy_thread_safe,
    memoize_once,
    memoize_thread_safe,
    memoize_weak,
)
from ..config import ConfigLoader, MemoConfig
from ..domain.entities.memoizer_kind import MemoizerKind
from .logging.console_logger import ConsoleLogger
from .logging.null_logger import NullLogger

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path

    from ..application.ports.services import LoggerPort
    from ..memoizers.base import MemoizedFunction

_CONSTRUCTORS: dict[MemoizerKind, Callable[..., MemoizedFunction[Any, Any]]] = {
    MemoizerKind.EAGER: memoize,
    MemoizerKind.THREAD_SAFE: memoize_thread_safe,
    MemoizerKind.LAZY: memoize_lazy_thread_safe,
    MemoizerKind.ASYNC_LAZY: memoize_lazy_async,
    MemoizerKind.WEAK: memoize_weak,
    MemoizerKind.ONCE: memoize_once,
}


class DependencyContainer:
    pass

    def __init__(
        self,
        config: MemoConfig | None = None,
        console: Console | None = None,
        use_null_logger: bool = False,
    ) -> None:
        super().__init__()
        self.config = config or MemoConfig()
        self.console = console or Console()
        self.use_null_logger = use_null_logger
        self._logger_instance: LoggerPort | None = None

    def create_logger(self) -> LoggerPort:
        if self._logger_instance is None:
            if self.use_null_logger:
                self._logger_instance = NullLogger()
            else:
                self._logger_instance = ConsoleLogger(
                    console=self.console,
                    verbosity=self.config.verbosity,
                    key_repr_limit=self.config.key_repr_limit,
                )
        return self._logger_instance

    def create_memoizer(
        self,
        kind: MemoizerKind | str,
        fn: Callable[..., Any],
        *,
        name: str | None = None,
    ) -> MemoizedFunction[Any, Any]:
        constructor = _CONSTRUCTORS[MemoizerKind(kind)]
        config = self.config.with_name(name) if name is not None else self.config
        return constructor(fn, logger=self.create_logger(), config=config)

    def reset_singletons(self) -> None:
        self._logger_instance = None

    def override_logger(self, logger: LoggerPort) -> None:
        self._logger_instance = logger


def create_default_container(
    config_file: Path | None = None, *, use_null_logger: bool = False
) -> DependencyContainer:
    return DependencyContainer(
        config=ConfigLoader.load(config_file), use_null_logger=use_null_logger
    )
