from enum import IntEnum
import threading
from typing import override

from rich.console import Console
from rich.markup import escape

from ...application.ports.services import LoggerPort
from ...constants import Defaults


class LogLevel(IntEnum):
    NORMAL = 0
    VERBOSE = 1
    DEBUG = 2


def _empty_stats() -> dict[str, int]:
    return {
        "hits": 0,
        "misses": 0,
        "computations": 0,
        "failures": 0,
        "evictions": 0,
        "contentions": 0,
        "warnings": 0,
        "errors": 0,
    }


class ConsoleLogger(LoggerPort):
    pass

    def __init__(
        self,
        console: Console | None = None,
        verbosity: int = 0,
        key_repr_limit: int = Defaults.KEY_REPR_LIMIT,
    ) -> None:
        super().__init__()
        self.console = console or Console()
        self.verbosity = verbosity
        self.key_repr_limit = key_repr_limit
        self._stats_lock = threading.RLock()
        self._stats = _empty_stats()

    @override
    def info(self, message: str, *, level: int = LogLevel.NORMAL) -> None:
        if self.verbosity >= level:
            self.console.print(message)

    @override
    def verbose(self, message: str) -> None:
        if self.verbosity >= LogLevel.VERBOSE:
            self.console.print(f"[dim]{message}[/dim]")

    @override
    def debug(self, message: str) -> None:
        if self.verbosity >= LogLevel.DEBUG:
            self.console.print(f"[dim cyan]{message}[/dim cyan]")

    @override
    def success(self, message: str) -> None:
        self.console.print(f"[green]✓[/green] {message}")

    @override
    def warning(self, message: str) -> None:
        self._bump("warnings")
        self.console.print(f"[yellow]⚠[/yellow] {message}")

    @override
    def error(self, message: str) -> None:
        self._bump("errors")
        self.console.print(f"[red]✗[/red] {message}")

    @override
    def log_cache_hit(self, name: str, key: object) -> None:
        self._bump("hits")
        self.debug(f"{escape(name)}: hit {self._format_key(key)}")

    @override
    def log_cache_miss(self, name: str, key: object) -> None:
        self._bump("misses")
        self.debug(f"{escape(name)}: miss {self._format_key(key)}")

    @override
    def log_computation_start(self, name: str, key: object) -> None:
        self.verbose(f"{escape(name)}: computing {self._format_key(key)}")

    @override
    def log_computation_complete(
        self, name: str, key: object, elapsed_ms: float
    ) -> None:
        self._bump("computations")
        self.verbose(
            f"{escape(name)}: computed {self._format_key(key)} in {elapsed_ms:.1f} ms"
        )

    @override
    def log_computation_failed(
        self, name: str, key: object, error: BaseException
    ) -> None:
        self._bump("failures")
        detail = escape(f"{type(error).__name__}: {error}")
        self.error(f"{escape(name)}: computing {self._format_key(key)} failed ({detail})")

    @override
    def log_eviction(self, name: str, key: object) -> None:
        self._bump("evictions")
        self.debug(f"{escape(name)}: evicted {self._format_key(key)}")

    @override
    def log_lock_contention(self, name: str, key: object, waiters: int) -> None:
        self._bump("contentions")
        self.debug(
            f"{escape(name)}: {waiters} callers contending for {self._format_key(key)}"
        )

    @override
    def log_final_stats(self) -> None:
        if self.verbosity < LogLevel.VERBOSE:
            return
        stats = self.get_stats()
        self.console.print()
        self.console.print("[dim]Memoization Statistics:[/dim]")
        self.console.print(f"[dim]  Hits: {stats['hits']:,}[/dim]")
        self.console.print(f"[dim]  Misses: {stats['misses']:,}[/dim]")
        self.console.print(f"[dim]  Computations: {stats['computations']:,}[/dim]")
        self.console.print(f"[dim]  Evictions: {stats['evictions']:,}[/dim]")
        if stats["contentions"] > 0:
            self.console.print(f"[dim]  Contended keys: {stats['contentions']:,}[/dim]")
        if stats["failures"] > 0:
            self.console.print(
                f"[dim red]  Failed computations: {stats['failures']}[/dim red]"
            )

    def get_stats(self) -> dict[str, int]:
        with self._stats_lock:
            return self._stats.copy()

    def reset_stats(self) -> None:
        with self._stats_lock:
            self._stats = _empty_stats()

    def _bump(self, counter: str) -> None:
        with self._stats_lock:
            self._stats[counter] += 1

    def _format_key(self, key: object) -> str:
        text = repr(key)
        if len(text) > self.key_repr_limit:
            text = text[: self.key_repr_limit - 3] + "..."
        return escape(text)
