"""Public constructors for memoized functions.

Each constructor wraps a unary source function (``memoize_once`` takes a
zero-argument one) and returns a callable that owns its own cache. They
work as bare decorators; pass ``logger=`` or ``config=`` through
``functools.partial`` to configure a decorator.

Example:
    >>> @memoize_weak
    ... def square(x):
    ...     return x * x
    >>> square(3)
    9
    >>> square.cache_stats().computations
    1
"""

from __future__ import annotations

from collections.abc import Hashable
from typing import TYPE_CHECKING

from .memoizers.async_lazy import AsyncLazyMemoizer
from .memoizers.base import AsyncMemoizedFunction, MemoizedFunction
from .memoizers.eager import EagerMemoizer
from .memoizers.lazy import LazyMemoizer
from .memoizers.once import OnceMemoizer
from .memoizers.single_flight import SingleFlightMemoizer
from .memoizers.thread_safe import ThreadSafeMemoizer

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from .application.ports.services import LoggerPort
    from .config import MemoConfig


def memoize[K: Hashable, V](
    fn: Callable[[K], V],
    *,
    logger: LoggerPort | None = None,
    config: MemoConfig | None = None,
) -> MemoizedFunction[K, V]:
    """Cache results in a plain dict. Single-threaded use only."""
    return MemoizedFunction(EagerMemoizer(fn, logger=logger, config=config))


def memoize_thread_safe[K: Hashable, V](
    fn: Callable[[K], V],
    *,
    logger: LoggerPort | None = None,
    config: MemoConfig | None = None,
) -> MemoizedFunction[K, V]:
    """Cache results in an atomic map.

    Safe to call from many threads, but racing callers on a cold key may
    each run ``fn``.
    """
    return MemoizedFunction(ThreadSafeMemoizer(fn, logger=logger, config=config))


def memoize_lazy_thread_safe[K: Hashable, V](
    fn: Callable[[K], V],
    *,
    logger: LoggerPort | None = None,
    config: MemoConfig | None = None,
) -> MemoizedFunction[K, V]:
    return MemoizedFunction(LazyMemoizer(fn, logger=logger, config=config))


def memoize_lazy_async[K: Hashable, V](
    fn: Callable[[K], Awaitable[V]],
    *,
    logger: LoggerPort | None = None,
    config: MemoConfig | None = None,
) -> AsyncMemoizedFunction[K, V]:
    return AsyncMemoizedFunction(AsyncLazyMemoizer(fn, logger=logger, config=config))


def memoize_weak[K: Hashable, V](
    fn: Callable[[K], V],
    *,
    logger: LoggerPort | None = None,
    config: MemoConfig | None = None,
) -> MemoizedFunction[K, V]:
    """Single-flight memoization with values held weakly.

    Concurrent calls for one key run ``fn`` at most once at a time; an
    entry is dropped as soon as its value is no longer referenced elsewhere.
    """
    return MemoizedFunction(SingleFlightMemoizer(fn, logger=logger, config=config))


def memoize_once[V](
    fn: Callable[[], V],
    *,
    logger: LoggerPort | None = None,
    config: MemoConfig | None = None,
) -> MemoizedFunction[tuple[()], V]:
    return MemoizedFunction(OnceMemoizer(fn, logger=logger, config=config))
