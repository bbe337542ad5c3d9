"""Concurrent memoization layer.

Wraps expensive, deterministic functions so repeated calls are served from
a per-function cache. Variants range from an unsynchronized dict cache to a
single-flight memoizer whose entries are weakly held and disappear once
their values are no longer used.

Features:
- Single-flight computation per key, with no global lock
- Weakly-held cache entries evicted by garbage collection
- Asynchronous single-flight memoization for coroutines
- Failures are never cached
"""

from importlib.metadata import PackageNotFoundError, version

try:  # pragma: no cover
    __version__ = version("concurrent-memo")
except PackageNotFoundError:  # pragma: no cover
    __version__ = "0.0.0"

from concurrent_memo.api import (
    memoize,
    memoize_lazy_async,
    memoize_lazy_thread_safe,
    memoize_once,
    memoize_thread_safe,
    memoize_weak,
)
from concurrent_memo.config import ConfigLoader, MemoConfig
from concurrent_memo.domain.entities import NOTHING, CacheStats, MemoizerKind, Option
from concurrent_memo.domain.exceptions import (
    ConfigError,
    MemoizationError,
    UnreferenceableValueError,
)

__all__ = [
    "__version__",
    # Constructors
    "memoize",
    "memoize_lazy_async",
    "memoize_lazy_thread_safe",
    "memoize_once",
    "memoize_thread_safe",
    "memoize_weak",
    # Configuration
    "ConfigLoader",
    "MemoConfig",
    # Values
    "NOTHING",
    "CacheStats",
    "MemoizerKind",
    "Option",
    # Errors
    "ConfigError",
    "MemoizationError",
    "UnreferenceableValueError",
]
