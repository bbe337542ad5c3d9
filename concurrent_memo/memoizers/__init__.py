"""Memoizer variants, from the unsynchronized dict cache up to the
weakly-valued single-flight memoizer."""

from .async_lazy import AsyncLazyMemoizer
from .base import AsyncMemoizedFunction, MemoizedFunction, Memoizer
from .eager import EagerMemoizer
from .lazy import LazyMemoizer
from .once import OnceMemoizer
from .single_flight import SingleFlightMemoizer
from .thread_safe import ThreadSafeMemoizer

__all__ = [
    "AsyncLazyMemoizer",
    "AsyncMemoizedFunction",
    "EagerMemoizer",
    "LazyMemoizer",
    "MemoizedFunction",
    "Memoizer",
    "OnceMemoizer",
    "SingleFlightMemoizer",
    "ThreadSafeMemoizer",
]
