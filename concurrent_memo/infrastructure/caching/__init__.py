"""Caching infrastructure.

Concurrency primitives backing the memoizers: an atomic map, per-key lock
tokens, a weakly-valued store and a once-only lazy cell.
"""

from .atomic_map import AtomicMap
from .key_lock_registry import KeyLockRegistry, LockToken
from .lazy_cell import CellState, LazyCell
from .weak_value_store import WeakValueStore

__all__ = [
    "AtomicMap",
    "CellState",
    "KeyLockRegistry",
    "LazyCell",
    "LockToken",
    "WeakValueStore",
]
