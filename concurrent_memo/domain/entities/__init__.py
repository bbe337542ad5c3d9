from .cache_stats import CacheStats
from .memoizer_kind import MemoizerKind
from .option import NOTHING, Option

__all__ = [
    "NOTHING",
    "CacheStats",
    "MemoizerKind",
    "Option",
]
