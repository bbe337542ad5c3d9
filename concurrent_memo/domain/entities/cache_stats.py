from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class CacheStats:
    """Point-in-time counters for one memoized function.

    Attributes:
        hits: Calls answered from the cache without running the source function
        misses: Calls that found nothing cached
        computations: Successful runs of the source function
        failures: Runs of the source function that raised
        evictions: Entries dropped because their value was reclaimed
        size: Entries currently held
    """

    hits: int = 0
    misses: int = 0
    computations: int = 0
    failures: int = 0
    evictions: int = 0
    size: int = 0

    @property
    def hit_ratio(self) -> float:
        total = self.hits + self.misses
        if total == 0:
            return 0.0
        return self.hits / total
