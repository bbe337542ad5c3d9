from typing import Protocol, runtime_checkable


@runtime_checkable
class LoggerPort(Protocol):
    pass

    def info(self, message: str) -> None: ...

    def success(self, message: str) -> None: ...

    def warning(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...

    def debug(self, message: str) -> None: ...

    def verbose(self, message: str) -> None: ...

    def log_cache_hit(self, name: str, key: object) -> None: ...

    def log_cache_miss(self, name: str, key: object) -> None: ...

    def log_computation_start(self, name: str, key: object) -> None: ...

    def log_computation_complete(
        self, name: str, key: object, elapsed_ms: float
    ) -> None: ...

    def log_computation_failed(
        self, name: str, key: object, error: BaseException
    ) -> None: ...

    def log_eviction(self, name: str, key: object) -> None: ...

    def log_lock_contention(self, name: str, key: object, waiters: int) -> None: ...

    def log_final_stats(self) -> None: ...
