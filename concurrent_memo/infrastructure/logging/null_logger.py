from typing import override

from ...application.ports.services import LoggerPort


class NullLogger(LoggerPort):
    pass

    @override
    def info(self, message: str) -> None:
        return

    @override
    def success(self, message: str) -> None:
        return

    @override
    def warning(self, message: str) -> None:
        return

    @override
    def error(self, message: str) -> None:
        return

    @override
    def debug(self, message: str) -> None:
        return

    @override
    def verbose(self, message: str) -> None:
        return

    @override
    def log_cache_hit(self, name: str, key: object) -> None:
        return None

    @override
    def log_cache_miss(self, name: str, key: object) -> None:
        return None

    @override
    def log_computation_start(self, name: str, key: object) -> None:
        return None

    @override
    def log_computation_complete(
        self, name: str, key: object, elapsed_ms: float
    ) -> None:
        return None

    @override
    def log_computation_failed(
        self, name: str, key: object, error: BaseException
    ) -> None:
        return None

    @override
    def log_eviction(self, name: str, key: object) -> None:
        return None

    @override
    def log_lock_contention(self, name: str, key: object, waiters: int) -> None:
        return None

    @override
    def log_final_stats(self) -> None:
        return None
