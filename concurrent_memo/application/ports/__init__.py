from .caching import ValueStorePort
from .services import LoggerPort

__all__ = [
    "LoggerPort",
    "ValueStorePort",
]
