"""Infrastructure layer for concurrent memoization.

Caching primitives, logging adapters and the dependency container. It
implements the ports defined in the application layer.
"""

__all__ = []
