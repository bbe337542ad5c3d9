"""Domain layer for concurrent memoization.

Pure value types and the error taxonomy. Nothing here touches threads,
weak references or I/O.
"""

__all__ = []
