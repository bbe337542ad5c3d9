"""Application layer for concurrent memoization.

Defines the ports (Protocols) that memoizers depend on; infrastructure
provides the adapters.
"""

__all__ = []
