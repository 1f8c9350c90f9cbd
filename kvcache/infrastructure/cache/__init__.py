"""Cache Implementations.

Concrete Cache backends: a clearable in-memory cache with TTL and a
flushable diskcache adapter.
Bounded Context: Cache Management
"""
