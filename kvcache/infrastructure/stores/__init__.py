"""Store Implementations.

Concrete KeyValueStore backends: an in-memory dictionary store and a
durable diskcache-backed store.
Bounded Context: Storage
"""
