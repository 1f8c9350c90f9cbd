"""Infrastructure Layer: Contains concrete implementations and adapters.

Stores, caches, configuration, logging and console output implementing the
interfaces defined in the domain layer.
"""
