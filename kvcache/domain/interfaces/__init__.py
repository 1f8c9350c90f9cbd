"""Domain Interfaces (Ports):

Defines the contracts (Abstract Base Classes) that infrastructure components
must implement. The caching decorator depends on these interfaces, not on
concrete backends.
"""
