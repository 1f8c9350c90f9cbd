"""Core Application Layer: the caching decorator and the CLI use cases.

Depends on the domain interfaces only; concrete backends are injected.
"""
