"""Domain Layer: value objects, exceptions and the store/cache contracts."""
