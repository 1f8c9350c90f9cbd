"""Domain Models: value objects shared by stores, caches and the CLI."""
