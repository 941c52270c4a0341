"""Domain layer: value objects, errors and pure calendar rules."""
