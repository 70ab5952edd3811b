"""Domain layer: value objects and pure comparison services."""
