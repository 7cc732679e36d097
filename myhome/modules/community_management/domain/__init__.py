"""Community management domain layer: entities, repository contracts and services."""
