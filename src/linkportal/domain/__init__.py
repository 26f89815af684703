"""Domain layer: entities and account workflows."""
