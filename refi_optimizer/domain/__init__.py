"""Domain layer: data models for loans, derived parameters and results."""
