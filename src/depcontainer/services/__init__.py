"""Service layer: rule evaluation and the developer preview service."""
