"""Domain layer: rule model, loose comparison, and value sources.

This layer depends only on stdlib and pydantic.
It must never import from services, fields, plugins, commands, or config.
"""
