"""Domain layer — rules, shapes, tags, and the struct walker.

This layer depends only on stdlib and pydantic.
It must never import from services, plugins, commands, or config.
"""
