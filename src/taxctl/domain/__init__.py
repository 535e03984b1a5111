"""Domain layer — taxonomy types, pure transitions, and navigation.

This layer depends only on stdlib and pydantic.
It must never import from services, infrastructure, commands, or config.
"""
