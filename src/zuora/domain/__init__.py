"""Domain layer: field types, coercion, lifecycle, and errors.

This layer depends only on stdlib and pydantic.
It must never import from services, infrastructure, wire, or config.
"""
