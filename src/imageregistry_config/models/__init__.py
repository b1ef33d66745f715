"""
Models package - Pydantic models for the registry configuration.

Defines data models for:
- Storage backend variants and the storage union
- Request admission limits
- The Config resource spec and status
- Advisory notices
"""
