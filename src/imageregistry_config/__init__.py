"""
Image Registry Config - configuration model for a managed image registry.

This package models, validates and normalizes the cluster-scoped registry
configuration with:
- Mutually exclusive storage backend variants
- Deprecated field migration at the boundary
- Management-state lifecycle rules
- Status projection for the reconciler
"""

__version__ = "0.1.0"
