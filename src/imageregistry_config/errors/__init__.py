"""
Error handling module for the registry configuration model.

This module provides the fatal error kinds reported by configuration
validation and the aggregate error that carries them together.
"""

from .config_errors import (
    ConfigValidationError,
    DuplicateRouteName,
    InvalidBackendConfig,
    InvalidFieldValue,
    InvalidRolloutStrategy,
    MultipleBackendsConfigured,
    RegistryConfigError,
    ReplicasExceedEphemeralLimit,
    UnknownManagementState,
)

__all__ = [
    "RegistryConfigError",
    "ConfigValidationError",
    "MultipleBackendsConfigured",
    "UnknownManagementState",
    "InvalidRolloutStrategy",
    "DuplicateRouteName",
    "ReplicasExceedEphemeralLimit",
    "InvalidBackendConfig",
    "InvalidFieldValue",
]
