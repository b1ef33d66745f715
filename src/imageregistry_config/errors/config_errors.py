"""
Configuration error hierarchy with categorization.

This module defines the fatal error kinds produced while validating a
registry configuration. Validators collect instances of these errors rather
than raising them one at a time; the aggregate ConfigValidationError carries
the complete correction list and converts to a kopf error for the
reconciler that consumes it.
"""

from collections.abc import Sequence

import kopf


class RegistryConfigError(Exception):
    """
    Base error class for all registry configuration errors.

    Provides categorization and user guidance for resolution. Configuration
    errors are never retryable: the same input always produces the same error.
    """

    kind = "RegistryConfigError"

    def __init__(
        self,
        message: str,
        category: str = "validation",
        field: str | None = None,
        user_action: str | None = None,
    ):
        """
        Initialize configuration error.

        Args:
            message: Human-readable error description
            category: Error category (validation, lifecycle, storage)
            field: Dotted wire path of the offending field
            user_action: What user should do to resolve the issue
        """
        super().__init__(message)
        self.message = message
        self.category = category
        self.field = field
        self.user_action = user_action
        self.retryable = False

    def __str__(self) -> str:
        base_msg = super().__str__()
        if self.field:
            base_msg = f"{self.kind} in field '{self.field}': {base_msg}"
        else:
            base_msg = f"{self.kind}: {base_msg}"
        if self.user_action:
            return f"{base_msg}\nAction required: {self.user_action}"
        return base_msg

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RegistryConfigError):
            return NotImplemented
        return (self.kind, self.field, self.message) == (
            other.kind,
            other.field,
            other.message,
        )

    def __hash__(self) -> int:
        return hash((self.kind, self.field, self.message))


class MultipleBackendsConfigured(RegistryConfigError):
    """More than one storage backend variant is populated."""

    kind = "MultipleBackendsConfigured"

    def __init__(self, backends: Sequence[str]):
        self.backends = tuple(sorted(backends))
        super().__init__(
            message=(
                "exactly one storage backend may be configured, found "
                f"{len(self.backends)}: {', '.join(self.backends)}"
            ),
            category="storage",
            field="spec.storage",
            user_action=f"Keep only one of: {', '.join(self.backends)}",
        )


class UnknownManagementState(RegistryConfigError):
    """A management state value outside its enumeration."""

    kind = "UnknownManagementState"

    def __init__(self, value: str, field: str, allowed: Sequence[str]):
        self.value = value
        self.allowed = tuple(allowed)
        super().__init__(
            message=f"unknown management state {value!r}",
            category="lifecycle",
            field=field,
            user_action=f"Set {field} to one of {list(self.allowed)}",
        )


class InvalidRolloutStrategy(RegistryConfigError):
    """Rollout strategy is not one of the supported deployment strategies."""

    kind = "InvalidRolloutStrategy"

    def __init__(self, value: str, allowed: Sequence[str]):
        self.value = value
        super().__init__(
            message=f"unsupported rollout strategy {value!r}",
            field="spec.rolloutStrategy",
            user_action=f"Set spec.rolloutStrategy to one of {list(allowed)}",
        )


class DuplicateRouteName(RegistryConfigError):
    """Two or more routes share a name."""

    kind = "DuplicateRouteName"

    def __init__(self, name: str, indices: Sequence[int]):
        self.name = name
        self.indices = tuple(indices)
        super().__init__(
            message=(
                f"route name {name!r} is used more than once "
                f"(positions {', '.join(str(i) for i in self.indices)})"
            ),
            field="spec.routes",
            user_action="Give every route a unique name",
        )


class ReplicasExceedEphemeralLimit(RegistryConfigError):
    """Ephemeral storage cannot be shared between replicas."""

    kind = "ReplicasExceedEphemeralLimit"

    def __init__(self, replicas: int, backend: str, limit: int):
        self.replicas = replicas
        self.backend = backend
        self.limit = limit
        super().__init__(
            message=(
                f"{replicas} replicas requested but {backend} storage "
                f"supports at most {limit}"
            ),
            field="spec.replicas",
            user_action=(
                f"Lower spec.replicas to {limit} or configure a persistent "
                "storage backend"
            ),
        )


class InvalidBackendConfig(RegistryConfigError):
    """A populated backend variant violates its own field constraints."""

    kind = "InvalidBackendConfig"

    def __init__(self, message: str, field: str, user_action: str | None = None):
        super().__init__(
            message=message,
            category="storage",
            field=field,
            user_action=user_action or "Correct the storage backend configuration",
        )


class InvalidFieldValue(RegistryConfigError):
    """A field value that is malformed on its own."""

    kind = "InvalidFieldValue"

    def __init__(self, message: str, field: str, user_action: str | None = None):
        super().__init__(
            message=message,
            field=field,
            user_action=user_action or "Review and correct the field value",
        )


class ConfigValidationError(RegistryConfigError):
    """
    Aggregate of every fatal error found in a single configuration.

    Raised by ValidationResult.raise_for_errors so that callers receive the
    complete correction list at once.
    """

    kind = "ConfigValidationError"

    def __init__(self, errors: Sequence[RegistryConfigError]):
        if not errors:
            raise ValueError("ConfigValidationError requires at least one error")
        self.errors = tuple(errors)
        lines = "\n".join(f"  - {error}" for error in self.errors)
        super().__init__(
            message=f"{len(self.errors)} configuration error(s):\n{lines}",
            user_action="Fix every listed error and resubmit the configuration",
        )

    @property
    def kinds(self) -> list[str]:
        return [error.kind for error in self.errors]

    def as_kopf_error(self) -> kopf.PermanentError:
        """Convert to a kopf error; invalid configuration is never retried."""
        return kopf.PermanentError(str(self))
