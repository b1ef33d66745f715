"""
Deprecated field migration.

Two deprecated fields coexist with their replacements:

- spec.logging (verbosity integer) is superseded by spec.logLevel
- status.storageManaged is superseded by spec.storage.managementState

Both are resolved here so the rest of the package only reads canonical
fields. Deprecated values are never rewritten or dropped; they are only
ignored on read when the replacement is set.
"""

import logging

from imageregistry_config.constants import (
    DEPRECATED_LOGGING_THRESHOLDS,
    LOG_LEVEL_NORMAL,
    MANAGEMENT_STATE_MANAGED,
    NOTICE_DEPRECATED_FIELD_CONFLICT,
)
from imageregistry_config.models.notices import AdvisoryNotice
from imageregistry_config.models.registry import ImageRegistrySpec

logger = logging.getLogger(__name__)


def log_level_from_verbosity(verbosity: int) -> str:
    """Map the deprecated numeric verbosity onto a log level."""
    for threshold, level in DEPRECATED_LOGGING_THRESHOLDS:
        if verbosity >= threshold:
            return level
    return LOG_LEVEL_NORMAL


def effective_log_level(spec: ImageRegistrySpec) -> str:
    """
    Log level the registry should run with.

    logLevel wins whenever it is set; the deprecated logging field is only
    consulted when logLevel is empty.
    """
    if spec.log_level:
        return spec.log_level
    if spec.logging:
        return log_level_from_verbosity(spec.logging)
    return LOG_LEVEL_NORMAL


def logging_conflicts(spec: ImageRegistrySpec) -> list[AdvisoryNotice]:
    """Report logging and logLevel set to different levels."""
    if not spec.log_level or not spec.logging:
        return []

    deprecated_level = log_level_from_verbosity(spec.logging)
    if deprecated_level == spec.log_level:
        return []

    return [
        AdvisoryNotice(
            code=NOTICE_DEPRECATED_FIELD_CONFLICT,
            field="spec.logging",
            message=(
                f"deprecated logging={spec.logging} ({deprecated_level}) is ignored "
                f"in favour of logLevel={spec.log_level}"
            ),
        )
    ]


def resolve_storage_management_state(
    explicit: str | None, storage_managed: bool | None
) -> tuple[str | None, list[AdvisoryNotice]]:
    """
    Resolve storage.managementState against the deprecated storageManaged flag.

    Only storageManaged=true carries information: false is the wire zero
    value and cannot be told apart from an absent flag.

    Args:
        explicit: spec.storage.managementState as submitted
        storage_managed: status.storageManaged of the existing object, if any

    Returns:
        The management state to use and any advisory notices
    """
    if not explicit:
        if storage_managed:
            logger.debug(
                "Migrating deprecated storageManaged=true to storage.managementState"
            )
            return MANAGEMENT_STATE_MANAGED, []
        return explicit, []

    if storage_managed and explicit != MANAGEMENT_STATE_MANAGED:
        return explicit, [
            AdvisoryNotice(
                code=NOTICE_DEPRECATED_FIELD_CONFLICT,
                field="status.storageManaged",
                message=(
                    "deprecated storageManaged=true is ignored in favour of "
                    f"storage.managementState={explicit}"
                ),
            )
        ]

    return explicit, []
