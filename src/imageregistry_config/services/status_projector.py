"""
Status projection.

Builds the status written back after a reconciliation cycle from the
canonical spec, the prior status and what the reconciler achieved. The
deprecated storageManaged flag is always recomputed from
storage.managementState and never carried over on its own.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import UTC, datetime

from imageregistry_config.constants import MANAGEMENT_STATE_MANAGED
from imageregistry_config.models.common import RegistryCondition
from imageregistry_config.models.registry import (
    ImageRegistrySpec,
    ImageRegistryStatus,
)
from imageregistry_config.models.storage import StorageConfig
from imageregistry_config.observability.tracing import traced_operation

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AchievedState:
    """Values reported by the reconciler at the end of a cycle."""

    storage: StorageConfig | None = None
    ready_replicas: int | None = None
    version: str | None = None
    observed_generation: int | None = None
    conditions: tuple[RegistryCondition, ...] = ()


def storage_managed_for(storage: StorageConfig) -> bool:
    return storage.management_state == MANAGEMENT_STATE_MANAGED


def get_condition(
    conditions: Iterable[RegistryCondition], condition_type: str
) -> RegistryCondition | None:
    for condition in conditions:
        if condition.type == condition_type:
            return condition
    return None


def set_condition(
    conditions: Iterable[RegistryCondition],
    condition: RegistryCondition,
    now: datetime | None = None,
) -> list[RegistryCondition]:
    """
    Add or replace a condition, returning a new list.

    lastTransitionTime is kept from the existing condition when its status
    does not change and stamped with the current time when it does.
    """
    existing = list(conditions)
    previous = get_condition(existing, condition.type)

    if previous is not None and previous.status == condition.status:
        transition_time = previous.last_transition_time
    else:
        transition_time = (now or datetime.now(UTC)).isoformat()

    if condition.last_transition_time is None or previous is not None:
        condition = condition.model_copy(
            update={"last_transition_time": transition_time}
        )

    updated = [c for c in existing if c.type != condition.type]
    updated.append(condition)
    return updated


def _storage_in_effect(
    spec: ImageRegistrySpec,
    prior: ImageRegistryStatus | None,
    achieved: AchievedState,
) -> StorageConfig:
    if achieved.storage is None:
        return prior.storage if prior is not None else StorageConfig()

    storage = achieved.storage
    # The reconciler applied the spec's backend, so the spec's storage
    # management state is the one in effect unless it reported its own.
    if (
        not storage.management_state
        and spec.storage.management_state
        and storage.populated_backends() == spec.storage.populated_backends()
    ):
        storage = storage.model_copy(
            update={"management_state": spec.storage.management_state}
        )
    return storage


@traced_operation("project_status")
def project_status(
    spec: ImageRegistrySpec,
    prior: ImageRegistryStatus | None,
    achieved: AchievedState,
    now: datetime | None = None,
) -> ImageRegistryStatus:
    """
    Project the new status.

    Args:
        spec: Canonical spec the cycle worked from
        prior: Status currently stored on the object, if any
        achieved: What the reconciler actually achieved
        now: Clock override for condition transition times

    Returns:
        A new status; the prior status is not modified
    """
    storage = _storage_in_effect(spec, prior, achieved)

    conditions: list[RegistryCondition] = list(prior.conditions or []) if prior else []
    for condition in achieved.conditions:
        conditions = set_condition(conditions, condition, now=now)

    def carried(value, attribute):
        if value is not None:
            return value
        return getattr(prior, attribute) if prior is not None else None

    status = ImageRegistryStatus(
        observed_generation=carried(
            achieved.observed_generation, "observed_generation"
        ),
        conditions=conditions or None,
        version=carried(achieved.version, "version"),
        ready_replicas=carried(achieved.ready_replicas, "ready_replicas"),
        storage_managed=storage_managed_for(storage),
        storage=storage,
    )

    if prior is not None and prior.storage_managed != status.storage_managed:
        logger.info(
            f"storageManaged changed from {prior.storage_managed} to "
            f"{status.storage_managed}",
            extra={"operation": "project_status"},
        )
    return status
