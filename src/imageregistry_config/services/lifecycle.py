"""
Management-state lifecycle.

Parses the top-level and storage management states (failing closed on
unknown values) and defines what the reconciler may do in each
combination:

| spec      | storage          | reconcile | teardown | provision storage | delete storage      |
|-----------|------------------|-----------|----------|-------------------|---------------------|
| Managed   | Managed or unset | yes       | no       | yes               | no                  |
| Managed   | Unmanaged        | yes       | no       | no                | no                  |
| Unmanaged | any              | no        | no       | no                | no                  |
| Removed   | snapshot         | no        | yes      | no                | snapshot == Managed |

The storage state used while Removed is captured when Removed is first
observed and reused until the registry leaves Removed.
"""

from dataclasses import dataclass
from enum import StrEnum

from imageregistry_config.constants import (
    MANAGEMENT_STATE_MANAGED,
    MANAGEMENT_STATE_REMOVED,
    MANAGEMENT_STATE_UNMANAGED,
    MANAGEMENT_STATES,
    STORAGE_MANAGEMENT_STATES,
)
from imageregistry_config.errors import UnknownManagementState
from imageregistry_config.models.registry import ImageRegistrySpec
from imageregistry_config.models.storage import BackendSelection


class ManagementState(StrEnum):
    MANAGED = MANAGEMENT_STATE_MANAGED
    UNMANAGED = MANAGEMENT_STATE_UNMANAGED
    REMOVED = MANAGEMENT_STATE_REMOVED


def parse_management_state(
    value: str | None, field: str = "spec.managementState"
) -> ManagementState:
    """
    Parse the top-level management state.

    An empty value is rejected like any other unknown value; it never
    defaults to Managed.

    Raises:
        UnknownManagementState: If the value is not Managed, Unmanaged or Removed
    """
    if value not in MANAGEMENT_STATES:
        raise UnknownManagementState(value or "", field, MANAGEMENT_STATES)
    return ManagementState(value)


def parse_storage_management_state(
    value: str | None, field: str = "spec.storage.managementState"
) -> ManagementState | None:
    """
    Parse the storage management state.

    Returns:
        The state, or None when unset

    Raises:
        UnknownManagementState: If set to anything but Managed or Unmanaged
    """
    if not value:
        return None
    if value not in STORAGE_MANAGEMENT_STATES:
        raise UnknownManagementState(value, field, STORAGE_MANAGEMENT_STATES)
    return ManagementState(value)


def check_management_states(spec: ImageRegistrySpec) -> list[UnknownManagementState]:
    """Collect errors for both management states of a spec."""
    errors = []
    try:
        parse_management_state(spec.management_state)
    except UnknownManagementState as e:
        errors.append(e)
    try:
        parse_storage_management_state(spec.storage.management_state)
    except UnknownManagementState as e:
        errors.append(e)
    return errors


@dataclass(frozen=True)
class LifecyclePlan:
    """What the reconciler is allowed to do for one reconciliation cycle."""

    management_state: ManagementState
    storage_management_state: ManagementState | None
    reconcile: bool
    teardown: bool
    may_provision_storage: bool
    delete_storage: bool
    removal_snapshot: ManagementState | None = None


def plan_lifecycle(
    management_state: ManagementState,
    storage_management_state: ManagementState | None,
    selection: BackendSelection | None = None,
    removal_snapshot: ManagementState | None = None,
) -> LifecyclePlan:
    """
    Apply the legality matrix.

    Args:
        management_state: Parsed top-level state
        storage_management_state: Parsed storage state, None when unset
        selection: Active backend; ephemeral storage has no storage unit to
            provision or delete
        removal_snapshot: Storage state captured when Removed was first
            observed, carried over from the previous cycle

    Returns:
        The plan for this cycle
    """
    has_storage_unit = selection is None or not selection.ephemeral

    if management_state is ManagementState.REMOVED:
        snapshot = removal_snapshot
        if snapshot is None:
            # Unset storage state is not proof of ownership; keep the data
            snapshot = storage_management_state or ManagementState.UNMANAGED
        return LifecyclePlan(
            management_state=management_state,
            storage_management_state=storage_management_state,
            reconcile=False,
            teardown=True,
            may_provision_storage=False,
            delete_storage=has_storage_unit and snapshot is ManagementState.MANAGED,
            removal_snapshot=snapshot,
        )

    if management_state is ManagementState.UNMANAGED:
        return LifecyclePlan(
            management_state=management_state,
            storage_management_state=storage_management_state,
            reconcile=False,
            teardown=False,
            may_provision_storage=False,
            delete_storage=False,
        )

    return LifecyclePlan(
        management_state=management_state,
        storage_management_state=storage_management_state,
        reconcile=True,
        teardown=False,
        may_provision_storage=(
            has_storage_unit
            and storage_management_state is not ManagementState.UNMANAGED
        ),
        delete_storage=False,
    )


def plan_for_spec(
    spec: ImageRegistrySpec,
    selection: BackendSelection | None = None,
    removal_snapshot: ManagementState | None = None,
) -> LifecyclePlan:
    """
    Parse a spec's management states and plan the cycle.

    Raises:
        UnknownManagementState: If either state is invalid
    """
    return plan_lifecycle(
        parse_management_state(spec.management_state),
        parse_storage_management_state(spec.storage.management_state),
        selection=selection,
        removal_snapshot=removal_snapshot,
    )
