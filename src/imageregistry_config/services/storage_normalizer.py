"""
Storage configuration normalizer.

Determines the single authoritative backend of a storage configuration,
applies per-backend defaults and migrates the deprecated storageManaged
flag. This is the one place where the at-most-one-backend rule is
enforced; everything downstream works with a BackendSelection.
"""

import logging
from dataclasses import dataclass

from imageregistry_config.constants import (
    BACKEND_AZURE,
    BACKEND_S3,
    BACKEND_SWIFT,
    NOTICE_DEFAULT_APPLIED,
)
from imageregistry_config.errors import (
    InvalidBackendConfig,
    MultipleBackendsConfigured,
    RegistryConfigError,
)
from imageregistry_config.models.notices import AdvisoryNotice
from imageregistry_config.models.storage import (
    AzureStorage,
    BackendSelection,
    S3Storage,
    StorageConfig,
    SwiftStorage,
)
from imageregistry_config.observability.tracing import traced_operation
from imageregistry_config.services.deprecations import (
    resolve_storage_management_state,
)
from imageregistry_config.utils.validation import (
    ValidationError,
    validate_azure_container,
    validate_url,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NormalizedStorage:
    """Canonical storage configuration plus the notices produced on the way."""

    storage: StorageConfig
    selection: BackendSelection | None
    notices: tuple[AdvisoryNotice, ...] = ()

    @property
    def backend(self) -> str | None:
        return self.selection.kind if self.selection else None

    @property
    def unset(self) -> bool:
        return self.selection is None


def select_backend(storage: StorageConfig) -> BackendSelection | None:
    """
    Pick the populated backend of a storage configuration.

    Returns:
        The selection, or None when no backend is configured

    Raises:
        MultipleBackendsConfigured: If more than one backend is populated
    """
    populated = storage.populated_backends()
    if len(populated) > 1:
        raise MultipleBackendsConfigured(populated)
    if not populated:
        return None

    kind = populated[0]
    return BackendSelection(kind=kind, config=storage.backend_config(kind))


def _default(field: str, value: object) -> AdvisoryNotice:
    return AdvisoryNotice(
        code=NOTICE_DEFAULT_APPLIED,
        field=field,
        message=f"defaulted to {value!r}",
    )


def apply_backend_defaults(
    selection: BackendSelection,
) -> tuple[BackendSelection, list[AdvisoryNotice]]:
    """Fill per-backend defaults, returning a new selection."""
    config = selection.config
    notices: list[AdvisoryNotice] = []

    if isinstance(config, S3Storage) and config.virtual_hosted_style is None:
        config = config.model_copy(update={"virtual_hosted_style": False})
        notices.append(_default("spec.storage.s3.virtualHostedStyle", False))

    # Empty authVersion lets the registry auto-detect the Keystone version
    if isinstance(config, SwiftStorage) and config.auth_version is None:
        config = config.model_copy(update={"auth_version": ""})
        notices.append(_default("spec.storage.swift.authVersion", ""))

    if config is selection.config:
        return selection, notices
    return BackendSelection(kind=selection.kind, config=config), notices


def check_backend_constraints(selection: BackendSelection) -> list[RegistryConfigError]:
    """
    Check field constraints inside the selected backend.

    Returns:
        Every violation found; empty when the backend is well formed
    """
    errors: list[RegistryConfigError] = []
    config = selection.config

    if selection.kind == BACKEND_S3 and isinstance(config, S3Storage):
        cloud_front = config.cloud_front
        if cloud_front is not None:
            field = "spec.storage.s3.cloudFront"
            present = {
                "baseURL": bool(cloud_front.base_url),
                "privateKey": bool(
                    cloud_front.private_key and cloud_front.private_key.name
                ),
                "keypairID": bool(cloud_front.keypair_id),
            }
            missing = [name for name, is_set in present.items() if not is_set]
            if missing and len(missing) < len(present):
                errors.append(
                    InvalidBackendConfig(
                        f"cloudFront requires baseURL, privateKey and keypairID "
                        f"together; missing {', '.join(missing)}",
                        field=field,
                        user_action="Set all three CloudFront fields or remove cloudFront",
                    )
                )
            if cloud_front.base_url:
                try:
                    validate_url(cloud_front.base_url, "CloudFront baseURL")
                except ValidationError as e:
                    errors.append(
                        InvalidBackendConfig(str(e), field=f"{field}.baseURL")
                    )

    if selection.kind == BACKEND_AZURE and isinstance(config, AzureStorage):
        if config.container:
            try:
                validate_azure_container(config.container)
            except ValidationError as e:
                errors.append(
                    InvalidBackendConfig(str(e), field="spec.storage.azure.container")
                )

    return errors


@traced_operation("normalize_storage")
def normalize_storage(
    storage: StorageConfig, storage_managed: bool | None = None
) -> NormalizedStorage:
    """
    Produce the canonical form of a storage configuration.

    Args:
        storage: Storage configuration as submitted
        storage_managed: Deprecated status.storageManaged of the existing object

    Returns:
        Canonical storage with its selection and advisory notices; an
        unconfigured storage stays unset, no backend is guessed

    Raises:
        MultipleBackendsConfigured: If more than one backend is populated
    """
    selection = select_backend(storage)
    notices: list[AdvisoryNotice] = []

    if selection is not None:
        selection, defaults = apply_backend_defaults(selection)
        notices.extend(defaults)

    management_state, migration_notices = resolve_storage_management_state(
        storage.management_state, storage_managed
    )
    notices.extend(migration_notices)

    canonical = StorageConfig.from_selection(selection, management_state)
    logger.debug(
        f"Normalized storage: backend={selection.kind if selection else 'unset'}, "
        f"managementState={management_state or 'unset'}"
    )
    return NormalizedStorage(
        storage=canonical, selection=selection, notices=tuple(notices)
    )
