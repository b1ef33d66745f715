"""
Registry configuration validator.

Composition root for configuration checks. Runs, in order:

1. decoding (fields with the wrong JSON type are reported and left out)
2. enum validation (management states, rollout strategy, log levels)
3. storage normalization (backend selection, defaults, deprecated flag)
4. request admission limits
5. cross-field checks (replicas against ephemeral storage, routes, proxy,
   resources)

Independent problems are all reported together: a submission with three
mistakes gets three errors. The input is never modified; a successful run
returns a new canonical Config.
"""

import copy
import time
from collections import Counter
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from imageregistry_config.constants import (
    LOG_LEVELS,
    MAX_EPHEMERAL_REPLICAS,
    ROLLOUT_STRATEGIES,
)
from imageregistry_config.errors import (
    ConfigValidationError,
    DuplicateRouteName,
    InvalidFieldValue,
    InvalidRolloutStrategy,
    MultipleBackendsConfigured,
    RegistryConfigError,
    ReplicasExceedEphemeralLimit,
)
from imageregistry_config.models.notices import AdvisoryNotice
from imageregistry_config.models.registry import Config, ImageRegistrySpec
from imageregistry_config.models.storage import BackendSelection
from imageregistry_config.observability.logging import ConfigLogger
from imageregistry_config.observability.tracing import traced_operation
from imageregistry_config.services.admission import normalize_requests
from imageregistry_config.services.deprecations import logging_conflicts
from imageregistry_config.services.lifecycle import check_management_states
from imageregistry_config.services.storage_normalizer import (
    NormalizedStorage,
    check_backend_constraints,
    normalize_storage,
)
from imageregistry_config.settings import settings
from imageregistry_config.utils.validation import (
    ValidationError,
    validate_resource_limits,
    validate_resource_name,
    validate_url,
)

config_logger = ConfigLogger(__name__)


@dataclass(frozen=True)
class ValidationResult:
    """
    Outcome of validating one configuration.

    Either config holds the canonical configuration, or errors is non-empty
    and config is None. Notices are returned in both cases.
    """

    config: Config | None
    errors: tuple[RegistryConfigError, ...] = ()
    notices: tuple[AdvisoryNotice, ...] = ()
    selection: BackendSelection | None = None

    @property
    def ok(self) -> bool:
        return not self.errors

    @property
    def backend(self) -> str | None:
        return self.selection.kind if self.selection else None

    @property
    def error_kinds(self) -> list[str]:
        return [error.kind for error in self.errors]

    def raise_for_errors(self) -> Config:
        """
        Return the canonical config or raise every fatal error at once.

        Raises:
            ConfigValidationError: If validation produced fatal errors
        """
        if self.config is None:
            raise ConfigValidationError(self.errors)
        return self.config


def is_cluster_config(config: Config) -> bool:
    """
    Whether config is the cluster's singleton registry configuration.

    Objects with any other name are not acted upon; callers skip them
    before validation.
    """
    return config.name == settings.config_name


def _wire_path(loc: tuple[int | str, ...]) -> str:
    return ".".join(str(part) for part in loc)


def _drop_field(document: dict[str, Any], loc: tuple[int | str, ...]) -> None:
    """Remove the innermost mapping entry along loc."""
    parent: dict[str, Any] | None = None
    key: int | str | None = None
    node: Any = document
    for part in loc:
        if isinstance(node, dict) and part in node:
            parent, key = node, part
            node = node[part]
        elif isinstance(node, list) and isinstance(part, int) and 0 <= part < len(node):
            node = node[part]
        else:
            break
    if parent is not None:
        del parent[key]


def _decode_without(
    document: Mapping[str, Any], locs: list[tuple[int | str, ...]]
) -> Config | None:
    salvaged = copy.deepcopy(dict(document))
    for loc in locs:
        _drop_field(salvaged, loc)
    try:
        return Config.model_validate(salvaged)
    except PydanticValidationError:
        return None


def decode_config(
    document: Mapping[str, Any],
) -> tuple[Config | None, list[RegistryConfigError]]:
    """
    Decode a JSON/YAML-shaped document into a Config.

    Type errors are reported per field instead of raised. The document is
    then decoded again without the offending fields, so that checks on the
    rest of the configuration can still run; the Config is None only when
    nothing could be decoded.
    """
    try:
        return Config.model_validate(document), []
    except PydanticValidationError as e:
        details = e.errors()

    errors: list[RegistryConfigError] = [
        InvalidFieldValue(detail["msg"], field=_wire_path(detail["loc"]))
        for detail in details
    ]
    if not isinstance(document, Mapping):
        return None, errors
    return _decode_without(document, [tuple(d["loc"]) for d in details]), errors


def _covered_by(error: RegistryConfigError, fields: set[str]) -> bool:
    """Whether error is about a field that already failed to decode."""
    if not error.field:
        return False
    return any(error.field == f or error.field.startswith(f"{f}.") for f in fields)


def check_enums(spec: ImageRegistrySpec) -> list[RegistryConfigError]:
    errors: list[RegistryConfigError] = list(check_management_states(spec))

    if spec.rollout_strategy and spec.rollout_strategy not in ROLLOUT_STRATEGIES:
        errors.append(InvalidRolloutStrategy(spec.rollout_strategy, ROLLOUT_STRATEGIES))

    for field, value in (
        ("spec.logLevel", spec.log_level),
        ("spec.operatorLogLevel", spec.operator_log_level),
    ):
        if value and value not in LOG_LEVELS:
            errors.append(
                InvalidFieldValue(
                    f"unknown log level {value!r}",
                    field=field,
                    user_action=f"Set {field} to one of {list(LOG_LEVELS)}",
                )
            )
    return errors


def check_routes(spec: ImageRegistrySpec) -> list[RegistryConfigError]:
    """Route names must be valid resource names and unique."""
    errors: list[RegistryConfigError] = []
    routes = spec.routes or []

    for index, route in enumerate(routes):
        try:
            validate_resource_name(route.name, "route")
        except ValidationError as e:
            errors.append(InvalidFieldValue(str(e), field=f"spec.routes.{index}.name"))

    counts = Counter(route.name for route in routes if route.name)
    for name, count in counts.items():
        if count > 1:
            indices = [i for i, route in enumerate(routes) if route.name == name]
            errors.append(DuplicateRouteName(name, indices))
    return errors


def check_replicas(
    spec: ImageRegistrySpec, selection: BackendSelection | None
) -> list[RegistryConfigError]:
    if spec.replicas < 0:
        return [
            InvalidFieldValue(
                f"replicas must not be negative, got {spec.replicas}",
                field="spec.replicas",
            )
        ]
    if (
        selection is not None
        and selection.ephemeral
        and spec.replicas > MAX_EPHEMERAL_REPLICAS
    ):
        return [
            ReplicasExceedEphemeralLimit(
                spec.replicas, selection.kind, MAX_EPHEMERAL_REPLICAS
            )
        ]
    return []


def check_proxy(spec: ImageRegistrySpec) -> list[RegistryConfigError]:
    errors: list[RegistryConfigError] = []
    if spec.proxy is None:
        return errors

    for field, value in (("http", spec.proxy.http), ("https", spec.proxy.https)):
        if not value:
            continue
        try:
            validate_url(value, f"{field} proxy")
        except ValidationError as e:
            errors.append(InvalidFieldValue(str(e), field=f"spec.proxy.{field}"))
    return errors


def check_resources(spec: ImageRegistrySpec) -> list[RegistryConfigError]:
    if not spec.resources:
        return []
    try:
        validate_resource_limits(spec.resources)
    except ValidationError as e:
        field = f"spec.resources.{e.field}" if e.field else "spec.resources"
        return [InvalidFieldValue(str(e), field=field)]
    return []


@traced_operation("validate_config")
def validate_config(config: Config | Mapping[str, Any]) -> ValidationResult:
    """
    Validate and normalize a registry configuration.

    Args:
        config: A decoded Config, or a JSON/YAML-shaped mapping

    Returns:
        The canonical configuration with advisory notices, or the complete
        list of fatal errors
    """
    started = time.monotonic()

    decode_errors: list[RegistryConfigError] = []
    if isinstance(config, Config):
        decoded = config
    else:
        decoded, decode_errors = decode_config(config)
        if decoded is None:
            metadata = config.get("metadata") if isinstance(config, Mapping) else None
            name = str(
                metadata.get("name", "unknown")
                if isinstance(metadata, Mapping)
                else "unknown"
            )
            config_logger.log_validation_failure(
                name, [error.kind for error in decode_errors], time.monotonic() - started
            )
            return ValidationResult(config=None, errors=tuple(decode_errors))

    name = decoded.name or "unknown"
    config_logger.log_validation_start(name)
    spec = decoded.spec

    errors: list[RegistryConfigError] = []
    notices: list[AdvisoryNotice] = []

    errors.extend(check_enums(spec))

    storage_managed = decoded.status.storage_managed if decoded.status else None
    normalized: NormalizedStorage | None = None
    try:
        normalized = normalize_storage(spec.storage, storage_managed)
    except MultipleBackendsConfigured as e:
        errors.append(e)

    selection = normalized.selection if normalized else None
    if normalized is not None:
        notices.extend(normalized.notices)
        if selection is not None:
            errors.extend(check_backend_constraints(selection))

    requests = normalize_requests(spec.requests)
    notices.extend(requests.notices)

    errors.extend(check_replicas(spec, selection))
    errors.extend(check_routes(spec))
    errors.extend(check_proxy(spec))
    errors.extend(check_resources(spec))

    notices.extend(logging_conflicts(spec))

    # Fields that failed to decode were checked in their absence
    undecoded = {error.field for error in decode_errors if error.field}
    errors = decode_errors + [e for e in errors if not _covered_by(e, undecoded)]

    for notice in notices:
        config_logger.log_notice(name, notice.code, notice.field, notice.message)

    duration = time.monotonic() - started
    if errors or normalized is None:
        config_logger.log_validation_failure(
            name, [error.kind for error in errors], duration
        )
        return ValidationResult(
            config=None, errors=tuple(errors), notices=tuple(notices)
        )

    canonical_spec = spec.model_copy(
        update={"storage": normalized.storage, "requests": requests.requests}
    )
    canonical = decoded.model_copy(update={"spec": canonical_spec})

    config_logger.log_validation_success(name, normalized.backend, len(notices), duration)
    return ValidationResult(
        config=canonical,
        notices=tuple(notices),
        selection=selection,
    )
