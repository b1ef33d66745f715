"""
Pydantic models for the image registry configuration resource.

This module defines the cluster-scoped Config resource: the desired state
(spec) edited by administrators and the observed state (status) written by
the reconciler. Enumerated strings such as managementState are kept as raw
strings here so that validation can report every bad value at once instead
of failing on the first.
"""

from typing import Any

from pydantic import Field, field_validator

from imageregistry_config.constants import API_GROUP_VERSION, CONFIG_KIND
from imageregistry_config.models.common import RegistryCondition, RegistryModel
from imageregistry_config.models.requests import RequestsConfig
from imageregistry_config.models.storage import StorageConfig


class ProxyConfig(RegistryModel):
    """Proxy used when calling the API server, upstream registries, etc."""

    http: str | None = Field(None, description="Proxy for HTTP endpoints")
    https: str | None = Field(None, description="Proxy for HTTPS endpoints")
    no_proxy: str | None = Field(
        None,
        alias="noProxy",
        description="Comma-separated host names that bypass the proxy",
    )


class RouteConfig(RegistryModel):
    """An additional external route to the registry."""

    name: str = Field("", description="Name of the route to be created")
    hostname: str | None = Field(None, description="Hostname for the route")
    secret_name: str | None = Field(
        None,
        alias="secretName",
        description="Secret containing the certificates used by the route",
    )


class ImageRegistrySpec(RegistryModel):
    """
    Desired state of the image registry.

    Covers the storage backend, request admission limits, network exposure
    and pod placement, plus the generic operator fields (management state,
    log levels, overrides).
    """

    # Generic operator fields
    management_state: str = Field(
        "",
        alias="managementState",
        description="Managed, Unmanaged or Removed",
    )
    log_level: str | None = Field(
        None, alias="logLevel", description="Registry log level (Normal, Debug, ...)"
    )
    operator_log_level: str | None = Field(
        None, alias="operatorLogLevel", description="Operator log level"
    )
    unsupported_config_overrides: dict[str, Any] | None = Field(
        None,
        alias="unsupportedConfigOverrides",
        description="Overrides outside the supported configuration surface",
    )
    observed_config: dict[str, Any] | None = Field(
        None,
        alias="observedConfig",
        description="Sparse config observed from the cluster",
    )

    # Registry behaviour
    http_secret: str | None = Field(
        None,
        alias="httpSecret",
        description="Secret used by the registry to secure uploads; generated if empty",
    )
    proxy: ProxyConfig | None = Field(None, description="Proxy configuration")
    storage: StorageConfig = Field(
        default_factory=StorageConfig, description="Storage backend configuration"
    )
    read_only: bool | None = Field(
        None, alias="readOnly", description="Reject pushes and deletes"
    )
    disable_redirect: bool | None = Field(
        None,
        alias="disableRedirect",
        description="Route all data through the registry instead of redirecting",
    )
    requests: RequestsConfig | None = Field(
        None, description="Parallel request admission limits"
    )

    # Network exposure
    default_route: bool | None = Field(
        None,
        alias="defaultRoute",
        description="Create an external route using the default hostname",
    )
    routes: list[RouteConfig] | None = Field(
        None, description="Additional external routes"
    )

    # Pod placement
    replicas: int = Field(0, description="Number of registry instances to run")
    resources: dict[str, Any] | None = Field(
        None, description="Resource requests and limits for the registry pod"
    )
    node_selector: dict[str, str] | None = Field(
        None, alias="nodeSelector", description="Node selection constraints"
    )
    tolerations: list[dict[str, Any]] | None = Field(
        None, description="Tolerations for the registry pod"
    )
    affinity: dict[str, Any] | None = Field(
        None, description="Affinity scheduling rules"
    )
    rollout_strategy: str | None = Field(
        None,
        alias="rolloutStrategy",
        description="Deployment rollout strategy (RollingUpdate, Recreate)",
    )

    # Deprecated
    logging: int | None = Field(
        None, description="Deprecated verbosity level, superseded by logLevel"
    )

    @field_validator("storage", mode="before")
    @classmethod
    def storage_null_as_empty(cls, v):
        # An empty "storage:" key decodes to null
        return {} if v is None else v


class ImageRegistryStatus(RegistryModel):
    """
    Observed state of the image registry.

    storageManaged is deprecated and always mirrors
    storage.managementState == Managed.
    """

    observed_generation: int | None = Field(
        None,
        alias="observedGeneration",
        description="Generation of the spec that was last processed",
    )
    conditions: list[RegistryCondition] | None = Field(
        None, description="Detailed status conditions"
    )
    version: str | None = Field(None, description="Running registry version")
    ready_replicas: int | None = Field(
        None, alias="readyReplicas", description="Number of ready replicas"
    )
    storage_managed: bool = Field(
        False,
        alias="storageManaged",
        description="Deprecated, refer to storage.managementState",
    )
    storage: StorageConfig = Field(
        default_factory=StorageConfig,
        description="Storage configuration currently applied",
    )

    @field_validator("storage", mode="before")
    @classmethod
    def storage_null_as_empty(cls, v):
        return {} if v is None else v


class Config(RegistryModel):
    """
    Complete registry configuration resource.

    This represents the full Kubernetes custom resource including
    metadata, spec, and status sections. It is cluster scoped: metadata
    carries a name but no namespace.
    """

    api_version: str = Field(API_GROUP_VERSION, alias="apiVersion")
    kind: str = Field(CONFIG_KIND)
    metadata: dict[str, Any] = Field(
        default_factory=dict, description="Kubernetes metadata"
    )
    spec: ImageRegistrySpec = Field(
        default_factory=ImageRegistrySpec, description="Desired registry state"
    )
    status: ImageRegistryStatus | None = Field(
        None, description="Observed registry state (managed by the reconciler)"
    )

    @property
    def name(self) -> str | None:
        return self.metadata.get("name")

    def to_wire(self) -> dict[str, Any]:
        """Encode with wire names; absent optional members stay absent."""
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


class ConfigList(RegistryModel):
    """List of Config resources."""

    api_version: str = Field(API_GROUP_VERSION, alias="apiVersion")
    kind: str = Field(f"{CONFIG_KIND}List")
    metadata: dict[str, Any] = Field(default_factory=dict)
    items: list[Config] = Field(default_factory=list)
