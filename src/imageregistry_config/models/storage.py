"""
Pydantic models for the registry storage backends.

This module defines the seven mutually exclusive backend variants, the
wire-shaped StorageConfig that carries them as optional members, and the
BackendSelection tagged view used once a configuration has been
normalized. The models hold data only; the at-most-one rule is enforced by
the storage normalizer.
"""

from dataclasses import dataclass
from typing import Union

from pydantic import Field

from imageregistry_config.constants import (
    BACKEND_AZURE,
    BACKEND_EMPTY_DIR,
    BACKEND_GCS,
    BACKEND_IBMCOS,
    BACKEND_PVC,
    BACKEND_S3,
    BACKEND_SWIFT,
    EPHEMERAL_BACKENDS,
    STORAGE_BACKENDS,
)
from imageregistry_config.models.common import Duration, RegistryModel, SecretKeySelector


class EmptyDirStorage(RegistryModel):
    """
    Placeholder for ephemeral storage on the pod's host node.

    Data is lost whenever the pod leaves its node; cannot be shared by more
    than one replica.
    """


class S3CloudFrontConfig(RegistryModel):
    """Amazon CloudFront as the storage middleware in front of S3."""

    base_url: str | None = Field(
        None,
        alias="baseURL",
        description="SCHEME://HOST[/PATH] at which CloudFront is served",
    )
    private_key: SecretKeySelector | None = Field(
        None,
        alias="privateKey",
        description="Secret containing the private key provided by AWS",
    )
    keypair_id: str | None = Field(
        None, alias="keypairID", description="Key pair ID provided by AWS"
    )
    duration: Duration | None = Field(
        None, description="Duration of the CloudFront session"
    )


class S3Storage(RegistryModel):
    """Amazon S3 or S3-compatible object storage."""

    bucket: str | None = Field(
        None, description="Bucket name; generated if not provided"
    )
    region: str | None = Field(
        None, description="Bucket region; inferred from the platform if not provided"
    )
    region_endpoint: str | None = Field(
        None,
        alias="regionEndpoint",
        description="Endpoint for S3 compatible storage services",
    )
    encrypt: bool | None = Field(
        None, description="Store images in encrypted format"
    )
    key_id: str | None = Field(
        None,
        alias="keyID",
        description="KMS key ID used for encryption; ignored unless encrypt is set",
    )
    cloud_front: S3CloudFrontConfig | None = Field(
        None, alias="cloudFront", description="CloudFront storage middleware"
    )
    virtual_hosted_style: bool | None = Field(
        None,
        alias="virtualHostedStyle",
        description="Use virtual hosted style bucket paths with a custom endpoint",
    )


class GCSStorage(RegistryModel):
    """Google Cloud Storage."""

    bucket: str | None = Field(None, description="Bucket name")
    region: str | None = Field(None, description="GCS location of the bucket")
    project_id: str | None = Field(
        None, alias="projectID", description="GCP project owning the bucket"
    )
    key_id: str | None = Field(
        None, alias="keyID", description="Custom KMS key ID used for encryption"
    )


class SwiftStorage(RegistryModel):
    """OpenStack Swift object storage."""

    auth_url: str | None = Field(
        None, alias="authURL", description="URL for obtaining an authentication token"
    )
    auth_version: str | None = Field(
        None,
        alias="authVersion",
        description="OpenStack auth version; empty means auto-detect",
    )
    container: str | None = Field(None, description="Swift container name")
    domain: str | None = Field(None, description="Identity v3 domain name")
    domain_id: str | None = Field(
        None, alias="domainID", description="Identity v3 domain ID"
    )
    tenant: str | None = Field(None, description="Tenant name")
    tenant_id: str | None = Field(None, alias="tenantID", description="Tenant ID")
    region_name: str | None = Field(
        None, alias="regionName", description="Region in which the container exists"
    )


class PVCStorage(RegistryModel):
    """PersistentVolumeClaim backed storage."""

    claim: str | None = Field(
        None, description="Claim name; the default claim is used if not provided"
    )


class AzureStorage(RegistryModel):
    """Azure Blob Storage."""

    account_name: str | None = Field(
        None, alias="accountName", description="Storage account name"
    )
    container: str | None = Field(None, description="Blob container name")
    cloud_name: str | None = Field(
        None,
        alias="cloudName",
        description="Azure cloud environment; inferred from the platform if empty",
    )


class IBMCOSStorage(RegistryModel):
    """IBM Cloud Object Storage."""

    bucket: str | None = Field(None, description="Bucket name")
    location: str | None = Field(None, description="IBM Cloud location")
    resource_group_name: str | None = Field(
        None, alias="resourceGroupName", description="IBM Cloud resource group"
    )
    resource_key_crn: str | None = Field(
        None,
        alias="resourceKeyCrn",
        description="CRN of the HMAC resource key for the service instance",
    )
    service_instance_crn: str | None = Field(
        None,
        alias="serviceInstanceCrn",
        description="CRN of the Cloud Object Storage service instance",
    )


BackendVariant = Union[
    EmptyDirStorage,
    S3Storage,
    GCSStorage,
    SwiftStorage,
    PVCStorage,
    AzureStorage,
    IBMCOSStorage,
]

# Wire name -> model attribute
BACKEND_FIELDS = {
    BACKEND_EMPTY_DIR: "empty_dir",
    BACKEND_S3: "s3",
    BACKEND_GCS: "gcs",
    BACKEND_SWIFT: "swift",
    BACKEND_PVC: "pvc",
    BACKEND_AZURE: "azure",
    BACKEND_IBMCOS: "ibmcos",
}


class StorageConfig(RegistryModel):
    """
    Storage configuration as it appears on the wire.

    Each backend is an optional member; an absent member stays absent through
    decode and encode. At most one member may be populated.
    """

    empty_dir: EmptyDirStorage | None = Field(
        None,
        alias="emptyDir",
        description="Ephemeral storage; not for production or multiple replicas",
    )
    s3: S3Storage | None = Field(None, description="Amazon S3 storage")
    gcs: GCSStorage | None = Field(None, description="Google Cloud Storage")
    swift: SwiftStorage | None = Field(None, description="OpenStack Swift storage")
    pvc: PVCStorage | None = Field(None, description="PersistentVolumeClaim storage")
    azure: AzureStorage | None = Field(None, description="Azure Blob Storage")
    ibmcos: IBMCOSStorage | None = Field(
        None, description="IBM Cloud Object Storage"
    )
    management_state: str | None = Field(
        None,
        alias="managementState",
        description="Whether the operator manages the storage unit (Managed, Unmanaged)",
    )

    def populated_backends(self) -> list[str]:
        """Wire names of the populated backend members, in wire order."""
        return [
            name
            for name in STORAGE_BACKENDS
            if getattr(self, BACKEND_FIELDS[name]) is not None
        ]

    def backend_config(self, name: str) -> BackendVariant | None:
        return getattr(self, BACKEND_FIELDS[name])

    @classmethod
    def from_selection(
        cls,
        selection: "BackendSelection | None",
        management_state: str | None = None,
    ) -> "StorageConfig":
        """Build the wire shape holding exactly the selected backend."""
        members = {}
        if selection is not None:
            members[BACKEND_FIELDS[selection.kind]] = selection.config
        return cls(management_state=management_state, **members)


@dataclass(frozen=True)
class BackendSelection:
    """The single authoritative backend of a normalized storage configuration."""

    kind: str
    config: BackendVariant

    @property
    def ephemeral(self) -> bool:
        return self.kind in EPHEMERAL_BACKENDS
