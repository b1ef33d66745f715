"""
Unit tests for CRD schema generation.
"""

from imageregistry_config.constants import STORAGE_BACKENDS
from imageregistry_config.models.storage import StorageConfig
from imageregistry_config.schema import (
    config_crd_manifest,
    config_crd_schema,
    model_openapi_schema,
)


def _walk(node):
    if isinstance(node, dict):
        yield node
        for value in node.values():
            yield from _walk(value)
    elif isinstance(node, list):
        for item in node:
            yield from _walk(item)


def test_schema_is_structural():
    schema = config_crd_schema()

    for node in _walk(schema):
        assert "$ref" not in node
        assert "$defs" not in node
        assert "anyOf" not in node


def test_storage_backends_use_wire_names():
    storage = model_openapi_schema(StorageConfig)

    assert set(STORAGE_BACKENDS) <= set(storage["properties"])
    assert storage["properties"]["s3"]["nullable"] is True
    assert "virtualHostedStyle" in storage["properties"]["s3"]["properties"]


def test_empty_dir_preserves_unknown_fields():
    storage = model_openapi_schema(StorageConfig)
    assert storage["properties"]["emptyDir"]["x-kubernetes-preserve-unknown-fields"]


def test_durations_are_strings():
    spec = config_crd_schema()["properties"]["spec"]
    read = spec["properties"]["requests"]["properties"]["read"]

    assert read["properties"]["maxWaitInQueue"]["type"] == "string"


def test_enum_patterns():
    spec = config_crd_schema()["properties"]["spec"]

    assert spec["properties"]["rolloutStrategy"]["pattern"] == "^(RollingUpdate|Recreate)$"
    assert (
        spec["properties"]["storage"]["properties"]["managementState"]["pattern"]
        == "^(Managed|Unmanaged)$"
    )


def test_status_exposes_storage_managed():
    status = config_crd_schema()["properties"]["status"]
    assert status["properties"]["storageManaged"]["type"] == "boolean"


def test_manifest_is_cluster_scoped_with_status_subresource():
    manifest = config_crd_manifest()

    assert manifest["metadata"]["name"] == "configs.imageregistry.operator.openshift.io"
    assert manifest["spec"]["scope"] == "Cluster"
    version = manifest["spec"]["versions"][0]
    assert version["name"] == "v1"
    assert version["subresources"] == {"status": {}}
