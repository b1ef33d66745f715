"""
CRD schema generation from the pydantic models.

Produces the structural OpenAPI v3 schema Kubernetes expects for the
Config custom resource: references inlined, optional members marked
nullable, free-form maps flagged to preserve unknown fields.
"""

from typing import Any

from pydantic import BaseModel

from imageregistry_config.constants import (
    API_GROUP,
    API_VERSION,
    CONFIG_KIND,
    CONFIG_PLURAL,
    ROLLOUT_STRATEGIES,
    STORAGE_MANAGEMENT_STATES,
)
from imageregistry_config.models.registry import ImageRegistrySpec, ImageRegistryStatus

# Wire path -> pattern enforced by the API server
FIELD_PATTERNS = {
    "rolloutStrategy": f"^({'|'.join(ROLLOUT_STRATEGIES)})$",
    "storage.managementState": f"^({'|'.join(STORAGE_MANAGEMENT_STATES)})$",
}

_DROPPED_KEYS = {"title", "default"}


def _structural(node: Any, defs: dict[str, Any]) -> Any:
    """Inline $refs and rewrite JSON Schema constructs CRDs do not accept."""
    if isinstance(node, list):
        return [_structural(item, defs) for item in node]
    if not isinstance(node, dict):
        return node

    if "$ref" in node:
        target = defs[node["$ref"].rsplit("/", 1)[-1]]
        merged = {**target, **{k: v for k, v in node.items() if k != "$ref"}}
        return _structural(merged, defs)

    if "anyOf" in node:
        variants = [v for v in node["anyOf"] if v.get("type") != "null"]
        rest = {k: v for k, v in node.items() if k != "anyOf"}
        if len(variants) == 1:
            result = _structural({**variants[0], **rest}, defs)
            if len(variants) < len(node["anyOf"]):
                result["nullable"] = True
            return result

    result = {
        key: _structural(value, defs)
        for key, value in node.items()
        if key not in _DROPPED_KEYS and key not in ("$defs", "properties")
    }
    if "properties" in node:
        result["properties"] = {
            name: _structural(value, defs)
            for name, value in node["properties"].items()
        }

    if result.get("type") == "object" and not result.get("properties"):
        result.pop("properties", None)
        result.pop("additionalProperties", None)
        result["x-kubernetes-preserve-unknown-fields"] = True

    return result


def _apply_patterns(schema: dict[str, Any]) -> dict[str, Any]:
    for path, pattern in FIELD_PATTERNS.items():
        node = schema
        for part in path.split("."):
            node = node["properties"][part]
        node["pattern"] = pattern
    return schema


def model_openapi_schema(model: type[BaseModel]) -> dict[str, Any]:
    """Structural OpenAPI v3 schema of a model, using wire names."""
    raw = model.model_json_schema(by_alias=True)
    return _structural(raw, raw.get("$defs", {}))


def config_crd_schema() -> dict[str, Any]:
    """openAPIV3Schema for the Config custom resource."""
    return {
        "type": "object",
        "required": ["metadata", "spec"],
        "properties": {
            "apiVersion": {"type": "string"},
            "kind": {"type": "string"},
            "metadata": {"type": "object"},
            "spec": _apply_patterns(model_openapi_schema(ImageRegistrySpec)),
            "status": model_openapi_schema(ImageRegistryStatus),
        },
    }


def config_crd_manifest() -> dict[str, Any]:
    """Complete, cluster-scoped CustomResourceDefinition for Config."""
    return {
        "apiVersion": "apiextensions.k8s.io/v1",
        "kind": "CustomResourceDefinition",
        "metadata": {"name": f"{CONFIG_PLURAL}.{API_GROUP}"},
        "spec": {
            "group": API_GROUP,
            "scope": "Cluster",
            "names": {
                "kind": CONFIG_KIND,
                "listKind": f"{CONFIG_KIND}List",
                "plural": CONFIG_PLURAL,
                "singular": CONFIG_KIND.lower(),
            },
            "versions": [
                {
                    "name": API_VERSION,
                    "served": True,
                    "storage": True,
                    "subresources": {"status": {}},
                    "schema": {"openAPIV3Schema": config_crd_schema()},
                }
            ],
        },
    }
