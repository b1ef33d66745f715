"""
Test fixtures for registry configuration resources.

This module provides sample Config documents as they would arrive from the
cluster, including valid and invalid configurations.
"""

from typing import Any

import yaml

MINIMAL_CONFIG_YAML = """
apiVersion: imageregistry.operator.openshift.io/v1
kind: Config
metadata:
  name: cluster
spec:
  managementState: Managed
  replicas: 1
"""

S3_CONFIG_YAML = """
apiVersion: imageregistry.operator.openshift.io/v1
kind: Config
metadata:
  name: cluster
spec:
  managementState: Managed
  replicas: 2
  httpSecret: 5f1c0a
  rolloutStrategy: RollingUpdate
  proxy:
    http: http://proxy.example.com:3128
    https: https://proxy.example.com:3129
    noProxy: .cluster.local,.svc
  storage:
    managementState: Managed
    s3:
      bucket: registry-bucket
      region: us-east-1
      encrypt: true
      keyID: arn:aws:kms:us-east-1:123456789012:key/abcd
      virtualHostedStyle: false
      cloudFront:
        baseURL: https://d111111abcdef8.cloudfront.net
        privateKey:
          name: cloudfront-key
          key: private.pem
        keypairID: APKAEIBAERJR2EXAMPLE
        duration: 30m0s
  requests:
    read:
      maxRunning: 100
      maxInQueue: 50
      maxWaitInQueue: 1m0s
    write:
      maxRunning: 10
  routes:
    - name: public
      hostname: registry.apps.example.com
    - name: internal
      hostname: registry.internal.example.com
      secretName: internal-tls
  resources:
    requests:
      cpu: 100m
      memory: 256Mi
  nodeSelector:
    node-role.kubernetes.io/infra: ""
  tolerations:
    - key: node-role.kubernetes.io/infra
      effect: NoSchedule
  futureField: ignored
status:
  storageManaged: true
  storage:
    managementState: Managed
    s3:
      bucket: registry-bucket
      region: us-east-1
      virtualHostedStyle: false
"""

EMPTY_DIR_CONFIG_YAML = """
apiVersion: imageregistry.operator.openshift.io/v1
kind: Config
metadata:
  name: cluster
spec:
  managementState: Managed
  replicas: 1
  storage:
    emptyDir: {}
"""

INVALID_CONFIG_YAML = """
apiVersion: imageregistry.operator.openshift.io/v1
kind: Config
metadata:
  name: cluster
spec:
  managementState: Deleted
  replicas: 3
  rolloutStrategy: BlueGreen
  storage:
    managementState: Removed
    emptyDir: {}
  routes:
    - name: public
    - name: public
"""


def load(document: str) -> dict[str, Any]:
    """Parse a YAML fixture into a fresh mapping."""
    return yaml.safe_load(document)


def minimal_config() -> dict[str, Any]:
    return load(MINIMAL_CONFIG_YAML)


def s3_config() -> dict[str, Any]:
    return load(S3_CONFIG_YAML)


def empty_dir_config() -> dict[str, Any]:
    return load(EMPTY_DIR_CONFIG_YAML)


def invalid_config() -> dict[str, Any]:
    return load(INVALID_CONFIG_YAML)


def with_storage(storage: dict[str, Any], **spec: Any) -> dict[str, Any]:
    """Minimal config with the given storage block and spec overrides."""
    document = minimal_config()
    document["spec"]["storage"] = storage
    document["spec"].update(spec)
    return document
