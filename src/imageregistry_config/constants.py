"""
Constants used throughout the registry configuration model.

This module defines all constant values including:
- API group, version and singleton naming
- Management states and rollout strategies
- Storage backend names
- Log levels and advisory notice codes
- Status condition types
"""

# API identification
API_GROUP = "imageregistry.operator.openshift.io"
API_VERSION = "v1"
API_GROUP_VERSION = f"{API_GROUP}/{API_VERSION}"
CONFIG_KIND = "Config"
CONFIG_PLURAL = "configs"

# The configuration is a cluster singleton identified by name only
DEFAULT_CONFIG_NAME = "cluster"

# Top-level management states
MANAGEMENT_STATE_MANAGED = "Managed"
MANAGEMENT_STATE_UNMANAGED = "Unmanaged"
MANAGEMENT_STATE_REMOVED = "Removed"

MANAGEMENT_STATES = (
    MANAGEMENT_STATE_MANAGED,
    MANAGEMENT_STATE_UNMANAGED,
    MANAGEMENT_STATE_REMOVED,
)

# Storage management states (Removed is not valid for the storage unit)
STORAGE_MANAGEMENT_STATES = (
    MANAGEMENT_STATE_MANAGED,
    MANAGEMENT_STATE_UNMANAGED,
)

# Deployment rollout strategies
ROLLOUT_STRATEGY_ROLLING_UPDATE = "RollingUpdate"
ROLLOUT_STRATEGY_RECREATE = "Recreate"
ROLLOUT_STRATEGIES = (ROLLOUT_STRATEGY_ROLLING_UPDATE, ROLLOUT_STRATEGY_RECREATE)

# Storage backend names, as they appear on the wire
BACKEND_EMPTY_DIR = "emptyDir"
BACKEND_S3 = "s3"
BACKEND_GCS = "gcs"
BACKEND_SWIFT = "swift"
BACKEND_PVC = "pvc"
BACKEND_AZURE = "azure"
BACKEND_IBMCOS = "ibmcos"

# Wire order of the backend variants
STORAGE_BACKENDS = (
    BACKEND_EMPTY_DIR,
    BACKEND_S3,
    BACKEND_GCS,
    BACKEND_SWIFT,
    BACKEND_PVC,
    BACKEND_AZURE,
    BACKEND_IBMCOS,
)

# Backends whose data lives only as long as the pod
EPHEMERAL_BACKENDS = frozenset({BACKEND_EMPTY_DIR})
MAX_EPHEMERAL_REPLICAS = 1

# Operator log levels
LOG_LEVEL_NORMAL = "Normal"
LOG_LEVEL_DEBUG = "Debug"
LOG_LEVEL_TRACE = "Trace"
LOG_LEVEL_TRACE_ALL = "TraceAll"
LOG_LEVELS = (LOG_LEVEL_NORMAL, LOG_LEVEL_DEBUG, LOG_LEVEL_TRACE, LOG_LEVEL_TRACE_ALL)

# Deprecated `logging` verbosity thresholds, highest first
DEPRECATED_LOGGING_THRESHOLDS = (
    (8, LOG_LEVEL_TRACE_ALL),
    (6, LOG_LEVEL_TRACE),
    (4, LOG_LEVEL_DEBUG),
)

# Advisory notice codes
NOTICE_INVALID_ADMISSION_LIMIT = "InvalidAdmissionLimit"
NOTICE_DEPRECATED_FIELD_CONFLICT = "DeprecatedFieldConflict"
NOTICE_DEFAULT_APPLIED = "DefaultApplied"

# httpSecret generation, in random bytes (hex encoded to twice the length)
HTTP_SECRET_BYTES = 64

# Azure container naming rules
AZURE_CONTAINER_MIN_LENGTH = 3
AZURE_CONTAINER_MAX_LENGTH = 63
AZURE_CONTAINER_PATTERN = r"^[0-9a-z]+(-[0-9a-z]+)*$"
