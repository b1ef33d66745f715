"""
Field-level validation utilities for the registry configuration.

This module provides the checks applied to individual values:

- Kubernetes resource names (route names)
- Proxy and CloudFront URLs
- Pod resource requirement maps
- Azure blob container names

Each check raises ValidationError; the config validator turns these into
collected configuration errors.
"""

import logging
import re
from typing import Any
from urllib.parse import urlparse

from imageregistry_config.constants import (
    AZURE_CONTAINER_MAX_LENGTH,
    AZURE_CONTAINER_MIN_LENGTH,
    AZURE_CONTAINER_PATTERN,
)

logger = logging.getLogger(__name__)


class ValidationError(Exception):
    """Exception raised for validation failures."""

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


def validate_resource_name(name: str, resource_type: str = "resource") -> None:
    """
    Validate Kubernetes resource name according to DNS-1123 subdomain rules.

    Args:
        name: Resource name to validate
        resource_type: Type of resource for error messages

    Raises:
        ValidationError: If name is invalid
    """
    if not name:
        raise ValidationError(f"{resource_type} name cannot be empty")

    if len(name) > 253:
        raise ValidationError(
            f"{resource_type} name '{name}' is too long (max 253 characters)"
        )

    # DNS-1123 subdomain: dot separated labels
    label = r"[a-z0-9]([a-z0-9\-]*[a-z0-9])?"
    if not re.fullmatch(rf"{label}(\.{label})*", name):
        raise ValidationError(
            f"{resource_type} name '{name}' is invalid. "
            "Must contain only lowercase letters, numbers, hyphens and dots, "
            "and must start and end with an alphanumeric character"
        )

    logger.debug(f"Validated {resource_type} name: {name}")


def validate_url(url: str, url_type: str = "URL") -> None:
    """
    Validate URL format.

    Args:
        url: URL to validate
        url_type: Type of URL for error messages

    Raises:
        ValidationError: If URL is invalid
    """
    if not url:
        raise ValidationError(f"{url_type} cannot be empty")

    try:
        parsed = urlparse(url)
        hostname = parsed.hostname
    except ValueError as e:
        raise ValidationError(f"Invalid {url_type} format: {e}") from e

    if parsed.scheme not in ["http", "https"]:
        raise ValidationError(
            f"{url_type} must use http or https scheme, got: {parsed.scheme or 'none'}"
        )

    if not hostname:
        raise ValidationError(f"{url_type} must have a valid hostname")

    logger.debug(f"Validated {url_type}: {url}")


def validate_resource_limits(resources: dict[str, Any]) -> None:
    """
    Validate Kubernetes resource limits and requests.

    Args:
        resources: Resource requirements mapping

    Raises:
        ValidationError: If the resource requirements are invalid
    """
    if not resources:
        return

    valid_resources = {"cpu", "memory", "storage", "ephemeral-storage"}

    for section in ["requests", "limits"]:
        if section not in resources:
            continue

        resource_section = resources[section]
        if not isinstance(resource_section, dict):
            raise ValidationError(
                f"Resources {section} must be a dictionary", field=section
            )

        for resource_name, quantity in resource_section.items():
            if resource_name not in valid_resources:
                logger.warning(f"Unknown resource type: {resource_name}")

            if isinstance(quantity, bool) or not isinstance(
                quantity, (str, int, float)
            ):
                raise ValidationError(
                    f"Resource quantity for {resource_name} must be a string or number",
                    field=f"{section}.{resource_name}",
                )

    logger.debug("Validated resource limits")


def validate_azure_container(container: str) -> None:
    """
    Validate an Azure blob container name.

    Args:
        container: Container name

    Raises:
        ValidationError: If the name breaks Azure's naming rules
    """
    if not AZURE_CONTAINER_MIN_LENGTH <= len(container) <= AZURE_CONTAINER_MAX_LENGTH:
        raise ValidationError(
            f"Azure container '{container}' must be between "
            f"{AZURE_CONTAINER_MIN_LENGTH} and {AZURE_CONTAINER_MAX_LENGTH} characters"
        )

    if not re.fullmatch(AZURE_CONTAINER_PATTERN, container):
        raise ValidationError(
            f"Azure container '{container}' must consist of lowercase letters and "
            "digits separated by single hyphens"
        )
