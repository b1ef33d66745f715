"""httpSecret generation; a secret that is already set is never regenerated."""

import logging
import secrets
from collections.abc import Callable

from imageregistry_config.constants import HTTP_SECRET_BYTES
from imageregistry_config.models.registry import ImageRegistrySpec

logger = logging.getLogger(__name__)


def generate_http_secret() -> str:
    return secrets.token_hex(HTTP_SECRET_BYTES)


def ensure_http_secret(
    spec: ImageRegistrySpec,
    token_factory: Callable[[], str] = generate_http_secret,
) -> ImageRegistrySpec:
    """
    Return a spec with httpSecret set.

    The same spec object is returned when a secret is already present, so
    a stored secret stays stable across reconciliations.
    """
    if spec.http_secret:
        return spec

    logger.info("Generating httpSecret for the registry")
    return spec.model_copy(update={"http_secret": token_factory()})
