"""
Request admission configuration.

Checks the read and write limit triples. Negative values are invalid input:
they are clamped to zero and flagged with an advisory notice, never
rejected. The limits themselves are enforced by the registry's admission
layer, not here.
"""

import logging
from dataclasses import dataclass
from datetime import timedelta

from imageregistry_config.constants import NOTICE_INVALID_ADMISSION_LIMIT
from imageregistry_config.models.common import format_go_duration
from imageregistry_config.models.notices import AdvisoryNotice
from imageregistry_config.models.requests import RequestLimits, RequestsConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NormalizedRequests:
    requests: RequestsConfig | None
    notices: tuple[AdvisoryNotice, ...] = ()


def _clamped(field: str, value: object, zero: object) -> AdvisoryNotice:
    return AdvisoryNotice(
        code=NOTICE_INVALID_ADMISSION_LIMIT,
        field=field,
        message=f"negative value {value} clamped to {zero}",
    )


def clamp_limits(
    limits: RequestLimits | None, field: str
) -> tuple[RequestLimits | None, list[AdvisoryNotice]]:
    """
    Clamp negative members of one limit triple to zero.

    Args:
        limits: The read or write limits, if set
        field: Dotted wire path of the triple

    Returns:
        The clamped limits (the same object when nothing changed) and notices
    """
    if limits is None:
        return None, []

    update: dict[str, object] = {}
    notices: list[AdvisoryNotice] = []

    if limits.max_running is not None and limits.max_running < 0:
        update["max_running"] = 0
        notices.append(_clamped(f"{field}.maxRunning", limits.max_running, 0))

    if limits.max_in_queue is not None and limits.max_in_queue < 0:
        update["max_in_queue"] = 0
        notices.append(_clamped(f"{field}.maxInQueue", limits.max_in_queue, 0))

    wait = limits.max_wait_in_queue
    if wait is not None and wait < timedelta(0):
        update["max_wait_in_queue"] = timedelta(0)
        notices.append(
            _clamped(f"{field}.maxWaitInQueue", format_go_duration(wait), "0s")
        )

    if not update:
        return limits, notices
    return limits.model_copy(update=update), notices


def normalize_requests(requests: RequestsConfig | None) -> NormalizedRequests:
    """Clamp both limit triples, returning a new value when anything changed."""
    if requests is None:
        return NormalizedRequests(requests=None)

    read, read_notices = clamp_limits(requests.read, "spec.requests.read")
    write, write_notices = clamp_limits(requests.write, "spec.requests.write")
    notices = tuple(read_notices + write_notices)

    if not notices:
        return NormalizedRequests(requests=requests)

    logger.debug(f"Clamped {len(notices)} negative admission limit(s)")
    return NormalizedRequests(
        requests=requests.model_copy(update={"read": read, "write": write}),
        notices=notices,
    )
