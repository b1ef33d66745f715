"""
Request admission limit models.

Read and write limits are independent triples consumed by the admission
layer of the running registry. Zero or unset means no limit.
"""

from pydantic import Field

from imageregistry_config.models.common import Duration, RegistryModel


class RequestLimits(RegistryModel):
    """Limits on running, queued and waiting registry API requests."""

    max_running: int | None = Field(
        None, alias="maxRunning", description="Maximum in-flight API requests"
    )
    max_in_queue: int | None = Field(
        None, alias="maxInQueue", description="Maximum queued API requests"
    )
    max_wait_in_queue: Duration | None = Field(
        None,
        alias="maxWaitInQueue",
        description="Maximum time a request may wait in the queue before rejection",
    )


class RequestsConfig(RegistryModel):
    """Admission limits for registry reads and writes."""

    read: RequestLimits | None = Field(None, description="Limits for image reads")
    write: RequestLimits | None = Field(None, description="Limits for image writes")
