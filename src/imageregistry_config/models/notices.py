"""Advisory notices: non-fatal diagnostics returned next to a canonical config."""

from pydantic import Field

from imageregistry_config.models.common import RegistryModel


class AdvisoryNotice(RegistryModel):
    """A default applied, a deprecated field conflict, or a value clamped."""

    code: str = Field(..., description="Notice code, e.g. InvalidAdmissionLimit")
    field: str = Field(..., description="Dotted wire path the notice refers to")
    message: str = Field(..., description="Human-readable explanation")

    def __str__(self) -> str:
        return f"{self.code} ({self.field}): {self.message}"
