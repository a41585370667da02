from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


class CandidateSourceRecord(BaseModel):
    """Acquisition channel entry for a single applicant."""

    source_channel: str = "Unknown"
    cost_per_applicant: float = Field(default=0.0, ge=0)
    converted_to_hire: bool = False
    application_id: str | None = None

    model_config = ConfigDict(extra="allow", frozen=True)

    @field_validator("source_channel", mode="before")
    @classmethod
    def _default_channel(cls, value: object) -> object:
        if value is None or (isinstance(value, str) and not value.strip()):
            return "Unknown"
        return value

    @field_validator("cost_per_applicant", mode="before")
    @classmethod
    def _default_cost(cls, value: object) -> object:
        return 0.0 if value is None else value
