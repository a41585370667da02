from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

UNKNOWN_DEPARTMENT = "Unknown"


class JobRecord(BaseModel):
    """Job opening keyed by its job class."""

    job_class: str
    title: str | None = None
    department: str = UNKNOWN_DEPARTMENT
    minimum_qualifications: list[str] = Field(default_factory=list)

    model_config = ConfigDict(extra="allow", frozen=True)

    @field_validator("department", mode="before")
    @classmethod
    def _default_department(cls, value: object) -> object:
        if value is None or (isinstance(value, str) and not value.strip()):
            return UNKNOWN_DEPARTMENT
        return value
