"""Applicant records produced by the screening oracle and review workflow."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

LIKELY_QUALIFIED = "Likely Qualified"
NEEDS_REVIEW = "Needs Review"
LIKELY_NOT_QUALIFIED = "Likely Not Qualified"

AI_LABELS: tuple[str, ...] = (LIKELY_QUALIFIED, NEEDS_REVIEW, LIKELY_NOT_QUALIFIED)

STATUS_PENDING = "pending"
STATUS_REVIEWED = "reviewed"
STATUS_QUALIFIED = "qualified"
STATUS_NOT_QUALIFIED = "not_qualified"
STATUS_NEEDS_REVIEW = "needs_review"

APPLICATION_STATUSES: tuple[str, ...] = (
    STATUS_PENDING,
    STATUS_REVIEWED,
    STATUS_QUALIFIED,
    STATUS_NOT_QUALIFIED,
    STATUS_NEEDS_REVIEW,
)

MQ_STATUSES: tuple[str, ...] = ("pass", "fail", "unclear")


class EducationEntry(BaseModel):
    """Structured education history entry extracted from a resume."""

    degree_level: str | None = None
    institution: str | None = None
    field_of_study: str | None = None
    graduation_year: int | None = None

    model_config = ConfigDict(extra="allow", frozen=True)


class MQResult(BaseModel):
    """Per-requirement minimum qualification assessment."""

    requirement: str = ""
    status: str = "unclear"
    confidence: float | None = Field(default=None, ge=0, le=100)
    evidence: str | None = None

    model_config = ConfigDict(extra="allow", frozen=True)


class ApplicationRecord(BaseModel):
    """One resume submission with its AI classification and review state.

    ``status`` and ``ai_label`` are stored as plain strings: values outside
    ``APPLICATION_STATUSES`` / ``AI_LABELS`` are kept so they still count in
    totals, and simply never match a labelled bucket.
    """

    id: str | None = None
    job_class: str | None = None
    candidate_name: str | None = None
    submitted_date: str | None = None
    reviewed_date: str | None = None
    status: str = STATUS_PENDING
    ai_label: str | None = None
    confidence: int | None = Field(default=None, ge=0, le=100)
    total_experience_years: float | None = Field(default=None, ge=0)
    relevant_experience_years: float | None = Field(default=None, ge=0)
    education: list[EducationEntry] = Field(default_factory=list)
    mq_results: list[MQResult] = Field(default_factory=list)
    reviewed_by: str | None = None

    model_config = ConfigDict(extra="allow", frozen=True)

    @property
    def is_reviewed(self) -> bool:
        return bool(self.reviewed_by)

    def unrecognized_fields(self) -> dict[str, str]:
        """Return enumerated fields whose values fall outside the known sets."""
        invalid: dict[str, str] = {}
        if self.status not in APPLICATION_STATUSES:
            invalid["status"] = self.status
        if self.ai_label is not None and self.ai_label not in AI_LABELS:
            invalid["ai_label"] = self.ai_label
        for idx, result in enumerate(self.mq_results):
            if result.status not in MQ_STATUSES:
                invalid[f"mq_results.{idx}.status"] = result.status
        return invalid
