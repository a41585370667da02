"""Reviewer feedback on individual AI predictions."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

AGREEMENT_TYPES: tuple[str, ...] = ("agree", "disagree", "partial")

ISSUE_CATEGORIES: tuple[str, ...] = (
    "false_positive",
    "false_negative",
    "confidence_mismatch",
    "missing_context",
    "correct",
    "other",
)


class MQFeedback(BaseModel):
    """Reviewer correction of a single minimum qualification assessment."""

    requirement: str = ""
    ai_assessment: str | None = None
    correct_assessment: str | None = None
    notes: str | None = None

    model_config = ConfigDict(extra="allow", frozen=True)


class FeedbackRecord(BaseModel):
    """Structured reviewer feedback attached to an application.

    ``agreement`` and ``issue_category`` are plain strings; values outside
    ``AGREEMENT_TYPES`` / ``ISSUE_CATEGORIES`` still count toward the
    feedback total.
    """

    application_id: str | None = None
    ai_prediction: str | None = None
    ai_confidence: int | None = Field(default=None, ge=0, le=100)
    reviewer_decision: str | None = None
    agreement: str | None = None
    issue_category: str | None = None
    feedback_notes: str | None = None
    mq_specific_feedback: list[MQFeedback] = Field(default_factory=list)
    reviewer_email: str | None = None
    submitted_date: str | None = None

    model_config = ConfigDict(extra="allow", frozen=True)

    def category(self) -> str:
        if self.issue_category in ISSUE_CATEGORIES:
            return self.issue_category
        return "other"

    def unrecognized_fields(self) -> dict[str, str]:
        invalid: dict[str, str] = {}
        if self.agreement is not None and self.agreement not in AGREEMENT_TYPES:
            invalid["agreement"] = self.agreement
        if self.issue_category is not None and self.issue_category not in ISSUE_CATEGORIES:
            invalid["issue_category"] = self.issue_category
        return invalid
