"""Label taxonomy: status to human label mapping and override transitions."""

from __future__ import annotations

from enum import Enum

from ..schemas.application import (
    LIKELY_NOT_QUALIFIED,
    LIKELY_QUALIFIED,
    NEEDS_REVIEW,
    STATUS_NOT_QUALIFIED,
    STATUS_QUALIFIED,
    ApplicationRecord,
)


def human_label(status: str | None) -> str:
    """Map a stored review status onto the AI label space.

    Any status other than qualified / not_qualified (pending included) maps
    to Needs Review.
    """
    if status == STATUS_QUALIFIED:
        return LIKELY_QUALIFIED
    if status == STATUS_NOT_QUALIFIED:
        return LIKELY_NOT_QUALIFIED
    return NEEDS_REVIEW


def agrees_with_reviewer(application: ApplicationRecord) -> bool:
    return application.ai_label == human_label(application.status)


def is_false_positive(application: ApplicationRecord) -> bool:
    return (
        application.ai_label == LIKELY_QUALIFIED
        and application.status == STATUS_NOT_QUALIFIED
    )


def is_false_negative(application: ApplicationRecord) -> bool:
    return (
        application.ai_label == LIKELY_NOT_QUALIFIED
        and application.status == STATUS_QUALIFIED
    )


class Transition(str, Enum):
    """Directed AI label to human label override."""

    QUALIFIED_TO_NOT_QUALIFIED = "Qualified → Not Qualified"
    NOT_QUALIFIED_TO_QUALIFIED = "Not Qualified → Qualified"
    QUALIFIED_TO_REVIEW = "Qualified → Review"
    NOT_QUALIFIED_TO_REVIEW = "Not Qualified → Review"
    REVIEW_TO_QUALIFIED = "Review → Qualified"
    REVIEW_TO_NOT_QUALIFIED = "Review → Not Qualified"


TRANSITIONS: dict[tuple[str, str], Transition] = {
    (LIKELY_QUALIFIED, LIKELY_NOT_QUALIFIED): Transition.QUALIFIED_TO_NOT_QUALIFIED,
    (LIKELY_NOT_QUALIFIED, LIKELY_QUALIFIED): Transition.NOT_QUALIFIED_TO_QUALIFIED,
    (LIKELY_QUALIFIED, NEEDS_REVIEW): Transition.QUALIFIED_TO_REVIEW,
    (LIKELY_NOT_QUALIFIED, NEEDS_REVIEW): Transition.NOT_QUALIFIED_TO_REVIEW,
    (NEEDS_REVIEW, LIKELY_QUALIFIED): Transition.REVIEW_TO_QUALIFIED,
    (NEEDS_REVIEW, LIKELY_NOT_QUALIFIED): Transition.REVIEW_TO_NOT_QUALIFIED,
}


def classify_override(application: ApplicationRecord) -> Transition | None:
    """Return the transition for an override, or None if the AI label is unknown."""
    return TRANSITIONS.get((application.ai_label or "", human_label(application.status)))
