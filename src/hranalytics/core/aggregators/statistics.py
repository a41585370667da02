"""Core screening statistics."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Sequence

from ...schemas.application import (
    LIKELY_NOT_QUALIFIED,
    LIKELY_QUALIFIED,
    NEEDS_REVIEW,
    STATUS_PENDING,
    ApplicationRecord,
)
from ..dates import hours_between
from ..labels import agrees_with_reviewer, is_false_negative, is_false_positive
from ..rates import mean, percentage


@dataclass
class StatisticsConfig:
    """Configuration for the core statistics aggregator."""

    processing_time_digits: int = 1


class StatisticsAggregator:
    """Totals, label distribution, processing time and AI/human agreement."""

    name = "statistics"

    def __init__(self, *, config: StatisticsConfig | None = None) -> None:
        self._config = config or StatisticsConfig()

    def aggregate(
        self,
        applications: Sequence[ApplicationRecord],
        context: dict[str, Any],
    ) -> dict[str, Any]:
        total = len(applications)
        processed = sum(1 for app in applications if app.status != STATUS_PENDING)
        label_counts = {
            label: sum(1 for app in applications if app.ai_label == label)
            for label in (LIKELY_QUALIFIED, NEEDS_REVIEW, LIKELY_NOT_QUALIFIED)
        }

        processing_hours = [
            hours
            for hours in (
                hours_between(app.submitted_date, app.reviewed_date) for app in applications
            )
            if hours is not None
        ]

        reviewed = [app for app in applications if app.is_reviewed]
        agreements = sum(1 for app in reviewed if agrees_with_reviewer(app))
        false_positives = sum(1 for app in reviewed if is_false_positive(app))
        false_negatives = sum(1 for app in reviewed if is_false_negative(app))

        return {
            "aggregator": self.name,
            "sections": {
                "stats": {
                    "total": total,
                    "processed": processed,
                    "remaining": total - processed,
                    "qualified": label_counts[LIKELY_QUALIFIED],
                    "needs_review": label_counts[NEEDS_REVIEW],
                    "not_qualified": label_counts[LIKELY_NOT_QUALIFIED],
                    "avg_processing_time": mean(
                        processing_hours, digits=self._config.processing_time_digits
                    ),
                    "ai_accuracy": percentage(agreements, len(reviewed)),
                    "false_positives": false_positives,
                    "false_negatives": false_negatives,
                    "reviewed_apps": len(reviewed),
                    "overall_precision": percentage(
                        len(reviewed) - false_positives - false_negatives,
                        len(reviewed),
                    ),
                    "qualification_rate": percentage(label_counts[LIKELY_QUALIFIED], total),
                }
            },
        }
