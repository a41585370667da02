"""Approval-rate disparity audit across experience, education and job."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Sequence

from ...schemas.application import LIKELY_QUALIFIED, ApplicationRecord
from ..rates import percentage, round_half_up, spread

NOT_SPECIFIED = "Not Specified"
UNKNOWN_JOB = "Unknown"


@dataclass
class FairnessConfig:
    """Configuration for the fairness auditor.

    ``experience_buckets`` pairs each bucket label with its lower bound in
    years, listed in ascending order.
    """

    disparity_threshold: float = 20.0
    experience_buckets: list[tuple[str, float]] = field(
        default_factory=lambda: [("0-2", 0.0), ("3-5", 3.0), ("6-10", 6.0), ("10+", 10.0)]
    )
    grades: tuple[str, str, str] = ("A+", "B", "C")


class FairnessAuditor:
    """Compute approval-rate breakdowns, disparities and bias alerts."""

    name = "fairness"

    def __init__(self, *, config: FairnessConfig | None = None) -> None:
        self._config = config or FairnessConfig()

    def aggregate(
        self,
        applications: Sequence[ApplicationRecord],
        context: dict[str, Any],
    ) -> dict[str, Any]:
        by_experience = self._breakdown(
            applications,
            self._experience_bucket,
            fixed_groups=[label for label, _ in self._config.experience_buckets],
        )
        by_education = self._breakdown(
            (app for app in applications if app.education),
            self._education_bucket,
        )
        by_job = self._breakdown(applications, lambda app: app.job_class or UNKNOWN_JOB)

        experience_disparity = self._disparity(by_experience)
        education_disparity = self._disparity(by_education)
        job_disparity = self._disparity(by_job)

        alerts = []
        for dimension, disparity in (
            ("Experience", experience_disparity),
            ("Education", education_disparity),
        ):
            if disparity > self._config.disparity_threshold:
                alerts.append(
                    {
                        "type": "warning",
                        "dimension": dimension.lower(),
                        "disparity": disparity,
                        "message": f"{dimension} bias: {round_half_up(disparity):.0f}% approval difference",
                    }
                )

        return {
            "aggregator": self.name,
            "sections": {
                "bias_analysis": {
                    "by_experience": by_experience,
                    "by_education": by_education,
                    "by_job": by_job,
                    "experience_disparity": experience_disparity,
                    "education_disparity": education_disparity,
                    "job_disparity": job_disparity,
                    "alerts": alerts,
                    "fairness_grade": self._grade(len(alerts)),
                }
            },
        }

    def _experience_bucket(self, application: ApplicationRecord) -> str:
        years = application.total_experience_years or 0
        label = self._config.experience_buckets[0][0]
        for bucket_label, lower_bound in self._config.experience_buckets:
            if years >= lower_bound:
                label = bucket_label
        return label

    @staticmethod
    def _education_bucket(application: ApplicationRecord) -> str:
        return application.education[0].degree_level or NOT_SPECIFIED

    @staticmethod
    def _breakdown(
        applications: Iterable[ApplicationRecord],
        key: Callable[[ApplicationRecord], str],
        *,
        fixed_groups: list[str] | None = None,
    ) -> list[dict[str, Any]]:
        counts: dict[str, list[int]] = {group: [0, 0] for group in fixed_groups or []}
        for app in applications:
            entry = counts.setdefault(key(app), [0, 0])
            entry[0] += 1
            if app.ai_label == LIKELY_QUALIFIED:
                entry[1] += 1

        buckets = [
            {
                "group": group,
                "count": total,
                "qualified": qualified,
                "rate": percentage(qualified, total),
            }
            for group, (total, qualified) in counts.items()
        ]
        if fixed_groups is None:
            buckets.sort(key=lambda bucket: (-bucket["count"], bucket["group"]))
        return buckets

    @staticmethod
    def _disparity(buckets: list[dict[str, Any]]) -> float:
        return spread(bucket["rate"] for bucket in buckets if bucket["count"] > 0)

    def _grade(self, alert_count: int) -> str:
        grades = self._config.grades
        return grades[min(alert_count, len(grades) - 1)]
