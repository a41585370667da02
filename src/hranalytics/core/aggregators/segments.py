"""Department and acquisition channel breakdowns."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Iterable, Sequence

from ...schemas.application import STATUS_QUALIFIED, ApplicationRecord
from ...schemas.job import UNKNOWN_DEPARTMENT, JobRecord
from ...schemas.source import CandidateSourceRecord
from ..dates import hours_between
from ..rates import mean, percentage, safe_ratio


@dataclass
class SegmentsConfig:
    """Configuration for the segment aggregator."""

    top_departments: int = 8
    cost_digits: int = 2


class SegmentAggregator:
    """Group applications by department and sources by channel."""

    name = "segments"

    def __init__(self, *, config: SegmentsConfig | None = None) -> None:
        self._config = config or SegmentsConfig()

    def aggregate(
        self,
        applications: Sequence[ApplicationRecord],
        context: dict[str, Any],
    ) -> dict[str, Any]:
        jobs: Iterable[JobRecord] = context.get("jobs") or ()
        sources: Iterable[CandidateSourceRecord] = context.get("sources") or ()
        return {
            "aggregator": self.name,
            "sections": {
                "department_stats": self._departments(applications, jobs),
                "source_effectiveness": self._sources(sources),
            },
        }

    def _departments(
        self,
        applications: Iterable[ApplicationRecord],
        jobs: Iterable[JobRecord],
    ) -> list[dict[str, Any]]:
        departments = self._department_lookup(jobs)
        grouped: dict[str, dict[str, Any]] = {}
        for app in applications:
            department = departments.get(app.job_class or "", UNKNOWN_DEPARTMENT)
            entry = grouped.setdefault(department, {"total": 0, "qualified": 0, "hours": []})
            entry["total"] += 1
            if app.status == STATUS_QUALIFIED:
                entry["qualified"] += 1
            hours = hours_between(app.submitted_date, app.reviewed_date)
            if hours is not None:
                entry["hours"].append(hours)

        rows = [
            {
                "department": department,
                "applications": data["total"],
                "qualified": data["qualified"],
                "offer_acceptance": percentage(data["qualified"], data["total"]),
                "avg_time_to_hire": mean(data["hours"]),
            }
            for department, data in grouped.items()
        ]
        rows.sort(key=lambda row: (-row["applications"], row["department"]))
        return rows[: self._config.top_departments]

    @staticmethod
    def _department_lookup(jobs: Iterable[JobRecord]) -> dict[str, str]:
        lookup: dict[str, str] = {}
        for job in jobs:
            lookup.setdefault(job.job_class, job.department)
        return lookup

    def _sources(self, sources: Iterable[CandidateSourceRecord]) -> list[dict[str, Any]]:
        grouped: dict[str, dict[str, Any]] = {}
        for source in sources:
            entry = grouped.setdefault(
                source.source_channel,
                {"applications": 0, "conversions": 0, "costs": []},
            )
            entry["applications"] += 1
            if source.converted_to_hire:
                entry["conversions"] += 1
            entry["costs"].append(source.cost_per_applicant)

        digits = self._config.cost_digits
        rows = []
        for channel, data in grouped.items():
            total_cost = math.fsum(data["costs"])
            rows.append(
                {
                    "channel": channel,
                    "applications": data["applications"],
                    "conversions": data["conversions"],
                    "conversion_rate": percentage(data["conversions"], data["applications"]),
                    "total_cost": round(total_cost, digits),
                    "cost_per_hire": safe_ratio(total_cost, data["conversions"], digits=digits),
                }
            )
        rows.sort(key=lambda row: (-row["conversion_rate"], row["channel"]))
        return rows
