"""Calendar-bucketed time series."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Sequence

from ...schemas.application import (
    LIKELY_NOT_QUALIFIED,
    LIKELY_QUALIFIED,
    STATUS_QUALIFIED,
    ApplicationRecord,
)
from ..dates import Granularity, bucket_key, hours_between, parse_timestamp
from ..labels import agrees_with_reviewer, is_false_negative, is_false_positive
from ..rates import percentage


@dataclass
class TrendsConfig:
    """Configuration for the time-series bucketer."""

    max_points: int = 12
    default_granularity: Granularity = "week"


class TimeSeriesAggregator:
    """Build the volume, AI accuracy and time-to-hire series."""

    name = "trends"

    def __init__(self, *, config: TrendsConfig | None = None) -> None:
        self._config = config or TrendsConfig()

    def aggregate(
        self,
        applications: Sequence[ApplicationRecord],
        context: dict[str, Any],
    ) -> dict[str, Any]:
        request = context.get("request")
        granularity = getattr(request, "granularity", None) or self._config.default_granularity

        return {
            "aggregator": self.name,
            "sections": {
                "hiring_trends": self._hiring_trends(applications, granularity),
                "ai_performance_over_time": self._ai_performance(applications, granularity),
                "time_to_hire_data": self._time_to_hire(applications),
            },
        }

    def _hiring_trends(
        self,
        applications: Iterable[ApplicationRecord],
        granularity: Granularity,
    ) -> list[dict[str, Any]]:
        buckets: dict[str, dict[str, Any]] = {}
        for app in applications:
            submitted = parse_timestamp(app.submitted_date)
            if submitted is None:
                continue
            period, label = bucket_key(submitted, granularity)
            bucket = buckets.setdefault(
                period,
                {"period": period, "label": label, "applications": 0, "qualified": 0, "rejected": 0},
            )
            bucket["applications"] += 1
            if app.ai_label == LIKELY_QUALIFIED:
                bucket["qualified"] += 1
            elif app.ai_label == LIKELY_NOT_QUALIFIED:
                bucket["rejected"] += 1
        return self._latest(buckets)

    def _ai_performance(
        self,
        applications: Iterable[ApplicationRecord],
        granularity: Granularity,
    ) -> list[dict[str, Any]]:
        buckets: dict[str, dict[str, Any]] = {}
        for app in applications:
            if not app.is_reviewed:
                continue
            activity = parse_timestamp(app.reviewed_date) or parse_timestamp(app.submitted_date)
            if activity is None:
                continue
            period, label = bucket_key(activity, granularity)
            bucket = buckets.setdefault(
                period,
                {
                    "period": period,
                    "label": label,
                    "correct": 0,
                    "total": 0,
                    "false_pos": 0,
                    "false_neg": 0,
                },
            )
            bucket["total"] += 1
            if agrees_with_reviewer(app):
                bucket["correct"] += 1
            elif is_false_positive(app):
                bucket["false_pos"] += 1
            elif is_false_negative(app):
                bucket["false_neg"] += 1

        points = self._latest(buckets)
        for point in points:
            point["accuracy"] = percentage(point["correct"], point["total"])
        return points

    def _time_to_hire(self, applications: Iterable[ApplicationRecord]) -> list[dict[str, Any]]:
        buckets: dict[str, dict[str, Any]] = {}
        for app in applications:
            if app.status != STATUS_QUALIFIED:
                continue
            submitted = parse_timestamp(app.submitted_date)
            hours = hours_between(app.submitted_date, app.reviewed_date)
            if submitted is None or hours is None:
                continue
            period, label = bucket_key(submitted, "month")
            bucket = buckets.setdefault(
                period,
                {"period": period, "label": label, "hires": 0, "total_time": 0},
            )
            bucket["hires"] += 1
            bucket["total_time"] += hours

        points = self._latest(buckets)
        for point in points:
            hires = point["hires"]
            point["avg_time"] = round(point["total_time"] / hires, 1) if hires else 0.0
        return points

    def _latest(self, buckets: dict[str, dict[str, Any]]) -> list[dict[str, Any]]:
        ordered = [buckets[key] for key in sorted(buckets)]
        if self._config.max_points <= 0:
            return []
        return ordered[-self._config.max_points :]
