"""Analytics request object and the record filter it drives."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

import pendulum
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ..schemas import ApplicationRecord
from .dates import Granularity, parse_period_end, parse_timestamp

WINDOW_PRESETS: tuple[int, ...] = (7, 30, 90, 365)


class AnalyticsRequest(BaseModel):
    """Immutable description of what a report should cover.

    ``start`` takes precedence over ``window_days``; ``window_days=None``
    with no explicit range selects the whole snapshot.
    """

    window_days: int | None = Field(default=30, gt=0)
    start: str | None = None
    end: str | None = None
    granularity: Granularity = "week"
    now: str | None = None
    job_classes: tuple[str, ...] = ()
    ai_labels: tuple[str, ...] = ()
    statuses: tuple[str, ...] = ()
    min_confidence: int | None = Field(default=None, ge=0, le=100)
    max_confidence: int | None = Field(default=None, ge=0, le=100)

    model_config = ConfigDict(frozen=True, extra="forbid")

    @field_validator("start", "end", "now")
    @classmethod
    def _validate_timestamp(cls, value: str | None) -> str | None:
        if value is not None and parse_timestamp(value) is None:
            raise ValueError(f"Unparsable timestamp: {value!r}")
        return value

    @model_validator(mode="after")
    def _validate_ranges(self) -> "AnalyticsRequest":
        if self.start and self.end:
            if parse_period_end(self.end) < parse_timestamp(self.start):
                raise ValueError("end must not precede start")
        if (
            self.min_confidence is not None
            and self.max_confidence is not None
            and self.max_confidence < self.min_confidence
        ):
            raise ValueError("max_confidence must not be below min_confidence")
        return self

    @property
    def is_bounded(self) -> bool:
        return bool(self.start or self.end or self.window_days)

    def effective_window_days(self) -> int | None:
        return None if self.start else self.window_days

    def cache_key(self) -> str:
        return self.model_dump_json()


@dataclass(slots=True)
class FilterResult:
    """Records selected for a request plus the resolved time bounds."""

    records: tuple[ApplicationRecord, ...]
    skipped: int
    start: pendulum.DateTime | None
    end: pendulum.DateTime | None


class RecordFilter:
    """Restrict the applicant snapshot to the requested window and filters."""

    def apply(
        self,
        applications: Iterable[ApplicationRecord],
        request: AnalyticsRequest,
        *,
        now: pendulum.DateTime,
    ) -> FilterResult:
        start, end = self.resolve_bounds(request, now)
        selected: list[ApplicationRecord] = []
        skipped = 0

        for application in applications:
            if request.is_bounded:
                submitted = parse_timestamp(application.submitted_date)
                if submitted is None:
                    skipped += 1
                    continue
                if start is not None and submitted < start:
                    continue
                if end is not None and submitted > end:
                    continue
            if not self._matches(application, request):
                continue
            selected.append(application)

        return FilterResult(records=tuple(selected), skipped=skipped, start=start, end=end)

    @staticmethod
    def resolve_bounds(
        request: AnalyticsRequest,
        now: pendulum.DateTime,
    ) -> tuple[pendulum.DateTime | None, pendulum.DateTime | None]:
        end = parse_period_end(request.end)
        if request.start:
            return parse_timestamp(request.start), end or now
        if request.window_days:
            return now.subtract(days=request.window_days), end
        return None, end

    @staticmethod
    def _matches(application: ApplicationRecord, request: AnalyticsRequest) -> bool:
        if request.job_classes and application.job_class not in request.job_classes:
            return False
        if request.ai_labels and application.ai_label not in request.ai_labels:
            return False
        if request.statuses and application.status not in request.statuses:
            return False
        if request.min_confidence is not None or request.max_confidence is not None:
            if application.confidence is None:
                return False
            if request.min_confidence is not None and application.confidence < request.min_confidence:
                return False
            if request.max_confidence is not None and application.confidence > request.max_confidence:
                return False
        return True
