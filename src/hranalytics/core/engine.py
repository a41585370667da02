"""Analytics engine orchestration and report assembly."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Protocol, Sequence, runtime_checkable

import pendulum
import structlog

from .. import __version__
from ..schemas import ApplicationRecord, Report, Snapshot
from .dates import parse_timestamp
from .window import AnalyticsRequest, FilterResult, RecordFilter


@runtime_checkable
class Aggregator(Protocol):
    """Aggregator contract for computing one or more report sections."""

    name: str

    def aggregate(
        self,
        applications: Sequence[ApplicationRecord],
        context: dict[str, Any],
    ) -> dict[str, Any]:
        """Return ``{"aggregator": name, "sections": {...}}`` for the given records."""


@dataclass(slots=True)
class AggregationResult:
    """Normalized aggregator output."""

    aggregator: str
    sections: dict[str, Any] = field(default_factory=dict)


class AnalyticsEngine:
    """Runs every aggregator over a filtered snapshot and assembles the report.

    Aggregators are independent pure functions; with ``max_workers > 1`` they
    run on a thread pool, and results are merged in registration order so the
    report is identical to a sequential run.
    """

    def __init__(
        self,
        aggregators: Iterable[Aggregator],
        *,
        record_filter: RecordFilter | None = None,
        max_workers: int | None = None,
        now_provider: Callable[[], pendulum.DateTime] | None = None,
    ) -> None:
        self._aggregators = list(aggregators)
        for aggregator in self._aggregators:
            if not isinstance(aggregator, Aggregator):
                raise TypeError(f"{aggregator!r} does not implement the aggregator interface.")
        self._filter = record_filter or RecordFilter()
        self._max_workers = max_workers or 1
        self._now_provider = now_provider or (lambda: pendulum.now("UTC"))
        self._logger = structlog.get_logger(__name__)

    def run(self, snapshot: Snapshot, request: AnalyticsRequest | None = None) -> Report:
        request = request or AnalyticsRequest()
        now = parse_timestamp(request.now) or self._now_provider().in_tz("UTC")
        selection = self._filter.apply(snapshot.applications, request, now=now)
        if selection.skipped:
            self._logger.warning(
                "records.skipped",
                count=selection.skipped,
                reason="unparsable submitted_date",
            )

        context: dict[str, Any] = {
            "jobs": snapshot.jobs,
            "sources": snapshot.sources,
            "feedback": snapshot.feedback,
            "request": request,
            "now": now,
        }
        results = [
            self._normalize_result(raw) for raw in self._collect(selection.records, context)
        ]

        report = self._assemble(results, snapshot, request, selection, now)
        self._logger.info(
            "report.generated",
            total=report.stats.total,
            skipped=selection.skipped,
            window_days=report.time_range_days,
            granularity=request.granularity,
            fairness_grade=report.bias_analysis.fairness_grade,
        )
        return report

    def _collect(
        self,
        applications: Sequence[ApplicationRecord],
        context: dict[str, Any],
    ) -> list[dict[str, Any]]:
        if self._max_workers <= 1 or len(self._aggregators) <= 1:
            return [aggregator.aggregate(applications, context) for aggregator in self._aggregators]
        with ThreadPoolExecutor(max_workers=self._max_workers) as executor:
            futures = [
                executor.submit(aggregator.aggregate, applications, context)
                for aggregator in self._aggregators
            ]
            return [future.result() for future in futures]

    @staticmethod
    def _normalize_result(payload: dict[str, Any]) -> AggregationResult:
        aggregator = payload.get("aggregator")
        sections = payload.get("sections")
        if aggregator is None:
            raise ValueError("Aggregator result must include 'aggregator'.")
        if not isinstance(sections, dict):
            raise ValueError("Aggregator result 'sections' must be a mapping.")
        return AggregationResult(aggregator=str(aggregator), sections=dict(sections))

    @staticmethod
    def _assemble(
        results: list[AggregationResult],
        snapshot: Snapshot,
        request: AnalyticsRequest,
        selection: FilterResult,
        now: pendulum.DateTime,
    ) -> Report:
        sections: dict[str, Any] = {}
        owners: dict[str, str] = {}
        for result in results:
            for key, value in result.sections.items():
                if key in owners:
                    raise ValueError(
                        f"Section {key!r} produced by both {owners[key]!r} and {result.aggregator!r}."
                    )
                owners[key] = result.aggregator
                sections[key] = value

        unknown = set(sections) - set(Report.model_fields)
        if unknown:
            raise ValueError(f"Unknown report sections: {sorted(unknown)}")

        return Report.model_validate(
            {
                **sections,
                "generated_at": now.to_iso8601_string(),
                "time_range_days": request.effective_window_days(),
                "time_range": {
                    "start": selection.start.to_iso8601_string() if selection.start else None,
                    "end": selection.end.to_iso8601_string() if selection.end else None,
                },
                "metadata": {
                    "app_version": __version__,
                    "record_count": len(snapshot.applications),
                    "filtered_count": len(selection.records),
                    "skipped_records": selection.skipped,
                },
            }
        )
