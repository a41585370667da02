from __future__ import annotations

from typing import Any

from hranalytics.core import SegmentAggregator
from hranalytics.core.aggregators import SegmentsConfig
from hranalytics.schemas import ApplicationRecord, CandidateSourceRecord, JobRecord


def build_application(**kwargs: Any) -> ApplicationRecord:
    defaults: dict[str, Any] = {
        "id": "A-001",
        "job_class": "Analyst",
        "submitted_date": "2026-10-13T09:00:00Z",
        "status": "pending",
    }
    defaults.update(kwargs)
    return ApplicationRecord(**defaults)


def build_sources(channel: str, count: int, conversions: int, cost: float) -> list[CandidateSourceRecord]:
    return [
        CandidateSourceRecord(
            source_channel=channel,
            cost_per_applicant=cost,
            converted_to_hire=idx < conversions,
        )
        for idx in range(count)
    ]


def test_department_stats_resolve_departments_from_jobs():
    jobs = [
        JobRecord(job_class="Analyst", department="Finance"),
        JobRecord(job_class="Clerk", department=""),
    ]
    applications = [
        build_application(
            job_class="Analyst",
            status="qualified",
            submitted_date="2026-10-10T00:00:00Z",
            reviewed_date="2026-10-11T00:00:00Z",
        ),
        build_application(job_class="Analyst", status="not_qualified"),
        build_application(job_class="Analyst"),
        build_application(job_class="Clerk", status="qualified"),
        build_application(job_class="Engineer"),
        build_application(job_class=None),
    ]

    rows = SegmentAggregator().aggregate(applications, {"jobs": jobs})["sections"]["department_stats"]

    assert rows == [
        {
            "department": "Finance",
            "applications": 3,
            "qualified": 1,
            "offer_acceptance": 33.3,
            "avg_time_to_hire": 24.0,
        },
        {
            "department": "Unknown",
            "applications": 3,
            "qualified": 1,
            "offer_acceptance": 33.3,
            "avg_time_to_hire": 0.0,
        },
    ]


def test_department_ties_break_by_name_and_keep_top_entries():
    jobs = [JobRecord(job_class=f"Job-{idx}", department=f"Dept-{idx:02d}") for idx in range(10)]
    applications = [
        build_application(id=f"A-{idx}-{copy}", job_class=f"Job-{idx}")
        for idx in range(10)
        for copy in range(1 + (idx == 9))
    ]

    rows = SegmentAggregator().aggregate(applications, {"jobs": jobs})["sections"]["department_stats"]

    assert len(rows) == 8
    assert rows[0]["department"] == "Dept-09"
    assert [row["department"] for row in rows[1:]] == [f"Dept-{idx:02d}" for idx in range(7)]


def test_department_limit_is_configurable():
    applications = [build_application(job_class=f"Job-{idx}") for idx in range(5)]
    jobs = [JobRecord(job_class=f"Job-{idx}", department=f"Dept-{idx}") for idx in range(5)]

    aggregator = SegmentAggregator(config=SegmentsConfig(top_departments=2))
    rows = aggregator.aggregate(applications, {"jobs": jobs})["sections"]["department_stats"]

    assert len(rows) == 2


def test_source_effectiveness_rates_and_cost_per_hire():
    sources = build_sources("Job Board", 10, 4, 40.0) + build_sources("Referral", 5, 0, 12.5)

    rows = SegmentAggregator().aggregate([], {"sources": sources})["sections"]["source_effectiveness"]

    assert rows[0] == {
        "channel": "Job Board",
        "applications": 10,
        "conversions": 4,
        "conversion_rate": 40.0,
        "total_cost": 400.0,
        "cost_per_hire": 100.0,
    }
    assert rows[1]["channel"] == "Referral"
    assert rows[1]["conversion_rate"] == 0.0
    assert rows[1]["total_cost"] == 62.5
    assert rows[1]["cost_per_hire"] == 0.0


def test_source_effectiveness_sorted_by_conversion_rate():
    sources = (
        build_sources("Campus", 4, 1, 0.0)
        + build_sources("Agency", 2, 2, 300.0)
        + build_sources("Website", 4, 1, 0.0)
    )

    rows = SegmentAggregator().aggregate([], {"sources": sources})["sections"]["source_effectiveness"]

    assert [row["channel"] for row in rows] == ["Agency", "Campus", "Website"]


def test_empty_segments():
    sections = SegmentAggregator().aggregate([], {})["sections"]

    assert sections == {"department_stats": [], "source_effectiveness": []}
