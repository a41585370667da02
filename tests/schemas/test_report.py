from __future__ import annotations

import json

from hranalytics.schemas import Report
from hranalytics.schemas.report import BiasAlert, BiasAnalysis, CoreStats, HiringTrendPoint


def build_report() -> Report:
    return Report(
        stats=CoreStats(total=4, qualified=1, ai_accuracy=50.0, qualification_rate=25.0),
        hiring_trends=[
            HiringTrendPoint(period="2026-10-12", label="Oct 12", applications=4, qualified=1)
        ],
        bias_analysis=BiasAnalysis(
            experience_disparity=30.0,
            alerts=[
                BiasAlert(
                    dimension="experience",
                    disparity=30.0,
                    message="Experience bias: 30% approval difference",
                )
            ],
            fairness_grade="B",
        ),
        generated_at="2026-10-15T12:00:00+00:00",
        time_range_days=30,
    )


def test_report_serializes_with_camel_case_keys():
    payload = json.loads(build_report().to_json())

    assert payload["stats"]["aiAccuracy"] == 50.0
    assert payload["stats"]["qualificationRate"] == 25.0
    assert payload["hiringTrends"][0]["applications"] == 4
    assert payload["biasAnalysis"]["fairnessGrade"] == "B"
    assert payload["timeRangeDays"] == 30
    assert "aiPerformanceOverTime" in payload
    assert "trainingProgress" in payload


def test_report_round_trips_through_json():
    report = build_report()

    restored = Report.from_json(report.to_json())

    assert restored == report
    assert restored.bias_analysis.alerts[0].message.endswith("approval difference")


def test_report_accepts_field_names_and_aliases():
    by_alias = Report.model_validate({"generatedAt": "2026-10-15T12:00:00+00:00", "timeRangeDays": 7})
    by_name = Report.model_validate({"generated_at": "2026-10-15T12:00:00+00:00", "time_range_days": 7})

    assert by_alias == by_name
