from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from hranalytics.cli import app
from hranalytics.container import create_container
from hranalytics.core import AnalyticsRequest
from hranalytics.schemas import Report


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


def write_json(path: Path, payload: object) -> None:
    path.write_text(json.dumps(payload, ensure_ascii=False), encoding="utf-8")


def write_jsonl(path: Path, rows: list[dict]) -> None:
    path.write_text("\n".join(json.dumps(row, ensure_ascii=False) for row in rows), encoding="utf-8")


@pytest.fixture
def record_files(tmp_path: Path) -> dict[str, Path]:
    applications = [
        {
            "id": "A-001",
            "job_class": "Analyst",
            "candidate_name": "Dana Whitfield",
            "submitted_date": "2026-10-01T09:00:00Z",
            "reviewed_date": "2026-10-02T09:00:00Z",
            "reviewed_by": "lead@example.com",
            "status": "qualified",
            "ai_label": "Likely Qualified",
            "confidence": 91,
            "total_experience_years": 4,
            "education": [{"degree_level": "Bachelor", "institution": "State University"}],
            "mq_results": [{"requirement": "3 years analysis", "status": "pass", "confidence": 90}],
        },
        {
            "id": "A-002",
            "job_class": "Analyst",
            "submitted_date": "2026-10-05T09:00:00Z",
            "reviewed_date": "2026-10-06T21:00:00Z",
            "reviewed_by": "lead@example.com",
            "status": "not_qualified",
            "ai_label": "Likely Qualified",
            "confidence": 72,
            "total_experience_years": 1,
        },
        {
            "id": "A-003",
            "job_class": "Clerk",
            "submitted_date": "2026-10-12T09:00:00Z",
            "status": "pending",
            "ai_label": "Needs Review",
            "confidence": 55,
        },
        {
            "id": "A-004",
            "job_class": "Clerk",
            "submitted_date": "2026-06-01T09:00:00Z",
            "status": "pending",
            "ai_label": "Likely Not Qualified",
        },
    ]
    jobs = [
        {"job_class": "Analyst", "title": "Budget Analyst", "department": "Finance"},
        {"job_class": "Clerk", "title": "Records Clerk", "department": None},
    ]
    sources = [
        {"source_channel": "Referral", "cost_per_applicant": 0, "converted_to_hire": True},
        {"source_channel": "Job Board", "cost_per_applicant": 25.5},
    ]
    feedback = [
        {"application_id": "A-002", "agreement": "disagree", "issue_category": "false_positive"},
    ]

    paths = {
        "applications": tmp_path / "applications.jsonl",
        "jobs": tmp_path / "jobs.json",
        "sources": tmp_path / "sources.json",
        "feedback": tmp_path / "feedback.jsonl",
    }
    write_jsonl(paths["applications"], applications)
    write_json(paths["jobs"], jobs)
    write_json(paths["sources"], sources)
    write_jsonl(paths["feedback"], feedback)
    return paths


def test_cli_runs_pipeline_and_writes_output(
    tmp_path: Path, runner: CliRunner, record_files: dict[str, Path]
) -> None:
    output_path = tmp_path / "out" / "report.json"

    result = runner.invoke(
        app,
        [
            "--applications",
            str(record_files["applications"]),
            "--jobs",
            str(record_files["jobs"]),
            "--sources",
            str(record_files["sources"]),
            "--feedback",
            str(record_files["feedback"]),
            "--output",
            str(output_path),
            "--window",
            "30",
            "--now",
            "2026-10-15T00:00:00Z",
        ],
    )

    assert result.exit_code == 0, result.stdout
    assert "Analyzed 3 applications" in result.stdout
    assert output_path.exists()

    rendered = json.loads(output_path.read_text(encoding="utf-8"))
    assert "stats" in rendered
    assert "biasAnalysis" in rendered
    assert rendered["generatedAt"] == "2026-10-15T00:00:00Z"

    report = Report.from_json(output_path.read_text(encoding="utf-8"))
    assert report.stats.total == 3
    assert report.stats.reviewed_apps == 2
    assert report.stats.false_positives == 1
    assert report.metadata.record_count == 4
    assert report.metadata.filtered_count == 3
    assert [row.department for row in report.department_stats] == ["Finance", "Unknown"]
    assert [row.channel for row in report.source_effectiveness] == ["Referral", "Job Board"]
    assert report.feedback_analysis.total == 1
    assert report.time_range_days == 30


def test_cli_whole_snapshot_with_config(
    tmp_path: Path, runner: CliRunner, record_files: dict[str, Path]
) -> None:
    config_path = tmp_path / "config.yaml"
    config_path.write_text(
        "engine:\n  max_workers: 2\naggregators:\n  trends:\n    max_points: 1\n",
        encoding="utf-8",
    )
    output_path = tmp_path / "report.json"

    result = runner.invoke(
        app,
        [
            "--applications",
            str(record_files["applications"]),
            "--output",
            str(output_path),
            "--window",
            "0",
            "--granularity",
            "month",
            "--config",
            str(config_path),
            "--now",
            "2026-10-15T00:00:00Z",
        ],
    )

    assert result.exit_code == 0, result.stdout
    report = Report.from_json(output_path.read_text(encoding="utf-8"))
    assert report.stats.total == 4
    assert report.time_range_days is None
    assert [point.period for point in report.hiring_trends] == ["2026-10-01"]


@pytest.mark.parametrize(
    "extra",
    [
        ["--window", "14"],
        ["--granularity", "day"],
        ["--start", "not-a-date"],
        ["--start", "2026-10-10T00:00:00Z", "--end", "2026-10-01T00:00:00Z"],
    ],
)
def test_cli_rejects_bad_parameters(
    tmp_path: Path, runner: CliRunner, record_files: dict[str, Path], extra: list[str]
) -> None:
    output_path = tmp_path / "report.json"

    result = runner.invoke(
        app,
        ["--applications", str(record_files["applications"]), "--output", str(output_path), *extra],
    )

    assert result.exit_code != 0
    assert not output_path.exists()


def test_pipeline_records_partial_load_errors(tmp_path: Path) -> None:
    applications_path = tmp_path / "applications.jsonl"
    applications_path.write_text(
        '{"id": "A-001", "submitted_date": "2026-10-10T00:00:00Z", "ai_label": "Likely Qualified"}\n'
        "{broken\n"
        '{"id": "A-003", "confidence": "high"}\n',
        encoding="utf-8",
    )
    output_path = tmp_path / "report.json"

    pipeline = create_container().pipeline()
    report = pipeline.run(
        applications_path=applications_path,
        output_path=output_path,
        request=AnalyticsRequest(window_days=None, now="2026-10-15T00:00:00Z"),
    )

    assert report.stats.total == 1
    assert len(report.metadata.load_errors) == 2
    assert report.metadata.load_errors[0].startswith("line 2: invalid JSON")
    assert report.metadata.load_errors[1] == "applications.jsonl line 3: invalid confidence"

    written = json.loads(output_path.read_text(encoding="utf-8"))
    assert written["metadata"]["loadErrors"] == report.metadata.load_errors
