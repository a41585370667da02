"""Snapshot loading, report generation and export."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, TypeVar

import structlog
from pydantic import BaseModel, ValidationError

from .cache import ReportCache
from .core import AnalyticsEngine, AnalyticsRequest
from .schemas import (
    ApplicationRecord,
    CandidateSourceRecord,
    FeedbackRecord,
    JobRecord,
    Report,
    Snapshot,
)

ModelT = TypeVar("ModelT", bound=BaseModel)

_COLLECTION_KEYS = ("records", "items", "data")


class SnapshotLoadError(ValueError):
    """Raised when snapshot loading encounters invalid records."""

    def __init__(self, errors: list[str], partial: Snapshot):
        super().__init__("Snapshot loading failed")
        self.errors = errors
        self.partial = partial

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"Snapshot loading failed: {self.errors}"


class RecordLoader:
    """Load a JSON array or JSON Lines file into validated records.

    Invalid entries are skipped and reported; a file that cannot be read at
    all raises ``ValueError``.
    """

    def load(self, path: Path, model: type[ModelT]) -> tuple[list[ModelT], list[str]]:
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as exc:
            raise ValueError(f"Cannot read {path}: {exc}") from exc

        records: list[ModelT] = []
        errors: list[str] = []
        for location, raw in self._entries(text, errors):
            if not isinstance(raw, dict):
                errors.append(f"{path.name} {location}: expected an object")
                continue
            try:
                records.append(model.model_validate(raw))
            except ValidationError as exc:
                fields = ", ".join(
                    ".".join(str(part) for part in error["loc"]) for error in exc.errors()
                )
                errors.append(f"{path.name} {location}: invalid {fields}")
        return records, errors

    @staticmethod
    def _entries(text: str, errors: list[str]) -> list[tuple[str, Any]]:
        stripped = text.strip()
        if not stripped:
            return []
        try:
            document = json.loads(stripped)
        except json.JSONDecodeError:
            document = None
        else:
            if isinstance(document, list):
                return [(f"item {idx}", raw) for idx, raw in enumerate(document, start=1)]
            if isinstance(document, dict):
                for key in _COLLECTION_KEYS:
                    if isinstance(document.get(key), list):
                        return [
                            (f"item {idx}", raw)
                            for idx, raw in enumerate(document[key], start=1)
                        ]
                return [("item 1", document)]

        entries: list[tuple[str, Any]] = []
        for idx, line in enumerate(stripped.splitlines(), start=1):
            raw = line.strip()
            if not raw:
                continue
            try:
                entries.append((f"line {idx}", json.loads(raw)))
            except json.JSONDecodeError as exc:
                errors.append(f"line {idx}: invalid JSON ({exc})")
        return entries


class SnapshotLoader:
    """Assemble a snapshot from per-entity record files."""

    def __init__(self, record_loader: RecordLoader | None = None) -> None:
        self._records = record_loader or RecordLoader()
        self._logger = structlog.get_logger(__name__)

    def load(
        self,
        *,
        applications_path: Path,
        jobs_path: Path | None = None,
        sources_path: Path | None = None,
        feedback_path: Path | None = None,
    ) -> Snapshot:
        errors: list[str] = []
        applications = self._load(applications_path, ApplicationRecord, errors)
        jobs = self._load(jobs_path, JobRecord, errors)
        sources = self._load(sources_path, CandidateSourceRecord, errors)
        feedback = self._load(feedback_path, FeedbackRecord, errors)

        self._warn_unrecognized("applications.unrecognized_values", applications)
        self._warn_unrecognized("feedback.unrecognized_values", feedback)
        snapshot = Snapshot(
            applications=tuple(applications),
            jobs=tuple(jobs),
            sources=tuple(sources),
            feedback=tuple(feedback),
        )
        self._logger.info(
            "snapshot.loaded",
            applications=len(applications),
            jobs=len(jobs),
            sources=len(sources),
            feedback=len(feedback),
            errors=len(errors),
        )
        if errors:
            raise SnapshotLoadError(errors, snapshot)
        return snapshot

    def _load(self, path: Path | None, model: type[ModelT], errors: list[str]) -> list[ModelT]:
        if path is None:
            return []
        records, record_errors = self._records.load(path, model)
        errors.extend(record_errors)
        return records

    def _warn_unrecognized(
        self,
        event: str,
        records: list[ApplicationRecord] | list[FeedbackRecord],
    ) -> None:
        invalid: dict[str, dict[str, str]] = {}
        for idx, record in enumerate(records, start=1):
            fields = record.unrecognized_fields()
            if fields:
                label = getattr(record, "id", None) or getattr(record, "application_id", None)
                invalid[label or f"#{idx}"] = fields
        if invalid:
            self._logger.warning(
                event,
                count=len(invalid),
                samples=dict(list(invalid.items())[:5]),
            )


class OutputWriter:
    """Persist analytics reports."""

    def write(self, path: Path, report: Report) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(report.to_json(), encoding="utf-8")


class AnalyticsPipeline:
    """End-to-end analytics orchestrator: load, compute, export."""

    def __init__(
        self,
        *,
        engine: AnalyticsEngine,
        cache: ReportCache | None = None,
        snapshot_loader: SnapshotLoader | None = None,
        writer: OutputWriter | None = None,
    ) -> None:
        self._engine = engine
        self._cache = cache
        self._snapshots = snapshot_loader or SnapshotLoader()
        self._writer = writer or OutputWriter()
        self._logger = structlog.get_logger(__name__)

    def run(
        self,
        *,
        applications_path: Path,
        output_path: Path,
        jobs_path: Path | None = None,
        sources_path: Path | None = None,
        feedback_path: Path | None = None,
        request: AnalyticsRequest | None = None,
    ) -> Report:
        load_errors: list[str] = []
        try:
            snapshot = self._snapshots.load(
                applications_path=applications_path,
                jobs_path=jobs_path,
                sources_path=sources_path,
                feedback_path=feedback_path,
            )
        except SnapshotLoadError as exc:
            snapshot = exc.partial
            load_errors.extend(exc.errors)
            self._logger.warning("snapshot.partial_load", errors=exc.errors)

        if self._cache is not None:
            report = self._cache.get_or_compute(snapshot, request)
        else:
            report = self._engine.run(snapshot, request)

        if load_errors:
            report = report.model_copy(
                update={
                    "metadata": report.metadata.model_copy(update={"load_errors": load_errors})
                }
            )

        self._writer.write(output_path, report)
        self._logger.info(
            "report.exported",
            path=str(output_path),
            total=report.stats.total,
            load_errors=len(load_errors),
        )
        return report
