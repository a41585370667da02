"""Serializable analytics report.

Field names are snake_case in Python and camelCase on the wire, so an
exported report reads ``hiringTrends``, ``biasAnalysis`` and so on. Every
model is frozen: a report is a value and is never edited in place.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ReportModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class CoreStats(ReportModel):
    total: int = 0
    processed: int = 0
    remaining: int = 0
    qualified: int = 0
    needs_review: int = 0
    not_qualified: int = 0
    avg_processing_time: float = 0.0
    ai_accuracy: float = 0.0
    false_positives: int = 0
    false_negatives: int = 0
    reviewed_apps: int = 0
    overall_precision: float = 0.0
    qualification_rate: float = 0.0


class HiringTrendPoint(ReportModel):
    period: str
    label: str
    applications: int = 0
    qualified: int = 0
    rejected: int = 0


class AIPerformancePoint(ReportModel):
    period: str
    label: str
    correct: int = 0
    total: int = 0
    false_pos: int = 0
    false_neg: int = 0
    accuracy: float = 0.0


class TimeToHirePoint(ReportModel):
    period: str
    label: str
    hires: int = 0
    total_time: int = 0
    avg_time: float = 0.0


class DepartmentStat(ReportModel):
    department: str
    applications: int = 0
    qualified: int = 0
    offer_acceptance: float = 0.0
    avg_time_to_hire: float = 0.0


class SourceStat(ReportModel):
    channel: str
    applications: int = 0
    conversions: int = 0
    conversion_rate: float = 0.0
    total_cost: float = 0.0
    cost_per_hire: float = 0.0


class BiasBucket(ReportModel):
    group: str
    count: int = 0
    qualified: int = 0
    rate: float = 0.0


class BiasAlert(ReportModel):
    type: str = "warning"
    dimension: str
    disparity: float
    message: str


class BiasAnalysis(ReportModel):
    by_experience: list[BiasBucket] = Field(default_factory=list)
    by_education: list[BiasBucket] = Field(default_factory=list)
    by_job: list[BiasBucket] = Field(default_factory=list)
    experience_disparity: float = 0.0
    education_disparity: float = 0.0
    job_disparity: float = 0.0
    alerts: list[BiasAlert] = Field(default_factory=list)
    fairness_grade: str = "A+"


class OverridePattern(ReportModel):
    pattern: str
    count: int


class OverridePatterns(ReportModel):
    total: int = 0
    unclassified: int = 0
    patterns: list[OverridePattern] = Field(default_factory=list)


class Suggestion(ReportModel):
    type: str
    message: str


class TrainingProgress(ReportModel):
    total_reviewed: int = 0
    needs_training: int = 0
    progress: float = 0.0
    eligible: bool = False
    ready: bool = False
    message: str = ""


class FeedbackCategoryCount(ReportModel):
    category: str
    label: str
    count: int


class FeedbackAgreementCount(ReportModel):
    type: str
    count: int = 0
    percentage: float = 0.0


class FeedbackAnalysis(ReportModel):
    total: int = 0
    by_category: list[FeedbackCategoryCount] = Field(default_factory=list)
    by_agreement: list[FeedbackAgreementCount] = Field(default_factory=list)


class TimeRange(ReportModel):
    start: str | None = None
    end: str | None = None


class ReportMetadata(ReportModel):
    app_version: str = ""
    record_count: int = 0
    filtered_count: int = 0
    skipped_records: int = 0
    load_errors: list[str] = Field(default_factory=list)


class Report(ReportModel):
    """Complete analytics report for one snapshot and request."""

    stats: CoreStats = Field(default_factory=CoreStats)
    hiring_trends: list[HiringTrendPoint] = Field(default_factory=list)
    ai_performance_over_time: list[AIPerformancePoint] = Field(default_factory=list)
    time_to_hire_data: list[TimeToHirePoint] = Field(default_factory=list)
    department_stats: list[DepartmentStat] = Field(default_factory=list)
    source_effectiveness: list[SourceStat] = Field(default_factory=list)
    bias_analysis: BiasAnalysis = Field(default_factory=BiasAnalysis)
    override_patterns: OverridePatterns = Field(default_factory=OverridePatterns)
    improvement_suggestions: list[Suggestion] = Field(default_factory=list)
    training_progress: TrainingProgress = Field(default_factory=TrainingProgress)
    feedback_analysis: FeedbackAnalysis = Field(default_factory=FeedbackAnalysis)
    generated_at: str
    time_range_days: int | None = None
    time_range: TimeRange = Field(default_factory=TimeRange)
    metadata: ReportMetadata = Field(default_factory=ReportMetadata)

    def to_json(self, *, indent: int | None = 2) -> str:
        return self.model_dump_json(by_alias=True, indent=indent)

    @classmethod
    def from_json(cls, payload: str | bytes) -> "Report":
        return cls.model_validate_json(payload)
