"""Pydantic schema definitions for analytics inputs and outputs."""

from __future__ import annotations

from .application import (
    AI_LABELS,
    APPLICATION_STATUSES,
    ApplicationRecord,
    EducationEntry,
    MQResult,
)
from .feedback import FeedbackRecord, MQFeedback
from .job import JobRecord
from .report import Report
from .snapshot import Snapshot
from .source import CandidateSourceRecord

__all__ = [
    "AI_LABELS",
    "APPLICATION_STATUSES",
    "ApplicationRecord",
    "CandidateSourceRecord",
    "EducationEntry",
    "FeedbackRecord",
    "JobRecord",
    "MQFeedback",
    "MQResult",
    "Report",
    "Snapshot",
]
