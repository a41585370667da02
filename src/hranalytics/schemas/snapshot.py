"""Immutable record snapshot handed to the analytics engine."""

from __future__ import annotations

import hashlib

from pydantic import BaseModel, ConfigDict

from .application import ApplicationRecord
from .feedback import FeedbackRecord
from .job import JobRecord
from .source import CandidateSourceRecord


class Snapshot(BaseModel):
    """Bounded, in-memory view of every record the engine reads."""

    applications: tuple[ApplicationRecord, ...] = ()
    jobs: tuple[JobRecord, ...] = ()
    sources: tuple[CandidateSourceRecord, ...] = ()
    feedback: tuple[FeedbackRecord, ...] = ()

    model_config = ConfigDict(frozen=True)

    def content_hash(self) -> str:
        """Stable digest of the snapshot contents, used as a cache key."""
        payload = self.model_dump_json(exclude_none=True)
        return hashlib.sha256(payload.encode("utf-8")).hexdigest()
