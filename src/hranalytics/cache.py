"""Thread-safe memoization of computed reports."""

from __future__ import annotations

from collections import OrderedDict
from threading import Lock

import structlog

from .core import AnalyticsEngine, AnalyticsRequest
from .schemas import Report, Snapshot


class ReportCache:
    """LRU cache of reports keyed by snapshot content and request.

    Reports are frozen values, so a cached report is shared rather than
    copied. Call ``invalidate`` whenever new records are ingested.
    """

    def __init__(self, engine: AnalyticsEngine, *, max_entries: int = 32) -> None:
        self._engine = engine
        self._max_entries = max(1, max_entries)
        self._entries: OrderedDict[tuple[str, str], Report] = OrderedDict()
        self._lock = Lock()
        self._logger = structlog.get_logger(__name__)

    def get_or_compute(
        self,
        snapshot: Snapshot,
        request: AnalyticsRequest | None = None,
    ) -> Report:
        request = request or AnalyticsRequest()
        key = (snapshot.content_hash(), request.cache_key())
        with self._lock:
            cached = self._entries.get(key)
            if cached is not None:
                self._entries.move_to_end(key)
                self._logger.debug("report.cache_hit", snapshot=key[0][:12])
                return cached

        report = self._engine.run(snapshot, request)

        with self._lock:
            self._entries[key] = report
            self._entries.move_to_end(key)
            while len(self._entries) > self._max_entries:
                self._entries.popitem(last=False)
        return report

    def invalidate(self) -> None:
        with self._lock:
            self._entries.clear()
        self._logger.info("report.cache_invalidated")

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
