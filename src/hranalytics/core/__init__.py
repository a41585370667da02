"""Core analytics engine components."""

from __future__ import annotations

# NOTE: keep imports explicit for export clarity.
from .aggregators import (
    FairnessAuditor,
    OverrideMiner,
    SegmentAggregator,
    StatisticsAggregator,
    TimeSeriesAggregator,
)
from .engine import AggregationResult, Aggregator, AnalyticsEngine
from .labels import Transition, human_label
from .window import AnalyticsRequest, FilterResult, RecordFilter

__all__ = [
    "Aggregator",
    "AggregationResult",
    "AnalyticsEngine",
    "AnalyticsRequest",
    "FairnessAuditor",
    "FilterResult",
    "OverrideMiner",
    "RecordFilter",
    "SegmentAggregator",
    "StatisticsAggregator",
    "TimeSeriesAggregator",
    "Transition",
    "human_label",
]
