"""Aggregator implementations for the analytics engine."""

from .fairness import FairnessAuditor, FairnessConfig
from .overrides import OverrideMiner, OverridesConfig
from .segments import SegmentAggregator, SegmentsConfig
from .statistics import StatisticsAggregator, StatisticsConfig
from .trends import TimeSeriesAggregator, TrendsConfig

__all__ = [
    "FairnessAuditor",
    "FairnessConfig",
    "OverrideMiner",
    "OverridesConfig",
    "SegmentAggregator",
    "SegmentsConfig",
    "StatisticsAggregator",
    "StatisticsConfig",
    "TimeSeriesAggregator",
    "TrendsConfig",
]
