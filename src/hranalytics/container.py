"""Dependency injection container for the analytics engine."""

from __future__ import annotations

from dependency_injector import containers, providers

from .cache import ReportCache
from .core import (
    AnalyticsEngine,
    FairnessAuditor,
    OverrideMiner,
    RecordFilter,
    SegmentAggregator,
    StatisticsAggregator,
    TimeSeriesAggregator,
)
from .core.aggregators import (
    FairnessConfig,
    OverridesConfig,
    SegmentsConfig,
    StatisticsConfig,
    TrendsConfig,
)
from .pipeline import AnalyticsPipeline


class AnalyticsContainer(containers.DeclarativeContainer):
    """Dependency-injector container definition."""

    config = providers.Configuration()

    statistics_aggregator = providers.Singleton(StatisticsAggregator)
    trends_aggregator = providers.Singleton(TimeSeriesAggregator)
    segment_aggregator = providers.Singleton(SegmentAggregator)
    fairness_auditor = providers.Singleton(FairnessAuditor)
    override_miner = providers.Singleton(OverrideMiner)

    aggregators = providers.List(
        statistics_aggregator,
        trends_aggregator,
        segment_aggregator,
        fairness_auditor,
        override_miner,
    )

    record_filter = providers.Singleton(RecordFilter)

    engine = providers.Singleton(
        AnalyticsEngine,
        aggregators=aggregators,
        record_filter=record_filter,
        max_workers=config.max_workers,
    )

    report_cache = providers.Singleton(ReportCache, engine=engine)

    pipeline = providers.Factory(
        AnalyticsPipeline,
        engine=engine,
        cache=report_cache,
    )


_AGGREGATOR_OVERRIDES = {
    "statistics": ("statistics_aggregator", StatisticsAggregator, StatisticsConfig),
    "trends": ("trends_aggregator", TimeSeriesAggregator, TrendsConfig),
    "segments": ("segment_aggregator", SegmentAggregator, SegmentsConfig),
    "fairness": ("fairness_auditor", FairnessAuditor, FairnessConfig),
    "overrides": ("override_miner", OverrideMiner, OverridesConfig),
}


def create_container(*, settings: dict | None = None) -> AnalyticsContainer:
    """Instantiate container with optional overrides."""

    container = AnalyticsContainer()

    if not settings:
        return container

    engine_settings = settings.get("engine", {}) if isinstance(settings, dict) else {}
    if engine_settings:
        container.config.override(engine_settings)

    aggregator_settings = settings.get("aggregators", {}) if isinstance(settings, dict) else {}

    for section, (provider_name, aggregator_cls, config_cls) in _AGGREGATOR_OVERRIDES.items():
        if section not in aggregator_settings:
            continue
        aggregator_config = config_cls(**aggregator_settings[section])
        getattr(container, provider_name).override(
            providers.Singleton(aggregator_cls, config=aggregator_config)
        )

    return container
