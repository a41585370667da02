"""Pydantic configuration schema for YAML settings files."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError


class EngineConfig(BaseModel):
    max_workers: int | None = Field(default=None, ge=1)

    model_config = ConfigDict(extra="forbid")


class AggregatorConfig(BaseModel):
    statistics: dict[str, Any] | None = None
    trends: dict[str, Any] | None = None
    segments: dict[str, Any] | None = None
    fairness: dict[str, Any] | None = None
    overrides: dict[str, Any] | None = None

    model_config = ConfigDict(extra="forbid")


class AppConfig(BaseModel):
    engine: EngineConfig = Field(default_factory=EngineConfig)
    aggregators: AggregatorConfig = Field(default_factory=AggregatorConfig)

    def to_settings(self) -> dict[str, Any]:
        settings: dict[str, Any] = {}
        engine_settings = self.engine.model_dump(exclude_none=True)
        if engine_settings:
            settings["engine"] = engine_settings
        aggregator_settings = self.aggregators.model_dump(exclude_none=True)
        if aggregator_settings:
            settings["aggregators"] = aggregator_settings
        return settings


def load_config(raw: Any) -> AppConfig:
    if raw is None:
        return AppConfig()
    if not isinstance(raw, dict):
        raise ValidationError.from_exception_data(
            "AppConfig",
            [{"type": "dict_type", "loc": ("config",), "input": raw}],
        )
    return AppConfig.model_validate(raw)
