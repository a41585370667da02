"""Configuration management utilities."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from ..schemas.config import AppConfig, load_config


def load_settings(path: str | Path) -> dict[str, Any]:
    """Read a YAML settings file and return validated container settings."""
    with Path(path).open("r", encoding="utf-8") as handle:
        raw = yaml.safe_load(handle)
    return load_config(raw).to_settings()


class ConfigManager:
    """YAML-backed loader for named configuration profiles."""

    def __init__(self, base_path: str | Path):
        self._base_path = Path(base_path)

    def load(self, name: str) -> AppConfig:
        """Load and validate a profile by name without file extension."""
        path = self._base_path / f"{name}.yaml"
        with path.open("r", encoding="utf-8") as handle:
            return load_config(yaml.safe_load(handle))


__all__ = ["ConfigManager", "load_settings"]
