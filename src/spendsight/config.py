"""
SpendSight configuration management.

Supports loading from YAML files, environment variables, and keyword overrides.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator


class ExtractionConfig(BaseModel):
    """Remote statement parsing service and fallback settings."""

    service_url: str = Field(default="http://localhost:3000", description="Base URL of the PDF parse service")
    timeout: float = Field(default=30.0, gt=0, description="Request timeout in seconds")
    offline: bool = Field(default=False, description="Never call the remote service")
    fallback_enabled: bool = Field(
        default=True,
        description="Generate synthetic transactions when remote parsing fails",
    )
    fallback_days: int = Field(default=30, description="Days of synthetic history (30 or 90)")
    seed: int | None = Field(default=None, description="Seed for synthetic data")

    @field_validator("fallback_days")
    @classmethod
    def _check_days(cls, value: int) -> int:
        if value not in (30, 90):
            raise ValueError("fallback_days must be 30 or 90")
        return value


class StorageConfig(BaseModel):
    """Analysis history persistence."""

    enabled: bool = True
    history_path: str = Field(default="~/.spendsight/history.json")
    max_entries: int = Field(default=10, ge=1)


class SpendSightConfig(BaseModel):
    """Root configuration for SpendSight."""

    extraction: ExtractionConfig = Field(default_factory=ExtractionConfig)
    storage: StorageConfig = Field(default_factory=StorageConfig)

    # Output settings
    currency: str = Field(default="USD")

    @classmethod
    def load(cls, config_path: str | None = None, **overrides: Any) -> SpendSightConfig:
        """Load configuration from file, env vars, and overrides.

        Priority: overrides > env vars > config file > defaults.
        """
        data: dict[str, Any] = {}

        # 1. Load from YAML file if provided
        if config_path:
            path = Path(config_path)
            if path.exists():
                with open(path) as f:
                    data = yaml.safe_load(f) or {}

        # Empty sections parse as None
        for section in ("extraction", "storage"):
            if data.get(section) is None:
                data.pop(section, None)

        # 2. Override from environment variables
        extraction = data.get("extraction") or {}
        env_url = os.environ.get("SPENDSIGHT_SERVICE_URL")
        env_timeout = os.environ.get("SPENDSIGHT_TIMEOUT")
        env_offline = os.environ.get("SPENDSIGHT_OFFLINE")
        env_seed = os.environ.get("SPENDSIGHT_SEED")

        if env_url:
            extraction["service_url"] = env_url
        if env_timeout:
            extraction["timeout"] = float(env_timeout)
        if env_offline and env_offline.lower() in ("1", "true", "yes"):
            extraction["offline"] = True
        if env_seed:
            extraction["seed"] = int(env_seed)
        if extraction:
            data["extraction"] = extraction

        env_history = os.environ.get("SPENDSIGHT_HISTORY_PATH")
        if env_history:
            storage = data.get("storage") or {}
            storage["history_path"] = env_history
            data["storage"] = storage

        # 3. Apply keyword overrides
        data.update(overrides)

        return cls.model_validate(data)
