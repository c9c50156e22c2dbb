"""Configuration settings using Pydantic Settings.

Provides typed scheduler configuration with environment variable support,
so a CI job can pin the tie-break seed without touching test code.

Usage:
    from tickwork.config import SchedulerSettings
    from tickwork.scheduling import SchedulerConfig, VirtualScheduler

    # Load from environment variables (TICKWORK_*)
    settings = SchedulerSettings()
    scheduler = VirtualScheduler(config=SchedulerConfig.from_settings(settings))

    # Or override with explicit values
    settings = SchedulerSettings(seed=42)
"""

from __future__ import annotations

from datetime import timedelta

try:
    from pydantic import Field
    from pydantic_settings import BaseSettings, SettingsConfigDict
except ImportError as e:
    raise ImportError(
        "pydantic-settings is required for config module. "
        "Install with: pip install tickwork[config]"
    ) from e

from tickwork.core.task import TIE_BREAK_POOL_SIZE
from tickwork.core.types import EPOCH


class SchedulerSettings(BaseSettings):  # type: ignore[misc]
    """Configuration for VirtualScheduler.

    Attributes:
        tie_break_pool_size: Max same-instant tasks considered for the random pick.
        seed: Seed for tie-break randomness (None for a fresh seed per scheduler).
        epoch: Starting virtual time (ISO 8601 duration, e.g. PT0S).

    Environment Variables:
        TICKWORK_TIE_BREAK_POOL_SIZE
        TICKWORK_SEED
        TICKWORK_EPOCH
    """

    model_config = SettingsConfigDict(
        env_prefix="TICKWORK_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    tie_break_pool_size: int = Field(default=TIE_BREAK_POOL_SIZE, ge=1)
    seed: int | None = None
    epoch: timedelta = EPOCH
