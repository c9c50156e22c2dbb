"""Configuration module using Pydantic Settings.

Usage:
    from tickwork.config import SchedulerSettings

    settings = SchedulerSettings(seed=7)
"""

from tickwork.config.settings import SchedulerSettings

__all__ = [
    "SchedulerSettings",
]
