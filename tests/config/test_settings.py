"""Tests for environment-driven scheduler settings."""

from datetime import timedelta

import pytest
from pydantic import ValidationError

from tickwork import SchedulerConfig, VirtualScheduler
from tickwork.config import SchedulerSettings
from tickwork.core.task import TIE_BREAK_POOL_SIZE
from tickwork.core.types import EPOCH


def test_defaults(monkeypatch):
    for name in ("TICKWORK_SEED", "TICKWORK_TIE_BREAK_POOL_SIZE", "TICKWORK_EPOCH"):
        monkeypatch.delenv(name, raising=False)
    settings = SchedulerSettings()
    assert settings.tie_break_pool_size == TIE_BREAK_POOL_SIZE
    assert settings.seed is None
    assert settings.epoch == EPOCH


def test_reads_environment(monkeypatch):
    monkeypatch.setenv("TICKWORK_SEED", "99")
    monkeypatch.setenv("TICKWORK_TIE_BREAK_POOL_SIZE", "3")
    monkeypatch.setenv("TICKWORK_EPOCH", "PT0S")

    config = SchedulerConfig.from_settings()

    assert config.seed == 99
    assert config.tie_break_pool_size == 3
    assert config.epoch == timedelta(0)
    assert VirtualScheduler(config=config).now() == timedelta(0)


def test_explicit_settings_override():
    config = SchedulerConfig.from_settings(SchedulerSettings(seed=5, epoch=timedelta(seconds=10)))
    assert config.seed == 5
    assert config.epoch == timedelta(seconds=10)


def test_rejects_invalid_pool_size():
    with pytest.raises(ValidationError):
        SchedulerSettings(tie_break_pool_size=0)
