"""Shared test fixtures."""

import sys

import pytest

# Ensure src is in path
sys.path.insert(0, "src")

from datetime import timedelta

from tickwork import SchedulerConfig, VirtualScheduler


@pytest.fixture
def scheduler():
    """Fresh VirtualScheduler with the default far-negative epoch."""
    return VirtualScheduler()


@pytest.fixture
def zero_scheduler():
    """VirtualScheduler whose clock starts at zero, seeded for reproducibility."""
    return VirtualScheduler(config=SchedulerConfig(epoch=timedelta(0), seed=0))


@pytest.fixture
def log():
    """List that test actions append to, recording execution order."""
    return []
