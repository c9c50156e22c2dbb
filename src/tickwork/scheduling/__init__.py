"""Task scheduling: the virtual-time engine and its state."""

from tickwork.scheduling.models import (
    EngineState,
    InvariantViolationError,
    SchedulerConfig,
    TaskSubmitter,
)
from tickwork.scheduling.scheduler import DerivedScheduler, VirtualScheduler

__all__ = [
    # Schedulers
    "VirtualScheduler",
    "DerivedScheduler",
    # Models
    "EngineState",
    "SchedulerConfig",
    "InvariantViolationError",
    # Protocols
    "TaskSubmitter",
]
