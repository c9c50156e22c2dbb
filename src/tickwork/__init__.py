"""tickwork: deterministic virtual-time task scheduling for tests.

Usage:
    from datetime import timedelta
    from tickwork import VirtualScheduler

    scheduler = VirtualScheduler()
    seen = []

    def outer():
        seen.append("outer")
        scheduler.submit(lambda: seen.append("inner"))

    scheduler.submit(outer)
    scheduler.schedule_after(timedelta(seconds=5), lambda: seen.append("later"))

    # Nothing executes until the scheduler is driven
    assert seen == []

    scheduler.advance_until_quiescent(timedelta(seconds=5))
    assert seen == ["outer", "inner", "later"]
    assert scheduler.state.last_failure is None
"""

__version__ = "0.1.0"

# Core primitives
from tickwork.core import (
    EPOCH,
    PendingTasks,
    Task,
    as_duration,
)

# Scheduling
from tickwork.scheduling import (
    DerivedScheduler,
    EngineState,
    InvariantViolationError,
    SchedulerConfig,
    TaskSubmitter,
    VirtualScheduler,
)

__all__ = [
    # Version
    "__version__",
    # Core
    "Task",
    "PendingTasks",
    "EPOCH",
    "as_duration",
    # Scheduling
    "VirtualScheduler",
    "DerivedScheduler",
    "EngineState",
    "SchedulerConfig",
    "InvariantViolationError",
    "TaskSubmitter",
]
