"""Task functionality: pending work units, their ordering, and extraction."""

from tickwork.core.task.models import PendingTasks, Task
from tickwork.core.task.operations import (
    TIE_BREAK_POOL_SIZE,
    compare_tasks,
    extract_one,
    same_instant_candidates,
)

__all__ = [
    "Task",
    "PendingTasks",
    "TIE_BREAK_POOL_SIZE",
    "compare_tasks",
    "extract_one",
    "same_instant_candidates",
]
