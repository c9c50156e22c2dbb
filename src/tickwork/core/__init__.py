"""Core functionalities: stateless primitives.

Architecture Note:
    core/ contains pure, stateless building blocks: task records, the
    immutable pending set, and the extraction algorithm. Nothing here holds
    a lock or mutates shared state. For the stateful engine, see scheduling/.
"""

from tickwork.core.task import (
    TIE_BREAK_POOL_SIZE,
    PendingTasks,
    Task,
    compare_tasks,
    extract_one,
    same_instant_candidates,
)
from tickwork.core.types import EPOCH, ZERO, Action, Cancel, DurationLike, as_duration

__all__ = [
    # Task
    "Task",
    "PendingTasks",
    "TIE_BREAK_POOL_SIZE",
    "compare_tasks",
    "extract_one",
    "same_instant_candidates",
    # Types
    "Action",
    "Cancel",
    "DurationLike",
    "EPOCH",
    "ZERO",
    "as_duration",
]
