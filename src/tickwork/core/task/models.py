"""Task models: the unit of pending work and the ordered pending set.

Usage:
    task = Task(id=1, action=do_work, runs_at=timedelta(seconds=5))
    pending = PendingTasks().add(task)
    pending.first()  # earliest task by (runs_at, id)
"""

from __future__ import annotations

from bisect import bisect_left, insort
from collections.abc import Iterator
from dataclasses import dataclass, field
from datetime import timedelta
from functools import total_ordering
from itertools import pairwise

from tickwork.core.types import Action


@total_ordering
@dataclass(frozen=True, slots=True, eq=False)
class Task:
    """A unit of work pending execution at or after `runs_at`.

    Tasks order by `runs_at` ascending, then by `id` ascending. Since ids are
    unique per scheduler, no two distinct tasks compare equal.
    """

    id: int
    action: Action = field(repr=False)
    runs_at: timedelta

    @property
    def sort_key(self) -> tuple[timedelta, int]:
        return (self.runs_at, self.id)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Task):
            return NotImplemented
        return self.sort_key == other.sort_key

    def __lt__(self, other: Task) -> bool:
        if not isinstance(other, Task):
            return NotImplemented
        return self.sort_key < other.sort_key

    def __hash__(self) -> int:
        return hash(self.sort_key)


def _sort_key(task: Task) -> tuple[timedelta, int]:
    return task.sort_key


@dataclass(frozen=True, slots=True)
class PendingTasks:
    """Immutable sorted set of tasks.

    Every mutation returns a new PendingTasks; the receiver is never changed,
    which lets engine states share it safely across snapshots.
    """

    tasks: tuple[Task, ...] = ()

    def __post_init__(self) -> None:
        for earlier, later in pairwise(self.tasks):
            if not earlier.sort_key < later.sort_key:
                raise ValueError(
                    f"Tasks must be unique and sorted by (runs_at, id): "
                    f"task {earlier.id} precedes task {later.id}"
                )

    def add(self, task: Task) -> PendingTasks:
        """Return a new set including task. Adding a task already present is a no-op."""
        if task in self:
            return self
        items = list(self.tasks)
        insort(items, task, key=_sort_key)
        return PendingTasks(tuple(items))

    def discard(self, task: Task) -> PendingTasks:
        """Return a new set without task, or self if task is not present."""
        index = self._index_of(task)
        if index is None:
            return self
        return PendingTasks(self.tasks[:index] + self.tasks[index + 1 :])

    def first(self) -> Task | None:
        """Earliest task, or None when empty."""
        return self.tasks[0] if self.tasks else None

    def _index_of(self, task: Task) -> int | None:
        index = bisect_left(self.tasks, task.sort_key, key=_sort_key)
        if index < len(self.tasks) and self.tasks[index].id == task.id:
            return index
        return None

    def __contains__(self, task: object) -> bool:
        return isinstance(task, Task) and self._index_of(task) is not None

    def __iter__(self) -> Iterator[Task]:
        return iter(self.tasks)

    def __len__(self) -> int:
        return len(self.tasks)

    def __bool__(self) -> bool:
        return bool(self.tasks)
