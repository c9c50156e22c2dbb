"""Scheduling models and configuration.

Types for engine state snapshots, scheduler configuration, and the
narrow submission protocol handed out by `VirtualScheduler.derive()`.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import timedelta
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from tickwork.core.task import TIE_BREAK_POOL_SIZE, PendingTasks, Task
from tickwork.core.types import EPOCH, Action

if TYPE_CHECKING:
    from tickwork.config import SchedulerSettings


class InvariantViolationError(AssertionError):
    """Raised when an engine state would hold a task scheduled before its clock.

    Indicates a bug in the scheduler's own transitions, never a user error.
    """

    pass


@dataclass(frozen=True, slots=True)
class EngineState:
    """Immutable snapshot of a scheduler.

    Each transition builds a new state; the engine swaps it in under its lock.
    Construction checks that no pending task is scheduled before `clock`.
    """

    last_id: int
    """Id assigned to the most recently created task."""

    clock: timedelta
    """Current virtual time."""

    pending: PendingTasks = field(default_factory=PendingTasks)
    """Tasks waiting to run, ordered by (runs_at, id)."""

    last_failure: BaseException | None = None
    """Most recent error captured from a task, overwritten on each report."""

    def __post_init__(self) -> None:
        head = self.pending.first()
        if head is not None and head.runs_at < self.clock:
            raise InvariantViolationError(
                f"Task {head.id} runs at {head.runs_at}, before clock {self.clock}"
            )

    @classmethod
    def initial(cls, epoch: timedelta = EPOCH) -> EngineState:
        """Fresh state with no tasks and the clock at epoch."""
        return cls(last_id=0, clock=epoch)

    @property
    def pending_count(self) -> int:
        return len(self.pending)

    @property
    def is_quiescent(self) -> bool:
        """True when no tasks remain pending."""
        return not self.pending

    @property
    def next_runs_at(self) -> timedelta | None:
        head = self.pending.first()
        return head.runs_at if head is not None else None

    def with_task(self, action: Action, delay: timedelta) -> tuple[Task, EngineState]:
        """Return a new task due `delay` after clock, and the state including it.

        Negative delays are clamped to zero.
        """
        new_id = self.last_id + 1
        task = Task(id=new_id, action=action, runs_at=self.clock + max(delay, timedelta(0)))
        return task, replace(self, last_id=new_id, pending=self.pending.add(task))

    def without_task(self, task: Task) -> EngineState:
        """Return a state with task removed, or self if it is not pending."""
        remaining = self.pending.discard(task)
        if remaining is self.pending:
            return self
        return replace(self, pending=remaining)

    def with_failure(self, error: BaseException) -> EngineState:
        return replace(self, last_failure=error)


@dataclass(frozen=True, slots=True)
class SchedulerConfig:
    """Configuration for scheduler behavior.

    Passed to VirtualScheduler at construction.
    """

    tie_break_pool_size: int = TIE_BREAK_POOL_SIZE
    """How many same-instant tasks are considered for the random pick."""

    seed: int | None = None
    """Seed for tie-break randomness. None = nondeterministic across runs."""

    epoch: timedelta = EPOCH
    """Starting value of the virtual clock."""

    def __post_init__(self) -> None:
        if self.tie_break_pool_size < 1:
            raise ValueError("tie_break_pool_size must be >= 1")

    @classmethod
    def from_settings(cls, settings: SchedulerSettings | None = None) -> SchedulerConfig:
        """Build config from settings, loading them from the environment if not given.

        Requires the `config` extra (pydantic-settings).
        """
        if settings is None:
            from tickwork.config import SchedulerSettings

            settings = SchedulerSettings()
        return cls(
            tie_break_pool_size=settings.tie_break_pool_size,
            seed=settings.seed,
            epoch=settings.epoch,
        )


@runtime_checkable
class TaskSubmitter(Protocol):
    """Narrow view of a scheduler: submit work and report failures, nothing else.

    This is what adapters needing a plain deferred-execution target consume.
    """

    def submit(self, action: Action) -> None:
        """Enqueue action to run once the scheduler is next driven."""
        ...

    def report_failure(self, error: BaseException) -> None:
        """Record an error raised outside the scheduler's own execution."""
        ...
